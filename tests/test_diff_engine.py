from subchecker.diff_engine import DELETE_COLOR, INSERT_COLOR, compare_output, render_diff


def test_identical_text_is_no_diff():
    text = "line one\nline two\n"

    outcome = compare_output(text, text)

    assert outcome.matched
    assert outcome.rendering == text


def test_carriage_returns_stripped_from_expected():
    assert compare_output("A\r\nB\r\n", "A\nB\n").matched


def test_carriage_returns_in_actual_still_differ():
    assert not compare_output("A\nB\n", "A\r\nB\r\n").matched


def test_mismatch_renders_inline_markup():
    outcome = compare_output("cat\n", "cut\n")

    assert not outcome.matched
    assert DELETE_COLOR + "a" in outcome.rendering
    assert INSERT_COLOR + "u" in outcome.rendering


def test_missing_output_is_mismatch():
    outcome = compare_output("expected\n", "")

    assert not outcome.matched
    assert outcome.rendering.startswith(DELETE_COLOR)


def test_empty_against_empty_is_no_diff():
    assert compare_output("", "").matched


def test_equal_runs_are_verbatim():
    assert render_diff("abc", "abcd") == "abc" + INSERT_COLOR + "d" + "\x1b[0m"
