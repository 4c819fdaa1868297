from pathlib import Path

import pytest

from subchecker.config import TRUNCATION_MARKER
from subchecker.models import Result, Status, Submission, TestCase
from subchecker.report_writer import ReportWriter, truncate_lines


@pytest.fixture
def expected_cases(tmp_path) -> list[TestCase]:
    cases = []
    for i, expected in enumerate(["HELLO\n", "ABC\r\nDEF\r\n", "X\n"], 1):
        (tmp_path / f"case{i}.in").write_text("", encoding="utf-8")
        (tmp_path / f"case{i}.out").write_text(expected, encoding="utf-8", newline="")
        cases.append(TestCase(input_path=tmp_path / f"case{i}.in", output_path=tmp_path / f"case{i}.out"))
    return cases


def make_submission(compile_result: Result, run_results=()) -> Submission:
    return Submission(
        name="jdoe_1000_01_Main",
        class_name="Main",
        source_path=Path("jdoe_1000_01_Main.java"),
        compile_result=compile_result,
        run_results=tuple(run_results),
    )


def test_truncate_keeps_short_text():
    text = "a\nb\nc\n"

    assert truncate_lines(text, 3) == text


def test_truncate_cuts_and_marks():
    text = "".join(f"line {i}\n" for i in range(60))

    truncated = truncate_lines(text, 50)

    assert truncated.startswith("line 0\n")
    assert "line 49\n" in truncated
    assert "line 50" not in truncated
    assert truncated.endswith(f"\n{TRUNCATION_MARKER}\n")


def test_verbose_keeps_log_byte_for_byte(tmp_path, expected_cases):
    long_log = "".join(f"e{i}\r\n" for i in range(100))
    submission = make_submission(Result(status=Status.ERROR, stderr=long_log))

    verbose_text, _ = ReportWriter(tmp_path, expected_cases, verbose=True, max_log_lines=5).render(submission)
    short_text, _ = ReportWriter(tmp_path, expected_cases, verbose=False, max_log_lines=5).render(submission)

    assert long_log in verbose_text
    assert TRUNCATION_MARKER not in verbose_text
    assert TRUNCATION_MARKER in short_text
    assert "e5\r\n" not in short_text


def test_compile_failure_report_has_no_run_section(tmp_path, expected_cases):
    submission = make_submission(Result(status=Status.ERROR, stderr="Main.java:3: error: ';' expected"))

    text, mismatches = ReportWriter(tmp_path, expected_cases).render(submission)

    assert text.startswith("Report For jdoe\n\n")
    assert "Compile Result: ERROR" in text
    assert "Error Log:\nMain.java:3: error: ';' expected\n\n" in text
    assert "Run Results" not in text
    assert "Test Cases" not in text
    assert mismatches == 0


def test_run_report_sections(tmp_path, expected_cases):
    submission = make_submission(
        Result(status=Status.OK),
        [
            Result(status=Status.OK, stdout="HELLO\n"),
            Result(status=Status.TIMEOUT, stdout="ABC\n"),
            Result(status=Status.ERROR, stderr="Exception in thread \"main\""),
        ],
    )

    text, mismatches = ReportWriter(tmp_path, expected_cases).render(submission)

    assert "Compile Result: OK" in text
    assert "Timeout: 1\nError: 1\nNo Timeout/Error: 1\n" in text
    assert "Case case1.out: OK\nDiff Log: No Diff!\n" in text
    assert "Case case2.out: TIMEOUT\nDiff Log:\n\n" in text
    assert "Out Log:\n\nABC\n" in text
    assert "Case case3.out: ERROR\nError Log:\nException in thread \"main\"\n" in text
    assert "Number of mismatch test outputs: 1" in text
    assert mismatches == 1


def test_write_all_writes_one_file_per_submission(tmp_path, expected_cases):
    reports = tmp_path / "reports"
    reports.mkdir()
    submissions = [
        make_submission(Result(status=Status.ERROR, stderr="bad")),
        Submission(
            name="amy_2_1_Main",
            class_name="Main",
            source_path=Path("amy_2_1_Main.java"),
            compile_result=Result(status=Status.OK),
            run_results=(
                Result(status=Status.OK, stdout="HELLO\n"),
                Result(status=Status.OK, stdout="ABC\nDEF\n"),
                Result(status=Status.OK, stdout="X\n"),
            ),
        ),
    ]

    outcomes = ReportWriter(reports, expected_cases).write_all(submissions)

    assert [o.name for o in outcomes] == ["jdoe_1000_01_Main", "amy_2_1_Main"]
    assert sorted(p.name for p in reports.iterdir()) == ["amy_2_1_Main.txt", "jdoe_1000_01_Main.txt"]
    assert not outcomes[0].compiled
    assert outcomes[1].mismatches == 0
    assert outcomes[1].counts == {Status.OK: 3, Status.ERROR: 0, Status.TIMEOUT: 0}


def test_write_all_raises_after_join(tmp_path, expected_cases):
    submission = make_submission(Result(status=Status.OK), [Result(status=Status.OK)] * 3)

    with pytest.raises(FileNotFoundError):
        ReportWriter(tmp_path / "missing", expected_cases).write_all([submission])
