"""
Expected vs. actual output diffing.

Diffs are rendered for terminals: text the program printed but should not
have is green, text it should have printed but did not is red.
"""

from pathlib import Path

from diff_match_patch import diff_match_patch
from pydantic import BaseModel, Field

INSERT_COLOR = "\x1b[32m"
DELETE_COLOR = "\x1b[31m"
RESET_COLOR = "\x1b[0m"


class DiffOutcome(BaseModel):
    """
    Classification of one actual output against its expected output.

    Attributes:
        matched: True when the rendered diff equals the expected text.
        rendering: The rendered diff.
    """

    matched: bool = Field(..., description="Whether no difference was found")
    rendering: str = Field(default="", description="Colored inline diff")


def render_diff(expected: str, actual: str) -> str:
    """
    Render a character-level diff from expected to actual as inline markup.
    """
    dmp = diff_match_patch()
    diffs = dmp.diff_main(expected, actual, False)

    parts: list[str] = []
    for op, text in diffs:
        if op == dmp.DIFF_INSERT:
            parts.append(f"{INSERT_COLOR}{text}{RESET_COLOR}")
        elif op == dmp.DIFF_DELETE:
            parts.append(f"{DELETE_COLOR}{text}{RESET_COLOR}")
        else:
            parts.append(text)
    return "".join(parts)


def compare_output(expected: str, actual: str) -> DiffOutcome:
    """
    Diff actual output against expected output.

    Carriage returns are stripped from the expected text first. The pair is
    a match when the rendered diff is identical to the expected text.

    Args:
        expected: Raw expected output.
        actual: Captured standard output.

    Returns:
        DiffOutcome with the classification and the rendering.
    """
    expected = expected.replace("\r", "")
    rendering = render_diff(expected, actual)
    return DiffOutcome(matched=rendering == expected, rendering=rendering)


def read_expected(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")
