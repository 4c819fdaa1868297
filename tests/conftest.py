import sys
from pathlib import Path

import pytest

from subchecker.config_loader import CheckerConfig
from subchecker.models import Completed, TimedOut

# The interpreter doubles as "compiler" and "runtime" so no JDK is needed.
PY_COMPILE = [sys.executable, "-m", "py_compile", "{source}"]
PY_RUN = [sys.executable, "{source}"]


class FakeLauncher:
    """Returns scripted outcomes and records every launch."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def launch(self, command, stdin_path=None, timeout=None, cwd=None):
        self.calls.append({"command": command, "stdin_path": stdin_path, "timeout": timeout, "cwd": cwd})
        return self.outcomes.pop(0)


@pytest.fixture
def fake_launcher():
    def make(*outcomes: Completed | TimedOut) -> FakeLauncher:
        return FakeLauncher(outcomes)
    return make


def write_test_cases(tests_dir: Path, cases: dict[str, tuple[str, str]]) -> None:
    tests_dir.mkdir(parents=True, exist_ok=True)
    for stem, (given, expected) in cases.items():
        (tests_dir / f"{stem}.in").write_text(given, encoding="utf-8")
        (tests_dir / f"{stem}.out").write_text(expected, encoding="utf-8")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project folder with two upper-casing test cases and no submissions yet."""
    (tmp_path / "submissions").mkdir()
    write_test_cases(
        tmp_path / "testcases",
        {"case1": ("hello\n", "HELLO\n"), "case2": ("abc\ndef\n", "ABC\r\nDEF\r\n")},
    )
    return tmp_path


@pytest.fixture
def python_config(project: Path) -> CheckerConfig:
    return CheckerConfig(
        project_dir=project,
        timeout_seconds=5,
        compile_command=PY_COMPILE,
        run_command=PY_RUN,
        source_extension=".py",
    )
