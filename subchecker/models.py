"""
Pydantic models for the Submission Checker.

Defines structured data types for test cases, staged workspaces, process
outcomes, per-submission results and report summaries.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .config import NAME_DELIMITER


class Status(str, Enum):
    """
    Outcome of a compile step or a single test-case run.
    """

    OK = "OK"
    ERROR = "ERROR"
    TIMEOUT = "TIMEOUT"

    def __str__(self) -> str:
        return self.value


class TestCase(BaseModel):
    """
    One input file paired with its expected output by sort position.

    Attributes:
        input_path: File fed to the program's standard input.
        output_path: File holding the expected standard output.
    """

    __test__ = False
    model_config = ConfigDict(frozen=True)

    input_path: Path = Field(..., description="Test input file")
    output_path: Path = Field(..., description="Expected output file")


class Workspace(BaseModel):
    """
    Isolated directory holding one staged submission.

    Attributes:
        path: Workspace directory.
        class_name: Class name derived from the raw filename.
        source_file: The staged, renamed source file.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Workspace directory")
    class_name: str = Field(..., description="Derived class name")
    source_file: Path = Field(..., description="Staged source file")


class Completed(BaseModel):
    """
    A process that exited before its deadline.

    Attributes:
        exit_code: Process exit code, None if the process could not be launched.
        stdout: Captured standard output.
        stderr: Captured standard error (or the launch error message).
        pid: Process id, None if the process could not be launched.
    """

    model_config = ConfigDict(frozen=True)

    exit_code: int | None = Field(default=None, description="Exit code")
    stdout: str = Field(default="", description="Captured standard output")
    stderr: str = Field(default="", description="Captured standard error")
    pid: int | None = Field(default=None, description="Process id")

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class TimedOut(BaseModel):
    """
    A process killed when its deadline elapsed.

    Attributes:
        stdout: Standard output captured up to the kill.
        stderr: Standard error captured up to the kill.
        pid: Process id of the killed (and reaped) process.
    """

    model_config = ConfigDict(frozen=True)

    stdout: str = Field(default="", description="Partial standard output")
    stderr: str = Field(default="", description="Partial standard error")
    pid: int | None = Field(default=None, description="Process id")


class Result(BaseModel):
    """
    Result of compiling a submission or running one test case.

    Attributes:
        status: OK, ERROR or TIMEOUT.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    model_config = ConfigDict(frozen=True)

    status: Status = Field(..., description="Terminal status")
    stdout: str = Field(default="", description="Captured standard output")
    stderr: str = Field(default="", description="Captured standard error")


class Submission(BaseModel):
    """
    Everything the pipeline learned about one raw submission.

    Attributes:
        name: Identity, the raw filename stem (also the report filename).
        class_name: Class name the source was staged under.
        source_path: Path to the raw submission file.
        compile_result: Result of the compile step.
        run_results: One result per test case, empty if compilation failed.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Submission identity")
    class_name: str = Field(..., description="Derived class name")
    source_path: Path = Field(..., description="Raw submission file")
    compile_result: Result = Field(..., description="Compile outcome")
    run_results: tuple[Result, ...] = Field(default=(), description="Per test case results")

    @property
    def display_name(self) -> str:
        """Identity before its first metadata delimiter."""
        return self.name.split(NAME_DELIMITER)[0]

    @property
    def compiled(self) -> bool:
        return self.compile_result.status == Status.OK

    def status_counts(self) -> dict[Status, int]:
        counts = {status: 0 for status in Status}
        for result in self.run_results:
            counts[result.status] += 1
        return counts


class ReportOutcome(BaseModel):
    """
    Summary returned by one report-writing task.

    Attributes:
        name: Submission identity.
        report_path: Written report file.
        compiled: Whether the submission compiled.
        mismatches: Number of test cases whose output differed.
        counts: Run status counts.
    """

    name: str = Field(..., description="Submission identity")
    report_path: Path = Field(..., description="Report file")
    compiled: bool = Field(..., description="Whether compilation succeeded")
    mismatches: int = Field(default=0, ge=0, description="Mismatched test outputs")
    counts: dict[Status, int] = Field(default_factory=dict, description="Run status counts")
