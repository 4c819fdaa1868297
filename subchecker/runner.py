"""
Compile and run steps for a staged submission.

Both steps go through a Launcher so the external toolchain (javac/java by
default) is only named in configuration.
"""

from pathlib import Path

from .config import COMPILE_COMMAND, DEFAULT_TIMEOUT_SECONDS, RUN_COMMAND
from .models import Completed, Result, Status, TestCase, TimedOut, Workspace
from .process import Launcher, SubprocessLauncher


def format_command(template: list[str], workspace: Workspace) -> list[str]:
    """
    Fill the {workspace}, {source} and {class_name} placeholders of a command.
    """
    values = {
        "workspace": str(workspace.path),
        "source": str(workspace.source_file),
        "class_name": workspace.class_name,
    }
    return [part.format(**values) for part in template]


class CompileRunner:
    """
    Compiles a staged submission with the external compiler.
    """

    def __init__(
        self,
        command: list[str] | None = None,
        launcher: Launcher | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """
        Initialize the compile runner.

        Args:
            command: Compiler command template. Defaults to javac.
            launcher: Process launcher to use.
            timeout_seconds: Optional compiler time limit, unlimited if None.
        """
        self.command = command or list(COMPILE_COMMAND)
        self.launcher = launcher or SubprocessLauncher()
        self.timeout_seconds = timeout_seconds

    def compile(self, workspace: Workspace) -> Result:
        """
        Compile the workspace's source file.

        Returns:
            Result with status OK iff the compiler exited with code 0.
        """
        outcome = self.launcher.launch(
            format_command(self.command, workspace),
            timeout=self.timeout_seconds,
            cwd=workspace.path,
        )

        if isinstance(outcome, TimedOut):
            stderr = outcome.stderr + f"\nCompilation exceeded {self.timeout_seconds}s and was killed.\n"
            return Result(status=Status.ERROR, stdout=outcome.stdout, stderr=stderr)

        status = Status.OK if outcome.succeeded else Status.ERROR
        return Result(status=status, stdout=outcome.stdout, stderr=outcome.stderr)


class TimedExecutor:
    """
    Runs a compiled submission against test inputs under a wall-clock timeout.
    """

    def __init__(
        self,
        command: list[str] | None = None,
        launcher: Launcher | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """
        Initialize the executor.

        Args:
            command: Runtime command template. Defaults to java -classpath.
            launcher: Process launcher to use.
            timeout_seconds: Time limit for each test case.
        """
        self.command = command or list(RUN_COMMAND)
        self.launcher = launcher or SubprocessLauncher()
        self.timeout_seconds = timeout_seconds

    def run(self, workspace: Workspace, input_path: Path) -> Result:
        """
        Run the submission once with input_path as standard input.

        Returns:
            Result with TIMEOUT if the deadline elapsed first, otherwise OK
            on a clean exit and ERROR on a non-zero exit or launch failure.
        """
        outcome = self.launcher.launch(
            format_command(self.command, workspace),
            stdin_path=input_path,
            timeout=self.timeout_seconds,
            cwd=workspace.path,
        )
        return classify(outcome)

    def run_all(self, workspace: Workspace, test_cases: list[TestCase]) -> list[Result]:
        """
        Run every test case in order, one process at a time.

        A failing or timed-out case does not stop the remaining ones.
        """
        results: list[Result] = []
        for test_case in test_cases:
            print(f"  case {test_case.input_path}...")
            results.append(self.run(workspace, test_case.input_path))
        return results


def classify(outcome: Completed | TimedOut) -> Result:
    if isinstance(outcome, TimedOut):
        return Result(status=Status.TIMEOUT, stdout=outcome.stdout, stderr=outcome.stderr)
    status = Status.OK if outcome.succeeded else Status.ERROR
    return Result(status=status, stdout=outcome.stdout, stderr=outcome.stderr)
