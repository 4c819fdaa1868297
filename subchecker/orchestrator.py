"""
Batch orchestration: stage, compile, run and report every submission.
"""

import concurrent.futures
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config_loader import CheckerConfig
from .models import ReportOutcome, Status, Submission, TestCase
from .process import Launcher, SubprocessLauncher
from .report_writer import ReportWriter
from .runner import CompileRunner, TimedExecutor
from .stager import find_submissions, remove_workspace, stage_submission
from .testcases import get_test_cases, single_test_case


class Orchestrator:
    """
    Drives the submission pipeline for one project directory.
    """

    def __init__(self, config: CheckerConfig, launcher: Launcher | None = None) -> None:
        """
        Initialize the orchestrator.

        Args:
            config: Checker configuration.
            launcher: Process launcher shared by the compile and run steps.
        """
        self.config = config
        launcher = launcher or SubprocessLauncher(verbose=config.verbose)
        self.compiler = CompileRunner(
            command=config.compile_command,
            launcher=launcher,
            timeout_seconds=config.compile_timeout_seconds,
        )
        self.executor = TimedExecutor(
            command=config.run_command,
            launcher=launcher,
            timeout_seconds=config.timeout_seconds,
        )

    def load_test_cases(self) -> list[TestCase]:
        """
        Resolve the test set: the fixed pair if configured, else testcases/.
        """
        if self.config.input_file or self.config.output_file:
            if not (self.config.input_file and self.config.output_file):
                raise ValueError("input_file and output_file must be configured together")
            return single_test_case(self.config.input_file, self.config.output_file)

        return get_test_cases(
            self.config.testcases_dir,
            self.config.input_extension,
            self.config.output_extension,
        )

    def process_submission(self, source_path: Path, test_cases: list[TestCase], work_root: Path) -> Submission:
        """
        Stage, compile and run one submission, removing its workspace afterwards.

        Args:
            source_path: Raw submission file.
            test_cases: Ordered test cases.
            work_root: Directory workspaces are created in.

        Returns:
            The finished Submission. run_results is empty if compilation failed.
        """
        print(f"Running {source_path}...")
        workspace = stage_submission(source_path, work_root, self.config.source_extension)
        try:
            compile_result = self.compiler.compile(workspace)
            if compile_result.status != Status.OK:
                print(f"  Compile failed for {source_path.name}")
                run_results = []
            else:
                run_results = self.executor.run_all(workspace, test_cases)
        finally:
            remove_workspace(workspace)

        return Submission(
            name=workspace.path.name,
            class_name=workspace.class_name,
            source_path=source_path,
            compile_result=compile_result,
            run_results=tuple(run_results),
        )

    def run_submissions(self, paths: list[Path], test_cases: list[TestCase], work_root: Path) -> list[Submission]:
        """
        Process every submission, sequentially or on a thread pool.

        Results keep the order of paths. The first fatal error cancels the
        submissions that have not started yet and is re-raised.
        """
        if self.config.workers == 1:
            return [self.process_submission(path, test_cases, work_root) for path in paths]

        executor = concurrent.futures.ThreadPoolExecutor(max_workers=self.config.workers)
        try:
            futures = [
                executor.submit(self.process_submission, path, test_cases, work_root)
                for path in paths
            ]
            return [future.result() for future in futures]
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    def run_batch(self) -> list[ReportOutcome]:
        """
        Grade the whole project directory.

        Test cases and submission names are validated before anything runs.
        The reports directory is recreated only once every submission has
        been processed.

        Returns:
            ReportOutcome per submission, in submission order.
        """
        test_cases = self.load_test_cases()
        print(f"Found {len(test_cases)} test cases")

        paths = find_submissions(self.config.submissions_dir, self.config.source_extension)
        print(f"Found {len(paths)} submissions")

        with _work_root(self.config.workspace_dir) as work_root:
            submissions = self.run_submissions(paths, test_cases, work_root)

        reports_dir = self.config.reports_dir
        shutil.rmtree(reports_dir, ignore_errors=True)
        reports_dir.mkdir(parents=True)

        writer = ReportWriter(
            output_dir=reports_dir,
            test_cases=test_cases,
            verbose=self.config.verbose,
            max_log_lines=self.config.max_log_lines,
        )
        return writer.write_all(submissions)


@contextmanager
def _work_root(workspace_dir: Path | None) -> Iterator[Path]:
    if workspace_dir is not None:
        workspace_dir.mkdir(parents=True, exist_ok=True)
        yield workspace_dir
        return

    with tempfile.TemporaryDirectory(prefix="subchecker-") as tmp:
        yield Path(tmp)
