"""
Report writer for per-submission text reports.

Each submission gets one plain text file in the reports directory. Reports
are written by one task per submission and joined before returning.
"""

import concurrent.futures
from pathlib import Path

from .config import REPORT_EXTENSION, TRUNCATION_MARKER, VERBOSE_NUM_LINES
from .diff_engine import compare_output, read_expected
from .models import ReportOutcome, Status, Submission, TestCase


def truncate_lines(text: str, max_lines: int) -> str:
    """
    Keep the first max_lines lines of text, marking the cut if one was made.

    Args:
        text: Log text.
        max_lines: Number of lines to keep.

    Returns:
        The text unchanged if it fits, otherwise the kept lines followed by
        the truncation marker on its own line.
    """
    lines = text.splitlines(keepends=True)
    if len(lines) <= max_lines:
        return text
    return "".join(lines[:max_lines]) + f"\n{TRUNCATION_MARKER}\n"


class ReportWriter:
    """
    Renders and writes submission reports.
    """

    def __init__(
        self,
        output_dir: Path,
        test_cases: list[TestCase],
        verbose: bool = False,
        max_log_lines: int = VERBOSE_NUM_LINES,
    ) -> None:
        """
        Initialize the report writer.

        Args:
            output_dir: Reports directory. Must exist.
            test_cases: Test cases, in the order submissions were run against them.
            verbose: Print full logs instead of truncating them.
            max_log_lines: Lines kept per log when not verbose.
        """
        self.output_dir = output_dir
        self.test_cases = test_cases
        self.verbose = verbose
        self.max_log_lines = max_log_lines

    def _log(self, text: str) -> str:
        if self.verbose:
            return text
        return truncate_lines(text, self.max_log_lines)

    def render(self, submission: Submission) -> tuple[str, int]:
        """
        Render the report text for a submission.

        Returns:
            Tuple of (report text, number of mismatched test outputs).
        """
        compile_result = submission.compile_result
        parts: list[str] = [f"Report For {submission.display_name}\n\n"]

        # Compile result
        parts.append(f"------------------Compile Result: {compile_result.status}------------------\n")
        if compile_result.status == Status.ERROR:
            parts.append("Error Log:\n")
            parts.append(self._log(compile_result.stderr) + "\n\n")
        if compile_result.stdout:
            parts.append("Out Log:\n")
            parts.append(self._log(compile_result.stdout) + "\n\n")
        if not submission.compiled:
            return "".join(parts), 0

        # Run results
        counts = submission.status_counts()
        parts.append(
            "------------------Run Results------------------\n"
            f"Timeout: {counts[Status.TIMEOUT]}\n"
            f"Error: {counts[Status.ERROR]}\n"
            f"No Timeout/Error: {counts[Status.OK]}\n\n"
        )

        parts.append("Test Cases:\n")
        mismatches = 0
        for test_case, result in zip(self.test_cases, submission.run_results, strict=True):
            parts.append(f"\nCase {test_case.output_path.name}: {result.status}\n")
            if result.status == Status.ERROR:
                parts.append("Error Log:\n")
                parts.append(self._log(result.stderr) + "\n\n")
                continue

            diff = compare_output(read_expected(test_case.output_path), result.stdout)
            if diff.matched:
                parts.append("Diff Log: No Diff!\n\n")
                continue

            mismatches += 1
            parts.append("Diff Log:\n\n")
            parts.append(self._log(diff.rendering))
            parts.append("Out Log:\n\n")
            parts.append(self._log(result.stdout))

        parts.append(f"\n\n---------------Number of mismatch test outputs: {mismatches}---------------\n\n")
        return "".join(parts), mismatches

    def write(self, submission: Submission) -> ReportOutcome:
        """
        Write one submission's report to <identity>.txt.
        """
        print(f"Writing report for {submission.name}...")
        text, mismatches = self.render(submission)

        report_path = self.output_dir / f"{submission.name}{REPORT_EXTENSION}"
        with open(report_path, "w", encoding="utf-8") as f:
            f.write(text)

        return ReportOutcome(
            name=submission.name,
            report_path=report_path,
            compiled=submission.compiled,
            mismatches=mismatches,
            counts=submission.status_counts(),
        )

    def write_all(self, submissions: list[Submission], max_workers: int | None = None) -> list[ReportOutcome]:
        """
        Write all reports concurrently, one task per submission.

        Waits for every task before returning. If any task failed, the
        first failure (in submission order) is raised after the join.

        Returns:
            ReportOutcome per submission, in submission order.
        """
        if not submissions:
            return []

        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(self.write, submission) for submission in submissions]
            concurrent.futures.wait(futures)

        return [future.result() for future in futures]
