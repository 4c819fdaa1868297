"""
Process launching with a deadline.

A launcher starts one external process, feeds it an optional stdin file,
and races its exit against a deadline. It returns Completed when the
process exits first and TimedOut when the deadline wins and the process
was killed. Each process runs in its own session so a timeout kills
every process it started, not just the direct child. Either way the
process is reaped and its pipes are closed.
"""

import os
import signal
import subprocess
from pathlib import Path
from typing import Protocol

from .config import KILL_DRAIN_SECONDS
from .models import Completed, TimedOut


class Launcher(Protocol):
    """Anything that can run a command under a deadline."""

    def launch(
        self,
        command: list[str],
        stdin_path: Path | None = None,
        timeout: float | None = None,
        cwd: Path | None = None,
    ) -> Completed | TimedOut:
        ...


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


def _kill_group(process: subprocess.Popen) -> None:
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


class SubprocessLauncher:
    """
    Runs commands with subprocess, killing them when the deadline elapses.
    """

    def __init__(self, verbose: bool = False) -> None:
        """
        Initialize the launcher.

        Args:
            verbose: Echo every executed command.
        """
        self.verbose = verbose

    def launch(
        self,
        command: list[str],
        stdin_path: Path | None = None,
        timeout: float | None = None,
        cwd: Path | None = None,
    ) -> Completed | TimedOut:
        """
        Run a command and wait for it to exit or for the deadline.

        Args:
            command: Program and arguments.
            stdin_path: File opened as the process's standard input.
            timeout: Seconds before the process is killed, None to wait forever.
            cwd: Working directory for the process.

        Returns:
            Completed with the exit code and captured streams, or TimedOut
            with whatever was captured before the kill.

        Raises:
            OSError: If stdin_path cannot be opened.
        """
        if self.verbose:
            print(f"  Executing: {' '.join(command)}")

        stdin = open(stdin_path, "rb") if stdin_path is not None else subprocess.DEVNULL
        try:
            try:
                process = subprocess.Popen(
                    command,
                    stdin=stdin,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    cwd=str(cwd) if cwd else None,
                    start_new_session=True,
                )
            except OSError as e:
                return Completed(exit_code=None, stderr=f"Failed to launch {command[0]}: {e}")

            with process:
                try:
                    stdout, stderr = process.communicate(timeout=timeout)
                except subprocess.TimeoutExpired:
                    _kill_group(process)
                    try:
                        stdout, stderr = process.communicate(timeout=KILL_DRAIN_SECONDS)
                    except subprocess.TimeoutExpired as e:
                        # A process that left the group still holds the pipes
                        stdout, stderr = e.output, e.stderr
                    return TimedOut(stdout=_decode(stdout), stderr=_decode(stderr), pid=process.pid)
                except BaseException:
                    _kill_group(process)
                    raise

            return Completed(
                exit_code=process.returncode,
                stdout=_decode(stdout),
                stderr=_decode(stderr),
                pid=process.pid,
            )
        finally:
            if stdin is not subprocess.DEVNULL:
                stdin.close()
