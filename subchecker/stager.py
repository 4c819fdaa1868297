"""
Submission staging.

Derives a submission's identity and class name from its raw filename and
copies it, renamed, into a private workspace so that concurrently processed
submissions never see each other's classes.
"""

import shutil
from pathlib import Path

from .config import (
    METADATA_TOKENS,
    NAME_DELIMITER,
    RESUBMISSION_DELIMITER,
    SOURCE_EXTENSION,
)
from .errors import SubmissionNameError
from .models import Workspace
from .testcases import is_hidden


def parse_submission_name(filename: str, source_extension: str = SOURCE_EXTENSION) -> tuple[str, str]:
    """
    Split a raw submission filename into identity and class name.

    "jdoe_1000_01_MyClass-2.java" gives ("jdoe_1000_01_MyClass-2", "MyClass").

    Args:
        filename: Base name of the raw submission file.
        source_extension: Source extension to strip.

    Returns:
        Tuple of (identity, class name).

    Raises:
        SubmissionNameError: If no class name remains after the metadata tokens.
    """
    identity = filename.removesuffix(source_extension)
    tokens = identity.split(NAME_DELIMITER)
    class_name = "".join(tokens[METADATA_TOKENS:]).split(RESUBMISSION_DELIMITER)[0]

    if not class_name:
        raise SubmissionNameError(
            f"Cannot derive a class name from '{filename}': expected "
            f"<student>_<id>_<n>_<ClassName>{source_extension}"
        )

    return identity, class_name


def find_submissions(submissions_dir: Path, source_extension: str = SOURCE_EXTENSION) -> list[Path]:
    """
    Find all raw submission files, sorted by path.

    Every name is checked against the naming convention up front so that a
    malformed name aborts the batch before anything is compiled.

    Raises:
        NotADirectoryError: If submissions_dir is not a directory.
        SubmissionNameError: If two files would share a workspace and report.
    """
    if not submissions_dir.is_dir():
        raise NotADirectoryError(f"Submissions directory not found: {submissions_dir}")

    paths = sorted(
        (p for p in submissions_dir.rglob("*") if p.is_file() and not is_hidden(p, submissions_dir)),
        key=str,
    )

    seen: dict[str, Path] = {}
    for path in paths:
        identity, _ = parse_submission_name(path.name, source_extension)
        if identity in seen:
            raise SubmissionNameError(f"Duplicate submission name: {seen[identity]} and {path}")
        seen[identity] = path

    return paths


def stage_submission(source_path: Path, work_root: Path, source_extension: str = SOURCE_EXTENSION) -> Workspace:
    """
    Create a fresh workspace for a submission and copy its source in.

    The caller owns the returned workspace and must remove it.

    Args:
        source_path: Raw submission file.
        work_root: Directory under which the workspace is created.
        source_extension: Extension of the staged source file.

    Returns:
        Workspace describing the staged submission.
    """
    identity, class_name = parse_submission_name(source_path.name, source_extension)

    workspace_dir = work_root.resolve() / identity
    if workspace_dir.exists():
        shutil.rmtree(workspace_dir)
    workspace_dir.mkdir(parents=True)

    staged = workspace_dir / f"{class_name}{source_extension}"
    try:
        shutil.copyfile(source_path, staged)
    except OSError:
        shutil.rmtree(workspace_dir, ignore_errors=True)
        raise

    return Workspace(path=workspace_dir, class_name=class_name, source_file=staged)


def remove_workspace(workspace: Workspace) -> None:
    shutil.rmtree(workspace.path, ignore_errors=True)
