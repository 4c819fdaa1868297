"""
Exceptions that abort a whole grading batch.

Per-submission problems (compile failures, crashes, timeouts) are recorded
as result statuses and never raised.
"""


class CheckerError(Exception):
    """Base class for fatal batch errors."""


class TestCaseNameError(CheckerError):
    """A test-case file lacks a recognized extension."""

    __test__ = False


class TestCaseMismatchError(CheckerError):
    """Input and expected-output test files cannot be paired."""

    __test__ = False


class SubmissionNameError(CheckerError):
    """A raw submission filename does not follow the naming convention."""
