"""
Submission Checker: Batch Grading for Compiled Student Programs

Compiles every raw submission in a project directory, runs it against an
ordered set of test cases under a wall-clock timeout, and writes one plain
text report per submission with output diffs.
"""

__version__ = "0.1.0"
