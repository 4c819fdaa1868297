"""
Configuration constants for the Submission Checker.
"""

from pathlib import Path


# Project layout
SUBMISSIONS_DIRNAME: str = "submissions"
TESTCASES_DIRNAME: str = "testcases"
REPORTS_DIRNAME: str = "reports"
DEFAULT_CONFIG_FILENAME: str = "checker_config.yml"

# File patterns
SOURCE_EXTENSION: str = ".java"
INPUT_EXTENSION: str = ".in"
OUTPUT_EXTENSION: str = ".out"
REPORT_EXTENSION: str = ".txt"

# Raw submission names look like "<student>_<id>_<attempt>_<ClassName>[-<n>].java"
METADATA_TOKENS: int = 3
NAME_DELIMITER: str = "_"
RESUBMISSION_DELIMITER: str = "-"

# External toolchain. Placeholders: {workspace}, {source}, {class_name}
COMPILE_COMMAND: list[str] = ["javac", "{source}"]
RUN_COMMAND: list[str] = ["java", "-classpath", "{workspace}", "{class_name}"]

# Execution configuration
DEFAULT_TIMEOUT_SECONDS: float = 5.0
DEFAULT_WORKERS: int = 1

# Report configuration
VERBOSE_NUM_LINES: int = 50
TRUNCATION_MARKER: str = "=========OUTPUT TRUNCATED. USE -v FOR FULL LOG PRINT========="

# Default paths (can be overridden via CLI)
DEFAULT_PROJECT_DIR: Path = Path(".")

# Seconds to collect remaining output after a timed-out process group is killed
KILL_DRAIN_SECONDS: float = 2.0
