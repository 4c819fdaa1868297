"""
Configuration loader for the Submission Checker.

Handles parsing and validation of YAML configuration files.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

from .config import (
    COMPILE_COMMAND,
    DEFAULT_PROJECT_DIR,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_WORKERS,
    INPUT_EXTENSION,
    OUTPUT_EXTENSION,
    REPORTS_DIRNAME,
    RUN_COMMAND,
    SOURCE_EXTENSION,
    SUBMISSIONS_DIRNAME,
    TESTCASES_DIRNAME,
    VERBOSE_NUM_LINES,
)


class CheckerConfig(BaseModel):
    """
    Configuration model for the checker.
    """
    project_dir: Path = Field(DEFAULT_PROJECT_DIR, description="Folder containing submissions and testcases")
    timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0, description="Timeout per test case run")
    verbose: bool = Field(False, description="Print full out/diff logs, even if very large")
    max_log_lines: int = Field(VERBOSE_NUM_LINES, ge=1, description="Log lines kept in non-verbose reports")
    workers: int = Field(DEFAULT_WORKERS, ge=1, description="Submissions compiled and run at the same time")

    # Toolchain
    compile_command: list[str] = Field(default_factory=lambda: list(COMPILE_COMMAND), min_length=1)
    run_command: list[str] = Field(default_factory=lambda: list(RUN_COMMAND), min_length=1)
    compile_timeout_seconds: Optional[float] = Field(None, gt=0, description="Optional compiler timeout")
    source_extension: str = Field(SOURCE_EXTENSION, description="Extension of raw submissions")

    # Test cases
    input_extension: str = Field(INPUT_EXTENSION, description="Extension of test inputs")
    output_extension: str = Field(OUTPUT_EXTENSION, description="Extension of expected outputs")
    input_file: Optional[Path] = Field(None, description="Single fixed test input (instead of testcases/)")
    output_file: Optional[Path] = Field(None, description="Single fixed expected output")

    workspace_dir: Optional[Path] = Field(None, description="Where workspaces are created (temp dir if unset)")

    @property
    def submissions_dir(self) -> Path:
        return self.project_dir / SUBMISSIONS_DIRNAME

    @property
    def testcases_dir(self) -> Path:
        return self.project_dir / TESTCASES_DIRNAME

    @property
    def reports_dir(self) -> Path:
        return self.project_dir / REPORTS_DIRNAME


def load_config(config_path: Path | None = None, overrides: dict[str, Any] | None = None) -> CheckerConfig:
    """
    Load configuration from a YAML file, then apply overrides.

    Args:
        config_path: Path to the YAML configuration file, or None for defaults.
        overrides: Values (e.g. from the command line) that win over the file.

    Returns:
        CheckerConfig object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If config file is invalid YAML.
        ValidationError: If config data is invalid.
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

        # Resolve relative paths relative to the config file location
        config_dir = config_path.parent
        for path_field in ["project_dir", "input_file", "output_file", "workspace_dir"]:
            if path_field in config_data and config_data[path_field]:
                path = Path(config_data[path_field])
                if not path.is_absolute():
                    config_data[path_field] = config_dir / path

    for key, value in (overrides or {}).items():
        if value is not None:
            config_data[key] = value

    return CheckerConfig(**config_data)
