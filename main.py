"""
Submission Checker: compile, run and diff student submissions.

Usage:
  main.py --path=PATH --timeout=SECONDS [--verbose] [--config=PATH] [--workers=N]
  main.py --config=PATH [--path=PATH] [--timeout=SECONDS] [--verbose] [--workers=N]
  main.py (-h | --help)

Options:
  -p PATH --path=PATH           Project folder that contains submissions / testcases.
  -t SECONDS --timeout=SECONDS  Timeout threshold when running tests, in seconds.
  -v --verbose                  Print full out/diff logs, even if the output is very large.
  --config=PATH                 Optional YAML configuration file.
  --workers=N                   Submissions compiled and run at the same time.
  -h --help                     Show this screen.

The project folder MUST contain the following folders:

  submissions - all student submissions, unaltered from the download form
                (<student>_<id>_<n>_<ClassName>[-<k>].java).
  testcases   - all testcase files. Inputs MUST end in .in and outputs in .out.
                Both groups are sorted alphabetically and the i-th input is
                paired with the i-th output.

Reports are written to <path>/reports, which is recreated on every run.
"""

import sys
from pathlib import Path

from docopt import docopt

from subchecker.config_loader import CheckerConfig, load_config
from subchecker.errors import CheckerError
from subchecker.models import ReportOutcome, Status
from subchecker.orchestrator import Orchestrator


def print_batch_summary(outcomes: list[ReportOutcome]) -> None:
    """
    Print a summary of the batch to console.

    Args:
        outcomes: One ReportOutcome per submission.
    """
    compile_failures = sum(1 for o in outcomes if not o.compiled)
    mismatches = sum(o.mismatches for o in outcomes)
    timeouts = sum(o.counts.get(Status.TIMEOUT, 0) for o in outcomes)
    errors = sum(o.counts.get(Status.ERROR, 0) for o in outcomes)

    print("\n" + "=" * 60)
    print("CHECKING COMPLETE")
    print("=" * 60)
    print(f"Total submissions processed: {len(outcomes)}")
    print(f"Compile failures: {compile_failures}")
    print(f"Runtime errors: {errors}, timeouts: {timeouts}")
    print(f"Mismatched test outputs: {mismatches}")


def build_config(arguments: dict) -> CheckerConfig:
    """
    Merge command-line arguments over the optional YAML configuration.
    """
    overrides = {
        "project_dir": Path(arguments["--path"]) if arguments["--path"] else None,
        "timeout_seconds": float(arguments["--timeout"]) if arguments["--timeout"] else None,
        "workers": int(arguments["--workers"]) if arguments["--workers"] else None,
        # Only a flag given on the command line overrides the file
        "verbose": True if arguments["--verbose"] else None,
    }
    config_path = Path(arguments["--config"]) if arguments["--config"] else None
    return load_config(config_path, overrides)


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entrypoint.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    arguments = docopt(__doc__, argv=argv)

    try:
        config = build_config(arguments)
    except (OSError, ValueError) as e:
        print(f"Error loading config: {e}")
        return 1

    try:
        outcomes = Orchestrator(config).run_batch()
    except KeyboardInterrupt:
        print("\nChecking interrupted by user.")
        return 1
    except (CheckerError, OSError, ValueError) as e:
        print(f"\nError: {e}")
        if config.verbose:
            import traceback
            traceback.print_exc()
        return 1

    print_batch_summary(outcomes)
    print("All Reports Completed. Exiting...")
    print("Please make sure to check error logs as students may have incongruent filenames to class names!!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
