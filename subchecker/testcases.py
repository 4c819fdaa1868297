"""
Test-case discovery.

Inputs and expected outputs are told apart by extension, sorted, and paired
by position: the i-th input goes with the i-th output regardless of stems.
"""

from pathlib import Path

from .config import INPUT_EXTENSION, OUTPUT_EXTENSION
from .errors import TestCaseMismatchError, TestCaseNameError
from .models import TestCase


def is_hidden(path: Path, root: Path) -> bool:
    """True if the file or any directory between root and it starts with a dot."""
    return any(part.startswith(".") for part in path.relative_to(root).parts)


def get_test_names(
    tests_dir: Path,
    input_extension: str = INPUT_EXTENSION,
    output_extension: str = OUTPUT_EXTENSION,
) -> tuple[list[Path], list[Path]]:
    """
    Partition the files under tests_dir into sorted inputs and outputs.

    Args:
        tests_dir: Directory holding test files (searched recursively).
        input_extension: Extension marking input files.
        output_extension: Extension marking expected-output files.

    Returns:
        Tuple of (sorted input paths, sorted output paths).

    Raises:
        NotADirectoryError: If tests_dir is not a directory.
        TestCaseNameError: If a filename has no extension or an unknown one.
    """
    if not tests_dir.is_dir():
        raise NotADirectoryError(f"Test case directory not found: {tests_dir}")

    inputs: list[Path] = []
    outputs: list[Path] = []

    for path in tests_dir.rglob("*"):
        if not path.is_file() or is_hidden(path, tests_dir):
            continue

        if "." not in path.name:
            raise TestCaseNameError(f"Test case file has no extension: {path}")

        if path.suffix == input_extension:
            inputs.append(path)
        elif path.suffix == output_extension:
            outputs.append(path)
        else:
            raise TestCaseNameError(
                f"Test case file {path} must end in {input_extension} or {output_extension}"
            )

    inputs.sort(key=str)
    outputs.sort(key=str)
    return inputs, outputs


def get_test_cases(
    tests_dir: Path,
    input_extension: str = INPUT_EXTENSION,
    output_extension: str = OUTPUT_EXTENSION,
) -> list[TestCase]:
    """
    Load and positionally pair the test cases in tests_dir.

    Raises:
        TestCaseMismatchError: If the number of inputs and outputs differ.
    """
    inputs, outputs = get_test_names(tests_dir, input_extension, output_extension)

    if len(inputs) != len(outputs):
        raise TestCaseMismatchError(
            f"Found {len(inputs)} input files but {len(outputs)} output files in {tests_dir}"
        )

    return [TestCase(input_path=i, output_path=o) for i, o in zip(inputs, outputs)]


def single_test_case(input_file: Path, output_file: Path) -> list[TestCase]:
    """Use one fixed input/expected-output pair as the whole test set."""
    for path in (input_file, output_file):
        if not path.is_file():
            raise FileNotFoundError(f"Test file not found: {path}")
    return [TestCase(input_path=input_file, output_path=output_file)]
