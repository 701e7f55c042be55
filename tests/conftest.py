"""
pytest configuration and fixtures for mediasort tests.
"""

import io
import os
import shutil
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List

import pytest

from mediasort.models import CaptureDate, Category, ClassifiedEntry


@dataclass
class CliResult:
    """Result from running CLI command."""
    exit_code: int
    output: str
    error: str


@pytest.fixture(scope="session")
def test_config_base(tmp_path_factory):
    """Shared test config directory for all tests."""
    return tmp_path_factory.mktemp("mediasort_test_config")


@pytest.fixture
def test_config_path(test_config_base):
    """Test-specific config path with clean state guarantee."""
    config_path = test_config_base / "config.yml"

    if config_path.exists():
        config_path.unlink()

    # Also clean any residual history or import logs
    history_dir = test_config_base / "history"
    imports_log = test_config_base / "imports.log"

    if history_dir.exists():
        shutil.rmtree(history_dir)
    if imports_log.exists():
        imports_log.unlink()

    return config_path


@pytest.fixture
def cli_runner():
    """Create a CLI runner that captures output and uses test config."""

    def run_cli(*args, config_path=None, answer="n"):
        """Run mediasort CLI with given arguments.

        Args:
            *args: Command line arguments (source, dest, --flags, etc)
            config_path: Optional config path for test isolation
            answer: Reply given to the confirmation prompt

        Returns:
            CliResult with exit_code, output, and error
        """
        from mediasort.cli import main
        from mediasort.constants import get_console

        old_stdout = sys.stdout
        old_stderr = sys.stderr
        stdout = io.StringIO()
        stderr = io.StringIO()
        old_argv = sys.argv

        console = get_console()
        console.input = lambda prompt="": answer

        try:
            sys.stdout = stdout
            sys.stderr = stderr
            sys.argv = ['mediasort'] + [str(a) for a in args]

            exit_code = main(config_path=config_path)

            return CliResult(
                exit_code=exit_code,
                output=stdout.getvalue(),
                error=stderr.getvalue()
            )
        except SystemExit as e:
            return CliResult(
                exit_code=e.code if e.code is not None else 0,
                output=stdout.getvalue(),
                error=stderr.getvalue()
            )
        finally:
            sys.stdout = old_stdout
            sys.stderr = old_stderr
            sys.argv = old_argv
            del console.input

    return run_cli


@pytest.fixture
def create_test_files(tmp_path):
    """Helper to create test files with specific properties."""

    def create_files(file_specs: List[dict], root: str = "source") -> Path:
        """Create test files based on specifications.

        Args:
            file_specs: List of dicts with keys:
                - name: path relative to the root
                - content: file content (optional)
                - mtime: modification time as datetime (optional)
            root: Directory name under tmp_path

        Returns:
            Path to directory containing created files
        """
        test_dir = tmp_path / root
        test_dir.mkdir(exist_ok=True)

        for spec in file_specs:
            file_path = test_dir / spec['name']
            file_path.parent.mkdir(parents=True, exist_ok=True)

            content = spec.get('content', b'test file content')
            if isinstance(content, str):
                file_path.write_text(content)
            else:
                file_path.write_bytes(content)

            if 'mtime' in spec:
                mtime = spec['mtime'].timestamp()
                os.utime(file_path, (mtime, mtime))

        return test_dir

    return create_files


@pytest.fixture
def make_entry():
    """Build a ClassifiedEntry for a real or imaginary source file."""

    def build(source_path: Path, category: Category = Category.PICTURE,
              date: CaptureDate = CaptureDate("2024", "03", "15", "MARS"),
              special: bool = False) -> ClassifiedEntry:
        size = source_path.stat().st_size if source_path.exists() else 0
        return ClassifiedEntry(
            source_path=source_path,
            extension=source_path.suffix.lower(),
            category=category,
            capture_date=date,
            size=size,
            mtime=datetime(2024, 3, 15, 12, 0, 0),
            is_special_origin=special,
        )

    return build


@pytest.fixture
def assert_file_structure():
    """Helper to assert expected file structure."""

    def check_structure(base_path: Path, expected_structure: dict):
        """Assert that directory has expected structure.

        Args:
            base_path: Root directory to check
            expected_structure: Dict describing expected structure
                e.g., {
                    "Photos": {
                        "2024": {"03 MARS": ["a.jpg", "b.jpg"]}
                    }
                }
        """
        def check_level(path: Path, structure: dict):
            for name, value in structure.items():
                item_path = path / name
                assert item_path.exists(), f"Expected {item_path} to exist"

                if isinstance(value, dict):
                    assert item_path.is_dir(), f"Expected {item_path} to be a directory"
                    check_level(item_path, value)
                elif isinstance(value, list):
                    assert item_path.is_dir(), f"Expected {item_path} to be a directory"
                    actual_files = sorted([f.name for f in item_path.iterdir() if f.is_file()])
                    expected_files = sorted(value)
                    assert actual_files == expected_files, \
                        f"Expected files {expected_files} in {item_path}, got {actual_files}"

        check_level(base_path, expected_structure)

    return check_structure
