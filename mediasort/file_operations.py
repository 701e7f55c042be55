"""
Filesystem primitives for directory creation and file transfer.
"""

import shutil
from pathlib import Path

from .constants import get_logger
from .errors import DirectoryCreationError


class FileOperations:
    """Directory creation, size checks and copy/move with dry-run support."""

    def __init__(self, dry_run: bool, move_files: bool):
        self.dry_run = dry_run
        self.move_files = move_files
        self.logger = get_logger()

    @staticmethod
    def same_size(source_file: Path, dest_file: Path) -> bool:
        """Check if an existing destination has the source file's size."""
        return source_file.stat().st_size == dest_file.stat().st_size

    def ensure_directory(self, directory: Path) -> None:
        """Create directory and parents if needed, with dry-run support."""
        if self.dry_run or directory.is_dir():
            return

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(directory, e) from e

    def transfer_file(self, source: Path, dest: Path) -> None:
        """Move or copy a file. Copies keep the source modification time.

        OSError propagates to the caller, which records it per entry.
        """
        if self.dry_run:
            return

        if self.move_files:
            shutil.move(str(source), str(dest))
        else:
            shutil.copy2(str(source), str(dest))

        # Verify the operation
        if not dest.exists():
            raise FileNotFoundError(f"File not found after transfer: {dest}")

        if self.move_files and source.exists():
            raise FileExistsError(f"Source file still exists after move: {source}")

        self.logger.info(f"{source} -> {dest}")

    @property
    def verb(self) -> str:
        return "moving" if self.move_files else "copying"
