"""
Destination path composition and collision handling.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .constants import MOVIES_FOLDER, PICTURES_FOLDER, WHATSAPP_FOLDER, get_logger
from .errors import CollisionError, DirectoryCreationError
from .file_operations import FileOperations
from .models import Category, ClassifiedEntry, Outcome, SortOptions

CATEGORY_FOLDERS = {
    Category.PICTURE: PICTURES_FOLDER,
    Category.MOVIE: MOVIES_FOLDER,
}


@dataclass
class Resolution:
    """Result of resolving one entry's destination."""
    path: Optional[Path]
    outcome: Outcome = Outcome.LISTED
    reason: str = ""

    @property
    def needs_transfer(self) -> bool:
        return self.outcome in (Outcome.LISTED, Outcome.RENAMED)


class DestinationResolver:
    """Computes a collision-free destination for each classified entry.

    Existence and size checks hit the filesystem at resolution time, so an
    entry must be transferred before the next one is resolved.
    """

    def __init__(self, dest: Path, options: SortOptions, file_ops: FileOperations):
        self.dest = dest
        self.options = options
        self.file_ops = file_ops
        self.logger = get_logger("mediasort.resolver")

    def destination_dir(self, entry: ClassifiedEntry) -> Path:
        dest_dir = self.dest
        if entry.is_special_origin:
            dest_dir = dest_dir / WHATSAPP_FOLDER
        if (self.options.category_folders
                and entry.category in self.options.selection.processed_categories):
            dest_dir = dest_dir / CATEGORY_FOLDERS[entry.category]
        return dest_dir / entry.capture_date.year / entry.capture_date.month_folder

    def resolve(self, entry: ClassifiedEntry) -> Resolution:
        """Assign entry.destination_path and report how it was reached."""
        dest_dir = self.destination_dir(entry)

        try:
            self.file_ops.ensure_directory(dest_dir)
        except DirectoryCreationError as e:
            self.logger.error(str(e))
            self.logger.error(f"Skipping file: {entry}")
            return Resolution(None, Outcome.ERROR, f"Unable to create directory \"{dest_dir}\"")

        dest_file = dest_dir / entry.name
        if not dest_file.exists():
            entry.destination_path = dest_file
            return Resolution(dest_file)

        self.logger.warning(f"File already exists: \"{dest_file}\"")
        if self.file_ops.same_size(entry.source_path, dest_file):
            entry.destination_path = dest_file
            return Resolution(dest_file, Outcome.SKIPPED)

        try:
            new_path = self.unique_path(dest_file)
        except CollisionError as e:
            self.logger.error(str(e))
            return Resolution(None, Outcome.ERROR, str(e))

        self.logger.warning(f"File has different size, renaming: \"{dest_file.name}\" -> \"{new_path.name}\"")
        entry.destination_path = new_path
        return Resolution(new_path, Outcome.RENAMED)

    @staticmethod
    def unique_path(dest_file: Path) -> Path:
        """Return the first free stem_N.ext next to dest_file, scanning N from 0."""
        dest_dir = dest_file.parent
        max_attempts = sum(1 for _ in dest_dir.iterdir()) + 1
        for counter in range(max_attempts):
            candidate = dest_dir / f"{dest_file.stem}_{counter}{dest_file.suffix}"
            if not candidate.exists():
                return candidate
        raise CollisionError(f"No free name for {dest_file} after {max_attempts} attempts")
