"""
Data records shared by the discovery, resolution and execution stages.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import FrozenSet, Optional

from .errors import MediaSortError


class Category(Enum):
    PICTURE = "picture"
    MOVIE = "movie"
    UNKNOWN = "unknown"


class CategorySelection(Enum):
    """Which categories a run materializes."""
    PICTURES = "pictures"
    MOVIES = "movies"
    ALL = "all"

    @property
    def processed_categories(self) -> FrozenSet[Category]:
        if self is CategorySelection.PICTURES:
            return frozenset({Category.PICTURE})
        if self is CategorySelection.MOVIES:
            return frozenset({Category.MOVIE})
        return frozenset({Category.PICTURE, Category.MOVIE})

    def allows(self, category: Category) -> bool:
        """ALL also lets unknown extensions through."""
        return self is CategorySelection.ALL or category in self.processed_categories


class Outcome(Enum):
    LISTED = "Listed"
    COPIED = "Copied"
    MOVED = "Moved"
    RENAMED = "Renamed"
    SKIPPED = "Skipped"
    ERROR = "Error"


@dataclass(frozen=True)
class CaptureDate:
    year: str
    month: str
    day: str
    month_label: str

    @property
    def month_folder(self) -> str:
        return f"{self.month} {self.month_label.upper()}"

    def __str__(self) -> str:
        return f"{self.year}-{self.month}-{self.day}"


@dataclass(frozen=True)
class SortOptions:
    """Runtime configuration consumed by the sorting core."""
    selection: CategorySelection = CategorySelection.ALL
    remove_source: bool = False
    exception_filter: bool = True
    dry_run: bool = False
    category_folders: bool = True
    min_file_size: Optional[int] = None  # bytes; None disables the check

    @property
    def mode_label(self) -> str:
        if self.dry_run:
            return "DRY RUN"
        return "MOVE" if self.remove_source else "COPY"


@dataclass
class ClassifiedEntry:
    """One discovered file and everything decided about it."""
    source_path: Path
    extension: str
    category: Category
    capture_date: CaptureDate
    size: int
    mtime: datetime
    is_special_origin: bool = False
    destination_path: Optional[Path] = None
    outcome: Outcome = Outcome.LISTED
    reason: str = ""
    _finalized: bool = field(default=False, repr=False, compare=False)

    @property
    def name(self) -> str:
        return self.source_path.name

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def finalize(self, outcome: Outcome, reason: str = "") -> None:
        """Record the terminal outcome. Allowed exactly once per entry."""
        if self._finalized:
            raise MediaSortError(
                f"Outcome of {self.source_path} already set to {self.outcome.value}")
        self.outcome = outcome
        self.reason = reason
        self._finalized = True

    @property
    def status(self) -> str:
        """Outcome text as written to the outcome logs."""
        if self.outcome is Outcome.ERROR and self.reason:
            return self.reason
        return self.outcome.value

    def __str__(self) -> str:
        return f"{self.capture_date}: \"{self.source_path}\""
