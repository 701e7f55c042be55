"""
Eligibility checks and classification of discovered files.
"""

from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

from .constants import MONTH_NAMES, WHATSAPP_KEYWORD, get_logger
from .errors import RejectedEntryError
from .filters import FilterSet
from .models import ClassifiedEntry, SortOptions
from .timestamps import capture_date_from_mtime, is_whatsapp_stem, whatsapp_date_from_stem


class Classifier:
    """Decides whether a file is eligible and derives its category and date."""

    def __init__(self, options: SortOptions, filter_set: Optional[FilterSet] = None,
                 months: Mapping[str, str] = MONTH_NAMES):
        self.options = options
        self.filter_set = filter_set or FilterSet()
        self.months = months
        self.logger = get_logger("mediasort.classifier")

    def classify(self, path: Path, size: int, mtime: datetime,
                 source_root: Optional[Path] = None) -> ClassifiedEntry:
        """Classify one file or raise RejectedEntryError with the reason.

        Hidden components are checked relative to source_root so a source
        tree that itself lives under a dot-directory is still usable.
        """
        ext = path.suffix.lower()
        if not ext:
            raise RejectedEntryError(path, "has no extension")

        category = self.filter_set.extension_category(ext)
        if not self.options.selection.allows(category):
            raise RejectedEntryError(path, f"is filtered out... ({ext})")

        relative_parts = path.relative_to(source_root).parts if source_root else path.parts
        if self.filter_set.is_hidden(relative_parts):
            raise RejectedEntryError(path, "is hidden")

        if self.options.exception_filter and self.filter_set.is_excluded_path(path.parts):
            raise RejectedEntryError(path, "matches an exception rule")

        min_size = self.options.min_file_size
        if min_size is not None and size < min_size:
            raise RejectedEntryError(path, f"is too small ({size} < {min_size} bytes)")

        entry = ClassifiedEntry(
            source_path=path,
            extension=ext,
            category=category,
            capture_date=capture_date_from_mtime(mtime, self.months),
            size=size,
            mtime=mtime,
        )
        self.update_date_for_whatsapp_file(entry)
        return entry

    def update_date_for_whatsapp_file(self, entry: ClassifiedEntry) -> None:
        """Flag WhatsApp media and take the date from its file name when possible."""
        stem = entry.source_path.stem
        keyword = WHATSAPP_KEYWORD.lower()
        in_whatsapp_folder = any(part.lower() == keyword for part in entry.source_path.parts)
        named_like_whatsapp = is_whatsapp_stem(stem)

        if not (in_whatsapp_folder or named_like_whatsapp):
            return
        entry.is_special_origin = True

        if named_like_whatsapp:
            whatsapp_date = whatsapp_date_from_stem(stem, self.months)
            if whatsapp_date is None:
                self.logger.debug(f"Keeping file date for {entry.source_path}")
                return
            self.logger.debug(
                f"WhatsApp date {whatsapp_date} replaces {entry.capture_date} for {entry.source_path}")
            entry.capture_date = whatsapp_date
