"""Capture date derivation from file timestamps and WhatsApp file names."""

from datetime import datetime
from typing import Mapping, Optional

from .constants import (MONTH_NAMES, WHATSAPP_MARKER, WHATSAPP_MARKER_OFFSET,
                        WHATSAPP_PREFIXES, get_logger)
from .models import CaptureDate


logger = get_logger("mediasort.timestamps")


def capture_date_from_mtime(mtime: datetime,
                            months: Mapping[str, str] = MONTH_NAMES) -> CaptureDate:
    """Build a capture date from a local last-modification time."""
    month = f"{mtime.month:02d}"
    return CaptureDate(
        year=f"{mtime.year:04d}",
        month=month,
        day=f"{mtime.day:02d}",
        month_label=months[month],
    )


def is_whatsapp_stem(stem: str) -> bool:
    """Match the PREFIX-YYYYMMDD-WA#### naming convention by position."""
    if not stem.startswith(WHATSAPP_PREFIXES):
        return False
    end = WHATSAPP_MARKER_OFFSET + len(WHATSAPP_MARKER)
    return stem[WHATSAPP_MARKER_OFFSET:end] == WHATSAPP_MARKER


def whatsapp_date_from_stem(stem: str,
                            months: Mapping[str, str] = MONTH_NAMES) -> Optional[CaptureDate]:
    """Extract the capture date embedded in a WhatsApp file name.

    Returns None when the stem does not follow the convention or the embedded
    date is unusable, so callers keep the filesystem date.
    """
    if not is_whatsapp_stem(stem):
        return None

    year, month, day = stem[4:8], stem[8:10], stem[10:12]
    if not (year.isdigit() and month.isdigit() and day.isdigit()):
        logger.debug(f"Non-numeric date in WhatsApp name: {stem}")
        return None
    if month not in months:
        logger.debug(f"Unknown month '{month}' in WhatsApp name: {stem}")
        return None

    return CaptureDate(year=year, month=month, day=day, month_label=months[month])
