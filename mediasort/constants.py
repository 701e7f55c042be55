"""
File extension tables, naming conventions and shared handles for mediasort.
"""

import logging
from typing import Optional

from rich.console import Console

PROGRAM = "mediasort"

# File extension constants
PICTURE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".dng")
MOVIE_EXTENSIONS = (
    ".mp4", ".mkv", ".avi", ".mov", ".ogg", ".m4v", ".wmv", ".3gp", ".m4a",
    ".webp",
)

HIDDEN_PREFIX = "."

# Month folder labels, keyed by zero-padded month number
MONTH_NAMES = {
    "01": "JANVIER", "02": "FEVRIER", "03": "MARS",
    "04": "AVRIL", "05": "MAI", "06": "JUIN",
    "07": "JUILLET", "08": "AOUT", "09": "SEPTEMBRE",
    "10": "OCTOBRE", "11": "NOVEMBRE", "12": "DECEMBRE",
}

# WhatsApp export conventions: IMG-20130830-WA0000.jpg, VID-20230526-WA0009.mp4
WHATSAPP_KEYWORD = "WhatsApp"
WHATSAPP_PREFIXES = ("IMG-", "VID-")
WHATSAPP_MARKER = "-WA"
WHATSAPP_MARKER_OFFSET = 12

# Destination folder names
WHATSAPP_FOLDER = "WhatsApp"
PICTURES_FOLDER = "Photos"
MOVIES_FOLDER = "Videos"

# Auxiliary WhatsApp folders that never hold original media
DEFAULT_EXCEPTION_RULES = (
    ("WhatsApp", "Sent"),
    ("WhatsApp", "Stickers"),
    ("WhatsApp", "WhatsApp Stickers"),
    ("WhatsApp", "Private"),
    ("WhatsApp", "Backups"),
    ("WhatsApp", "Databases"),
    ("WhatsApp", ".Statuses"),
)

# Legacy size threshold used when the minimum size check is re-enabled
DEFAULT_MIN_FILE_SIZE_KIB = 200

# Outcome log file names, written into the destination root
LOG_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
INFO_LOG_PREFIX = "copy_log_info"
ERROR_LOG_PREFIX = "copy_log_error"

_console: Optional[Console] = None


def get_console() -> Console:
    """Return the shared rich console."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def get_logger(name: str = PROGRAM) -> logging.Logger:
    """Return the program logger or one of its children."""
    return logging.getLogger(name)
