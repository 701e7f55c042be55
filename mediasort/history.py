"""
Session logging and outcome reports for mediasort.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Tuple, TYPE_CHECKING

from .constants import ERROR_LOG_PREFIX, INFO_LOG_PREFIX, LOG_TIMESTAMP_FORMAT
from .file_operations import FileOperations
from .models import ClassifiedEntry, Outcome

if TYPE_CHECKING:
    from .stats import StatsManager

SUCCESS_OUTCOMES = (Outcome.COPIED, Outcome.MOVED, Outcome.RENAMED)


class HistoryManager:
    """Manages the session log, the audit log and the per-run outcome logs."""

    def __init__(self, dest_path: Path, root_dir: Path, file_ops: FileOperations):
        self.dest_path = dest_path
        self.file_ops = file_ops
        self.root_dir = root_dir
        self.history_dir = self.root_dir / "history"
        self.imports_audit_log = self.root_dir / "imports.log"
        self.started = datetime.now()

        self._setup_import_session()

    def _setup_import_session(self) -> None:
        """Pick the session folder name, numbering it if already used."""
        timestamp = self.started.strftime("%Y-%m-%d")
        dest_name = self._sanitize_dest_name(self.dest_path)
        folder_name = f"{timestamp}+{dest_name}"

        folder = self.history_dir / folder_name
        counter = 1
        while folder.exists() and any(folder.iterdir()):
            folder = self.history_dir / f"{folder_name}-{counter:02d}"
            counter += 1

        self.file_ops.ensure_directory(folder)
        self.import_folder = folder
        self.import_folder_name = folder.name
        self.import_log = folder / "import.log"

    def _sanitize_dest_name(self, dest_path: Path) -> str:
        """Convert destination path to safe folder name."""
        name = dest_path.name
        sanitized = re.sub(r'[^\w\-_]', '-', name)
        sanitized = re.sub(r'-+', '-', sanitized)
        return sanitized.strip('-')

    def setup_import_logger(self, logger: logging.Logger) -> Optional[logging.Handler]:
        """Configure logger to write to the session log file."""
        if self.file_ops.dry_run:
            return None

        file_handler = logging.FileHandler(self.import_log, encoding='utf-8',
                                           errors='backslashreplace')
        file_handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(
            '%(asctime)s [%(name)s] %(levelname)s: %(message)s'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        # Ensure logger level allows DEBUG messages to reach the file handler
        logger.setLevel(logging.DEBUG)
        return file_handler

    def outcome_log_paths(self) -> Tuple[Path, Path]:
        """Return the (info, error) outcome log paths for this run."""
        stamp = self.started.strftime(LOG_TIMESTAMP_FORMAT)
        return (self.dest_path / f"{INFO_LOG_PREFIX}_{stamp}.txt",
                self.dest_path / f"{ERROR_LOG_PREFIX}_{stamp}.txt")

    def write_outcome_logs(self, entries: Iterable[ClassifiedEntry]) -> Optional[Tuple[Path, Path]]:
        """Write one line per entry, successes and failures in separate files."""
        if self.file_ops.dry_run:
            return None

        info_path, error_path = self.outcome_log_paths()
        self.file_ops.ensure_directory(self.dest_path)
        with open(info_path, 'w', encoding='utf-8', errors='backslashreplace') as info, \
                open(error_path, 'w', encoding='utf-8', errors='backslashreplace') as error:
            for entry in entries:
                line = (f"\"{entry.source_path}\" -> \"{entry.destination_path or ''}\""
                        f" \tstatus : \"{entry.status}\"\n")
                if entry.outcome in SUCCESS_OUTCOMES:
                    info.write(line)
                else:
                    error.write(line)
        return info_path, error_path

    def log_import_summary(self, source: Path, dest: Path, stats_manager: "StatsManager",
                           success: bool) -> None:
        """Log import summary to global imports.log."""
        if self.file_ops.dry_run:
            return

        self.root_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        status = "SUCCESS" if success else "PARTIAL"
        stats = stats_manager.get_stats()

        summary = (
            f"{timestamp} | {status} | "
            f"Source: {source} | Dest: {dest} | "
            f"Files: {stats_manager.get_total_files()} ({stats['pictures']} pictures, "
            f"{stats['movies']} movies, {stats['others']} others) | "
            f"Size: {stats_manager.get_total_size_mb():.1f}MB | Skipped: {stats['skipped']} | "
            f"Renamed: {stats['renamed']} | Errors: {stats['error']} | "
            f"Rejected: {stats['rejected']} | History: {self.import_folder_name}\n"
        )

        with open(self.imports_audit_log, 'a', encoding='utf-8', errors='backslashreplace') as f:
            f.write(summary)
