"""
Core media sorting functionality.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from rich.logging import RichHandler
from rich.progress import Progress
from rich.table import Table

from .classifier import Classifier
from .constants import PROGRAM, get_console, get_logger
from .errors import ConfigurationError
from .file_operations import FileOperations
from .filters import FilterSet
from .history import HistoryManager
from .models import ClassifiedEntry, Outcome, SortOptions
from .progress import EtaTracker, ProgressContext
from .resolver import DestinationResolver
from .scanner import DiscoveryWalker
from .stats import StatsManager


def validate_paths(source: Path, dest: Path) -> Tuple[Path, Path]:
    """Reject source/destination pairs where one tree contains the other.

    Returns both paths made absolute, with symlinks and ".." resolved.
    """
    source = source.expanduser().resolve()
    dest = dest.expanduser().resolve()
    if source == dest:
        raise ConfigurationError(f"Source and destination are the same folder: {source}")
    if source in dest.parents:
        raise ConfigurationError(
            f"Destination folder is contained in the source folder: {source} -> {dest}")
    if dest in source.parents:
        raise ConfigurationError(
            f"Source folder is contained in the destination folder: {source} -> {dest}")
    return source, dest


class MediaSorter:
    """Main class for classifying media files into a dated destination tree."""

    def __init__(self, source: Path, dest: Path, options: SortOptions,
                 root_dir: Optional[Path] = None, filter_set: Optional[FilterSet] = None):
        # Configuration errors abort before anything touches the disk
        source, dest = validate_paths(source, dest)

        self.source = source
        self.dest = dest
        self.options = options
        self.root_dir = root_dir or Path.home() / f".{PROGRAM}"
        self.stats_manager = StatsManager()

        # Setup logging with separate console and file levels
        self.console = get_console()
        console_handler = RichHandler(console=self.console, rich_tracebacks=True)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[console_handler]
        )
        self.logger = get_logger()

        self.file_ops = FileOperations(dry_run=options.dry_run, move_files=options.remove_source)

        self.history_manager = HistoryManager(dest_path=dest, root_dir=self.root_dir,
                                              file_ops=self.file_ops)
        self._session_handler = self.history_manager.setup_import_logger(self.logger)

        self.classifier = Classifier(options, filter_set=filter_set)
        self.walker = DiscoveryWalker(source, self.classifier)
        self.resolver = DestinationResolver(dest, options, self.file_ops)

        self.logger.info(f"Starting session: {self.source} -> {self.dest}")
        self.logger.info(f"Mode: {options.mode_label}, selection: {options.selection.value}")

    def find_source_files(self) -> List[ClassifiedEntry]:
        """List and classify every eligible file under the source folder."""
        self.logger.info("Listing files...")
        manifest = self.walker.walk()
        self.stats_manager.increment_rejected(len(self.walker.rejected))
        return manifest

    def process_files(self, entries: List[ClassifiedEntry],
                      progress_ctx: Optional[ProgressContext] = None) -> None:
        """Resolve and transfer every entry, one at a time."""
        self.logger.info(f"Starting to process {len(entries)} files")

        if progress_ctx is None:
            with Progress(console=self.console) as progress:
                task = progress.add_task("Processing files...", total=len(entries))
                self._process_files_with_progress(entries, ProgressContext(progress, task))
        else:
            self._process_files_with_progress(entries, progress_ctx)

    def _process_files_with_progress(self, entries: List[ClassifiedEntry],
                                     progress_ctx: ProgressContext) -> None:
        tracker = EtaTracker(len(entries))
        for index, entry in enumerate(entries, start=1):
            try:
                self._process_single_entry(entry, index, len(entries))
            except OSError as e:
                self.logger.error(f"Error processing {entry.source_path}: {e}")
                if not entry.is_finalized:
                    entry.finalize(Outcome.ERROR, str(e))
                    self.stats_manager.record_entry(entry, transferred=False)

            status = tracker.status(index)
            self.logger.debug(str(status))
            progress_ctx.update(f"{entry.outcome.value}: {entry.name}")
            progress_ctx.advance()

    def _process_single_entry(self, entry: ClassifiedEntry, index: int, total: int) -> None:
        resolution = self.resolver.resolve(entry)

        if not resolution.needs_transfer or self.options.dry_run:
            entry.finalize(resolution.outcome, resolution.reason)
            self.stats_manager.record_entry(entry, transferred=False)
            return

        verb = "Moving" if self.options.remove_source else "Copying"
        self.logger.info(f"{verb} {index}/{total}: {entry.source_path}")

        try:
            self.file_ops.transfer_file(entry.source_path, resolution.path)
        except OSError as e:
            self.logger.error(f"Error when {self.file_ops.verb} file: "
                              f"\"{entry.source_path}\" -> \"{resolution.path}\": {e}")
            entry.finalize(Outcome.ERROR, str(e))
            self.stats_manager.record_entry(entry, transferred=False)
            return

        if resolution.outcome is Outcome.RENAMED:
            outcome = Outcome.RENAMED
        else:
            outcome = Outcome.MOVED if self.options.remove_source else Outcome.COPIED
        entry.finalize(outcome)
        self.stats_manager.record_entry(entry, transferred=True)

    def run(self, progress_ctx: Optional[ProgressContext] = None) -> List[ClassifiedEntry]:
        """Discover, process and report. Returns the finalized manifest."""
        try:
            entries = self.find_source_files()
            if entries:
                self.process_files(entries, progress_ctx)
            self.finish(entries)
            return entries
        finally:
            self.close()

    def finish(self, entries: List[ClassifiedEntry]) -> None:
        """Write outcome logs and the audit summary."""
        if not entries:
            return
        logs = self.history_manager.write_outcome_logs(entries)
        if logs:
            self.logger.info(f"Outcome logs written: {logs[0].name}, {logs[1].name}")
        self.history_manager.log_import_summary(self.source, self.dest, self.stats_manager,
                                                success=not self.stats_manager.has_errors())

    def close(self) -> None:
        """Detach and close the session log handler."""
        if self._session_handler is not None:
            self.logger.removeHandler(self._session_handler)
            self._session_handler.close()
            self._session_handler = None

    def print_summary(self) -> None:
        """Print processing summary."""
        table = Table(title="Processing Summary")
        table.add_column("Category", style="cyan")
        table.add_column("Count", style="green")

        table.add_row("Pictures", str(self.stats_manager.get_pictures()))
        table.add_row("Movies", str(self.stats_manager.get_movies()))
        table.add_row("Other Files", str(self.stats_manager.get_others()))
        table.add_row("Renamed", str(self.stats_manager.get_outcome(Outcome.RENAMED)))
        table.add_row("Skipped (already copied)", str(self.stats_manager.get_outcome(Outcome.SKIPPED)))
        table.add_row("Rejected", str(self.stats_manager.get_rejected()))
        table.add_row("Errors", str(self.stats_manager.get_outcome(Outcome.ERROR)))
        if self.options.dry_run:
            table.add_row("Listed (dry run)", str(self.stats_manager.get_outcome(Outcome.LISTED)))

        size_mb = self.stats_manager.get_total_size_mb()
        if size_mb > 1024:
            size_str = f"{size_mb/1024:.1f} GB"
        else:
            size_str = f"{size_mb:.1f} MB"
        table.add_row("Total Size", size_str)

        self.console.print(table)

        if self.stats_manager.has_errors() and not self.options.dry_run:
            _, error_log = self.history_manager.outcome_log_paths()
            self.console.print(f"\n[red]Failed files are listed in: {error_log}[/red]")
