"""
Command-line interface for mediasort.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.progress import Progress

from .config import Config
from .constants import DEFAULT_MIN_FILE_SIZE_KIB, PROGRAM, get_console, get_logger
from .core import MediaSorter, validate_paths
from .errors import ConfigurationError
from .models import CategorySelection, Outcome, SortOptions
from .progress import ProgressContext


def create_parser(config: Config) -> argparse.ArgumentParser:
    """Create argument parser with dynamic defaults from config."""
    last_source = config.get_last_source()
    last_dest = config.get_last_dest()
    selection = config.get_selection()

    source_help = "Source directory containing media files to sort"
    dest_help = "Destination directory for the dated tree"
    selection_help = "(default: saved selection)"
    if last_source:
        source_help += f" (default: {last_source})"
    if last_dest:
        dest_help += f" (default: {last_dest})"
    if selection:
        selection_help = f"(default: {selection.value})"

    parser = argparse.ArgumentParser(
        description="Import files from a folder into a year/month tree classified by last write date",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  {PROGRAM} --all ~/Phone/DCIM ~/Pictures/Sorted
  {PROGRAM} --pictures --dry-run ~/Phone/WhatsApp ~/Pictures/Sorted
  {PROGRAM} --movies --remove-copied -s ~/Downloads -d ~/Videos
        """
    )

    parser.add_argument("source", nargs="?", help=source_help)
    parser.add_argument("dest", nargs="?", help=dest_help)
    parser.add_argument(
        "--source", "-s", dest="source_override",
        help="Override source directory"
    )
    parser.add_argument(
        "--dest", "-d", dest="dest_override",
        help="Override destination directory"
    )

    categories = parser.add_mutually_exclusive_group()
    categories.add_argument(
        "--all", "-a", dest="selection", action="store_const", const=CategorySelection.ALL,
        help=f"Copy all files, whatever their extension {selection_help}"
    )
    categories.add_argument(
        "--pictures", "-p", dest="selection", action="store_const",
        const=CategorySelection.PICTURES, help="Copy picture files only"
    )
    categories.add_argument(
        "--movies", "-m", dest="selection", action="store_const",
        const=CategorySelection.MOVIES, help="Copy movie files only"
    )

    parser.add_argument(
        "--remove-copied", "-r", action="store_true",
        help="Move files instead of copying them"
    )
    parser.add_argument(
        "--exception-filter", action=argparse.BooleanOptionalAction, default=None,
        help=f"Skip WhatsApp auxiliary folders such as Sent and Stickers "
             f"(default: {'on' if config.get_exception_filter() else 'off'})"
    )
    parser.add_argument(
        "--category-folders", action=argparse.BooleanOptionalAction, default=None,
        help=f"Sort pictures and movies into Photos/ and Videos/ subfolders "
             f"(default: {'on' if config.get_category_folders() else 'off'})"
    )
    parser.add_argument(
        "--min-size", type=int, nargs="?", const=DEFAULT_MIN_FILE_SIZE_KIB, metavar="KIB",
        help=f"Reject files smaller than KIB kibibytes (default when given: "
             f"{DEFAULT_MIN_FILE_SIZE_KIB}; 0 disables the check)"
    )
    parser.add_argument(
        "--dry-run", "--simulation", "-n", action="store_true",
        help="Preview operations without making changes"
    )
    parser.add_argument(
        "--yes", "-y", action="store_true",
        help="Auto-confirm processing for saved source/dest paths"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version", "-V", action="store_true",
        help=f"Display the version number of {PROGRAM} and exit"
    )

    return parser


def build_options(args: argparse.Namespace, config: Config,
                  selection: CategorySelection) -> SortOptions:
    """Merge command-line flags over saved settings."""
    exception_filter = (args.exception_filter if args.exception_filter is not None
                        else config.get_exception_filter())
    category_folders = (args.category_folders if args.category_folders is not None
                        else config.get_category_folders())
    min_size_kib = args.min_size if args.min_size is not None else config.get_min_file_size_kib()

    toggled = (args.exception_filter is not None or args.category_folders is not None
               or args.min_size is not None)
    if toggled and not args.dry_run:
        config.update_options(exception_filter, category_folders, min_size_kib or None)

    return SortOptions(
        selection=selection,
        remove_source=args.remove_copied,
        exception_filter=exception_filter,
        dry_run=args.dry_run,
        category_folders=category_folders,
        min_file_size=min_size_kib * 1024 if min_size_kib else None,
    )


def show_processing_plan(source: Path, dest: Path, options: SortOptions,
                         console: Console) -> None:
    """Display the processing plan before execution."""
    console.print("\n[bold]Processing Plan:[/bold]")
    console.print(f"  Source:           [blue]{source}[/blue]")
    console.print(f"  Destination:      [blue]{dest}[/blue]")
    console.print(f"  Processing Mode:  [cyan]{options.mode_label}[/cyan]")
    console.print(f"  Selection:        [cyan]{options.selection.value}[/cyan]")
    console.print(f"  Exception Filter: [cyan]{'Yes' if options.exception_filter else 'No'}[/cyan]")
    console.print(f"  Category Folders: [cyan]{'Yes' if options.category_folders else 'No'}[/cyan]")
    if options.min_file_size:
        console.print(f"  Minimum Size:     [cyan]{options.min_file_size // 1024} KiB[/cyan]")
    console.print()


def confirm_processing(console: Console) -> bool:
    """Ask for confirmation when using saved configuration."""
    console.print("[yellow]Confirm processing plan with saved configuration.[/yellow]")

    try:
        response = console.input("Continue? [y/N]: ").strip().lower()
        return response in ['y', 'yes']
    except (EOFError, KeyboardInterrupt):
        console.print("\n[red]Operation cancelled[/red]")
        return False


def main(config_path: Optional[Path] = None) -> int:
    """Main entry point.

    Args:
        config_path: Optional path to config file (for testing)
    """
    config = Config(config_path=config_path)
    parser = create_parser(config)
    args = parser.parse_args()

    using_saved_config = args.source is None and args.dest is None and \
                         args.source_override is None and args.dest_override is None

    if args.version:
        from . import __version__, __copyright__
        if args.verbose:
            print(f"{PROGRAM} version {__version__} {__copyright__}")
            print(f"Config:  {config.config_path}")
            return 0
        print(__version__)
        return 0

    source_path = args.source_override or args.source or config.get_last_source()
    dest_path = args.dest_override or args.dest or config.get_last_dest()

    if not source_path or not dest_path:
        parser.error("Source and destination directories are required")

    source = Path(source_path).expanduser().resolve()
    dest = Path(dest_path).expanduser().resolve()

    if not source.exists():
        print(f"Error: Source directory does not exist: {source}")
        return 1

    if not source.is_dir():
        print(f"Error: Source is not a directory: {source}")
        return 1

    try:
        validate_paths(source, dest)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    selection = args.selection or config.get_selection()
    if selection is None:
        print("Error: No category selected, use --all, --pictures or --movies")
        return 1

    # A dry run leaves every file alone, the preferences file included
    if not args.dry_run:
        config.update_paths(str(source), str(dest))
        config.update_selection(selection)
    options = build_options(args, config, selection)

    if args.verbose:
        get_logger().setLevel(logging.DEBUG)

    console = get_console()
    show_processing_plan(source, dest, options, console)

    if using_saved_config and not args.yes:
        if not confirm_processing(console):
            return 0

    sorter = MediaSorter(source=source, dest=dest, options=options,
                         root_dir=config.program_root)
    try:
        entries = sorter.find_source_files()
        if not entries:
            console.print("[yellow]No media files found in source directory[/yellow]")
            return 0

        console.print(f"Found {len(entries)} files to process")

        with Progress(console=console) as progress:
            task = progress.add_task("Processing files...", total=len(entries))
            sorter.process_files(entries, ProgressContext(progress, task))

        sorter.finish(entries)
        sorter.print_summary()

        error_count = sorter.stats_manager.get_outcome(Outcome.ERROR)
        if error_count > 0:
            console.print(f"\n[green]✓ Processing completed[/green] [yellow]({error_count} files failed)[/yellow]")
        else:
            console.print("\n[green]✓ Processing completed successfully![/green]")
        return 0

    except KeyboardInterrupt:
        console.print("\n[red]Operation cancelled by user[/red]")
        return 1
    except Exception as e:
        console.print(f"\n[red]Fatal error: {e}[/red]")
        return 1
    finally:
        sorter.close()


if __name__ == "__main__":
    sys.exit(main())
