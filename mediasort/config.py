"""
Configuration management for mediasort.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml

from .constants import PROGRAM
from .models import CategorySelection


class Config:
    """Manages configuration file for storing user preferences."""

    def __init__(self, config_path: Optional[Path] = None):
        # Default config location: ~/.<PROGRAM>/config.yml
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.home() / f".{PROGRAM}" / "config.yml"
        self.program_root = self.config_path.parent
        self.data = self._load_config()

    def _load_config(self) -> Dict:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, 'r') as f:
                return yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger = logging.getLogger(PROGRAM)
            logger.warning(f"Could not load config: {e}")
            return {}

    def save_config(self) -> None:
        """Save current configuration to file."""
        try:
            self.program_root.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w') as f:
                yaml.safe_dump(self.data, f, default_flow_style=False)
        except (OSError, yaml.YAMLError) as e:
            logger = logging.getLogger(PROGRAM)
            logger.error(f"Could not save config: {e}")

    def get_last_source(self) -> Optional[str]:
        return self.data.get('last_source')

    def get_last_dest(self) -> Optional[str]:
        return self.data.get('last_dest')

    def get_selection(self) -> Optional[CategorySelection]:
        """Get the saved category selection, ignoring unknown values."""
        value = self.data.get('selection')
        try:
            return CategorySelection(value) if value else None
        except ValueError:
            return None

    def get_exception_filter(self) -> bool:
        """Get the exception filter setting (default: True)."""
        return self.data.get('exception_filter', True)

    def get_category_folders(self) -> bool:
        """Get the per-category folder setting (default: True)."""
        return self.data.get('category_folders', True)

    def get_min_file_size_kib(self) -> Optional[int]:
        """Get the minimum file size in KiB, or None when the check is off."""
        return self.data.get('min_file_size_kib')

    def update_paths(self, source: str, dest: str) -> None:
        """Update and save the last used paths."""
        self.data['last_source'] = source
        self.data['last_dest'] = dest
        self.save_config()

    def update_selection(self, selection: CategorySelection) -> None:
        self.data['selection'] = selection.value
        self.save_config()

    def update_options(self, exception_filter: bool, category_folders: bool,
                       min_file_size_kib: Optional[int]) -> None:
        """Update and save the sorting toggles."""
        self.data['exception_filter'] = exception_filter
        self.data['category_folders'] = category_folders
        self.data['min_file_size_kib'] = min_file_size_kib
        self.save_config()
