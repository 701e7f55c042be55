"""
Recursive discovery of source files into a classified manifest.
"""

from datetime import datetime
from pathlib import Path
from typing import List

from .classifier import Classifier
from .constants import get_logger
from .errors import RejectedEntryError
from .models import ClassifiedEntry


class DiscoveryWalker:
    """Walks a source tree and builds the manifest of eligible files."""

    def __init__(self, source: Path, classifier: Classifier):
        self.source = source
        self.classifier = classifier
        self.logger = get_logger("mediasort.scanner")
        self.rejected: List[RejectedEntryError] = []

    def walk(self) -> List[ClassifiedEntry]:
        """Return classified entries sorted by source path."""
        manifest = []
        for file_path in sorted(self.source.rglob("*")):
            if not file_path.is_file():
                continue

            stat = file_path.stat()
            try:
                entry = self.classifier.classify(
                    file_path,
                    size=stat.st_size,
                    mtime=datetime.fromtimestamp(stat.st_mtime),
                    source_root=self.source,
                )
            except RejectedEntryError as e:
                self.logger.error(str(e))
                self.rejected.append(e)
                continue

            self.logger.debug(str(entry))
            manifest.append(entry)

        self.logger.info(f"Listed {len(manifest)} files, rejected {len(self.rejected)}")
        return manifest
