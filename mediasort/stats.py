"""
Statistics tracking for sorting runs.
"""

from typing import Dict

from .models import Category, ClassifiedEntry, Outcome


class StatsManager:
    """Counts outcomes, categories and transferred bytes."""

    def __init__(self):
        self._outcomes: Dict[Outcome, int] = {outcome: 0 for outcome in Outcome}
        self._stats = {
            'pictures': 0,
            'movies': 0,
            'others': 0,
            'rejected': 0,
            'transferred': 0,
            'total_size': 0,
        }

    def increment_rejected(self, count: int = 1) -> None:
        """Increment rejected count for files filtered out during discovery."""
        self._stats['rejected'] += count

    def record_entry(self, entry: ClassifiedEntry, transferred: bool) -> None:
        """Record a finalized entry; size and category only count when data moved."""
        self._outcomes[entry.outcome] += 1
        if not transferred:
            return

        self._stats['transferred'] += 1
        if entry.category is Category.PICTURE:
            self._stats['pictures'] += 1
        elif entry.category is Category.MOVIE:
            self._stats['movies'] += 1
        else:
            self._stats['others'] += 1
        self._stats['total_size'] += entry.size

    def get_stats(self) -> Dict[str, int]:
        """Get a flat copy of current statistics."""
        stats = self._stats.copy()
        stats.update({outcome.value.lower(): count for outcome, count in self._outcomes.items()})
        return stats

    def get_outcome(self, outcome: Outcome) -> int:
        return self._outcomes[outcome]

    def get_total_files(self) -> int:
        """Get total count of successfully transferred files."""
        return self._stats['transferred']

    def get_total_size_mb(self) -> float:
        return self._stats['total_size'] / (1024 * 1024)

    def has_errors(self) -> bool:
        return self._outcomes[Outcome.ERROR] > 0

    # Individual stat getters for reporting
    def get_pictures(self) -> int:
        return self._stats['pictures']

    def get_movies(self) -> int:
        return self._stats['movies']

    def get_others(self) -> int:
        return self._stats['others']

    def get_rejected(self) -> int:
        return self._stats['rejected']
