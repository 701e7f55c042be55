"""Progress tracking context for mediasort operations."""

import time
from dataclasses import dataclass
from typing import Callable, Optional

from rich.progress import Progress, TaskID


@dataclass(frozen=True)
class ProgressStatus:
    elapsed: float
    fraction_done: float
    eta: float

    @property
    def remaining(self) -> float:
        return max(self.eta - self.elapsed, 0.0)

    def __str__(self) -> str:
        return (f"Status... {format_duration(self.elapsed)} ({self.fraction_done * 100:.1f}%)"
                f" - ETA {format_duration(self.remaining)}")


def format_duration(seconds: float) -> str:
    if seconds >= 60:
        return f"{seconds / 60:.1f}min"
    return f"{seconds:.1f}s"


class EtaTracker:
    """Elapsed time and estimated total duration from entry index and wall clock."""

    def __init__(self, total: int, clock: Callable[[], float] = time.monotonic):
        self.total = total
        self.clock = clock
        self.start = clock()

    def status(self, index: int) -> ProgressStatus:
        elapsed = self.clock() - self.start
        fraction_done = index / self.total if self.total else 0.0
        eta = elapsed / fraction_done if fraction_done > 0 else 0.0
        return ProgressStatus(elapsed, fraction_done, eta)


class ProgressContext:
    """Encapsulates progress tracking state for cleaner parameter passing."""

    def __init__(self, progress: Optional[Progress] = None, task: Optional[TaskID] = None):
        self.progress = progress
        self.task = task

    @property
    def is_active(self) -> bool:
        """Check if progress tracking is active."""
        return self.progress is not None and self.task is not None

    def update(self, description: str) -> None:
        """Update progress description if tracking is active."""
        if self.is_active:
            self.progress.update(self.task, description=description)

    def advance(self, steps: int = 1) -> None:
        """Advance progress by given number of steps."""
        if self.is_active:
            self.progress.advance(self.task, steps)
