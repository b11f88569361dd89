"""Progress reporting for chart generation."""

import time
from typing import Callable, Optional


def format_duration(seconds: float) -> str:
    """Elapsed time as "45s" or "2m 5s"."""
    minutes, seconds = divmod(int(max(seconds, 0)), 60)
    if minutes:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


class ChartProgress:
    """Progress callback for ChartPipeline.run().

    Prints a line per finished chart:
        [charts] 3/11 (27%) | elapsed 2s | 2-grams.svg
    """

    def __init__(self, step_name: str = "charts", quiet: bool = False):
        self.step_name = step_name
        self.quiet = quiet
        self.done = 0
        self.total = 0
        self._start_time: Optional[float] = None

    @property
    def percent(self) -> float:
        if self.total == 0:
            return 100.0
        return (self.done / self.total) * 100

    @property
    def elapsed_seconds(self) -> float:
        if self._start_time is None:
            return 0.0
        return time.time() - self._start_time

    def format_progress(self, label: str = "") -> str:
        parts = [
            f"[{self.step_name}]",
            f"{self.done}/{self.total}",
            f"({self.percent:.0f}%)",
            f"| elapsed {format_duration(self.elapsed_seconds)}",
        ]
        if label:
            parts.append(f"| {label}")
        return " ".join(parts)

    def __call__(self, label: str, done: int, total: int):
        if self._start_time is None:
            self._start_time = time.time()
        self.done = done
        self.total = total
        if not self.quiet:
            print(self.format_progress(label))

    def __str__(self) -> str:
        return self.format_progress()


def create_progress_callback(quiet: bool = False) -> Callable[[str, int, int], None]:
    """Create a progress callback for ChartPipeline.run(on_progress=...)."""
    return ChartProgress(quiet=quiet)
