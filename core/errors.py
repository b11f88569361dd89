"""Error types for the n-gram statistics pipeline.

Propagation:
- CorpusLoadError aborts the whole run (no partial corpus)
- ParseError is recovered by the loader (line dropped)
- EmptyTableError and RenderError abort only the chart being produced
"""

from pathlib import Path
from typing import Optional, Union


class CorpusLoadError(OSError):
    """Raised when an n-gram file is missing or unreadable."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot load n-gram file: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ParseError(ValueError):
    """Raised when a line does not look like '<count> <token>'."""

    def __init__(self, line: str, reason: str, line_number: Optional[int] = None):
        self.line = line
        self.reason = reason
        self.line_number = line_number
        where = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{where}{reason}: {line!r}")


class EmptyTableError(ValueError):
    """Raised when an aggregate needs a maximum of an empty table."""

    def __init__(self, length: int, stage: str = ""):
        self.length = length
        self.stage = stage
        message = f"{length}-gram table is empty"
        if stage:
            message += f" in {stage}"
        super().__init__(message)


class RenderError(RuntimeError):
    """Raised when a chart image cannot be produced."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot render chart: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
