"""Default configuration for ngram-charts."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple


# Supported n-gram lengths (one input file per length)
NGRAM_LENGTHS = (1, 2, 3)

# Top-N per length used for the "filtered" charts (hand-tuned, not derived)
FILTER_LIMITS = (80, 115, 90)

# Canvas
DEFAULT_CANVAS = (1920, 1080)

# Y axis gets max/HEADROOM_DIVISOR extra room
HEADROOM_DIVISOR = 10

# Series colors
SUBJECT_COLOR = "red"
REFERENCE_COLOR = "blue"
OVERLAY_ALPHA = 0.7


@dataclass
class Config:
    """Application configuration."""

    # Inputs
    corpus_dir: Path = field(default_factory=lambda: Path.home() / "ngrams")
    reference_dir: Optional[Path] = Path("eng_wiki_1m")

    # Output
    output_dir: Path = Path("target")
    canvas_size: Tuple[int, int] = DEFAULT_CANVAS
    overviews: bool = False  # extra PNG line overviews

    # Processing
    filter_limits: Tuple[int, int, int] = FILTER_LIMITS
    workers: int = 1

    @classmethod
    def from_env(cls) -> "Config":
        """Build config from NGRAMS_* environment variables."""
        home = os.environ.get("HOME", str(Path.home()))
        corpus_dir = os.environ.get("NGRAMS_DIR") or f"{home}/ngrams"
        reference_dir = os.environ.get("NGRAMS_REFERENCE_DIR", "eng_wiki_1m")
        output_dir = os.environ.get("NGRAMS_OUTPUT_DIR") or "target"

        return cls(
            corpus_dir=Path(corpus_dir),
            # Empty string disables the reference corpus
            reference_dir=Path(reference_dir) if reference_dir else None,
            output_dir=Path(output_dir),
        )
