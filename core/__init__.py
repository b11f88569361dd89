"""Core modules for ngram-charts: sanitizing, corpus model, loading."""

from .corpus import CorpusSet, FrequencyEntry, FrequencyTable
from .errors import CorpusLoadError, EmptyTableError, ParseError, RenderError
from .loader import CorpusLoader, load_corpus
from .sanitizer import SanitizedString, cleaned

__all__ = [
    "CorpusSet",
    "FrequencyEntry",
    "FrequencyTable",
    "CorpusLoadError",
    "EmptyTableError",
    "ParseError",
    "RenderError",
    "CorpusLoader",
    "load_corpus",
    "SanitizedString",
    "cleaned",
]
