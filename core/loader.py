"""Loading of n-gram frequency files.

Expected layout of a corpus directory:

    <dir>/1-grams.txt
    <dir>/2-grams.txt
    <dir>/3-grams.txt

Each non-empty line is "<count> <token>". The token is everything after
the first space, embedded spaces included.
"""

import re
from pathlib import Path
from typing import Dict, List, Union

from config import NGRAM_LENGTHS
from core.corpus import MAX_COUNT, CorpusSet, FrequencyEntry, FrequencyTable
from core.errors import CorpusLoadError, ParseError
from core.sanitizer import cleaned


COUNT_PATTERN = re.compile(r"\+?[0-9]+")


def ngram_file_name(length: int) -> str:
    return f"{length}-grams.txt"


def parse_line(line: str, line_number: int = None) -> FrequencyEntry:
    """Parse one "<count> <token>" line.

    Raises:
        ParseError: No space separator, or count is not an unsigned 64-bit integer
    """
    number, sep, token = line.partition(" ")
    if not sep:
        raise ParseError(line, "missing space separator", line_number)

    if not COUNT_PATTERN.fullmatch(number):
        raise ParseError(line, "count is not an unsigned integer", line_number)

    count = int(number)
    if count > MAX_COUNT:
        raise ParseError(line, "count does not fit in 64 bits", line_number)

    return FrequencyEntry(count, cleaned(token))


class CorpusLoader:
    """Reads a directory of n-gram files into a CorpusSet."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        # path -> number of malformed lines dropped
        self.skipped: Dict[Path, int] = {}

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except FileNotFoundError:
            raise CorpusLoadError(path, "file not found")
        except UnicodeDecodeError as e:
            raise CorpusLoadError(path, f"invalid {self.encoding}: {e.reason}")
        except OSError as e:
            raise CorpusLoadError(path, e.strerror or str(e))

    def load_table(self, path: Union[str, Path], length: int) -> FrequencyTable:
        """Load and sort one n-gram file."""
        path = Path(path)
        contents = self._read(path)

        entries: List[FrequencyEntry] = []
        dropped = 0

        # Split on "\n" only; str.splitlines() would also break on
        # control characters that belong to tokens.
        for line_number, line in enumerate(contents.split("\n"), start=1):
            if line.endswith("\r"):
                line = line[:-1]
            if not line:
                continue
            try:
                entries.append(parse_line(line, line_number))
            except ParseError:
                dropped += 1

        self.skipped[path] = dropped
        if dropped:
            print(f"Warning: skipped {dropped} malformed line(s) in {path}")

        return FrequencyTable.from_entries(length, entries)

    def load(self, directory: Union[str, Path]) -> CorpusSet:
        """Load 1-, 2- and 3-gram files from a directory.

        Raises:
            CorpusLoadError: If any of the files is missing or unreadable
        """
        directory = Path(directory)
        tables = tuple(
            self.load_table(directory / ngram_file_name(length), length)
            for length in NGRAM_LENGTHS
        )
        return CorpusSet(directory.name or str(directory), tables)


def load_corpus(directory: Union[str, Path]) -> CorpusSet:
    """Convenience function to load a corpus directory."""
    return CorpusLoader().load(directory)
