"""Display-safe rendering of raw n-gram text.

Control and whitespace characters are replaced with short escape
sequences so tokens can be used as chart labels. Control characters
without a dedicated escape collapse into the replacement character,
which marks the token as unrepresentable.
"""

import unicodedata
from dataclasses import dataclass


SENTINEL = "\ufffd"

# Character -> replacement
ESCAPES = {
    "\x00": "\\0",
    "\x01": "^A",   # start of heading
    "\x03": "^C",
    "\x08": "\\b",  # backspace
    "\x09": "\\t",  # tab
    "\x12": "^R",   # device control 2
    "\x14": "^T",   # device control 4
    "\x16": "^V",
    "\x17": "^W",
    "\x18": "^X",   # cancel
    "\x1b": "\\e",  # escape
    "\x7f": "\\d",  # delete
    " ": "\\s",
    "\xa0": "\\s",  # no-break space
}


@dataclass(frozen=True, order=True)
class SanitizedString:
    """Sanitized token text. Compares and sorts by the sanitized text."""

    text: str

    @property
    def is_unrepresentable(self) -> bool:
        """True if the whole token collapsed into the sentinel."""
        return self.text == SENTINEL

    def __str__(self) -> str:
        return self.text


def _clean_char(char: str) -> str:
    replacement = ESCAPES.get(char)
    if replacement is not None:
        return replacement
    if unicodedata.category(char) == "Cc":
        return SENTINEL
    return char


def cleaned(raw: str) -> SanitizedString:
    """Sanitize raw token text for display.

    Examples:
        cleaned("a b") -> SanitizedString("a\\sb")
        cleaned("\\x07") -> SanitizedString("\\ufffd")
    """
    return SanitizedString("".join(_clean_char(char) for char in raw))
