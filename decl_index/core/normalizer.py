"""Text normalization utilities for search patterns and docstrings."""

import re
import string
from typing import List

# Only ASCII letters are folded; math symbols and other non-ASCII text
# must compare as written.
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

# Unicode White_Space. str.isspace() also accepts the information
# separators U+001C..U+001F, which are not whitespace here.
_WHITESPACE = re.compile(r"[^\S\x1c-\x1f]+")


class TextNormalizer:
    """Handles the pattern and doc normalization used by the search engine."""

    SEPARATORS = frozenset("._")

    def ascii_lower(self, text: str) -> str:
        """Lowercase ASCII letters only."""
        if not text:
            return ""
        return text.translate(_ASCII_LOWER)

    def strip_whitespace(self, text: str) -> str:
        """
        Remove all whitespace from a pattern.

        Args:
            text: Raw search pattern

        Returns:
            Pattern with every whitespace run removed
        """
        return _WHITESPACE.sub("", text)

    def doc_words(self, text: str) -> List[str]:
        """
        Split a pattern into lowercase words for docstring matching.

        Args:
            text: Raw search pattern

        Returns:
            Whitespace-separated words, ASCII-lowercased
        """
        return [word for word in _WHITESPACE.split(self.ascii_lower(text)) if word]

    def is_separator(self, char: str) -> bool:
        return char in self.SEPARATORS

    @staticmethod
    def byte_length(text: str) -> int:
        """Length of ``text`` encoded as UTF-8."""
        return len(text.encode("utf-8", "surrogatepass"))
