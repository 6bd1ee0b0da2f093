"""Case-aware subsequence matching for declaration names."""

from typing import Optional

from .normalizer import TextNormalizer

# Cost of a gap ending in a separator, per byte skipped
SEPARATOR_WEIGHT = 0.125
# Extra cost when a matched character differs only in ASCII case
CASE_MISMATCH_PENALTY = 0.5
# Cost per byte of the name left over after the last match
TRAILING_WEIGHT = 0.125


class SubsequenceMatcher:
    """Scores a pattern against a name as an ordered subsequence.

    The cost grows with the bytes skipped between matched characters. Gaps
    before a separator (``.`` or ``_``) in the pattern, separators skipped in
    the name and the unmatched tail of the name are cheap; gaps before any
    other character cost one per byte. Lower is better, and an exact match
    costs 0.
    """

    def __init__(self) -> None:
        self.normalizer = TextNormalizer()

    def match_cost(self, name: str, pattern: str) -> Optional[float]:
        """
        Compute the match cost of ``pattern`` against ``name``.

        Args:
            name: Candidate declaration name
            pattern: Search pattern with whitespace already removed

        Returns:
            Non-negative cost, or None if pattern is not a subsequence of name
        """
        is_separator = self.normalizer.is_separator
        lower_name = self.normalizer.ascii_lower(name)
        lower_pattern = self.normalizer.ascii_lower(pattern)

        cost = 0.0
        last_match = 0
        pattern_pos = 0
        pattern_len = len(pattern)

        # Offsets are UTF-8 byte offsets into name
        didx = 0
        for d, ld in zip(name, lower_name):
            if pattern_pos == pattern_len:
                break
            char_len = 1 if d < "\x80" else len(d.encode("utf-8", "surrogatepass"))
            p = pattern[pattern_pos]

            if lower_pattern[pattern_pos] == ld:
                gap = didx - last_match
                cost += SEPARATOR_WEIGHT * gap if is_separator(p) else gap
                if p != d:
                    cost += CASE_MISMATCH_PENALTY
                last_match = didx + char_len
                pattern_pos += 1
            elif is_separator(d):
                cost += SEPARATOR_WEIGHT * (didx + char_len - last_match)
                last_match = didx + char_len

            didx += char_len

        cost += TRAILING_WEIGHT * (self.normalizer.byte_length(name) - last_match)

        if pattern_pos < pattern_len:
            return None
        return cost


_default_matcher = SubsequenceMatcher()


def match_cost(name: str, pattern: str) -> Optional[float]:
    """Module-level shortcut for :meth:`SubsequenceMatcher.match_cost`."""
    return _default_matcher.match_cost(name, pattern)
