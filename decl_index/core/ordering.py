"""Canonical key enumeration order.

Browsers enumerate the own string keys of an ordinary object by putting
integer-index keys first, in ascending numeric order, followed by every other
key in insertion order (ECMAScript ``OrdinaryOwnPropertyKeys``). Search
results tie-break on this order so that they come out the same way the
legacy client listed them.
"""

import re
import threading
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)

# Largest array index is 2**32 - 2; 2**32 - 1 is reserved for "length".
MAX_ARRAY_INDEX = 2 ** 32 - 2
MAX_LENIENT_INDEX = 2 ** 64 - 1

_LENIENT_INTEGER = re.compile(r"\+?[0-9]+")


class IntegerKeyMode(str, Enum):
    """How keys are recognised as integer indices."""

    EXACT = "exact"
    LENIENT = "lenient"


def parse_array_index(key: str) -> Optional[int]:
    """Return the array index ``key`` names, or None if it is an ordinary key."""
    if not key or not key.isascii() or not key.isdigit():
        return None
    if len(key) > 1 and key[0] == "0":
        return None
    value = int(key)
    if value > MAX_ARRAY_INDEX:
        return None
    return value


def parse_lenient_index(key: str) -> Optional[int]:
    """Plain decimal parse: optional '+', ASCII digits, fits in 64 bits."""
    if not _LENIENT_INTEGER.fullmatch(key):
        return None
    value = int(key)
    if value > MAX_LENIENT_INDEX:
        return None
    return value


_PARSERS = {
    IntegerKeyMode.EXACT: parse_array_index,
    IntegerKeyMode.LENIENT: parse_lenient_index,
}


def enumeration_order(
    keys: Iterable[str],
    mode: IntegerKeyMode = IntegerKeyMode.EXACT,
) -> List[str]:
    """
    Order keys the way an ordinary object enumerates them.

    Args:
        keys: Keys in insertion order
        mode: Integer-key recognition rule

    Returns:
        Integer keys ascending by value, then all other keys in insertion order
    """
    parse = _PARSERS[IntegerKeyMode(mode)]

    numeric: List[Tuple[int, str]] = []
    named: List[str] = []

    for key in keys:
        index = parse(key)
        if index is None:
            named.append(key)
        else:
            numeric.append((index, key))

    # Stable, so equal values (lenient "7" and "007") keep insertion order
    numeric.sort(key=lambda item: item[0])

    return [key for _, key in numeric] + named


class CanonicalOrderCache:
    """Compute-once holder for the enumeration order of a key source.

    The first caller computes the order under the lock and publishes an
    immutable tuple; later callers read the published tuple without locking.
    """

    def __init__(
        self,
        keys: Callable[[], Iterable[str]],
        mode: IntegerKeyMode = IntegerKeyMode.EXACT,
    ) -> None:
        """
        Initialize the cache.

        Args:
            keys: Callable returning the keys in insertion order
            mode: Integer-key recognition rule
        """
        self._keys = keys
        self.mode = IntegerKeyMode(mode)
        self._order: Optional[Tuple[str, ...]] = None
        self._integer_keys = 0
        self._lock = threading.Lock()

    @property
    def is_computed(self) -> bool:
        return self._order is not None

    @property
    def integer_key_count(self) -> int:
        """Number of keys recognised as integers; computes the order if needed."""
        self.get()
        return self._integer_keys

    def get(self) -> Tuple[str, ...]:
        """Return the cached order, computing it on first access."""
        order = self._order
        if order is not None:
            return order

        with self._lock:
            if self._order is None:
                computed = tuple(enumeration_order(self._keys(), self.mode))
                parse = _PARSERS[self.mode]
                self._integer_keys = sum(1 for key in computed if parse(key) is not None)
                self._order = computed
                logger.info(
                    "Canonical key order computed",
                    keys=len(computed),
                    integer_keys=self._integer_keys,
                    mode=self.mode.value,
                )
            return self._order
