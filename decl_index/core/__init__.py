"""Core declaration index functionality."""

from .engine import SearchEngine
from .matcher import SubsequenceMatcher, match_cost
from .normalizer import TextNormalizer
from .ordering import CanonicalOrderCache, IntegerKeyMode, enumeration_order
from .snapshot import Declaration, Kind, Snapshot, load_snapshot
from .store import SnapshotStore

__all__ = [
    "SearchEngine",
    "SubsequenceMatcher",
    "match_cost",
    "TextNormalizer",
    "CanonicalOrderCache",
    "IntegerKeyMode",
    "enumeration_order",
    "Declaration",
    "Kind",
    "Snapshot",
    "load_snapshot",
    "SnapshotStore",
]
