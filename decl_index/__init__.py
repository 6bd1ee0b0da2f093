"""
Declaration Index - fuzzy search and cross-reference lookups for generated docs.

This package loads the declaration data of a statically generated
documentation corpus into memory and serves name search, instance and import
lookups to the browser pages of that corpus.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .core.snapshot import Declaration, Kind, Snapshot, load_snapshot
from .core.store import SnapshotStore

__all__ = [
    "SearchEngine",
    "SnapshotStore",
    "Declaration",
    "Kind",
    "Snapshot",
    "load_snapshot",
]
