"""Main search engine implementation."""

import math
import threading
from typing import Any, Collection, Dict, List, Optional, Tuple

import structlog

from .errors import EngineAlreadyLoadedError, EngineNotReadyError, SearchInvariantError
from .matcher import SubsequenceMatcher
from .normalizer import TextNormalizer
from .snapshot import Declaration, Kind
from .store import SnapshotStore

logger = structlog.get_logger(__name__)

DEFAULT_MAX_RESULTS = 30
MAX_MAX_RESULTS = 80

# Doc-text fallback: a poor name match whose docstring contains every word
# of a long enough pattern is lifted to this cost.
DOC_FALLBACK_COST = 3.0
DOC_FALLBACK_MIN_PATTERN_BYTES = 3


def clamp_max_results(max_results: Optional[int]) -> int:
    """Apply the default and the hard ceiling to a requested result count."""
    if max_results is None:
        max_results = DEFAULT_MAX_RESULTS
    return max(0, min(max_results, MAX_MAX_RESULTS))


class SearchEngine:
    """Fuzzy and exact declaration search over an attached snapshot store."""

    def __init__(self, store: Optional[SnapshotStore] = None) -> None:
        """
        Initialize the search engine.

        Args:
            store: Snapshot store to search; may be attached later
        """
        self.matcher = SubsequenceMatcher()
        self.normalizer = TextNormalizer()
        self._store = store
        self._attach_lock = threading.Lock()

    def attach(self, store: SnapshotStore) -> None:
        """
        Bind the engine to its snapshot store. Allowed once per engine.

        Raises:
            EngineAlreadyLoadedError: If a store is already attached
        """
        with self._attach_lock:
            if self._store is not None:
                raise EngineAlreadyLoadedError("A snapshot is already attached")
            self._store = store
        logger.info("Snapshot attached", declarations=len(store.declarations))

    @property
    def is_ready(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> SnapshotStore:
        store = self._store
        if store is None:
            raise EngineNotReadyError("No snapshot has been loaded yet")
        return store

    def search_strict(self, name: str) -> Optional[Declaration]:
        """Exact lookup by fully-qualified name."""
        return self.store.get(name)

    def search(
        self,
        pattern: str,
        allowed_kinds: Optional[Collection[Kind]] = None,
        max_results: Optional[int] = None,
    ) -> List[Declaration]:
        """
        Search declarations whose name fuzzily matches a pattern.

        Args:
            pattern: Search pattern; whitespace is ignored for name matching
            allowed_kinds: Only return declarations of these kinds
            max_results: Result cap; defaults to 30, never more than 80

        Returns:
            Declarations ordered by ascending cost, ties in canonical order
        """
        limit = clamp_max_results(max_results)
        ranked = self.rank(pattern, allowed_kinds)
        return [decl for _, decl in ranked[:limit]]

    def rank(
        self,
        pattern: str,
        allowed_kinds: Optional[Collection[Kind]] = None,
    ) -> List[Tuple[float, Declaration]]:
        """Score every matching declaration; sorted, untruncated."""
        store = self.store
        declarations = store.declarations

        name_pattern = self.normalizer.strip_whitespace(pattern)
        doc_words = self.normalizer.doc_words(pattern)
        doc_fallback = self.normalizer.byte_length(pattern) > DOC_FALLBACK_MIN_PATTERN_BYTES
        if allowed_kinds is not None:
            allowed_kinds = frozenset(allowed_kinds)

        results: List[Tuple[float, Declaration]] = []

        for key in store.declaration_order():
            decl = declarations[key]

            if allowed_kinds is not None and decl.kind not in allowed_kinds:
                continue

            cost = self.matcher.match_cost(decl.name, name_pattern)
            if cost is None:
                continue

            if cost >= DOC_FALLBACK_COST and doc_fallback:
                lower_doc = self.normalizer.ascii_lower(decl.doc)
                if all(word in lower_doc for word in doc_words):
                    cost = DOC_FALLBACK_COST

            if not math.isfinite(cost):
                raise SearchInvariantError(f"Non-finite cost {cost!r} for {decl.name!r}")

            results.append((cost, decl))

        # Stable sort keeps canonical order among equal costs
        results.sort(key=lambda item: item[0])
        return results

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        if self._store is None:
            return {"ready": False}
        return {"ready": True, "index_stats": self._store.get_stats()}
