"""Global search engine instance to avoid circular imports."""

from .core.engine import SearchEngine

# Global search engine instance; the snapshot is attached at startup
search_engine = SearchEngine()
