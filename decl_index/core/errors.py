"""Exception hierarchy for the declaration index."""


class DeclIndexError(Exception):
    """Base class for all declaration index errors."""


class SnapshotLoadError(DeclIndexError):
    """The declaration document could not be read or parsed."""


class CorpusError(DeclIndexError):
    """The documentation corpus is missing or could not be fetched."""


class EngineNotReadyError(DeclIndexError):
    """A query arrived before a snapshot was attached to the engine."""


class EngineAlreadyLoadedError(DeclIndexError):
    """A second snapshot was attached to an engine that already has one."""


class SearchInvariantError(DeclIndexError):
    """The matcher produced a cost that cannot be ordered."""
