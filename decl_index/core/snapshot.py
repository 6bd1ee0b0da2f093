"""Declaration data model and snapshot loading."""

import time
from enum import Enum
from pathlib import Path
from typing import Dict, List, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .errors import SnapshotLoadError

logger = structlog.get_logger(__name__)


class Kind(str, Enum):
    """Closed category tag of a declaration."""

    CTOR = "ctor"
    DEF = "def"
    INSTANCE = "instance"
    THEOREM = "theorem"
    AXIOM = "axiom"
    INDUCTIVE = "inductive"
    STRUCTURE = "structure"
    CLASS = "class"
    OPAQUE = "opaque"


class Declaration(BaseModel):
    """A named entity of the documented corpus."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    source_link: str = Field(..., description="Link to the declaration's source")
    name: str = Field(..., description="Fully-qualified declaration name")
    kind: Kind = Field(..., description="Declaration kind")
    doc_link: str = Field(..., description="Link to the rendered documentation")
    doc: str = Field(..., description="Docstring text")


class Snapshot(BaseModel):
    """The immutable dataset loaded from the declaration document.

    Every field is optional in the document and defaults to empty. Mapping
    fields keep the insertion order of the document.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    declarations: Dict[str, Declaration] = Field(default_factory=dict)
    instances: Dict[str, List[str]] = Field(default_factory=dict)
    instances_for: Dict[str, List[str]] = Field(default_factory=dict)
    imports: List[str] = Field(default_factory=list)
    imported_by: Dict[str, List[str]] = Field(default_factory=dict)
    modules: Dict[str, str] = Field(default_factory=dict)


def parse_snapshot(data: Union[str, bytes]) -> Snapshot:
    """
    Parse a declaration document.

    Args:
        data: Raw JSON document

    Returns:
        The parsed snapshot

    Raises:
        SnapshotLoadError: If the document is malformed
    """
    try:
        return Snapshot.model_validate_json(data)
    except ValidationError as e:
        raise SnapshotLoadError(f"Malformed declaration document: {e}") from e


def load_snapshot(source: Union[str, Path]) -> Snapshot:
    """
    Load a snapshot from a declaration document on disk.

    Args:
        source: Path of the JSON document

    Returns:
        The loaded snapshot

    Raises:
        SnapshotLoadError: If the file is missing, unreadable or malformed
    """
    path = Path(source)
    start_time = time.time()

    try:
        data = path.read_bytes()
    except OSError as e:
        raise SnapshotLoadError(f"Cannot read declaration document {path}: {e}") from e

    snapshot = parse_snapshot(data)

    logger.info(
        "Snapshot loaded",
        path=str(path),
        declarations=len(snapshot.declarations),
        modules=len(snapshot.modules),
        load_time_ms=round((time.time() - start_time) * 1000, 2),
    )
    return snapshot
