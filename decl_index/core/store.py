"""Read-only lookups over a loaded snapshot."""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models.response import LinkInfo
from .ordering import CanonicalOrderCache, IntegerKeyMode
from .snapshot import Declaration, Snapshot


class SnapshotStore:
    """Owns a snapshot and answers exact lookups into its maps.

    Every lookup is total: unknown names give an empty list, an empty
    string or None, never an error. Returned lists are copies so callers
    cannot mutate the shared snapshot.
    """

    def __init__(
        self,
        snapshot: Snapshot,
        integer_key_mode: IntegerKeyMode = IntegerKeyMode.EXACT,
    ) -> None:
        """
        Initialize the store.

        Args:
            snapshot: The loaded snapshot
            integer_key_mode: Integer-key rule for the canonical order
        """
        self.snapshot = snapshot
        self._order = CanonicalOrderCache(snapshot.declarations.keys, integer_key_mode)

    @property
    def declarations(self) -> Dict[str, Declaration]:
        return self.snapshot.declarations

    def declaration_order(self) -> Tuple[str, ...]:
        """Declaration names in canonical enumeration order."""
        return self._order.get()

    def get(self, name: str) -> Optional[Declaration]:
        return self.snapshot.declarations.get(name)

    def instances_for_class(self, name: str) -> List[str]:
        """Instance names of a class, empty if the class is unknown."""
        return list(self.snapshot.instances.get(name, ()))

    def instances_for_type(self, name: str) -> List[str]:
        """Instance names mentioning a type, empty if the type is unknown."""
        return list(self.snapshot.instances_for.get(name, ()))

    def module_link(self, name: str) -> Optional[str]:
        return self.snapshot.modules.get(name)

    def imported_by(self, name: str) -> List[str]:
        """Modules importing ``name``, empty if the module is unknown."""
        return list(self.snapshot.imported_by.get(name, ()))

    def declaration_link(self, name: str) -> str:
        """Doc link of a declaration, empty string if unknown."""
        decl = self.get(name)
        return decl.doc_link if decl is not None else ""

    def annotate_instances(self, names: Sequence[str]) -> List[List[LinkInfo]]:
        """Instances of each class in ``names`` with their doc links."""
        return self._annotate(names, self.snapshot.instances)

    def annotate_instances_for(self, names: Sequence[str]) -> List[List[LinkInfo]]:
        """Instances for each type in ``names`` with their doc links."""
        return self._annotate(names, self.snapshot.instances_for)

    def _annotate(
        self,
        names: Sequence[str],
        targets: Dict[str, List[str]],
    ) -> List[List[LinkInfo]]:
        annotated = []
        for name in names:
            annotated.append([
                LinkInfo(name=inst, link=self.declaration_link(inst))
                for inst in targets.get(name, ())
            ])
        return annotated

    def linked_imported_by(self, name: str) -> List[LinkInfo]:
        """Importers of a module, each with its module doc link."""
        return [
            LinkInfo(name=module, link=self.module_link(module) or "")
            for module in self.snapshot.imported_by.get(name, ())
        ]

    def get_stats(self) -> Dict[str, Any]:
        """Get snapshot statistics."""
        snapshot = self.snapshot
        return {
            "declarations": len(snapshot.declarations),
            "instances": len(snapshot.instances),
            "instances_for": len(snapshot.instances_for),
            "imports": len(snapshot.imports),
            "imported_by": len(snapshot.imported_by),
            "modules": len(snapshot.modules),
            "order_computed": self._order.is_computed,
            "integer_key_mode": self._order.mode.value,
        }
