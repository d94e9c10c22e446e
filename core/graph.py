import logging
import re
from typing import Callable, Dict, Iterator, List, Optional

from uml_types import ElementKind, XmiId
from core.uml_model import (
    UmlElement, UmlClassifier, UmlOperation, UmlRelationship, UmlProject,
)

logger = logging.getLogger(__name__)

RelationshipPredicate = Callable[[UmlRelationship], bool]

_PATH_SPLIT = re.compile(r"::|/|\\")


class UmlGraph:
    """Read-only index over a model tree: elements by id and relationships by element."""

    def __init__(self, root: UmlElement, project: Optional[UmlProject] = None) -> None:
        self.root = root
        self.project = project or UmlProject(name=root.name)
        self.elements_by_id: Dict[XmiId, UmlElement] = {}
        self.relationships: List[UmlRelationship] = []
        for elem in self.walk():
            self.elements_by_id[elem.xmi] = elem
            if elem.is_relationship:
                self.relationships.append(elem)  # type: ignore[arg-type]
        logger.debug(f"Indexed {len(self.elements_by_id)} elements, {len(self.relationships)} relationships")

    @property
    def author(self) -> str:
        return self.project.author or ""

    def walk(self, start: Optional[UmlElement] = None) -> Iterator[UmlElement]:
        """Depth-first walk of the containment tree in declaration order."""
        stack = [start or self.root]
        while stack:
            elem = stack.pop()
            yield elem
            children: List[UmlElement] = list(elem.owned_elements)
            if isinstance(elem, UmlClassifier):
                children = list(elem.attributes) + list(elem.operations) + list(elem.literals) + children
            elif isinstance(elem, UmlOperation):
                children = list(elem.parameters) + children
            stack.extend(reversed(children))

    def relationships_of(self, elem: UmlElement,
                         predicate: Optional[RelationshipPredicate] = None) -> List[UmlRelationship]:
        """Relationships touching ``elem`` that satisfy ``predicate``, in model order."""
        result: List[UmlRelationship] = []
        for rel in self.relationships:
            if not rel.involves(elem):
                continue
            if predicate is not None and not predicate(rel):
                continue
            result.append(rel)
        return result

    def models(self) -> List[UmlElement]:
        if self.root.kind == ElementKind.MODEL:
            return [self.root]
        return [e for e in self.root.owned_elements if e.kind == ElementKind.MODEL]

    def find(self, qualified_name: str) -> Optional[UmlElement]:
        """Find an element by ``A::B::C`` (or ``/``, ``\\``) path below the root.

        The leading model name may be omitted.
        """
        parts = [p for p in _PATH_SPLIT.split(qualified_name.strip()) if p]
        if not parts:
            return None
        starts = [self.root] + [m for m in self.models() if m is not self.root]
        for start in starts:
            found = self._descend(start, parts)
            if found is None and parts[0] == start.name:
                found = self._descend(start, parts[1:])
            if found is not None:
                return found
        return None

    @staticmethod
    def _descend(start: UmlElement, parts: List[str]) -> Optional[UmlElement]:
        current = start
        for part in parts:
            nxt = next((c for c in current.owned_elements if c.name == part), None)
            if nxt is None:
                return None
            current = nxt
        return current


__all__ = ["UmlGraph", "RelationshipPredicate"]
