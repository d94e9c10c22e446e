from __future__ import annotations

from typing import Iterable, List, Optional

from uml_types import ElementKind
from core.graph import UmlGraph
from core.namespace import qualified_path, needs_import
from core.uml_model import UmlElement, UmlClassifier, UmlUseCase
from gen.php.relationships import (
    super_classes, super_dependencies, super_interfaces, param_namespaces,
)


def _candidates(elem: UmlClassifier, graph: UmlGraph) -> Iterable[str]:
    for attr in elem.attributes:
        if isinstance(attr.type, UmlElement) and attr.type.name:
            yield qualified_path(attr.type)

    for dep in super_dependencies(elem, graph):
        yield qualified_path(dep.target)  # type: ignore[arg-type]

    for sup in super_classes(elem, graph):
        if not sup.external:
            yield qualified_path(sup)

    for iface in super_interfaces(elem, graph):
        if not iface.external and iface.kind in (ElementKind.INTERFACE, ElementKind.CLASS):
            yield qualified_path(iface)

    yield from param_namespaces(elem, graph)

    for child in elem.owned_elements:
        if isinstance(child, UmlUseCase) and isinstance(child.stereotype, UmlElement):
            yield qualified_path(child.stereotype)


def collect_uses(elem: UmlClassifier, graph: UmlGraph, namespace: Optional[str]) -> List[str]:
    """Qualified names ``elem``'s declaration must import, first-seen order.

    Paths that resolve inside ``namespace`` (or at the global level) are
    already in scope and are left out.
    """
    uses: List[str] = []
    for path in _candidates(elem, graph):
        if needs_import(path, namespace) and path not in uses:
            uses.append(path)
    return uses


__all__ = ["collect_uses"]
