from typing import List, Optional

from meta import DEFAULT_META
from uml_types import ElementKind, Namespace, QualifiedPath
from core.uml_model import UmlElement

SEPARATOR = DEFAULT_META.php.namespace_separator

# Containment walks stop here: model and project names never become namespaces.
_ROOT_KINDS = frozenset({ElementKind.MODEL, ElementKind.PROJECT})


def namespace_path(elem: UmlElement) -> List[str]:
    """Names of the packages enclosing ``elem``, root first.

    Classifier ancestors are skipped: a nested declaration is emitted inside
    its owner's file and shares the owner's namespace.
    """
    names: List[str] = []
    current = elem.parent
    while current is not None and current.kind not in _ROOT_KINDS:
        if current.kind == ElementKind.PACKAGE and current.name:
            names.append(current.name)
        current = current.parent
    names.reverse()
    return names


def namespace_of(elem: UmlElement) -> Optional[Namespace]:
    path = namespace_path(elem)
    if not path:
        return None
    return Namespace(SEPARATOR.join(path))


def qualified_path(elem: UmlElement) -> QualifiedPath:
    """``A\\B\\Name`` without the leading separator."""
    return QualifiedPath(SEPARATOR.join(namespace_path(elem) + [elem.name]))


def needs_import(path: str, namespace: Optional[str]) -> bool:
    """True when ``path`` still has namespace depth once the current namespace is stripped."""
    remainder = path
    if namespace and path.startswith(namespace + SEPARATOR):
        remainder = path[len(namespace) + len(SEPARATOR):]
    return SEPARATOR in remainder


__all__ = ["SEPARATOR", "namespace_path", "namespace_of", "qualified_path", "needs_import"]
