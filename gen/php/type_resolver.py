"""
Model type references to PHP type expressions.

``resolve_type`` is the single place deciding how a typed element (attribute,
parameter, association end) is spelled, both in PHPDoc (``Foo[]``) and in
code (``array``).
"""
from __future__ import annotations

from typing import Optional

from meta import DEFAULT_META
from uml_types import ElementKind
from core.uml_model import UmlElement
from core.namespace import SEPARATOR, namespace_of

PHP = DEFAULT_META.php


def is_many(multiplicity: Optional[str]) -> bool:
    return bool(multiplicity) and multiplicity.strip() in PHP.many_multiplicities


def qualify(elem: UmlElement, namespace: Optional[str] = None, suppress_namespace: bool = False) -> str:
    """Spell a reference to ``elem`` from inside ``namespace``."""
    if suppress_namespace:
        return elem.name
    own = namespace_of(elem)
    if own == (namespace or None):
        return elem.name
    if own is None:
        return SEPARATOR + elem.name
    return SEPARATOR + own + SEPARATOR + elem.name


def resolve_type(ref: Optional[UmlElement], namespace: Optional[str] = None,
                 for_documentation: bool = True, suppress_namespace: bool = False) -> str:
    """Return the PHP type of a typed model element.

    ``namespace`` is the namespace of the unit being emitted; references into
    it collapse to their short name. With ``for_documentation`` a many-valued
    reference renders as ``Name[]``, otherwise as ``array``.
    """
    type_name = PHP.void_type
    if ref is None:
        return type_name

    if ref.kind == ElementKind.ASSOCIATION_END:
        target = getattr(ref, "reference", None)
        if isinstance(target, UmlElement) and target.name:
            type_name = qualify(target, namespace, suppress_namespace)
    else:
        t = getattr(ref, "type", None)
        if isinstance(t, UmlElement) and t.name:
            type_name = qualify(t, namespace, suppress_namespace)
        elif isinstance(t, str) and t:
            type_name = t

    multiplicity = (getattr(ref, "multiplicity", "") or "").strip()
    if multiplicity and type_name != PHP.void_type:
        if is_many(multiplicity):
            if for_documentation:
                type_name += "[]"
            else:
                type_name = PHP.array_type
    else:
        if getattr(ref, "default_value", "") == "[]":
            type_name = PHP.array_type
        if is_many(multiplicity):
            type_name = PHP.array_type

    if type_name == PHP.object_type:
        type_name = PHP.self_type
    return type_name


def is_allowed_type_hint(type_name: str) -> bool:
    return type_name not in PHP.disallowed_type_hints


def default_return(type_name: str) -> str:
    """Literal returned by a placeholder body for a method returning ``type_name``."""
    if type_name == PHP.self_type:
        return PHP.self_type
    return PHP.default_returns.get(type_name, PHP.null_literal)


__all__ = [
    "is_many", "qualify", "resolve_type", "is_allowed_type_hint", "default_return",
]
