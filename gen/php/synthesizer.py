"""
Operations the model implies but does not declare.

Every function returns fresh ``UmlOperation`` values owned (but not listed)
by the classifier being emitted; the model itself is never modified.
"""
from __future__ import annotations

import dataclasses
import logging
import re
from typing import List, Optional, Tuple

from meta import DEFAULT_META
from uml_types import Direction, ElementKind, Visibility
from core.graph import UmlGraph
from core.uml_model import UmlAttribute, UmlClassifier, UmlOperation, UmlParameter
from gen.php.relationships import stereotype_tags, super_interfaces
from utils.ids import stable_id

logger = logging.getLogger(__name__)

PHP = DEFAULT_META.php

_WORD_START = re.compile(r"(?:^\w|[A-Z]|\b\w)")
_SPACES = re.compile(r"\s+")


def camelize(name: str, capitalize_first: bool = False) -> str:
    """``first_name`` -> ``firstName`` (or ``FirstName`` with ``capitalize_first``)."""
    def repl(m: "re.Match[str]") -> str:
        letter = m.group(0)
        if capitalize_first or m.start() > 0:
            return letter.upper()
        return letter.lower()
    return _SPACES.sub("", _WORD_START.sub(repl, name.replace("_", " ")))


def _derived(op: UmlOperation, owner: UmlClassifier, tag: str, **changes) -> UmlOperation:
    """Copy of ``op`` re-homed on ``owner``."""
    copy = dataclasses.replace(
        op, xmi=stable_id(f"{owner.xmi}:{tag}:{op.xmi}"), parent=owner,
        owned_elements=[], **changes)
    return copy


# ---------- Accessors ----------
def accessor_names(attr: UmlAttribute) -> Tuple[str, str]:
    """(setter, getter) names for ``attr``."""
    suffix = camelize(attr.name, True)
    is_bool = isinstance(attr.type, str) and attr.type in PHP.boolean_types
    return "set" + suffix, ("is" if is_bool else "get") + suffix


def synthesize_accessors(attr: UmlAttribute, owner: UmlClassifier) -> List[UmlOperation]:
    """Fluent setter and getter for a private, non-derived attribute.

    A name already declared among ``owner``'s own operations is not
    synthesized again.
    """
    if not attr.name or attr.visibility != Visibility.PRIVATE or attr.is_derived:
        return []

    setter_name, getter_name = accessor_names(attr)
    prop = camelize(attr.name)
    access = f"self::${attr.name}" if attr.is_static else f"$this->{attr.name}"

    setter = UmlOperation(
        name=setter_name,
        xmi=stable_id(f"{owner.xmi}:setter:{attr.name}"),
        is_static=attr.is_static,
        specification=f"{access} = ${prop};",
    )
    setter.parent = owner
    setter.add_parameter(UmlParameter(
        name=prop, type=attr.type, multiplicity=attr.multiplicity,
        documentation=attr.documentation))
    if not attr.is_static:
        setter.add_parameter(UmlParameter(name="", type=PHP.self_type, direction=Direction.RETURN))

    getter = UmlOperation(
        name=getter_name,
        xmi=stable_id(f"{owner.xmi}:getter:{attr.name}"),
        is_static=attr.is_static,
        specification=f"return {access};",
    )
    getter.parent = owner
    getter.add_parameter(UmlParameter(
        name="", type=attr.type, multiplicity=attr.multiplicity, direction=Direction.RETURN))

    result: List[UmlOperation] = []
    for op in (setter, getter):
        if owner.has_operation(op.name):
            logger.debug(f"'{owner.name}' already declares {op.name}(), not synthesized")
            continue
        result.append(op)
    return result


# ---------- Stereotype capabilities ----------
def _capability_method(tag: str, owner: UmlClassifier) -> Optional[UmlOperation]:
    key = tag.lower()
    if key == "iteratoraggregate":
        name, return_type = "getIterator", PHP.iterator_class
        body = f"return new {PHP.iterator_class}([]);"
    elif key == "countable":
        name, return_type = "count", "int"
        body = "return 0;"
    else:
        return None
    op = UmlOperation(
        name=name,
        xmi=stable_id(f"{owner.xmi}:capability:{key}"),
        is_abstract=owner.is_abstract,
        specification=f"{PHP.not_implemented}\n{body}",
    )
    op.parent = owner
    op.add_parameter(UmlParameter(name="", type=return_type, direction=Direction.RETURN))
    return op


def synthesize_stereotype_methods(elem: UmlClassifier) -> List[UmlOperation]:
    """Default methods for capability tags such as ``countable``."""
    result: List[UmlOperation] = []
    for tag in stereotype_tags(elem):
        op = _capability_method(tag, elem)
        if op is None or elem.has_operation(op.name):
            continue
        result.append(op)
    return result


# ---------- Inherited obligations ----------
def synthesize_interface_stubs(elem: UmlClassifier, graph: UmlGraph) -> List[UmlOperation]:
    """Placeholder implementations of realized interface operations ``elem`` lacks."""
    result: List[UmlOperation] = []
    for iface in super_interfaces(elem, graph):
        if iface.external or iface.kind != ElementKind.INTERFACE:
            continue
        for op in iface.operations:
            if not op.name or elem.has_operation(op.name):
                continue
            result.append(_derived(op, elem, "stub",
                                   specification=PHP.not_implemented, is_abstract=False))
    return result


def synthesize_abstract_overrides(elem: UmlClassifier, super_class: UmlClassifier) -> List[UmlOperation]:
    """Concrete overrides of ``super_class``'s abstract operations ``elem`` lacks."""
    result: List[UmlOperation] = []
    for op in super_class.operations:
        if not op.is_abstract or not op.name or elem.has_operation(op.name):
            continue
        result.append(_derived(op, elem, "override", specification="", is_abstract=False))
    return result


# ---------- Factory methods ----------
def is_factory_method(op: UmlOperation) -> bool:
    return PHP.factory_marker in op.name


def rewrite_factory_method(op: UmlOperation, continuation_indent: str = "    ") -> UmlOperation:
    """Copy of a ``createWith*`` operation whose body chains one setter per in-parameter."""
    calls = [
        f"\n{continuation_indent}->set{camelize(p.name, True)}(${camelize(p.name)})"
        for p in op.parameters
        if p.direction == Direction.IN
    ]
    body = "return self::create()" + "".join(calls) + ";"
    return dataclasses.replace(op, xmi=stable_id(f"{op.xmi}:factory"), specification=body)


__all__ = [
    "camelize", "accessor_names", "synthesize_accessors",
    "synthesize_stereotype_methods", "synthesize_interface_stubs",
    "synthesize_abstract_overrides", "is_factory_method", "rewrite_factory_method",
]
