"""
Relationship queries for one classifier.

Besides explicit Generalization / InterfaceRealization / Dependency edges,
stereotype tags contribute synthetic supertypes: ``extends Foo`` names a
base class, any other tag (except ``trait``) names an interface. Synthetic
targets are external classifiers: declared outside the model, never imported.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from uml_types import ElementKind
from core.graph import UmlGraph
from core.uml_model import (
    UmlElement, UmlClassifier, UmlDependency, UmlAssociation,
    UmlAssociationEnd, UmlOperation, UmlParameter,
)
from core.namespace import SEPARATOR, qualified_path
from utils.ids import stable_id

logger = logging.getLogger(__name__)

EXTENDS_PREFIX = "extends "
TRAIT_TAG = "trait"


def stereotype_tags(elem: UmlElement) -> List[str]:
    if isinstance(elem, UmlClassifier):
        return elem.stereotype_tags
    return []


def is_trait(elem: UmlElement) -> bool:
    """Only a classifier whose whole stereotype is ``trait`` is declared as a trait."""
    return isinstance(elem, UmlClassifier) and elem.stereotype.strip() == TRAIT_TAG


def _external(name: str, kind: ElementKind, owner: UmlElement) -> UmlClassifier:
    return UmlClassifier(
        name=SEPARATOR + name,
        kind=kind,
        xmi=stable_id(f"{owner.xmi}:stereotype:{name}"),
        external=True,
    )


def super_classes(elem: UmlElement, graph: UmlGraph) -> List[UmlClassifier]:
    rels = graph.relationships_of(
        elem, lambda r: r.kind == ElementKind.GENERALIZATION and r.source is elem)
    result: List[UmlClassifier] = [r.target for r in rels if r.target is not None]  # type: ignore[misc]
    for tag in stereotype_tags(elem):
        if tag.startswith(EXTENDS_PREFIX):
            base = tag[len(EXTENDS_PREFIX):].strip()
            if base:
                result.append(_external(base, ElementKind.CLASS, elem))
    return result


def super_interfaces(elem: UmlElement, graph: UmlGraph) -> List[UmlClassifier]:
    rels = graph.relationships_of(
        elem, lambda r: r.kind == ElementKind.INTERFACE_REALIZATION and r.source is elem)
    result: List[UmlClassifier] = [r.target for r in rels if r.target is not None]  # type: ignore[misc]
    for tag in stereotype_tags(elem):
        if tag.startswith(EXTENDS_PREFIX) or tag == TRAIT_TAG:
            continue
        result.append(_external(tag, ElementKind.INTERFACE, elem))
    return result


def super_dependencies(elem: UmlElement, graph: UmlGraph) -> List[UmlDependency]:
    """Dependencies on classes, rendered as trait ``use`` clauses."""
    rels = graph.relationships_of(
        elem,
        lambda r: (r.kind == ElementKind.DEPENDENCY and r.source is elem
                   and r.target is not None and r.target.kind == ElementKind.CLASS))
    return rels  # type: ignore[return-value]


def _element_type_path(param: Optional[UmlParameter]) -> Optional[str]:
    if param is None:
        return None
    t = param.type
    if isinstance(t, UmlElement) and t.name:
        return qualified_path(t)
    return None


def _operation_type_paths(ops: List[UmlOperation]) -> List[str]:
    paths: List[str] = []
    for op in ops:
        for param in op.non_return_parameters() + [op.return_parameter()]:
            path = _element_type_path(param)
            if path:
                paths.append(path)
    return paths


def param_namespaces(elem: UmlElement, graph: UmlGraph) -> List[str]:
    """Qualified paths of model types used by own and realized operations."""
    if not isinstance(elem, UmlClassifier):
        return []
    paths = _operation_type_paths(elem.operations)
    for iface in super_interfaces(elem, graph):
        if iface.kind == ElementKind.INTERFACE and not iface.external:
            paths.extend(_operation_type_paths(iface.operations))
    return paths


def navigable_member_ends(elem: UmlClassifier, graph: UmlGraph) -> List[UmlAssociationEnd]:
    """Opposite association ends that become member variables of ``elem``.

    Ends whose name is already taken by an attribute are left out.
    """
    taken = {attr.name for attr in elem.attributes}
    result: List[UmlAssociationEnd] = []
    for rel in graph.relationships_of(elem, lambda r: r.kind == ElementKind.ASSOCIATION):
        assoc: UmlAssociation = rel  # type: ignore[assignment]
        if assoc.end1.reference is elem and assoc.end2.navigable:
            end = assoc.end2
        elif assoc.end2.reference is elem and assoc.end1.navigable:
            end = assoc.end1
        else:
            continue
        if end.name and end.name in taken:
            logger.debug(f"Association end '{end.name}' of '{elem.name}' already declared as attribute")
            continue
        result.append(end)
    return result


__all__ = [
    "stereotype_tags", "is_trait", "super_classes", "super_interfaces",
    "super_dependencies", "param_namespaces", "navigable_member_ends",
]
