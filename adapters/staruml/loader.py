"""
Loader for StarUML ``.mdj`` projects.

The file is a JSON tree of ``{"_type": ..., "_id": ...}`` nodes; references
between nodes are ``{"$ref": id}`` objects. Loading runs in two passes: the
first creates one model element per known node, the second resolves the
references (types, relationship ends, stereotypes) once every element exists.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from uml_types import Direction, ElementKind, Visibility, XmiId
from core.graph import UmlGraph
from core.uml_model import (
    UmlElement, UmlPackage, UmlClassifier, UmlEnumerationLiteral, UmlAttribute,
    UmlParameter, UmlOperation, UmlRelationship, UmlGeneralization,
    UmlInterfaceRealization, UmlDependency, UmlAssociation, UmlAssociationEnd,
    UmlUseCase, UmlProject,
)
from meta import DEFAULT_META
from adapters.errors import ModelLoadError

logger = logging.getLogger(__name__)

Node = Dict[str, Any]

_CONTAINER_TYPES: Dict[str, ElementKind] = {
    "Project": ElementKind.PROJECT,
    "UMLModel": ElementKind.MODEL,
    "UMLPackage": ElementKind.PACKAGE,
    "UMLSubsystem": ElementKind.PACKAGE,
}
_CLASSIFIER_TYPES: Dict[str, ElementKind] = {
    "UMLClass": ElementKind.CLASS,
    "UMLInterface": ElementKind.INTERFACE,
    "UMLEnumeration": ElementKind.ENUMERATION,
}
_RELATIONSHIP_TYPES: Dict[str, type] = {
    "UMLGeneralization": UmlGeneralization,
    "UMLInterfaceRealization": UmlInterfaceRealization,
    "UMLDependency": UmlDependency,
}

_NOT_NAVIGABLE = "notNavigable"


def _is_ref(value: Any) -> bool:
    return isinstance(value, dict) and "$ref" in value


def _visibility(node: Node) -> Visibility:
    raw = node.get("visibility") or Visibility.PUBLIC.value
    try:
        return Visibility(raw)
    except ValueError:
        logger.warning(f"Unknown visibility '{raw}' on {node.get('_id')}, using public")
        return Visibility.PUBLIC


def _direction(node: Node) -> Direction:
    raw = node.get("direction") or Direction.IN.value
    try:
        return Direction(raw)
    except ValueError:
        logger.warning(f"Unknown parameter direction '{raw}' on {node.get('_id')}, using in")
        return Direction.IN


def _navigable(value: Any) -> bool:
    # StarUML 2 stores a bool, later versions "navigable" / "unspecified" / "notNavigable"
    if isinstance(value, bool):
        return value
    if value is None:
        return True
    return str(value) != _NOT_NAVIGABLE


class StarUmlLoader:
    def __init__(self, data: Node, source: Optional[Union[str, Path]] = None) -> None:
        if not isinstance(data, dict) or "_type" not in data:
            raise ModelLoadError("not a StarUML project (missing _type)", source)
        self.data = data
        self.source = source
        self.elements: Dict[str, UmlElement] = {}
        # Reference fixups collected in the first pass, applied in the second
        self._fixups: List[Tuple[Node, Callable[[Node], None]]] = []

    # ---------- Public ----------
    def load(self) -> UmlGraph:
        root = self.prepare()
        self.build()
        project = UmlProject(name=root.name, author=str(self.data.get("author") or ""))
        graph = UmlGraph(root, project)
        logger.debug(f"Loaded {len(self.elements)} elements from {self.source or 'StarUML data'}")
        return graph

    def prepare(self) -> UmlElement:
        """First pass: create the element tree."""
        root = self._create(self.data)
        if root is None:
            raise ModelLoadError(f"unsupported root element {self.data.get('_type')}", self.source)
        return root

    def build(self) -> None:
        """Second pass: resolve ``$ref`` references."""
        for node, apply in self._fixups:
            apply(node)
        self._fixups.clear()

    # ---------- References ----------
    def resolve(self, ref: Any, owner: Node) -> UmlElement:
        target = self.elements.get(str(ref.get("$ref")))
        if target is None:
            raise ModelLoadError(
                f"dangling reference {ref.get('$ref')} from {owner.get('_type')} {owner.get('_id')}",
                self.source)
        return target

    def type_ref(self, value: Any, owner: Node) -> Union[str, UmlElement, None]:
        if _is_ref(value):
            return self.resolve(value, owner)
        if isinstance(value, str) and value:
            return value
        return None

    def _defer(self, node: Node, apply: Callable[[Node], None]) -> None:
        self._fixups.append((node, apply))

    # ---------- Creation ----------
    def _register(self, node: Node, elem: UmlElement) -> UmlElement:
        if node.get("_id"):
            elem.xmi = XmiId(str(node["_id"]))
            self.elements[elem.xmi] = elem
        return elem

    def _create(self, node: Any) -> Optional[UmlElement]:
        if not isinstance(node, dict):
            return None
        kind_name = node.get("_type", "")
        if kind_name in _CONTAINER_TYPES:
            elem = self._container(node, _CONTAINER_TYPES[kind_name])
        elif kind_name in _CLASSIFIER_TYPES:
            elem = self._classifier(node, _CLASSIFIER_TYPES[kind_name])
        elif kind_name in _RELATIONSHIP_TYPES:
            elem = self._relationship(node, _RELATIONSHIP_TYPES[kind_name])
        elif kind_name == "UMLAssociation":
            elem = self._association(node)
        elif kind_name == "UMLUseCase":
            elem = self._use_case(node)
        elif kind_name == "UMLStereotype":
            elem = self._register(node, UmlElement(name=str(node.get("name") or ""),
                                                   kind=ElementKind.STEREOTYPE))
            self._add_children(elem, node)
        else:
            logger.debug(f"Skipping {kind_name or 'untyped node'} {node.get('_id', '')}")
            return None
        elem.documentation = str(node.get("documentation") or "")
        return elem

    def _add_children(self, elem: UmlElement, node: Node) -> None:
        for child_node in node.get("ownedElements") or []:
            child = self._create(child_node)
            if child is not None:
                elem.add(child)

    def _container(self, node: Node, kind: ElementKind) -> UmlElement:
        elem = self._register(node, UmlPackage(name=str(node.get("name") or ""), kind=kind))
        self._add_children(elem, node)
        return elem

    def _classifier(self, node: Node, kind: ElementKind) -> UmlClassifier:
        cls = UmlClassifier(
            name=str(node.get("name") or ""),
            kind=kind,
            visibility=_visibility(node),
            is_static=bool(node.get("isStatic", False)),
            is_abstract=bool(node.get("isAbstract", False)),
            is_leaf=bool(node.get("isLeaf", False) or node.get("isFinalSpecification", False)),
        )
        self._register(node, cls)

        stereotype = node.get("stereotype")
        if isinstance(stereotype, str):
            cls.stereotype = stereotype
        elif _is_ref(stereotype):
            self._defer(node, lambda n: setattr(cls, "stereotype", self.resolve(n["stereotype"], n).name))
        if kind == ElementKind.CLASS:
            self._defer(node, lambda n: self._mark_annotation_type(cls))

        for attr_node in node.get("attributes") or []:
            cls.add_attribute(self._attribute(attr_node))
        for op_node in node.get("operations") or []:
            cls.add_operation(self._operation(op_node))
        for lit_node in node.get("literals") or []:
            literal = UmlEnumerationLiteral(name=str(lit_node.get("name") or ""),
                                            documentation=str(lit_node.get("documentation") or ""))
            cls.add_literal(self._register(lit_node, literal))  # type: ignore[arg-type]
        self._add_children(cls, node)
        return cls

    @staticmethod
    def _mark_annotation_type(cls: UmlClassifier) -> None:
        if cls.stereotype == DEFAULT_META.uml.annotation_stereotype:
            cls.kind = ElementKind.ANNOTATION_TYPE

    def _attribute(self, node: Node) -> UmlAttribute:
        attr = UmlAttribute(
            name=str(node.get("name") or ""),
            documentation=str(node.get("documentation") or ""),
            multiplicity=str(node.get("multiplicity") or ""),
            default_value=str(node.get("defaultValue") or ""),
            visibility=_visibility(node),
            is_static=bool(node.get("isStatic", False)),
            is_leaf=bool(node.get("isLeaf", False) or node.get("isFinalSpecification", False)),
            is_derived=bool(node.get("isDerived", False)),
            is_read_only=bool(node.get("isReadOnly", False)),
        )
        self._register(node, attr)
        self._defer(node, lambda n: setattr(attr, "type", self.type_ref(n.get("type"), n)))
        return attr

    def _parameter(self, node: Node) -> UmlParameter:
        param = UmlParameter(
            name=str(node.get("name") or ""),
            documentation=str(node.get("documentation") or ""),
            multiplicity=str(node.get("multiplicity") or ""),
            default_value=str(node.get("defaultValue") or ""),
            direction=_direction(node),
        )
        self._register(node, param)
        self._defer(node, lambda n: setattr(param, "type", self.type_ref(n.get("type"), n)))
        return param

    def _operation(self, node: Node) -> UmlOperation:
        op = UmlOperation(
            name=str(node.get("name") or ""),
            documentation=str(node.get("documentation") or ""),
            specification=str(node.get("specification") or ""),
            visibility=_visibility(node),
            is_static=bool(node.get("isStatic", False)),
            is_abstract=bool(node.get("isAbstract", False)),
            is_leaf=bool(node.get("isLeaf", False)),
        )
        self._register(node, op)
        for param_node in node.get("parameters") or []:
            op.add_parameter(self._parameter(param_node))
        return op

    def _relationship(self, node: Node, cls: type) -> UmlRelationship:
        rel: UmlRelationship = cls(name=str(node.get("name") or ""))
        if isinstance(rel, UmlDependency):
            rel.mapping = str(node.get("mapping") or "")
        self._register(node, rel)

        def apply(n: Node) -> None:
            if not _is_ref(n.get("source")) or not _is_ref(n.get("target")):
                raise ModelLoadError(f"{n.get('_type')} {n.get('_id')} lacks source or target", self.source)
            rel.source = self.resolve(n["source"], n)
            rel.target = self.resolve(n["target"], n)
        self._defer(node, apply)
        return rel

    def _association_end(self, node: Node) -> UmlAssociationEnd:
        end = UmlAssociationEnd(
            name=str(node.get("name") or ""),
            documentation=str(node.get("documentation") or ""),
            navigable=_navigable(node.get("navigable")),
            multiplicity=str(node.get("multiplicity") or ""),
            default_value=str(node.get("defaultValue") or ""),
            visibility=_visibility(node),
            is_static=bool(node.get("isStatic", False)),
            is_leaf=bool(node.get("isLeaf", False)),
        )
        return self._register(node, end)  # type: ignore[return-value]

    def _association(self, node: Node) -> UmlAssociation:
        end1 = self._association_end(node.get("end1") or {})
        end2 = self._association_end(node.get("end2") or {})
        assoc = UmlAssociation(name=str(node.get("name") or ""), end1=end1, end2=end2)
        self._register(node, assoc)

        def apply(n: Node) -> None:
            for end, end_node in ((end1, n.get("end1") or {}), (end2, n.get("end2") or {})):
                if not _is_ref(end_node.get("reference")):
                    raise ModelLoadError(f"association {n.get('_id')} has an end without reference", self.source)
                end.reference = self.resolve(end_node["reference"], end_node)
            assoc.source = end1.reference
            assoc.target = end2.reference
        self._defer(node, apply)
        return assoc

    def _use_case(self, node: Node) -> UmlUseCase:
        uc = UmlUseCase(name=str(node.get("name") or ""))
        self._register(node, uc)
        if _is_ref(node.get("stereotype")):
            self._defer(node, lambda n: setattr(uc, "stereotype", self.resolve(n["stereotype"], n)))
        self._add_children(uc, node)
        return uc


def load_mdj(path: Union[str, Path]) -> UmlGraph:
    p = Path(path)
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ModelLoadError(f"cannot read file: {e.strerror or e}", p) from e
    except json.JSONDecodeError as e:
        raise ModelLoadError(f"invalid JSON: {e}", p) from e
    return StarUmlLoader(data, p).load()


__all__ = ["StarUmlLoader", "load_mdj"]
