"""
Loader for Eclipse UML2 / Papyrus ``.uml`` (XMI) models.

Besides the plain UML structure, PHP specific data is read from
``eAnnotations`` details:

* ``stereotype`` on classifiers: comma separated tags (``extends Base``,
  ``countable``, ``trait``, ``annotationType`` ...)
* ``body`` on operations: the method body
* ``mapping`` on dependencies: trait conflict resolution rules
* ``author`` on the model: project author
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

from lxml import etree

from meta import DEFAULT_META
from uml_types import Direction, ElementKind, Visibility, XmiId, CLASSIFIER_KINDS
from core.graph import UmlGraph
from core.uml_model import (
    UmlElement, UmlPackage, UmlClassifier, UmlEnumerationLiteral, UmlAttribute,
    UmlParameter, UmlOperation, UmlGeneralization, UmlInterfaceRealization,
    UmlDependency, UmlAssociation, UmlAssociationEnd, UmlUseCase, UmlProject,
    TypeRef,
)
from utils.xml import xml_text, local_name, xmi_attr, bool_attr
from adapters.errors import ModelLoadError

logger = logging.getLogger(__name__)

UML = DEFAULT_META.uml

_NESTED_TAGS = ("packagedElement", "nestedClassifier", "ownedUseCase")


class XmiModelLoader:
    def __init__(self, tree: etree._ElementTree, source: Optional[Union[str, Path]] = None) -> None:
        self.tree = tree
        self.source = source
        # Every xmi:id in the document, loaded or not
        self.nodes: Dict[str, etree._Element] = {}
        self.elements: Dict[str, UmlElement] = {}
        self._fixups: List[Callable[[], None]] = []
        self._associations: List[etree._Element] = []
        self.root: Optional[UmlElement] = None

    # ---------- Public ----------
    def load(self) -> UmlGraph:
        root = self.prepare()
        self.build()
        project = UmlProject(name=root.name, author=self._details(self._model_node()).get("author", ""))
        return UmlGraph(root, project)

    def prepare(self) -> UmlElement:
        for node in self.tree.iter():
            node_id = xmi_attr(node, "id") if isinstance(node.tag, str) else None
            if node_id:
                self.nodes[node_id] = node
        model_node = self._model_node()
        root = UmlPackage(name=xml_text(model_node.get("name")), kind=ElementKind.MODEL)
        self._register(model_node, root)
        self.root = root
        root.documentation = self._documentation(model_node)
        self._add_children(root, model_node)
        return root

    def build(self) -> None:
        for fixup in self._fixups:
            fixup()
        self._fixups.clear()
        for node in self._associations:
            self._association(node)

    # ---------- Lookup helpers ----------
    def _model_node(self) -> etree._Element:
        root = self.tree.getroot()
        if self._xmi_type(root) == UML.model_type or local_name(root) == "Model":
            return root
        for child in root:
            if isinstance(child.tag, str) and (local_name(child) == "Model"
                                               or self._xmi_type(child) == UML.model_type):
                return child
        raise ModelLoadError("no uml:Model element found", self.source)

    @staticmethod
    def _xmi_type(node: etree._Element) -> str:
        return xml_text(xmi_attr(node, "type"))

    def _register(self, node: etree._Element, elem: UmlElement) -> UmlElement:
        node_id = xmi_attr(node, "id")
        if node_id:
            elem.xmi = XmiId(node_id)
            self.elements[node_id] = elem
        return elem

    def resolve(self, ref: str, owner: etree._Element) -> UmlElement:
        elem = self.elements.get(ref)
        if elem is None:
            raise ModelLoadError(
                f"dangling reference {ref} from {local_name(owner)} {xmi_attr(owner, 'id') or ''}",
                self.source)
        return elem

    def _children(self, node: etree._Element, tag: str) -> List[etree._Element]:
        return [c for c in node if isinstance(c.tag, str) and local_name(c) == tag]

    def _details(self, node: etree._Element) -> Dict[str, str]:
        """``key -> value`` of all eAnnotations details on ``node``."""
        result: Dict[str, str] = {}
        for ann in self._children(node, "eAnnotations"):
            for detail in self._children(ann, "details"):
                key = detail.get("key")
                if key:
                    result[key] = detail.get("value") or ""
        return result

    def _annotation_references(self, node: etree._Element) -> List[str]:
        refs: List[str] = []
        for ann in self._children(node, "eAnnotations"):
            refs.extend((ann.get("references") or "").split())
        return refs

    def _documentation(self, node: etree._Element) -> str:
        bodies: List[str] = []
        for comment in self._children(node, "ownedComment"):
            body = comment.get("body")
            if body is None:
                body_nodes = self._children(comment, "body")
                body = "".join(body_nodes[0].itertext()) if body_nodes else ""
            if body:
                bodies.append(body)
        return "\n".join(bodies)

    @staticmethod
    def _visibility(node: etree._Element) -> Visibility:
        raw = node.get("visibility") or Visibility.PUBLIC.value
        try:
            return Visibility(raw)
        except ValueError:
            logger.warning(f"Unknown visibility '{raw}', using public")
            return Visibility.PUBLIC

    def _bound(self, node: etree._Element, tag: str) -> Optional[str]:
        values = self._children(node, tag)
        if not values:
            return None
        value = values[0].get("value")
        if value is None:
            # An omitted value attribute is the literal 0
            return "0"
        return UML.unlimited_multiplicity if value == "-1" else value

    def _multiplicity(self, node: etree._Element) -> str:
        lower = self._bound(node, "lowerValue")
        upper = self._bound(node, "upperValue")
        if lower is None and upper is None:
            return ""
        if upper is None:
            upper = "1"
        if lower is None:
            lower = "1"
        if lower == upper:
            return lower
        if lower == "0" and upper == UML.unlimited_multiplicity:
            return "0..*"
        return f"{lower}..{upper}"

    def _default_value(self, node: etree._Element) -> str:
        values = self._children(node, "defaultValue")
        if not values:
            return ""
        dv = values[0]
        value = dv.get("value")
        if value is None:
            body = self._children(dv, "body")
            value = "".join(body[0].itertext()) if body else ""
        if self._xmi_type(dv) == "uml:LiteralString" and value:
            return f"'{value}'"
        return value

    def _primitive_name(self, name: str) -> str:
        return UML.primitive_types.get(name, name)

    def _type_of(self, node: etree._Element) -> TypeRef:
        """Type of a typed element: a model element or a PHP scalar name."""
        type_id = node.get("type")
        if type_id:
            target = self.nodes.get(type_id)
            if target is not None and self._xmi_type(target) in (UML.primitive_type, UML.data_type) \
                    and type_id not in self.elements:
                return self._primitive_name(xml_text(target.get("name")))
            return self.resolve(type_id, node)
        type_nodes = self._children(node, "type")
        if type_nodes:
            href = type_nodes[0].get("href") or ""
            if "#" in href:
                return self._primitive_name(href.rsplit("#", 1)[-1])
        return None

    # ---------- Creation ----------
    def _add_children(self, parent: UmlElement, node: etree._Element) -> None:
        for child in node:
            if not isinstance(child.tag, str) or local_name(child) not in _NESTED_TAGS:
                continue
            elem = self._create(child)
            if elem is not None:
                parent.add(elem)

    def _create(self, node: etree._Element) -> Optional[UmlElement]:
        xmi_type = self._xmi_type(node)
        try:
            kind = UML.get_element_kind(xmi_type)
        except KeyError:
            logger.debug(f"Skipping {xmi_type or local_name(node)} {xmi_attr(node, 'id') or ''}")
            return None

        if kind in (ElementKind.PACKAGE, ElementKind.MODEL):
            elem: UmlElement = UmlPackage(name=xml_text(node.get("name")), kind=kind)
            self._register(node, elem)
            self._add_children(elem, node)
        elif kind in CLASSIFIER_KINDS:
            elem = self._classifier(node, kind)
        elif kind == ElementKind.DEPENDENCY:
            elem = self._dependency(node)
        elif kind == ElementKind.ASSOCIATION:
            # Ends may live in classes that are not loaded yet
            self._associations.append(node)
            return None
        elif kind == ElementKind.USE_CASE:
            elem = self._use_case(node)
        else:
            elem = self._register(node, UmlElement(name=xml_text(node.get("name")), kind=kind))
        elem.documentation = self._documentation(node)
        return elem

    def _classifier(self, node: etree._Element, kind: ElementKind) -> UmlClassifier:
        details = self._details(node)
        cls = UmlClassifier(
            name=xml_text(node.get("name")),
            kind=kind,
            stereotype=details.get("stereotype", ""),
            visibility=self._visibility(node),
            is_abstract=bool_attr(node, "isAbstract"),
            is_leaf=bool_attr(node, "isLeaf"),
        )
        if kind == ElementKind.CLASS and cls.stereotype == UML.annotation_stereotype:
            cls.kind = ElementKind.ANNOTATION_TYPE
        self._register(node, cls)

        for attr_node in self._children(node, "ownedAttribute"):
            cls.add_attribute(self._attribute(attr_node))
        for op_node in self._children(node, "ownedOperation"):
            cls.add_operation(self._operation(op_node))
        for lit_node in self._children(node, "ownedLiteral"):
            literal = UmlEnumerationLiteral(name=xml_text(lit_node.get("name")),
                                            documentation=self._documentation(lit_node))
            self._register(lit_node, literal)
            cls.add_literal(literal)

        for gen_node in self._children(node, "generalization"):
            self._relationship(cls, gen_node, UmlGeneralization, gen_node.get("general"))
        for real_node in self._children(node, "interfaceRealization"):
            self._relationship(cls, real_node, UmlInterfaceRealization,
                               real_node.get("contract") or real_node.get("supplier"))

        self._add_children(cls, node)
        return cls

    def _relationship(self, source: UmlClassifier, node: etree._Element, rel_type: type,
                      target_id: Optional[str]) -> None:
        if not target_id:
            logger.warning(f"{local_name(node)} of '{source.name}' has no target, ignored")
            return
        rel = rel_type(source=source)
        self._register(node, rel)
        source.add(rel)

        def apply() -> None:
            rel.target = self.resolve(target_id, node)
        self._fixups.append(apply)

    def _dependency(self, node: etree._Element) -> UmlDependency:
        dep = UmlDependency(name=xml_text(node.get("name")),
                            mapping=self._details(node).get("mapping", ""))
        self._register(node, dep)
        client = (node.get("client") or "").split()
        supplier = (node.get("supplier") or "").split()
        if not client or not supplier:
            raise ModelLoadError(f"dependency {dep.xmi} lacks client or supplier", self.source)

        def apply() -> None:
            dep.source = self.resolve(client[0], node)
            dep.target = self.resolve(supplier[0], node)
        self._fixups.append(apply)
        return dep

    def _attribute(self, node: etree._Element) -> UmlAttribute:
        attr = UmlAttribute(
            name=xml_text(node.get("name")),
            documentation=self._documentation(node),
            multiplicity=self._multiplicity(node),
            default_value=self._default_value(node),
            visibility=self._visibility(node),
            is_static=bool_attr(node, "isStatic"),
            is_leaf=bool_attr(node, "isLeaf"),
            is_derived=bool_attr(node, "isDerived"),
            is_read_only=bool_attr(node, "isReadOnly"),
        )
        self._register(node, attr)
        self._fixups.append(lambda: setattr(attr, "type", self._type_of(node)))
        return attr

    def _parameter(self, node: etree._Element) -> UmlParameter:
        raw = node.get("direction") or Direction.IN.value
        try:
            direction = Direction(raw)
        except ValueError:
            logger.warning(f"Unknown parameter direction '{raw}', using in")
            direction = Direction.IN
        param = UmlParameter(
            name=xml_text(node.get("name")),
            documentation=self._documentation(node),
            multiplicity=self._multiplicity(node),
            default_value=self._default_value(node),
            direction=direction,
        )
        self._register(node, param)
        self._fixups.append(lambda: setattr(param, "type", self._type_of(node)))
        return param

    def _operation(self, node: etree._Element) -> UmlOperation:
        op = UmlOperation(
            name=xml_text(node.get("name")),
            documentation=self._documentation(node),
            specification=self._details(node).get("body", ""),
            visibility=self._visibility(node),
            is_static=bool_attr(node, "isStatic"),
            is_abstract=bool_attr(node, "isAbstract"),
            is_leaf=bool_attr(node, "isLeaf"),
        )
        self._register(node, op)
        for param_node in self._children(node, "ownedParameter"):
            op.add_parameter(self._parameter(param_node))
        return op

    def _use_case(self, node: etree._Element) -> UmlUseCase:
        uc = UmlUseCase(name=xml_text(node.get("name")))
        self._register(node, uc)
        refs = self._annotation_references(node)
        if refs:
            self._fixups.append(lambda: setattr(uc, "stereotype", self.resolve(refs[0], node)))
        return uc

    # ---------- Associations ----------
    def _end(self, assoc_node: etree._Element, end_id: str) -> Tuple[UmlAssociationEnd, UmlElement]:
        prop = self.nodes.get(end_id)
        if prop is None:
            raise ModelLoadError(f"association {xmi_attr(assoc_node, 'id')} has unknown end {end_id}",
                                 self.source)
        owned_by_class = local_name(prop) == "ownedAttribute"
        navigable_ids = (assoc_node.get("navigableOwnedEnd") or "").split()
        reference = self._type_of(prop)
        if not isinstance(reference, UmlElement):
            raise ModelLoadError(f"association end {end_id} is not typed by a model element", self.source)
        end = UmlAssociationEnd(
            name=xml_text(prop.get("name")),
            xmi=XmiId(f"{end_id}_end"),
            documentation=self._documentation(prop),
            reference=reference,
            navigable=owned_by_class or end_id in navigable_ids,
            multiplicity=self._multiplicity(prop),
            default_value=self._default_value(prop),
            visibility=self._visibility(prop),
            is_static=bool_attr(prop, "isStatic"),
            is_leaf=bool_attr(prop, "isLeaf"),
        )
        return end, reference

    def _association(self, node: etree._Element) -> None:
        member_ends = (node.get("memberEnd") or "").split()
        if len(member_ends) != 2:
            logger.warning(f"Association {xmi_attr(node, 'id')} has {len(member_ends)} member ends, ignored")
            return
        end1, _ = self._end(node, member_ends[0])
        end2, _ = self._end(node, member_ends[1])
        assoc = UmlAssociation(name=xml_text(node.get("name")), end1=end1, end2=end2)
        self._register(node, assoc)
        parent = node.getparent()
        owner = self.elements.get(xmi_attr(parent, "id") or "") if parent is not None else None
        (owner or self.root).add(assoc)  # type: ignore[union-attr]


def load_xmi(path: Union[str, Path]) -> UmlGraph:
    p = Path(path)
    try:
        tree = etree.parse(str(p), etree.XMLParser(remove_blank_text=True, resolve_entities=False))
    except OSError as e:
        raise ModelLoadError(f"cannot read file: {e}", p) from e
    except etree.XMLSyntaxError as e:
        raise ModelLoadError(f"invalid XML: {e}", p) from e
    return XmiModelLoader(tree, p).load()


__all__ = ["XmiModelLoader", "load_xmi"]
