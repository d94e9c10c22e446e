from dataclasses import dataclass, field
from typing import List, Optional, Union

from uml_types import (
    XmiId, ElementName, ElementKind, Visibility, Direction,
    RELATIONSHIP_KINDS,
)
from utils.ids import xid


# ---------- Base element ----------
@dataclass(eq=False)
class UmlElement:
    """Named node of the containment tree.

    Elements compare by identity: the tree links parents and children both
    ways, and two structurally equal classes are still different types.
    """
    name: ElementName
    kind: ElementKind
    xmi: XmiId = XmiId("")
    documentation: str = ""
    parent: Optional["UmlElement"] = field(default=None, repr=False)
    owned_elements: List["UmlElement"] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.xmi:
            self.xmi = xid()

    def add(self, child: "UmlElement") -> "UmlElement":
        """Attach ``child`` to this element's owned elements."""
        child.parent = self
        self.owned_elements.append(child)
        return child

    @property
    def is_relationship(self) -> bool:
        return self.kind in RELATIONSHIP_KINDS


# A type reference is either a primitive name or a model element.
TypeRef = Union[str, UmlElement, None]


# ---------- Containers ----------
@dataclass(eq=False)
class UmlPackage(UmlElement):
    kind: ElementKind = ElementKind.PACKAGE


@dataclass(eq=False)
class UmlEnumerationLiteral(UmlElement):
    kind: ElementKind = ElementKind.ENUMERATION_LITERAL


@dataclass(eq=False)
class UmlClassifier(UmlElement):
    kind: ElementKind = ElementKind.CLASS
    stereotype: str = ""
    visibility: Visibility = Visibility.PUBLIC
    is_static: bool = False
    is_abstract: bool = False
    is_leaf: bool = False
    attributes: List["UmlAttribute"] = field(default_factory=list, repr=False)
    operations: List["UmlOperation"] = field(default_factory=list, repr=False)
    literals: List[UmlEnumerationLiteral] = field(default_factory=list, repr=False)
    # Set on classifiers synthesized from stereotype tags: they live outside
    # the model and are never imported.
    external: bool = False

    def add_attribute(self, attr: "UmlAttribute") -> "UmlAttribute":
        attr.parent = self
        self.attributes.append(attr)
        return attr

    def add_operation(self, op: "UmlOperation") -> "UmlOperation":
        op.parent = self
        self.operations.append(op)
        return op

    def add_literal(self, literal: UmlEnumerationLiteral) -> UmlEnumerationLiteral:
        literal.parent = self
        self.literals.append(literal)
        return literal

    def has_operation(self, name: str) -> bool:
        return any(op.name == name for op in self.operations)

    @property
    def stereotype_tags(self) -> List[str]:
        """Comma separated stereotype tags, stripped, empty ones dropped."""
        if not self.stereotype:
            return []
        return [tag.strip() for tag in self.stereotype.split(",") if tag.strip()]


# ---------- Members ----------
@dataclass(eq=False)
class UmlAttribute(UmlElement):
    kind: ElementKind = ElementKind.ATTRIBUTE
    type: TypeRef = None
    multiplicity: str = ""
    default_value: str = ""
    visibility: Visibility = Visibility.PUBLIC
    is_static: bool = False
    is_leaf: bool = False
    is_derived: bool = False
    is_read_only: bool = False


@dataclass(eq=False)
class UmlParameter(UmlElement):
    kind: ElementKind = ElementKind.PARAMETER
    type: TypeRef = None
    multiplicity: str = ""
    default_value: str = ""
    direction: Direction = Direction.IN


@dataclass(eq=False)
class UmlOperation(UmlElement):
    kind: ElementKind = ElementKind.OPERATION
    parameters: List[UmlParameter] = field(default_factory=list, repr=False)
    specification: str = ""
    visibility: Visibility = Visibility.PUBLIC
    is_static: bool = False
    is_abstract: bool = False
    is_leaf: bool = False

    def add_parameter(self, param: UmlParameter) -> UmlParameter:
        param.parent = self
        self.parameters.append(param)
        return param

    def non_return_parameters(self) -> List[UmlParameter]:
        return [p for p in self.parameters if p.direction != Direction.RETURN]

    def return_parameter(self) -> Optional[UmlParameter]:
        for p in self.parameters:
            if p.direction == Direction.RETURN:
                return p
        return None


# ---------- Relationships ----------
@dataclass(eq=False)
class UmlRelationship(UmlElement):
    name: ElementName = ElementName("")
    kind: ElementKind = ElementKind.DEPENDENCY
    source: Optional[UmlElement] = field(default=None, repr=False)
    target: Optional[UmlElement] = field(default=None, repr=False)

    def involves(self, elem: UmlElement) -> bool:
        return self.source is elem or self.target is elem


@dataclass(eq=False)
class UmlGeneralization(UmlRelationship):
    kind: ElementKind = ElementKind.GENERALIZATION


@dataclass(eq=False)
class UmlInterfaceRealization(UmlRelationship):
    kind: ElementKind = ElementKind.INTERFACE_REALIZATION


@dataclass(eq=False)
class UmlDependency(UmlRelationship):
    kind: ElementKind = ElementKind.DEPENDENCY
    # Trait conflict resolution rules, e.g. "A::hello insteadof B"
    mapping: str = ""


@dataclass(eq=False)
class UmlAssociationEnd(UmlElement):
    name: ElementName = ElementName("")
    kind: ElementKind = ElementKind.ASSOCIATION_END
    reference: Optional[UmlElement] = field(default=None, repr=False)
    navigable: bool = True
    multiplicity: str = ""
    default_value: str = ""
    visibility: Visibility = Visibility.PUBLIC
    is_static: bool = False
    is_leaf: bool = False


@dataclass(eq=False)
class UmlAssociation(UmlRelationship):
    kind: ElementKind = ElementKind.ASSOCIATION
    end1: UmlAssociationEnd = field(default_factory=UmlAssociationEnd, repr=False)
    end2: UmlAssociationEnd = field(default_factory=UmlAssociationEnd, repr=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        self.end1.parent = self
        self.end2.parent = self
        self.source = self.end1.reference
        self.target = self.end2.reference

    def involves(self, elem: UmlElement) -> bool:
        return self.end1.reference is elem or self.end2.reference is elem


# ---------- Misc ----------
@dataclass(eq=False)
class UmlUseCase(UmlElement):
    kind: ElementKind = ElementKind.USE_CASE
    stereotype: Optional[UmlElement] = field(default=None, repr=False)


@dataclass
class UmlProject:
    name: str = ""
    author: str = ""


__all__ = [
    "TypeRef", "UmlElement", "UmlPackage", "UmlClassifier",
    "UmlEnumerationLiteral", "UmlAttribute", "UmlParameter", "UmlOperation",
    "UmlRelationship", "UmlGeneralization", "UmlInterfaceRealization",
    "UmlDependency", "UmlAssociationEnd", "UmlAssociation", "UmlUseCase",
    "UmlProject", "ElementKind", "ElementName", "XmiId", "Visibility",
    "Direction",
]
