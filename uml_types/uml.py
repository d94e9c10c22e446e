#!/usr/bin/env python3
"""
UML-specific types and enums for uml2php.
"""

from typing import NewType, FrozenSet
from enum import Enum

# ---------- Type aliases for UML elements ----------
XmiId = NewType('XmiId', str)
ElementName = NewType('ElementName', str)
Namespace = NewType('Namespace', str)
QualifiedPath = NewType('QualifiedPath', str)

# ---------- Enums for UML elements ----------
class ElementKind(Enum):
    PROJECT = "project"
    MODEL = "model"
    PACKAGE = "package"
    CLASS = "class"
    INTERFACE = "interface"
    ENUMERATION = "enumeration"
    ANNOTATION_TYPE = "annotationType"
    ENUMERATION_LITERAL = "enumerationLiteral"
    ATTRIBUTE = "attribute"
    OPERATION = "operation"
    PARAMETER = "parameter"
    ASSOCIATION = "association"
    ASSOCIATION_END = "associationEnd"
    GENERALIZATION = "generalization"
    INTERFACE_REALIZATION = "interfaceRealization"
    DEPENDENCY = "dependency"
    USE_CASE = "useCase"
    STEREOTYPE = "stereotype"

class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    PACKAGE = "package"

class Direction(Enum):
    """Parameter direction modifiers."""
    IN = "in"
    OUT = "out"
    INOUT = "inout"
    RETURN = "return"

# ---------- Kind groups ----------
PACKAGE_KINDS: FrozenSet[ElementKind] = frozenset({
    ElementKind.PROJECT, ElementKind.MODEL, ElementKind.PACKAGE,
})
CLASSIFIER_KINDS: FrozenSet[ElementKind] = frozenset({
    ElementKind.CLASS, ElementKind.INTERFACE,
    ElementKind.ENUMERATION, ElementKind.ANNOTATION_TYPE,
})
RELATIONSHIP_KINDS: FrozenSet[ElementKind] = frozenset({
    ElementKind.GENERALIZATION, ElementKind.INTERFACE_REALIZATION,
    ElementKind.DEPENDENCY, ElementKind.ASSOCIATION,
})
