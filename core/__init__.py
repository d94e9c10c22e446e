#!/usr/bin/env python3
"""
Core model for uml2php: element tree, relationship graph and namespace paths.
"""

from .uml_model import (
    UmlElement, UmlPackage, UmlClassifier, UmlEnumerationLiteral,
    UmlAttribute, UmlParameter, UmlOperation, UmlRelationship,
    UmlGeneralization, UmlInterfaceRealization, UmlDependency,
    UmlAssociationEnd, UmlAssociation, UmlUseCase, UmlProject, TypeRef,
)
from .graph import UmlGraph
from .namespace import namespace_path, namespace_of, qualified_path

__all__ = [
    'UmlElement', 'UmlPackage', 'UmlClassifier', 'UmlEnumerationLiteral',
    'UmlAttribute', 'UmlParameter', 'UmlOperation', 'UmlRelationship',
    'UmlGeneralization', 'UmlInterfaceRealization', 'UmlDependency',
    'UmlAssociationEnd', 'UmlAssociation', 'UmlUseCase', 'UmlProject',
    'TypeRef', 'UmlGraph', 'namespace_path', 'namespace_of', 'qualified_path',
]
