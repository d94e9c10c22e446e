#!/usr/bin/env python3
"""
Types module for uml2php.
Centralized type definitions organized by domain.
"""

from .uml import (
    ElementKind, Visibility, Direction,
    XmiId, ElementName,
    Namespace, QualifiedPath,
    PACKAGE_KINDS, CLASSIFIER_KINDS, RELATIONSHIP_KINDS,
)

__all__ = [
    'ElementKind', 'Visibility', 'Direction',
    'XmiId', 'ElementName',
    'Namespace', 'QualifiedPath',
    'PACKAGE_KINDS', 'CLASSIFIER_KINDS', 'RELATIONSHIP_KINDS',
]
