from dataclasses import dataclass, field
from typing import Dict, FrozenSet


def _scalar_hints() -> Dict[str, str]:
    return {
        "bool": "bool",
        "boolean": "bool",
        "int": "int",
        "integer": "int",
        "float": "float",
        "double": "float",
        "string": "string",
    }


def _default_returns() -> Dict[str, str]:
    return {
        "boolean": "false",
        "bool": "false",
        "int": "0",
        "long": "0",
        "short": "0",
        "byte": "0",
        "float": "0.0",
        "double": "0.0",
        "char": "'0'",
        "string": '""',
        "array": "[]",
        "create": "self::create()",
    }


@dataclass
class PhpMetaModel:
    namespace_separator: str = "\\"
    open_tag: str = "<?php"

    void_type: str = "void"
    array_type: str = "array"
    self_type: str = "$this"
    object_type: str = "object"
    null_literal: str = "null"

    constructor_name: str = "__construct"
    factory_marker: str = "createWith"
    not_implemented: str = "// TODO: implement here"

    many_multiplicities: FrozenSet[str] = frozenset({"0..*", "1..*", "*"})
    boolean_types: FrozenSet[str] = frozenset({"bool", "boolean"})
    # Scalars and pseudo types that never become parameter type hints
    disallowed_type_hints: FrozenSet[str] = frozenset({
        "bool", "boolean", "int", "integer", "float", "double",
        "string", "resource", "void", "mixed", "$this",
    })

    # Scalar spellings accepted as PHP 7 type hints, normalized
    scalar_type_hints: Dict[str, str] = field(default_factory=_scalar_hints)
    default_returns: Dict[str, str] = field(default_factory=_default_returns)

    enum_base_class: str = "\\SplEnum"
    iterator_class: str = "\\ArrayIterator"
