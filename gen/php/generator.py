"""
PHP source generator for UML models.

One file per class, interface, enumeration and annotation type; packages and
models become directories. Declarations nested in a classifier are written
inline in their owner's file.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from meta import DEFAULT_META
from uml_types import ElementKind, Visibility, PACKAGE_KINDS
from core.graph import UmlGraph
from core.namespace import SEPARATOR, namespace_of, needs_import, qualified_path
from core.uml_model import (
    UmlElement, UmlClassifier, UmlAttribute, UmlAssociationEnd, UmlOperation,
)
from app.config import GeneratorConfig, DEFAULT_CONFIG
from gen.php.code_writer import CodeWriter, SourceUnit
from gen.php.errors import DirectoryCreationError, FileWriteError
from gen.php.imports import collect_uses
from gen.php.relationships import (
    is_trait, super_classes, super_interfaces, super_dependencies, navigable_member_ends,
)
from gen.php.synthesizer import (
    synthesize_accessors, synthesize_stereotype_methods, synthesize_interface_stubs,
    synthesize_abstract_overrides, is_factory_method, rewrite_factory_method,
)
from gen.php.type_resolver import (
    is_many, qualify, resolve_type, is_allowed_type_hint, default_return,
)

logger = logging.getLogger(__name__)

PHP = DEFAULT_META.php

_VISIBILITY_KEYWORDS: Dict[Visibility, str] = {
    Visibility.PUBLIC: "public",
    Visibility.PROTECTED: "protected",
    Visibility.PRIVATE: "private",
    Visibility.PACKAGE: "",
}

MemberLike = Union[UmlAttribute, UmlAssociationEnd]


@dataclass
class UnitContext:
    """Emission state of one source file: its buffers and its namespace."""
    unit: SourceUnit
    namespace: Optional[str]

    @property
    def body(self) -> CodeWriter:
        return self.unit.body


class PhpCodeGenerator:
    def __init__(self, graph: UmlGraph, config: Optional[GeneratorConfig] = None) -> None:
        self.graph = graph
        self.config = config or DEFAULT_CONFIG
        # Declaration writers by classifier kind
        self._writers: Dict[ElementKind, Callable[[UnitContext, UmlClassifier], None]] = {
            ElementKind.CLASS: self.write_class,
            ElementKind.INTERFACE: self.write_interface,
            ElementKind.ENUMERATION: self.write_enum,
            ElementKind.ANNOTATION_TYPE: self.write_annotation_type,
        }

    # ---------- Files ----------
    @property
    def author(self) -> str:
        if self.config.author is not None:
            return self.config.author
        return self.graph.author

    def file_name(self, elem: UmlClassifier) -> str:
        suffix = ""
        if elem.kind == ElementKind.CLASS:
            suffix = self.config.class_extension
        elif elem.kind == ElementKind.INTERFACE:
            suffix = self.config.interface_extension
        return f"{elem.name}{suffix}{self.config.file_extension}"

    def render_unit(self, elem: UmlClassifier) -> str:
        """Complete text of the file declaring ``elem``."""
        namespace = namespace_of(elem)
        ctx = UnitContext(SourceUnit(self.config.indent_string()), namespace)
        self.write_declaration(ctx, elem)
        return ctx.unit.render(namespace)

    def generate(self, elem: UmlElement, path: Union[str, Path]) -> List[Path]:
        """Write ``elem`` below ``path``; returns the files written, in order.

        The first directory or file error aborts the walk; files already
        written are left in place.
        """
        base = Path(path)
        if elem.kind in PACKAGE_KINDS:
            target = base / elem.name if elem.name else base
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirectoryCreationError(target, e) from e
            logger.info(f"Directory {target}")
            written: List[Path] = []
            for child in elem.owned_elements:
                written.extend(self.generate(child, target))
            return written

        if elem.kind in self._writers and isinstance(elem, UmlClassifier):
            if not elem.name:
                logger.debug(f"Skipping unnamed {elem.kind.value} {elem.xmi}")
                return []
            target = base / self.file_name(elem)
            text = self.render_unit(elem)
            try:
                target.write_text(text, encoding="utf-8")
            except OSError as e:
                raise FileWriteError(target, e) from e
            logger.info(f"Wrote {target}")
            return [target]

        logger.debug(f"Nothing generated for {elem.kind.value} '{elem.name}'")
        return []

    # ---------- Shared writers ----------
    def write_doc(self, w: CodeWriter, text: Optional[str]) -> None:
        if not self.config.php_doc or text is None:
            return
        w.write_line("/**")
        for line in text.strip().split("\n"):
            line = line.strip()
            w.write_line(f" * {line}" if line else " *")
        w.write_line(" */")

    def write_spec(self, w: CodeWriter, text: str) -> None:
        for line in text.strip().split("\n"):
            w.write_line(line)

    @staticmethod
    def visibility(elem: UmlElement) -> str:
        vis = getattr(elem, "visibility", None)
        return _VISIBILITY_KEYWORDS.get(vis, "") if vis is not None else ""

    @staticmethod
    def class_modifiers(elem: UmlElement) -> List[str]:
        modifiers: List[str] = []
        if getattr(elem, "is_static", False):
            modifiers.append("static")
        if getattr(elem, "is_abstract", False):
            modifiers.append("abstract")
        if getattr(elem, "is_leaf", False):
            modifiers.append("final")
        return modifiers

    def modifiers(self, elem: UmlElement) -> List[str]:
        vis = self.visibility(elem)
        return ([vis] if vis else []) + self.class_modifiers(elem)

    def class_doc(self, elem: UmlClassifier) -> str:
        doc = elem.documentation.strip()
        if self.author:
            doc += f"\n@author {self.author}"
        return doc

    def reference_name(self, ctx: UnitContext, target: UmlClassifier) -> str:
        """Name under which ``target`` is written in a declaration header.

        Model types outside the unit's namespace are imported and referred to
        by their short name.
        """
        if target.external:
            return target.name
        if needs_import(qualified_path(target), ctx.namespace):
            ctx.unit.add_use(qualified_path(target))
            return target.name
        return qualify(target, ctx.namespace)

    def write_declaration(self, ctx: UnitContext, elem: UmlClassifier) -> None:
        for path in collect_uses(elem, self.graph, ctx.namespace):
            ctx.unit.add_use(path)
        self._writers[elem.kind](ctx, elem)

    def write_nested(self, ctx: UnitContext, elem: UmlClassifier, kinds: frozenset) -> None:
        for child in elem.owned_elements:
            if child.kind in kinds and isinstance(child, UmlClassifier):
                self.write_declaration(ctx, child)
                ctx.body.write_line()

    def close_block(self, w: CodeWriter) -> None:
        w.outdent()
        w.drop_trailing_blank()
        w.write_line("}")

    # ---------- Members ----------
    def write_member_variable(self, ctx: UnitContext, elem: MemberLike) -> None:
        if not elem.name:
            logger.debug(f"Skipping unnamed member of '{getattr(elem.parent, 'name', '')}'")
            return
        w = ctx.body
        doc_type = resolve_type(elem, ctx.namespace, for_documentation=True, suppress_namespace=True)
        self.write_doc(w, f"@var {doc_type} {elem.documentation.strip()}")

        terms: List[str] = []
        if elem.is_leaf:
            terms.append(f"const {elem.name.upper()}")
        else:
            modifiers = self.modifiers(elem)
            if modifiers:
                terms.append(" ".join(modifiers))
            terms.append(f"${elem.name}")

        if elem.default_value:
            terms.append(f"= {elem.default_value}")
        elif is_many(elem.multiplicity):
            terms.append("= []")
        w.write_line(" ".join(terms) + ";")
        w.write_line()

    def write_member_variables(self, ctx: UnitContext, elem: UmlClassifier) -> None:
        for attr in elem.attributes:
            self.write_member_variable(ctx, attr)
        for end in navigable_member_ends(elem, self.graph):
            self.write_member_variable(ctx, end)

    @staticmethod
    def param_name(name: str, for_documentation: bool = False) -> str:
        """``$name``; a by-reference ``&name`` becomes ``&$name`` in signatures."""
        if "&" in name:
            bare = name.replace("&", "")
            return f"${bare}" if for_documentation else f"&${bare}"
        return f"${name}"

    def type_hint(self, ctx: UnitContext, type_name: str) -> Optional[str]:
        """Code-level type hint for ``type_name``, or None when it is not hinted."""
        if "|" in type_name:
            type_name = PHP.void_type
        if self.config.php_scalar_hints and type_name in PHP.scalar_type_hints:
            return PHP.scalar_type_hints[type_name]
        if not is_allowed_type_hint(type_name):
            return None
        if type_name.count(SEPARATOR) > 1:
            ctx.unit.add_use(type_name)
            return type_name.rsplit(SEPARATOR, 1)[-1]
        return type_name

    def return_declaration(self, ctx: UnitContext, op: UmlOperation, owner: UmlClassifier) -> str:
        type_name = resolve_type(op.return_parameter(), ctx.namespace, for_documentation=False)
        if type_name == PHP.self_type:
            return owner.name
        if "|" in type_name:
            return PHP.void_type
        if type_name in PHP.scalar_type_hints:
            return PHP.scalar_type_hints[type_name]
        if type_name.count(SEPARATOR) > 1:
            ctx.unit.add_use(type_name)
            return type_name.rsplit(SEPARATOR, 1)[-1]
        return type_name

    def write_method(self, ctx: UnitContext, op: UmlOperation, owner: UmlClassifier,
                     skip_body: bool = False, skip_params: bool = False) -> bool:
        """Write one operation; returns False when it has no name and was skipped."""
        if not op.name:
            logger.debug(f"Skipping unnamed operation of '{owner.name}'")
            return False
        w = ctx.body
        params = op.non_return_parameters()
        return_param = op.return_parameter()

        doc = op.documentation.strip()
        for p in params:
            doc_type = resolve_type(p, ctx.namespace, for_documentation=True, suppress_namespace=True)
            doc += f"\n@param {doc_type} {self.param_name(p.name, True)} {p.documentation}"
        if return_param is not None:
            doc_type = resolve_type(return_param, ctx.namespace, for_documentation=True, suppress_namespace=True)
            doc += f"\n@return {doc_type} {return_param.documentation}"
        self.write_doc(w, doc)

        modifiers = self.modifiers(op)
        terms = list(modifiers) + ["function"]

        param_terms: List[str] = []
        if not skip_params:
            for p in params:
                term = self.param_name(p.name)
                if self.config.php_strict_mode:
                    hint = self.type_hint(ctx, resolve_type(p, ctx.namespace, for_documentation=False))
                    if hint:
                        term = f"{hint} {term}"
                if p.default_value:
                    term += f" = {p.default_value}"
                param_terms.append(term)

        signature = f"{op.name}({', '.join(param_terms)})"
        if self.config.php_return_type and op.name != PHP.constructor_name:
            signature += f": {self.return_declaration(ctx, op, owner)}"
        terms.append(signature)

        if skip_body or "abstract" in modifiers:
            w.write_line(" ".join(terms) + ";")
            return True

        w.write_line(" ".join(terms))
        w.write_line("{")
        w.indent()
        return_type = None
        if return_param is not None:
            return_type = resolve_type(return_param, ctx.namespace, for_documentation=False)
        if op.specification.strip():
            self.write_spec(w, op.specification)
            if return_type == PHP.self_type and not op.is_static:
                w.write_line()
                w.write_line(f"return {PHP.self_type};")
        else:
            w.write_line(PHP.not_implemented)
            if return_type is not None:
                literal = default_return(return_type)
                if not (literal == PHP.self_type and op.is_static):
                    w.write_line(f"return {literal};")
        w.outdent()
        w.write_line("}")
        return True

    def write_methods(self, ctx: UnitContext, ops: List[UmlOperation], owner: UmlClassifier,
                      skip_body: bool = False, skip_params: bool = False) -> None:
        for op in ops:
            if self.write_method(ctx, op, owner, skip_body, skip_params):
                ctx.body.write_line()

    def write_constructor(self, ctx: UnitContext, elem: UmlClassifier, has_super_class: bool) -> None:
        """Default constructor when none is declared, then the factory methods."""
        w = ctx.body
        if elem.name and not has_super_class and not elem.has_operation(PHP.constructor_name):
            self.write_doc(w, elem.documentation)
            vis = self.visibility(elem)
            w.write_line(f"{vis} function {PHP.constructor_name}()".lstrip())
            w.write_line("{")
            w.write_line("}")
            w.write_line()

        factories = [rewrite_factory_method(op, self.config.indent_string())
                     for op in elem.operations if is_factory_method(op)]
        self.write_methods(ctx, factories, elem)

    def write_trait_uses(self, ctx: UnitContext, elem: UmlClassifier) -> None:
        deps = super_dependencies(elem, self.graph)
        if not deps:
            return
        w = ctx.body
        names = ", ".join(self.reference_name(ctx, d.target) for d in deps)  # type: ignore[arg-type]
        mappings = [d.mapping.strip().rstrip(";") for d in deps if d.mapping.strip()]
        if not mappings:
            w.write_line(f"use {names};")
        else:
            w.write_line(f"use {names} {{")
            w.indent()
            for mapping in mappings:
                w.write_line(f"{mapping};")
            w.outdent()
            w.write_line("}")
        w.write_line()

    # ---------- Declarations ----------
    def write_class(self, ctx: UnitContext, elem: UmlClassifier) -> None:
        w = ctx.body
        self.write_doc(w, self.class_doc(elem))

        terms = self.class_modifiers(elem)
        terms.append("trait" if is_trait(elem) else "class")
        terms.append(elem.name)

        supers = super_classes(elem, self.graph)
        super_class = supers[0] if supers else None
        if len(supers) > 1:
            logger.debug(f"'{elem.name}' has {len(supers)} superclasses, only the first is extended")
        if super_class is not None:
            terms.append(f"extends {self.reference_name(ctx, super_class)}")

        interfaces = super_interfaces(elem, self.graph)
        if interfaces:
            terms.append("implements " + ", ".join(self.reference_name(ctx, i) for i in interfaces))

        w.write_line(" ".join(terms))
        w.write_line("{")
        w.indent()

        self.write_trait_uses(ctx, elem)
        self.write_member_variables(ctx, elem)
        self.write_constructor(ctx, elem, super_class is not None)

        accessors: List[UmlOperation] = []
        for attr in elem.attributes:
            accessors.extend(synthesize_accessors(attr, elem))
        self.write_methods(ctx, accessors, elem)

        self.write_methods(ctx, synthesize_stereotype_methods(elem), elem)
        self.write_methods(ctx, synthesize_interface_stubs(elem, self.graph), elem)

        self.write_methods(ctx, [op for op in elem.operations if not is_factory_method(op)], elem)

        if super_class is not None:
            self.write_methods(ctx, synthesize_abstract_overrides(elem, super_class), elem)

        self.write_nested(ctx, elem, frozenset({
            ElementKind.CLASS, ElementKind.ANNOTATION_TYPE,
            ElementKind.INTERFACE, ElementKind.ENUMERATION,
        }))
        self.close_block(w)

    def write_interface(self, ctx: UnitContext, elem: UmlClassifier) -> None:
        w = ctx.body
        self.write_doc(w, elem.documentation)

        terms = ["interface", elem.name]
        supers = super_classes(elem, self.graph)
        if supers:
            terms.append("extends " + ", ".join(self.reference_name(ctx, s) for s in supers))
        w.write_line(" ".join(terms))
        w.write_line("{")
        w.indent()

        self.write_member_variables(ctx, elem)
        self.write_methods(ctx, elem.operations, elem, skip_body=True)
        self.write_nested(ctx, elem, frozenset({
            ElementKind.CLASS, ElementKind.ANNOTATION_TYPE, ElementKind.ENUMERATION,
        }))
        self.close_block(w)

    def write_enum(self, ctx: UnitContext, elem: UmlClassifier) -> None:
        w = ctx.body
        self.write_doc(w, elem.documentation)
        literals = [lit for lit in elem.literals if lit.name]
        if self.config.php_native_enum:
            w.write_line(f"enum {elem.name}")
            w.write_line("{")
            w.indent()
            for lit in literals:
                w.write_line(f"case {lit.name};")
        else:
            w.write_line(f"class {elem.name} extends {PHP.enum_base_class}")
            w.write_line("{")
            w.indent()
            for i, lit in enumerate(literals):
                w.write_line(f"const {lit.name} = {i};")
        self.close_block(w)

    def write_annotation_type(self, ctx: UnitContext, elem: UmlClassifier) -> None:
        w = ctx.body
        self.write_doc(w, self.class_doc(elem))

        terms = self.class_modifiers(elem) + ["@interface", elem.name]
        w.write_line(" ".join(terms))
        w.write_line("{")
        w.indent()

        for attr in elem.attributes:
            self.write_member_variable(ctx, attr)
        self.write_methods(ctx, elem.operations, elem, skip_body=True, skip_params=True)
        self.write_nested(ctx, elem, frozenset({
            ElementKind.CLASS, ElementKind.ANNOTATION_TYPE,
            ElementKind.INTERFACE, ElementKind.ENUMERATION,
        }))
        self.close_block(w)


def generate(graph: UmlGraph, base: Optional[UmlElement], path: Union[str, Path],
             config: Optional[GeneratorConfig] = None) -> List[Path]:
    """Generate PHP sources for ``base`` (every model of ``graph`` when None) into ``path``."""
    generator = PhpCodeGenerator(graph, config)
    bases = [base] if base is not None else graph.models()
    root = Path(path)
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(root, e) from e
    written: List[Path] = []
    for elem in bases:
        written.extend(generator.generate(elem, path))
    logger.info(f"Generated {len(written)} file(s) into {path}")
    return written


__all__ = ["PhpCodeGenerator", "UnitContext", "generate"]
