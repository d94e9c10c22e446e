#!/usr/bin/env python3
"""
CLI entrypoint for uml2php.

Usage:
  uml2php <model.mdj|model.uml> <output-dir> [flags]
  python -m app.cli <model.mdj|model.uml> <output-dir> [flags]
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Dict, List, Optional

from adapters import ModelLoadError, load_model
from app.config import GeneratorConfig, DEFAULT_CONFIG, load_config
from gen.php.errors import CodeGenerationError
from gen.php.generator import generate
from utils.logging_config import configure_logging, level_for

logger = logging.getLogger("uml2php")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uml2php",
        description="Generate PHP source files from a UML model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Model formats:
    .mdj, .json   StarUML project
    .uml, .xmi    Eclipse UML2 / Papyrus model

Examples:
    uml2php shop.mdj build/
    uml2php shop.mdj build/ --base Model::Shop --return-types
    uml2php shop.uml build/ --config php.yaml -v
        """)

    parser.add_argument("model", help="Model file to generate from")
    parser.add_argument("output", help="Output directory")

    parser.add_argument("--config", metavar="FILE",
                        help="YAML or JSON file with generator options")
    parser.add_argument("--base", metavar="QNAME",
                        help="Package or classifier to generate (A::B::C); default: every model")

    parser.add_argument("--tab", action="store_true", default=None, dest="use_tab",
                        help="Indent with tabs")
    parser.add_argument("--indent", type=int, metavar="N", dest="indent_spaces",
                        help="Spaces per indentation level")
    parser.add_argument("--class-suffix", metavar="S", dest="class_extension",
                        help="File name suffix for classes")
    parser.add_argument("--interface-suffix", metavar="S", dest="interface_extension",
                        help="File name suffix for interfaces")
    parser.add_argument("--no-doc", action="store_false", default=None, dest="php_doc",
                        help="Do not write PHPDoc blocks")
    parser.add_argument("--no-strict", action="store_false", default=None, dest="php_strict_mode",
                        help="Do not type hint parameters")
    parser.add_argument("--scalar-hints", action="store_true", default=None, dest="php_scalar_hints",
                        help="Type hint scalar parameters too (PHP 7+)")
    parser.add_argument("--return-types", action="store_true", default=None, dest="php_return_type",
                        help="Write return type declarations")
    parser.add_argument("--native-enums", action="store_true", default=None, dest="php_native_enum",
                        help="Write PHP 8.1 enums instead of \\SplEnum subclasses")
    parser.add_argument("--author", help="Author written in class documentation")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Debug output")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Warnings and errors only")
    return parser


_OVERRIDES = (
    "use_tab", "indent_spaces", "class_extension", "interface_extension",
    "php_doc", "php_strict_mode", "php_scalar_hints", "php_return_type",
    "php_native_enum", "author",
)


def config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    """Configuration file (if any) overridden by the flags actually given."""
    cfg = load_config(args.config) if args.config else DEFAULT_CONFIG
    changes: Dict[str, object] = {
        name: getattr(args, name) for name in _OVERRIDES if getattr(args, name) is not None
    }
    return replace(cfg, **changes)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level_for(args.verbose, args.quiet))

    try:
        cfg = config_from_args(args)
    except (OSError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        graph = load_model(args.model)
    except ModelLoadError as e:
        logger.error(f"Cannot load model: {e}")
        return 1

    base = None
    if args.base:
        base = graph.find(args.base)
        if base is None:
            logger.error(f"Element '{args.base}' not found in {args.model}")
            return 1

    try:
        written = generate(graph, base, args.output, cfg)
    except CodeGenerationError as e:
        logger.error(f"Generation failed: {e}")
        return 1

    if not written:
        logger.warning("No PHP files generated")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
