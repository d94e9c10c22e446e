from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    # ===== Layout =====
    use_tab: bool = False
    indent_spaces: int = 4
    class_extension: str = ""                  # file name suffix for classes
    interface_extension: str = ""              # file name suffix for interfaces
    file_extension: str = ".php"

    # ===== Emission policy =====
    php_doc: bool = True                       # emit /** ... */ blocks
    php_strict_mode: bool = True               # type hint parameters
    php_scalar_hints: bool = False             # also hint bool/int/float/string (PHP 7+)
    php_return_type: bool = False              # emit ": type" return declarations
    php_native_enum: bool = False              # PHP 8.1 enum instead of \SplEnum subclass

    # Overrides the project author of the model when set
    author: Optional[str] = None

    def indent_string(self) -> str:
        if self.use_tab:
            return "\t"
        return " " * max(self.indent_spaces, 0)


DEFAULT_CONFIG = GeneratorConfig()

# StarUML preference names accepted in configuration files
PREFERENCE_ALIASES: Dict[str, str] = {
    "useTab": "use_tab",
    "indentSpaces": "indent_spaces",
    "classExtension": "class_extension",
    "interfaceExtension": "interface_extension",
    "phpDoc": "php_doc",
    "phpStrictMode": "php_strict_mode",
    "phpScalarHints": "php_scalar_hints",
    "phpReturnType": "php_return_type",
    "phpNativeEnum": "php_native_enum",
}


def config_from_dict(data: Dict[str, Any], base: Optional[GeneratorConfig] = None) -> GeneratorConfig:
    known = {f.name: f for f in fields(GeneratorConfig)}
    changes: Dict[str, Any] = {}
    for key, value in (data or {}).items():
        name = PREFERENCE_ALIASES.get(key, key)
        if name not in known:
            raise ValueError(f"Unknown configuration option: {key}")
        expected = known[name].type
        if expected in ("bool",) and not isinstance(value, bool):
            raise ValueError(f"Option {key} expects true/false, got {value!r}")
        if expected in ("int",) and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"Option {key} expects an integer, got {value!r}")
        changes[name] = value
    return replace(base or DEFAULT_CONFIG, **changes)


def _load_file(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yml", ".yaml"):
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        else:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    # Allow the options to live under a "php" section
    if isinstance(data.get("php"), dict):
        data = data["php"]
    return data


def load_config(path: Union[str, Path], base: Optional[GeneratorConfig] = None) -> GeneratorConfig:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Configuration file not found: {p}")
    cfg = config_from_dict(_load_file(p), base)
    logger.debug(f"Loaded configuration from {p}: {cfg}")
    return cfg


__all__ = [
    "GeneratorConfig",
    "DEFAULT_CONFIG",
    "PREFERENCE_ALIASES",
    "config_from_dict",
    "load_config",
]
