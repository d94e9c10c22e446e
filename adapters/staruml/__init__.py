"""Reader for StarUML ``.mdj`` project files."""

from .loader import StarUmlLoader, load_mdj

__all__ = ["StarUmlLoader", "load_mdj"]
