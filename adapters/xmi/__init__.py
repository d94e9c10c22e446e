"""Reader for Eclipse UML2 / Papyrus XMI models, built on lxml."""

from .loader import XmiModelLoader, load_xmi

__all__ = ["XmiModelLoader", "load_xmi"]
