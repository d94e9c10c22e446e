"""
Model loaders.

``load_model`` picks the reader from the file extension: StarUML projects
(``.mdj``, ``.json``) or Eclipse UML2 / Papyrus XMI (``.uml``, ``.xmi``).
"""
from pathlib import Path
from typing import Union

from .errors import ModelLoadError
from .staruml import StarUmlLoader, load_mdj
from .xmi import XmiModelLoader, load_xmi
from core.graph import UmlGraph

_LOADERS = {
    ".mdj": load_mdj,
    ".json": load_mdj,
    ".uml": load_xmi,
    ".xmi": load_xmi,
}


def load_model(path: Union[str, Path]) -> UmlGraph:
    p = Path(path)
    loader = _LOADERS.get(p.suffix.lower())
    if loader is None:
        raise ModelLoadError(
            f"unsupported model format '{p.suffix}' (expected one of {', '.join(sorted(_LOADERS))})", p)
    return loader(p)


__all__ = [
    "ModelLoadError", "StarUmlLoader", "XmiModelLoader",
    "load_mdj", "load_xmi", "load_model",
]
