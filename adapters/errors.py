from pathlib import Path
from typing import Optional, Union


class ModelLoadError(ValueError):
    """A model file is unreadable, malformed or holds dangling references."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = Path(path) if path is not None else None


__all__ = ["ModelLoadError"]
