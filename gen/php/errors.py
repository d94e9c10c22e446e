from pathlib import Path
from typing import Optional, Union


class CodeGenerationError(RuntimeError):
    """Generation of a package or source unit failed."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class DirectoryCreationError(CodeGenerationError):
    def __init__(self, path: Union[str, Path], cause: OSError) -> None:
        super().__init__(f"Cannot create directory {path}: {cause.strerror or cause}", path)


class FileWriteError(CodeGenerationError):
    def __init__(self, path: Union[str, Path], cause: OSError) -> None:
        super().__init__(f"Cannot write {path}: {cause.strerror or cause}", path)


__all__ = ["CodeGenerationError", "DirectoryCreationError", "FileWriteError"]
