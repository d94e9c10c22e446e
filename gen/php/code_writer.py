from __future__ import annotations

from typing import List, Optional

from meta import DEFAULT_META


class CodeWriter:
    """Line buffer with an indentation stack."""

    def __init__(self, indent_string: str = "    ") -> None:
        self.lines: List[str] = []
        self.indent_string = indent_string
        self.indentations: List[str] = []

    def indent(self) -> None:
        self.indentations.append(self.indent_string)

    def outdent(self) -> None:
        if self.indentations:
            self.indentations.pop()

    def write_line(self, line: Optional[str] = None) -> None:
        if line:
            self.lines.append("".join(self.indentations) + line)
        else:
            self.lines.append("")

    def drop_trailing_blank(self) -> None:
        if self.lines and self.lines[-1] == "":
            self.lines.pop()

    def get_data(self) -> str:
        return "\n".join(self.lines)


class SourceUnit:
    """One generated file: an import header and a body, joined on render.

    Imports can be discovered at any point of the body emission (type hints of
    a nested class, say); they land in the header and keep first-seen order.
    """

    def __init__(self, indent_string: str = "    ") -> None:
        self.uses: List[str] = []
        self.body = CodeWriter(indent_string)

    def add_use(self, path: str) -> None:
        path = path.lstrip(DEFAULT_META.php.namespace_separator)
        if path and path not in self.uses:
            self.uses.append(path)

    def render(self, namespace: Optional[str] = None) -> str:
        out: List[str] = [DEFAULT_META.php.open_tag, ""]
        if namespace:
            out.append(f"namespace {namespace};")
            out.append("")
        if self.uses:
            out.extend(f"use {path};" for path in self.uses)
            out.append("")
        body = self.body.get_data().rstrip("\n")
        if body:
            out.append(body)
        return "\n".join(out).rstrip("\n") + "\n"


__all__ = ["CodeWriter", "SourceUnit"]
