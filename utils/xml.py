from __future__ import annotations

from typing import Optional

from lxml import etree

from meta import DEFAULT_META


def xml_text(v: Optional[str]) -> str:
    return "" if v is None else str(v)


def local_name(el: etree._Element) -> str:
    """Tag name without its namespace, '' for comments and processing instructions."""
    if not isinstance(el.tag, str):
        return ""
    return etree.QName(el).localname


def xmi_attr(el: etree._Element, name: str) -> Optional[str]:
    """Read an ``xmi:``-qualified attribute whatever XMI namespace version the exporter used."""
    for ns in DEFAULT_META.xml.xmi_namespaces:
        value = el.get(f"{{{ns}}}{name}")
        if value is not None:
            return value
    return el.get(name)


def bool_attr(el: etree._Element, name: str, default: bool = False) -> bool:
    value = el.get(name)
    if value is None:
        return default
    return value.strip().lower() == "true"


__all__ = ["xml_text", "local_name", "xmi_attr", "bool_attr"]
