from dataclasses import dataclass
from typing import Tuple

Namespace = str


@dataclass
class XmlMetaModel:
    xmi_ns: Namespace = "http://www.omg.org/XMI"
    # Other XMI namespace URIs seen in exports from Papyrus, MagicDraw and EA
    xmi_ns_aliases: Tuple[Namespace, ...] = (
        "http://www.omg.org/spec/XMI/20131001",
        "http://www.omg.org/spec/XMI/20110701",
        "http://schema.omg.org/spec/XMI/2.1",
    )

    @property
    def xmi_namespaces(self) -> Tuple[Namespace, ...]:
        return (self.xmi_ns,) + self.xmi_ns_aliases
