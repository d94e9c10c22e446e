from dataclasses import dataclass
from .xml_meta import XmlMetaModel
from .uml_meta import UmlMetaModel
from .php_meta import PhpMetaModel


@dataclass
class MetaBundle:
    xml: XmlMetaModel
    uml: UmlMetaModel
    php: PhpMetaModel


DEFAULT_META = MetaBundle(xml=XmlMetaModel(), uml=UmlMetaModel(), php=PhpMetaModel())
