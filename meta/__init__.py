from .xml_meta import XmlMetaModel
from .uml_meta import UmlMetaModel
from .php_meta import PhpMetaModel
from .default_model import DEFAULT_META

__all__ = [
    "XmlMetaModel",
    "UmlMetaModel",
    "PhpMetaModel",
    "DEFAULT_META",
]
