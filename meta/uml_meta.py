from dataclasses import dataclass, field
from typing import Dict

from uml_types import ElementKind

ElementType = str


def _primitive_types() -> Dict[str, str]:
    return {
        "String": "string",
        "Integer": "int",
        "Boolean": "bool",
        "Real": "float",
        "UnlimitedNatural": "int",
    }


@dataclass
class UmlMetaModel:
    model_type: ElementType = "uml:Model"
    package_type: ElementType = "uml:Package"
    class_type: ElementType = "uml:Class"
    interface_type: ElementType = "uml:Interface"
    enum_type: ElementType = "uml:Enumeration"
    association_type: ElementType = "uml:Association"
    dependency_type: ElementType = "uml:Dependency"
    usage_type: ElementType = "uml:Usage"
    use_case_type: ElementType = "uml:UseCase"
    stereotype_type: ElementType = "uml:Stereotype"
    primitive_type: ElementType = "uml:PrimitiveType"
    data_type: ElementType = "uml:DataType"

    unlimited_multiplicity: str = "*"

    # Tag used on classes to mark annotation types
    annotation_stereotype: str = "annotationType"

    primitive_types: Dict[str, str] = field(default_factory=_primitive_types)

    def get_element_kind(self, xmi_type: ElementType) -> ElementKind:
        mapping: Dict[ElementType, ElementKind] = {
            self.model_type: ElementKind.MODEL,
            self.package_type: ElementKind.PACKAGE,
            self.class_type: ElementKind.CLASS,
            self.interface_type: ElementKind.INTERFACE,
            self.enum_type: ElementKind.ENUMERATION,
            self.association_type: ElementKind.ASSOCIATION,
            self.dependency_type: ElementKind.DEPENDENCY,
            self.usage_type: ElementKind.DEPENDENCY,
            self.use_case_type: ElementKind.USE_CASE,
            self.stereotype_type: ElementKind.STEREOTYPE,
        }
        kind = mapping.get(xmi_type)
        if kind is None:
            raise KeyError(xmi_type)
        return kind
