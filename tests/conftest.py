import json
import os
import sys

import pytest

# Ensure project root is first on sys.path so the local packages are used
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app.config import GeneratorConfig  # noqa: E402
from core.uml_model import UmlPackage  # noqa: E402
from uml_types import ElementKind  # noqa: E402


@pytest.fixture
def model() -> UmlPackage:
    """Empty root model; namespaces start below it."""
    return UmlPackage(name="Model", kind=ElementKind.MODEL)


@pytest.fixture
def plain_config() -> GeneratorConfig:
    """Defaults without PHPDoc, so expected sources stay short."""
    return GeneratorConfig(php_doc=False)


@pytest.fixture
def php7_config() -> GeneratorConfig:
    """Scalar hints and return type declarations, no PHPDoc."""
    return GeneratorConfig(php_doc=False, php_scalar_hints=True, php_return_type=True)


def _ref(id_):
    return {"$ref": id_}


SHOP_MDJ = {
    "_type": "Project",
    "_id": "p1",
    "name": "Shop",
    "author": "Jane Roe",
    "ownedElements": [{
        "_type": "UMLModel",
        "_id": "m1",
        "_parent": _ref("p1"),
        "name": "Model",
        "ownedElements": [
            {"_type": "UMLClassDiagram", "_id": "dg1", "_parent": _ref("m1"), "name": "Main"},
            {
                "_type": "UMLPackage",
                "_id": "pk1",
                "_parent": _ref("m1"),
                "name": "Shop",
                "ownedElements": [
                    {
                        "_type": "UMLClass",
                        "_id": "c1",
                        "_parent": _ref("pk1"),
                        "name": "Order",
                        "documentation": "An order.",
                        "ownedElements": [
                            {"_type": "UMLGeneralization", "_id": "g1", "_parent": _ref("c1"),
                             "source": _ref("c1"), "target": _ref("c2")},
                            {"_type": "UMLInterfaceRealization", "_id": "r1", "_parent": _ref("c1"),
                             "source": _ref("c1"), "target": _ref("i1")},
                            {"_type": "UMLDependency", "_id": "dp1", "_parent": _ref("c1"),
                             "source": _ref("c1"), "target": _ref("t1"),
                             "mapping": "Timestamps::touch insteadof Other"},
                            {
                                "_type": "UMLAssociation",
                                "_id": "a1",
                                "_parent": _ref("c1"),
                                "end1": {"_type": "UMLAssociationEnd", "_id": "e1", "_parent": _ref("a1"),
                                         "reference": _ref("c1"), "navigable": False},
                                "end2": {"_type": "UMLAssociationEnd", "_id": "e2", "_parent": _ref("a1"),
                                         "name": "customer", "reference": _ref("c3"),
                                         "multiplicity": "0..1"},
                            },
                        ],
                        "attributes": [
                            {"_type": "UMLAttribute", "_id": "at1", "_parent": _ref("c1"),
                             "name": "total", "type": "float", "visibility": "private"},
                            {"_type": "UMLAttribute", "_id": "at2", "_parent": _ref("c1"),
                             "name": "lines", "type": _ref("c4"), "multiplicity": "0..*",
                             "visibility": "protected"},
                        ],
                        "operations": [
                            {
                                "_type": "UMLOperation",
                                "_id": "o1",
                                "_parent": _ref("c1"),
                                "name": "place",
                                "specification": "return true;",
                                "parameters": [
                                    {"_type": "UMLParameter", "_id": "pa1", "_parent": _ref("o1"),
                                     "name": "customer", "type": _ref("c3")},
                                    {"_type": "UMLParameter", "_id": "pa2", "_parent": _ref("o1"),
                                     "type": "bool", "direction": "return"},
                                ],
                            },
                        ],
                    },
                    {"_type": "UMLClass", "_id": "c2", "_parent": _ref("pk1"), "name": "Entity",
                     "isAbstract": True},
                    {"_type": "UMLClass", "_id": "t1", "_parent": _ref("pk1"), "name": "Timestamps",
                     "stereotype": "trait"},
                    {"_type": "UMLInterface", "_id": "i1", "_parent": _ref("pk1"), "name": "Payable"},
                    {"_type": "UMLClass", "_id": "c4", "_parent": _ref("pk1"), "name": "OrderLine"},
                    {"_type": "UMLEnumeration", "_id": "en1", "_parent": _ref("pk1"), "name": "Status",
                     "literals": [
                         {"_type": "UMLEnumerationLiteral", "_id": "l1", "_parent": _ref("en1"), "name": "OPEN"},
                         {"_type": "UMLEnumerationLiteral", "_id": "l2", "_parent": _ref("en1"), "name": "CLOSED"},
                     ]},
                    {"_type": "UMLClass", "_id": "an1", "_parent": _ref("pk1"), "name": "Route",
                     "stereotype": "annotationType"},
                    {
                        "_type": "UMLPackage",
                        "_id": "pk2",
                        "_parent": _ref("pk1"),
                        "name": "Crm",
                        "ownedElements": [
                            {"_type": "UMLClass", "_id": "c3", "_parent": _ref("pk2"), "name": "Customer",
                             "stereotype": "countable"},
                        ],
                    },
                ],
            },
        ],
    }],
}


SHOP_XMI = """<?xml version="1.0" encoding="UTF-8"?>
<uml:Model xmi:version="20131001" xmlns:xmi="http://www.omg.org/spec/XMI/20131001"
    xmlns:uml="http://www.eclipse.org/uml2/5.0.0/UML" xmi:id="m1" name="Model">
  <eAnnotations xmi:id="ann0" source="php">
    <details xmi:id="det0" key="author" value="Jane Roe"/>
  </eAnnotations>
  <packagedElement xmi:type="uml:Package" xmi:id="pk1" name="Shop">
    <packagedElement xmi:type="uml:Class" xmi:id="c1" name="Order">
      <ownedComment xmi:id="cm1" annotatedElement="c1">
        <body>An order.</body>
      </ownedComment>
      <generalization xmi:id="g1" general="c2"/>
      <interfaceRealization xmi:id="r1" client="c1" supplier="i1" contract="i1"/>
      <ownedAttribute xmi:id="at1" name="total" visibility="private">
        <type xmi:type="uml:PrimitiveType" href="pathmap://UML_LIBRARIES/UMLPrimitiveTypes.library.uml#Real"/>
      </ownedAttribute>
      <ownedAttribute xmi:id="at2" name="lines" visibility="protected" type="c4">
        <lowerValue xmi:type="uml:LiteralInteger" xmi:id="lv1"/>
        <upperValue xmi:type="uml:LiteralUnlimitedNatural" xmi:id="uv1" value="*"/>
      </ownedAttribute>
      <ownedOperation xmi:id="o1" name="place">
        <eAnnotations xmi:id="ann1" source="php">
          <details xmi:id="det1" key="body" value="return true;"/>
        </eAnnotations>
        <ownedParameter xmi:id="pa1" name="customer" type="c3"/>
        <ownedParameter xmi:id="pa2" name="result" direction="return">
          <type xmi:type="uml:PrimitiveType" href="pathmap://UML_LIBRARIES/UMLPrimitiveTypes.library.uml#Boolean"/>
        </ownedParameter>
      </ownedOperation>
    </packagedElement>
    <packagedElement xmi:type="uml:Class" xmi:id="c2" name="Entity" isAbstract="true"/>
    <packagedElement xmi:type="uml:Class" xmi:id="t1" name="Timestamps">
      <eAnnotations xmi:id="ann2" source="php">
        <details xmi:id="det2" key="stereotype" value="trait"/>
      </eAnnotations>
    </packagedElement>
    <packagedElement xmi:type="uml:Interface" xmi:id="i1" name="Payable"/>
    <packagedElement xmi:type="uml:Class" xmi:id="c4" name="OrderLine"/>
    <packagedElement xmi:type="uml:Dependency" xmi:id="dp1" client="c1" supplier="t1">
      <eAnnotations xmi:id="ann3" source="php">
        <details xmi:id="det3" key="mapping" value="Timestamps::touch insteadof Other"/>
      </eAnnotations>
    </packagedElement>
    <packagedElement xmi:type="uml:Association" xmi:id="a1" memberEnd="e1 e2" navigableOwnedEnd="e2">
      <ownedEnd xmi:id="e1" name="orders" type="c1" association="a1"/>
      <ownedEnd xmi:id="e2" name="customer" type="c3" association="a1">
        <lowerValue xmi:type="uml:LiteralInteger" xmi:id="lv2"/>
        <upperValue xmi:type="uml:LiteralUnlimitedNatural" xmi:id="uv2" value="1"/>
      </ownedEnd>
    </packagedElement>
    <packagedElement xmi:type="uml:Enumeration" xmi:id="en1" name="Status">
      <ownedLiteral xmi:id="l1" name="OPEN"/>
      <ownedLiteral xmi:id="l2" name="CLOSED"/>
    </packagedElement>
    <packagedElement xmi:type="uml:Class" xmi:id="an1" name="Route">
      <eAnnotations xmi:id="ann4" source="php">
        <details xmi:id="det4" key="stereotype" value="annotationType"/>
      </eAnnotations>
    </packagedElement>
    <packagedElement xmi:type="uml:Package" xmi:id="pk2" name="Crm">
      <packagedElement xmi:type="uml:Class" xmi:id="c3" name="Customer">
        <eAnnotations xmi:id="ann5" source="php">
          <details xmi:id="det5" key="stereotype" value="countable"/>
        </eAnnotations>
      </packagedElement>
    </packagedElement>
  </packagedElement>
</uml:Model>
"""


@pytest.fixture
def shop_mdj(tmp_path):
    """StarUML project: Model/Shop with an Order class and its collaborators."""
    path = tmp_path / "shop.mdj"
    path.write_text(json.dumps(SHOP_MDJ, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def shop_xmi(tmp_path):
    """The same shop model as an Eclipse UML2 file."""
    path = tmp_path / "shop.uml"
    path.write_text(SHOP_XMI, encoding="utf-8")
    return path
