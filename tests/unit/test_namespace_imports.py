#!/usr/bin/env python3
"""
Tests for namespace paths and import collection.
"""

import pytest

from core.graph import UmlGraph
from core.namespace import namespace_of, namespace_path, needs_import, qualified_path
from core.uml_model import (
    UmlAttribute, UmlClassifier, UmlDependency, UmlGeneralization, UmlInterfaceRealization,
    UmlOperation, UmlPackage, UmlParameter, UmlUseCase,
)
from gen.php.imports import collect_uses
from uml_types import Direction, ElementKind


@pytest.fixture
def packages(model):
    app = model.add(UmlPackage(name="App"))
    return {
        "app": app,
        "sales": app.add(UmlPackage(name="Sales")),
        "crm": app.add(UmlPackage(name="Crm")),
    }


class TestNamespacePath:
    def test_model_name_is_not_a_namespace(self, model, packages):
        order = packages["sales"].add(UmlClassifier(name="Order"))
        assert namespace_path(order) == ["App", "Sales"]
        assert namespace_of(order) == "App\\Sales"
        assert qualified_path(order) == "App\\Sales\\Order"

    def test_top_level_class_has_no_namespace(self, model):
        money = model.add(UmlClassifier(name="Money"))
        assert namespace_of(money) is None
        assert qualified_path(money) == "Money"

    def test_nested_class_shares_owner_namespace(self, packages):
        order = packages["sales"].add(UmlClassifier(name="Order"))
        line = order.add(UmlClassifier(name="Line"))
        assert namespace_of(line) == "App\\Sales"

    @pytest.mark.parametrize("path,namespace,expected", [
        ("App\\Crm\\Customer", "App\\Sales", True),
        ("App\\Sales\\Order", "App\\Sales", False),
        ("App\\Sales\\Sub\\Item", "App\\Sales", True),
        ("Money", "App", False),
        ("Money", None, False),
        ("App\\Money", None, True),
    ])
    def test_needs_import(self, path, namespace, expected):
        assert needs_import(path, namespace) is expected


class TestCollectUses:
    def test_imports_in_first_seen_order_without_duplicates(self, model, packages):
        customer = packages["crm"].add(UmlClassifier(name="Customer"))
        base = packages["app"].add(UmlClassifier(name="Entity"))
        payable = packages["crm"].add(UmlClassifier(name="Payable", kind=ElementKind.INTERFACE))
        order = packages["sales"].add(UmlClassifier(name="Order"))
        line = packages["sales"].add(UmlClassifier(name="Line"))

        order.add_attribute(UmlAttribute(name="customer", type=customer))
        order.add_attribute(UmlAttribute(name="lines", type=line, multiplicity="*"))
        op = order.add_operation(UmlOperation(name="reassign"))
        op.add_parameter(UmlParameter(name="to", type=customer))
        op.add_parameter(UmlParameter(name="", type=base, direction=Direction.RETURN))
        order.add(UmlGeneralization(source=order, target=base))
        order.add(UmlInterfaceRealization(source=order, target=payable))

        graph = UmlGraph(model)
        assert collect_uses(order, graph, "App\\Sales") == [
            "App\\Crm\\Customer",
            "App\\Entity",
            "App\\Crm\\Payable",
        ]

    def test_stereotype_supertypes_are_never_imported(self, model, packages):
        order = packages["sales"].add(UmlClassifier(name="Order", stereotype="extends Vendor\\Model, countable"))
        graph = UmlGraph(model)
        assert collect_uses(order, graph, "App\\Sales") == []

    def test_trait_dependency_and_use_case_stereotype(self, model, packages):
        timestamps = packages["app"].add(UmlClassifier(name="Timestamps", stereotype="trait"))
        marker = packages["crm"].add(UmlClassifier(name="Audited"))
        order = packages["sales"].add(UmlClassifier(name="Order"))
        order.add(UmlDependency(source=order, target=timestamps))
        order.add(UmlUseCase(name="audit", stereotype=marker))
        graph = UmlGraph(model)
        assert collect_uses(order, graph, "App\\Sales") == ["App\\Timestamps", "App\\Crm\\Audited"]

    def test_realized_interface_parameter_types(self, model, packages):
        customer = packages["crm"].add(UmlClassifier(name="Customer"))
        repo = packages["app"].add(UmlClassifier(name="Repository", kind=ElementKind.INTERFACE))
        find = repo.add_operation(UmlOperation(name="find"))
        find.add_parameter(UmlParameter(name="", type=customer, direction=Direction.RETURN))
        impl = packages["app"].add(UmlClassifier(name="CustomerRepository"))
        impl.add(UmlInterfaceRealization(source=impl, target=repo))
        graph = UmlGraph(model)
        assert collect_uses(impl, graph, "App") == ["App\\Crm\\Customer"]
