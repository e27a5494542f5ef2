"""Tests for SpecificationFactory."""

from __future__ import annotations

import pytest

from specfilter import (
    AttributeSpecification,
    Color,
    ColorSpecification,
    CombinationSpecification,
    Combinator,
    NotSpecification,
    OperatorNotFoundError,
    Product,
    Size,
    SizeSpecification,
    SpecificationFactory,
    ValidationError,
)

HOUSE = Product(name="House", color=Color.WHITE, size=Size.HUGE)
APPLE = Product(name="Apple", color=Color.GREEN, size=Size.SMALL)


def test_from_dict_leaf(registry):
    spec = SpecificationFactory.from_dict(
        {"op": "=", "attr": "color", "val": "white"}, registry=registry
    )
    assert isinstance(spec, AttributeSpecification)
    assert spec.is_satisfied_by(HOUSE) is True
    assert spec.is_satisfied_by(APPLE) is False


def test_from_dict_and(registry):
    data = {
        "op": "and",
        "conditions": [
            {"op": "=", "attr": "color", "val": "white"},
            {"op": "=", "attr": "size", "val": "huge"},
        ],
    }
    spec = SpecificationFactory.from_dict(data, registry=registry)
    assert isinstance(spec, CombinationSpecification)
    assert spec.is_satisfied_by(HOUSE) is True
    assert spec.to_dict() == data


def test_from_dict_folds_long_chains_left(registry):
    data = {
        "op": "or",
        "conditions": [
            {"op": "=", "attr": "color", "val": "red"},
            {"op": "=", "attr": "color", "val": "blue"},
            {"op": "=", "attr": "color", "val": "green"},
        ],
    }
    spec = SpecificationFactory.from_dict(data, registry=registry)
    assert isinstance(spec, CombinationSpecification)
    assert spec.combinator is Combinator.OR
    assert isinstance(spec.left, CombinationSpecification)
    assert spec.right.to_dict() == {"op": "=", "attr": "color", "val": "green"}
    assert spec.is_satisfied_by(APPLE) is True


def test_from_dict_single_condition_group_is_unwrapped(registry):
    spec = SpecificationFactory.from_dict(
        {"op": "and", "conditions": [{"op": "=", "attr": "size", "val": "small"}]},
        registry=registry,
    )
    assert isinstance(spec, AttributeSpecification)


def test_from_dict_not(registry):
    spec = SpecificationFactory.from_dict(
        {"op": "NOT", "conditions": [{"op": "=", "attr": "color", "val": "green"}]},
        registry=registry,
    )
    assert isinstance(spec, NotSpecification)
    assert spec.is_satisfied_by(HOUSE) is True


def test_round_trip_through_to_dict(registry):
    original = (ColorSpecification("white") | ~SizeSpecification("small")) & (
        ColorSpecification("green") | SizeSpecification("huge")
    )
    rebuilt = SpecificationFactory.from_dict(original.to_dict(), registry=registry)
    assert rebuilt.to_dict() == original.to_dict()
    for product in (HOUSE, APPLE):
        assert rebuilt.is_satisfied_by(product) == original.is_satisfied_by(product)


def test_from_json(registry):
    spec = SpecificationFactory.from_json(
        '{"op": "in", "attr": "size", "val": ["huge", "large"]}', registry=registry
    )
    assert spec.is_satisfied_by(HOUSE) is True


def test_from_json_invalid(registry):
    with pytest.raises(ValidationError, match="Invalid JSON"):
        SpecificationFactory.from_json("{not json", registry=registry)


def test_from_json_rejects_non_object(registry):
    with pytest.raises(ValidationError, match="must be an object"):
        SpecificationFactory.from_json("[1, 2]", registry=registry)


def test_from_json_too_deep_to_decode(registry):
    with pytest.raises(ValidationError, match="nested too deeply"):
        SpecificationFactory.from_json("[" * 100_000 + "]" * 100_000, registry=registry)


# -- validation --------------------------------------------------------------


def test_missing_op_raises(registry):
    with pytest.raises(ValidationError) as exc_info:
        SpecificationFactory.from_dict({"attr": "color"}, registry=registry)
    assert exc_info.value.path == "<root>"


def test_unknown_operator_raises(registry):
    with pytest.raises(OperatorNotFoundError) as exc_info:
        SpecificationFactory.from_dict(
            {"op": "==", "attr": "color", "val": "red"}, registry=registry
        )
    assert "=" in exc_info.value.suggestions


def test_empty_conditions_raise(registry):
    with pytest.raises(ValidationError, match="non-empty 'conditions'"):
        SpecificationFactory.from_dict(
            {"op": "and", "conditions": []}, registry=registry
        )


def test_not_with_two_conditions_raises(registry):
    leaf = {"op": "=", "attr": "color", "val": "red"}
    with pytest.raises(ValidationError, match="exactly one"):
        SpecificationFactory.from_dict(
            {"op": "not", "conditions": [leaf, leaf]}, registry=registry
        )


def test_nested_error_reports_path(registry):
    data = {
        "op": "or",
        "conditions": [{"op": "=", "attr": "color", "val": "red"}, {"op": "="}],
    }
    with pytest.raises(ValidationError) as exc_info:
        SpecificationFactory.from_dict(data, registry=registry)
    assert exc_info.value.path == "<root>.conditions[1]"


def test_allowed_fields(registry):
    with pytest.raises(ValidationError, match="not in the allowed fields"):
        SpecificationFactory.from_dict(
            {"op": "=", "attr": "weight", "val": 3},
            registry=registry,
            allowed_fields=["color", "size"],
        )


@pytest.mark.parametrize("op", ["in", "not_in"])
def test_membership_with_scalar_value_raises(registry, op):
    with pytest.raises(ValidationError, match="needs a list of values, got int"):
        SpecificationFactory.from_dict(
            {"op": op, "attr": "name", "val": 5}, registry=registry
        )


def test_membership_with_single_string_is_accepted(registry):
    spec = SpecificationFactory.from_dict(
        {"op": "in", "attr": "name", "val": "Apple"}, registry=registry
    )
    assert spec.is_satisfied_by(APPLE) is True
    assert spec.is_satisfied_by(HOUSE) is False


def test_validate_collects_all_errors():
    errors = SpecificationFactory.validate(
        {
            "op": "and",
            "conditions": [
                {"op": "bogus", "attr": "color"},
                {"op": "="},
                "not a dict",
            ],
        }
    )
    assert len(errors) == 3
    assert errors[0].startswith("<root>.conditions[0]: Unknown operator")
    assert errors[1].startswith("<root>.conditions[1]:")
    assert errors[2] == "<root>.conditions[2]: Expected a dict, got str"


def test_validate_reports_membership_value_path():
    errors = SpecificationFactory.validate(
        {"op": "not", "conditions": [{"op": "in", "attr": "size", "val": None}]}
    )
    assert errors == [
        "<root>.conditions[0]: "
        "'in' on 'size' needs a list of values, got NoneType"
    ]


def test_validate_valid_tree_returns_no_errors():
    assert SpecificationFactory.validate(ColorSpecification("red").to_dict()) == []


# -- nesting depth -----------------------------------------------------------


def _nested_not(levels: int) -> dict:
    node: dict = {"op": "=", "attr": "color", "val": "green"}
    for _ in range(levels):
        node = {"op": "not", "conditions": [node]}
    return node


def test_nesting_at_the_limit_builds(registry):
    spec = SpecificationFactory.from_dict(_nested_not(99), registry=registry)
    assert spec.is_satisfied_by(APPLE) is False


def test_nesting_past_the_limit_raises(registry):
    with pytest.raises(ValidationError, match="nested more than 100 levels"):
        SpecificationFactory.from_dict(_nested_not(5000), registry=registry)


def test_wide_group_counts_as_folded_depth():
    leaf = {"op": "=", "attr": "color", "val": "green"}
    assert SpecificationFactory.validate({"op": "or", "conditions": [leaf] * 100}) == []
    errors = SpecificationFactory.validate({"op": "or", "conditions": [leaf] * 101})
    assert errors == ["<root>: Specification is nested more than 100 levels deep"]
