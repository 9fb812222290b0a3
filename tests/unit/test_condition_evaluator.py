"""Condition evaluation: operators, dot-paths, strict typing and fail-closed behavior."""

import math

import pytest

from bookflow.application.services.condition_evaluator import evaluate_condition, matches
from bookflow.domain.entities.workflow import Condition


def _c(field: str, operator: str, value=None) -> Condition:
    return Condition(field=field, operator=operator, value=value)


CONTEXT = {
    "customer": {"name": "Jane Doe", "email": "jane@example.com", "isVip": True, "tags": ["vip", "returning"]},
    "payment": {"amount": 250, "currency": "USD", "note": None},
    "appointment": {"type": "consultation", "items": [{"sku": "A1"}, {"sku": "B2"}]},
}


@pytest.mark.parametrize("context", [{}, CONTEXT, {"anything": [1, 2, 3]}])
def test_empty_conditions_always_match(context) -> None:
    assert matches([], context) is True


def test_greater_than_on_payment_amount() -> None:
    cond = [_c("payment.amount", "greater_than", 100)]
    assert matches(cond, {"payment": {"amount": 250}}) is True
    assert matches(cond, {"payment": {"amount": 50}}) is False
    assert matches(cond, {"payment": {"amount": 100}}) is False


def test_less_than() -> None:
    assert matches([_c("payment.amount", "less_than", 300)], CONTEXT) is True
    assert matches([_c("payment.amount", "less_than", 250)], CONTEXT) is False


def test_numeric_operators_do_not_coerce_strings() -> None:
    assert matches([_c("payment.amount", "greater_than", 100)], {"payment": {"amount": "250"}}) is False
    assert matches([_c("payment.amount", "greater_than", "100")], CONTEXT) is False


def test_numeric_operators_reject_bool_and_non_finite() -> None:
    assert matches([_c("flag", "greater_than", 0)], {"flag": True}) is False
    assert matches([_c("x", "greater_than", 0)], {"x": math.inf}) is False
    assert matches([_c("x", "less_than", math.nan)], {"x": 1}) is False


def test_strings_are_never_ordered() -> None:
    assert matches([_c("name", "greater_than", "a")], {"name": "b"}) is False
    assert matches([_c("name", "less_than", "z")], {"name": "b"}) is False


def test_equals_primitives() -> None:
    assert matches([_c("appointment.type", "equals", "consultation")], CONTEXT) is True
    assert matches([_c("appointment.type", "equals", "tattoo_session")], CONTEXT) is False
    assert matches([_c("customer.isVip", "equals", True)], CONTEXT) is True
    assert matches([_c("payment.amount", "equals", 250.0)], CONTEXT) is True


def test_equals_is_strict_about_types() -> None:
    assert matches([_c("payment.amount", "equals", "250")], CONTEXT) is False
    assert matches([_c("flag", "equals", 1)], {"flag": True}) is False
    assert matches([_c("count", "equals", True)], {"count": 1}) is False


def test_equals_never_compares_structures() -> None:
    assert matches([_c("customer.tags", "equals", ["vip", "returning"])], CONTEXT) is False
    assert matches([_c("payment", "equals", {"amount": 250})], {"payment": {"amount": 250}}) is False


def test_absent_field_compares_like_null() -> None:
    assert matches([_c("customer.phone", "equals", "555")], CONTEXT) is False
    assert matches([_c("customer.phone", "equals", None)], CONTEXT) is True
    assert matches([_c("payment.note", "equals", None)], CONTEXT) is True
    assert matches([_c("customer.phone", "not_equals", "555")], CONTEXT) is True
    assert matches([_c("customer.phone", "not_equals", None)], CONTEXT) is False


def test_absent_field_fails_numeric_and_contains() -> None:
    assert matches([_c("payment.tip", "greater_than", 0)], CONTEXT) is False
    assert matches([_c("payment.tip", "less_than", 0)], CONTEXT) is False
    assert matches([_c("customer.bio", "contains", "x")], CONTEXT) is False


def test_not_equals() -> None:
    assert matches([_c("appointment.type", "not_equals", "tattoo_session")], CONTEXT) is True
    assert matches([_c("appointment.type", "not_equals", "consultation")], CONTEXT) is False
    assert matches([_c("customer.tags", "not_equals", "vip")], CONTEXT) is False


def test_contains_substring_is_case_insensitive() -> None:
    assert matches([_c("customer.name", "contains", "jane")], CONTEXT) is True
    assert matches([_c("customer.email", "contains", "@EXAMPLE")], CONTEXT) is True
    assert matches([_c("customer.name", "contains", "john")], CONTEXT) is False
    assert matches([_c("customer.name", "contains", 1)], CONTEXT) is False


def test_contains_membership_in_sequence() -> None:
    assert matches([_c("customer.tags", "contains", "vip")], CONTEXT) is True
    assert matches([_c("customer.tags", "contains", "new")], CONTEXT) is False
    assert matches([_c("nums", "contains", 1)], {"nums": [True, 2]}) is False


def test_in_operator() -> None:
    assert matches([_c("payment.currency", "in", ["USD", "EUR"])], CONTEXT) is True
    assert matches([_c("payment.currency", "in", ["GBP"])], CONTEXT) is False
    assert matches([_c("payment.currency", "in", "USD")], CONTEXT) is False
    assert matches([_c("payment.tip", "in", [None])], CONTEXT) is True
    assert matches([_c("customer.tags", "in", [["vip", "returning"]])], CONTEXT) is False


def test_list_index_segments() -> None:
    assert matches([_c("appointment.items.1.sku", "equals", "B2")], CONTEXT) is True
    assert matches([_c("appointment.items.5.sku", "equals", None)], CONTEXT) is True
    assert matches([_c("appointment.items.x.sku", "equals", "A1")], CONTEXT) is False


def test_conditions_are_anded() -> None:
    conditions = [
        _c("payment.amount", "greater_than", 100),
        _c("customer.isVip", "equals", True),
    ]
    assert matches(conditions, CONTEXT) is True
    assert matches(conditions, {**CONTEXT, "customer": {"isVip": False}}) is False


def test_unknown_operator_fails_closed(caplog: pytest.LogCaptureFixture) -> None:
    assert evaluate_condition(_c("payment.amount", "between", [1, 2]), CONTEXT) is False
    assert "Unknown condition operator" in caplog.text


def test_malformed_field_fails_closed() -> None:
    assert evaluate_condition(Condition(field=None, operator="equals", value="x"), CONTEXT) is False
    assert evaluate_condition(Condition(field="a..b", operator="equals", value=1), {"a": {"": {"b": 1}}}) is False
    assert evaluate_condition(_c("payment.amount.value", "equals", 1), CONTEXT) is False
