"""Condition evaluation: does an event context satisfy a workflow's conditions?

Pure functions, no I/O. Conditions are ANDed. Comparisons are strict-typed
(no string/number coercion) and only ever compare primitives. Any condition
that cannot be evaluated fails closed: it is "not satisfied", never an error.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from bookflow.application.services.context_path import MISSING, resolve_path
from bookflow.domain.entities.workflow import Condition
from bookflow.shared.enums import ConditionOperator
from bookflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _is_primitive(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def primitive_equal(left: Any, right: Any) -> bool:
    """Equality on primitives; bool never equals a number, str never equals a number."""
    if not (_is_primitive(left) and _is_primitive(right)):
        return False
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if left is None or right is None:
        return left is None and right is None
    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right
    return left == right


def _equals(actual: Any, expected: Any) -> bool:
    # An absent field compares like null, so {"value": None} matches it.
    if actual is MISSING:
        actual = None
    return primitive_equal(actual, expected)


def _not_equals(actual: Any, expected: Any) -> bool:
    if actual is MISSING:
        actual = None
    if not (_is_primitive(actual) and _is_primitive(expected)):
        return False
    return not primitive_equal(actual, expected)


def _greater_than(actual: Any, expected: Any) -> bool:
    return _is_number(actual) and _is_number(expected) and actual > expected


def _less_than(actual: Any, expected: Any) -> bool:
    return _is_number(actual) and _is_number(expected) and actual < expected


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, str):
        return isinstance(expected, str) and expected.lower() in actual.lower()
    if _is_sequence(actual):
        return any(primitive_equal(item, expected) for item in actual)
    return False


def _in(actual: Any, expected: Any) -> bool:
    if not _is_sequence(expected):
        return False
    if actual is MISSING:
        actual = None
    return any(primitive_equal(actual, item) for item in expected)


_OPERATORS = {
    ConditionOperator.EQUALS: _equals,
    ConditionOperator.NOT_EQUALS: _not_equals,
    ConditionOperator.GREATER_THAN: _greater_than,
    ConditionOperator.LESS_THAN: _less_than,
    ConditionOperator.CONTAINS: _contains,
    ConditionOperator.IN: _in,
}


def evaluate_condition(condition: Condition, context: Mapping[str, Any]) -> bool:
    """Evaluate one condition against the context; never raises."""
    try:
        operator = ConditionOperator(condition.operator)
    except ValueError:
        logger.warning(
            "Unknown condition operator %r on field %r; failing closed",
            condition.operator,
            condition.field,
        )
        return False
    try:
        actual = resolve_path(context, condition.field)
        return bool(_OPERATORS[operator](actual, condition.value))
    except Exception:
        logger.warning(
            "Condition %s %s could not be evaluated; failing closed",
            condition.field,
            operator.value,
            exc_info=True,
        )
        return False


def matches(conditions: Sequence[Condition], context: Mapping[str, Any]) -> bool:
    """Return True when every condition holds. No conditions always match."""
    return all(evaluate_condition(c, context) for c in conditions)
