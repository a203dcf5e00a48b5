"""Recursive expression matching over document trees.

This module decides whether one value satisfies a list of sibling
expressions (implicitly ANDed). Nested operators ($some, $every, $not,
$and, $or, $nor) call back into ``document_matches`` on a strictly smaller
piece of the query or of the document, so recursion always terminates.
"""

from __future__ import annotations

import operator as operator_module
import re
from enum import Enum
from typing import Any, Callable, Sequence

from core.errors import DocStoreQueryError
from core.types import Expression, coerce_expression
from store.document_paths import get_path

_ORDERING_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "$greaterThan": operator_module.gt,
    "$greaterThanOrEqual": operator_module.ge,
    "$lessThan": operator_module.lt,
    "$lessThanOrEqual": operator_module.le,
}


def document_matches(value: Any, expressions: Sequence[object]) -> bool:
    """Return True when a value satisfies every expression in a list.

    Args:
        value: Document or sub-value the expression paths start from.
        expressions: Expressions or (path, operator, operand) triples.

    Returns:
        True if all expressions match; evaluation stops at the first miss.

    Raises:
        DocStoreQueryError: If an operator is unsupported or operands are invalid.
    """
    for raw_expression in expressions:
        expression = coerce_expression(raw_expression)
        attribute_value = get_path(value, expression.path) if expression.path else value
        if not evaluate_expression(attribute_value, expression):
            return False
    return True


def evaluate_expression(attribute_value: Any, expression: Expression) -> bool:
    """Apply one operator to an already-resolved attribute value.

    Args:
        attribute_value: Value found at the expression path.
        expression: Expression holding operator and operand.

    Returns:
        Operator result.

    Raises:
        DocStoreQueryError: If the operator is not supported.
    """
    operator_name = expression.operator
    operand = expression.operand

    # Basic operators
    if operator_name == "$equal":
        return values_equal(attribute_value, operand)
    if operator_name == "$notEqual":
        return not values_equal(attribute_value, operand)
    if operator_name in _ORDERING_OPERATORS:
        return _compare_ordered(attribute_value, operand, expression)
    if operator_name == "$any":
        candidates = _expect_list_operand(operand, expression)
        return any(values_equal(attribute_value, candidate) for candidate in candidates)

    # String operators
    if operator_name == "$includes":
        return isinstance(attribute_value, str) and str(operand) in attribute_value
    if operator_name == "$startsWith":
        return isinstance(attribute_value, str) and attribute_value.startswith(str(operand))
    if operator_name == "$endsWith":
        return isinstance(attribute_value, str) and attribute_value.endswith(str(operand))
    if operator_name == "$matches":
        if not isinstance(attribute_value, str):
            return False
        return _compile_pattern(operand, expression).search(attribute_value) is not None

    # Array operators
    if operator_name == "$some":
        if not isinstance(attribute_value, list):
            return False
        subexpressions = _expect_list_operand(operand, expression)
        return any(document_matches(element, subexpressions) for element in attribute_value)
    if operator_name == "$every":
        # An empty list does not satisfy $every, same as a non-list value.
        if not isinstance(attribute_value, list) or not attribute_value:
            return False
        subexpressions = _expect_list_operand(operand, expression)
        return all(document_matches(element, subexpressions) for element in attribute_value)
    if operator_name == "$length":
        if not isinstance(attribute_value, list) or isinstance(operand, bool):
            return False
        return len(attribute_value) == operand

    # Logical operators
    if operator_name == "$not":
        subexpressions = _expect_list_operand(operand, expression)
        return not document_matches(attribute_value, subexpressions)
    if operator_name == "$and":
        branches = _expect_list_operand(operand, expression)
        return all(document_matches(attribute_value, branch) for branch in branches)
    if operator_name == "$or":
        branches = _expect_list_operand(operand, expression)
        return any(document_matches(attribute_value, branch) for branch in branches)
    if operator_name == "$nor":
        branches = _expect_list_operand(operand, expression)
        return not any(document_matches(attribute_value, branch) for branch in branches)

    raise DocStoreQueryError(
        "A query contains an operator that is not supported "
        f"(operator: '{operator_name}', path: '{expression.path}')."
    )


def normalize_value(value: Any) -> Any:
    """Unwrap enum members to their underlying value for comparisons."""
    if isinstance(value, Enum):
        return value.value
    return value


def values_equal(left: Any, right: Any) -> bool:
    """Compare two values by normalized value.

    Booleans never equal numbers, so ``True`` does not match ``1``; the
    rule also applies to elements of lists and values of mappings.

    Args:
        left: First value.
        right: Second value.

    Returns:
        True if both values are equal.
    """
    left = normalize_value(left)
    right = normalize_value(right)
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(
            values_equal(left_item, right_item) for left_item, right_item in zip(left, right)
        )
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(
            values_equal(left[key], right[key]) for key in left
        )
    return bool(left == right)


def _compare_ordered(attribute_value: Any, operand: Any, expression: Expression) -> bool:
    left = normalize_value(attribute_value)
    right = normalize_value(operand)
    if left is None or right is None:
        return False
    compare = _ORDERING_OPERATORS[expression.operator]
    try:
        return bool(compare(left, right))
    except TypeError as error:
        raise DocStoreQueryError(
            f"Cannot compare {type(left).__name__} with {type(right).__name__} "
            f"(operator: '{expression.operator}', path: '{expression.path}')."
        ) from error


def _expect_list_operand(operand: Any, expression: Expression) -> Sequence[Any]:
    if isinstance(operand, (list, tuple)):
        return operand
    raise DocStoreQueryError(
        f"Operator '{expression.operator}' expects a list operand, got "
        f"{type(operand).__name__} (path: '{expression.path}')."
    )


def _compile_pattern(operand: Any, expression: Expression) -> re.Pattern[str]:
    if isinstance(operand, re.Pattern):
        return operand
    if isinstance(operand, str):
        try:
            return re.compile(operand)
        except re.error as error:
            raise DocStoreQueryError(
                f"Invalid pattern '{operand}' (operator: '$matches', path: '{expression.path}')."
            ) from error
    raise DocStoreQueryError(
        f"Operator '$matches' expects a pattern operand, got {type(operand).__name__} "
        f"(path: '{expression.path}')."
    )
