"""Criteria parsing from user input.

This module validates raw field/operator/value input into typed criteria.
Operator names are matched case-insensitively and common comparison
symbols are accepted as aliases.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.errors import FormFilterCriteriaError
from core.types import Criterion, FilterLogic, FilterRequest, Operator

_OPERATOR_ALIASES: dict[str, Operator] = {
    "=": Operator.EQUALS,
    "==": Operator.EQUALS,
    ">": Operator.GREATER,
    "<": Operator.LESS,
    ">=": Operator.GREATER_OR_EQUAL,
    "<=": Operator.LESS_OR_EQUAL,
}


def parse_operator(raw_operator: str) -> Operator:
    """Resolve an operator name or symbol.

    Args:
        raw_operator: Operator name such as ``greaterOrEqual`` or ``>=``.

    Returns:
        Matching operator.

    Raises:
        FormFilterCriteriaError: If the operator is unknown.
    """
    normalized = raw_operator.strip()
    if normalized in _OPERATOR_ALIASES:
        return _OPERATOR_ALIASES[normalized]
    for candidate in Operator:
        if candidate.value.lower() == normalized.lower():
            return candidate
    supported_rows = ", ".join(item.value for item in Operator)
    raise FormFilterCriteriaError(
        f"Unsupported operator '{raw_operator}'. Use one of: {supported_rows}, "
        f"or a symbol from {', '.join(_OPERATOR_ALIASES)}."
    )


def parse_logic(raw_logic: str) -> FilterLogic:
    """Resolve a logic name, case-insensitively.

    Raises:
        FormFilterCriteriaError: If logic is neither AND nor OR.
    """
    normalized = raw_logic.strip().upper()
    for candidate in FilterLogic:
        if candidate.value == normalized:
            return candidate
    raise FormFilterCriteriaError(f"Unsupported logic '{raw_logic}'. Use AND or OR.")


def parse_criterion(field_name: str, raw_operator: str, raw_value: object) -> Criterion:
    """Build one validated criterion.

    Args:
        field_name: Record value key.
        raw_operator: Operator name or symbol.
        raw_value: Comparison value; non-string scalars are stringified.

    Returns:
        Typed criterion.

    Raises:
        FormFilterCriteriaError: If field, operator, or value is invalid.
    """
    normalized_field = field_name.strip()
    if not normalized_field:
        raise FormFilterCriteriaError("Criterion field name must not be empty.")
    return Criterion(
        field=normalized_field,
        operator=parse_operator(raw_operator),
        value=_value_text(raw_value, normalized_field),
    )


def parse_filter_request(
    criteria_rows: Iterable[Sequence[str]],
    raw_logic: str = FilterLogic.AND.value,
) -> FilterRequest:
    """Parse ``(field, operator, value)`` triples plus logic.

    Args:
        criteria_rows: Triples as collected from the command line.
        raw_logic: Logic name.

    Returns:
        Validated filter request.

    Raises:
        FormFilterCriteriaError: If any row is malformed.
    """
    criteria = []
    for index, row in enumerate(criteria_rows):
        if len(row) != 3:
            raise FormFilterCriteriaError(
                f"Invalid criterion #{index + 1}: expected FIELD OPERATOR VALUE, got {list(row)}."
            )
        field_name, raw_operator, raw_value = row
        criteria.append(parse_criterion(field_name, raw_operator, raw_value))
    return FilterRequest(criteria=tuple(criteria), logic=parse_logic(raw_logic))


def _value_text(raw_value: object, field_name: str) -> str:
    if isinstance(raw_value, bool):
        return "true" if raw_value else "false"
    if isinstance(raw_value, (str, int, float)):
        return str(raw_value)
    raise FormFilterCriteriaError(
        f"Criterion value for field '{field_name}' must be a string or number, "
        f"got {type(raw_value).__name__}."
    )
