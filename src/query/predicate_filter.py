"""Record predicate filtering.

This module applies field/operator/value criteria to record snapshots.
Evaluation is pure: inputs are never mutated and unevaluable criteria
resolve to "not satisfied" instead of raising.
"""

from __future__ import annotations

import operator
from typing import Callable, Sequence

from core.types import Criterion, FilterLogic, FormRecord, Operator
from query.value_normalization import (
    FieldValue,
    GeoValue,
    Missing,
    NumericValue,
    TextValue,
    lookup_value,
    normalize_value,
)

_NUMERIC_COMPARATORS: dict[str, Callable[[float, float], bool]] = {
    Operator.EQUALS.value: operator.eq,
    Operator.GREATER.value: operator.gt,
    Operator.LESS.value: operator.lt,
    Operator.GREATER_OR_EQUAL.value: operator.ge,
    Operator.LESS_OR_EQUAL.value: operator.le,
}

_TEXT_COMPARATORS: dict[str, Callable[[str, str], bool]] = {
    Operator.EQUALS.value: operator.eq,
    Operator.CONTAINS.value: operator.contains,
    Operator.STARTSWITH.value: str.startswith,
}


def apply_filter(
    records: Sequence[FormRecord],
    criteria: Sequence[Criterion],
    logic: FilterLogic = FilterLogic.AND,
) -> tuple[FormRecord, ...]:
    """Filter records using predicate criteria.

    Args:
        records: Input records in display order.
        criteria: Criteria to evaluate; empty keeps every record.
        logic: ``AND`` keeps records matching all criteria, ``OR`` any.

    Returns:
        Matching records in their original relative order.
    """
    if not criteria:
        return tuple(records)
    combinator = all if logic == FilterLogic.AND else any
    return tuple(
        record
        for record in records
        if combinator(matches_criterion(record, criterion) for criterion in criteria)
    )


def matches_criterion(record: FormRecord, criterion: Criterion) -> bool:
    """Evaluate one criterion against one record.

    Args:
        record: Record to test.
        criterion: Predicate to evaluate.

    Returns:
        True when the record value satisfies the criterion.
    """
    record_value = lookup_value(record.values, criterion.field)
    if isinstance(record_value, (Missing, GeoValue)):
        return False
    operator_name = _operator_name(criterion.operator)
    criterion_value = normalize_value(criterion.value)
    if isinstance(criterion_value, Missing):
        return False
    if isinstance(record_value, NumericValue) and isinstance(criterion_value, NumericValue):
        numeric_comparator = _NUMERIC_COMPARATORS.get(operator_name)
        if numeric_comparator is None:
            return False
        return numeric_comparator(record_value.number, criterion_value.number)
    text_comparator = _TEXT_COMPARATORS.get(operator_name)
    if text_comparator is None:
        return False
    return text_comparator(record_value.text.lower(), _text_of(criterion_value).lower())


def _operator_name(raw_operator: Operator | str) -> str:
    if isinstance(raw_operator, Operator):
        return raw_operator.value
    return str(raw_operator)


def _text_of(value: FieldValue) -> str:
    if isinstance(value, (NumericValue, TextValue)):
        return value.text
    return ""
