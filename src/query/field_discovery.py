"""Field discovery from sample records.

This module derives the filterable field list offered to users by
inspecting the keys of one sample record and guessing each field kind.
"""

from __future__ import annotations

from typing import Sequence

from core.types import FieldDescriptor, FieldKind, FormRecord, Operator
from query.value_normalization import GeoValue, NumericValue, normalize_value

_KIND_OPERATORS: dict[FieldKind, tuple[Operator, ...]] = {
    FieldKind.NUMBER: (
        Operator.EQUALS,
        Operator.GREATER,
        Operator.LESS,
        Operator.GREATER_OR_EQUAL,
        Operator.LESS_OR_EQUAL,
    ),
    FieldKind.TEXT: (Operator.EQUALS, Operator.CONTAINS, Operator.STARTSWITH),
    FieldKind.GEO: (),
}


def discover_fields(records: Sequence[FormRecord]) -> tuple[FieldDescriptor, ...]:
    """Describe the fields of the first record in a collection.

    Args:
        records: Snapshot records; only the first one is inspected.

    Returns:
        Field descriptors in the sample record's key order, empty when
        there are no records.
    """
    if not records:
        return ()
    sample = records[0]
    return tuple(
        FieldDescriptor(name=str(name), kind=guess_field_kind(value))
        for name, value in sample.values.items()
    )


def guess_field_kind(raw_value: object) -> FieldKind:
    """Guess a field kind from one sample value.

    Args:
        raw_value: Sample field value.

    Returns:
        ``number`` when the value fully parses as a number, ``geo`` for
        latitude/longitude objects, otherwise ``text``.
    """
    normalized = normalize_value(raw_value)
    if isinstance(normalized, NumericValue):
        return FieldKind.NUMBER
    if isinstance(normalized, GeoValue):
        return FieldKind.GEO
    return FieldKind.TEXT


def operators_for_kind(kind: FieldKind) -> tuple[Operator, ...]:
    """Return the operators that can match values of a field kind."""
    return _KIND_OPERATORS[kind]
