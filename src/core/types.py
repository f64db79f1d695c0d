"""Shared typed models.

This module defines immutable data models used by the filter engine,
record sources, SDK, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Operator(str, Enum):
    """Criterion operators accepted by the filter engine."""

    EQUALS = "equals"
    GREATER = "greater"
    LESS = "less"
    GREATER_OR_EQUAL = "greaterOrEqual"
    LESS_OR_EQUAL = "lessOrEqual"
    CONTAINS = "contains"
    STARTSWITH = "startswith"


class FilterLogic(str, Enum):
    """Combinator applied across a criteria list."""

    AND = "AND"
    OR = "OR"


class FieldKind(str, Enum):
    """Guessed field kind used when offering operators to users."""

    NUMBER = "number"
    TEXT = "text"
    GEO = "geo"


@dataclass(frozen=True)
class FormRecord:
    """One schemaless record collected by a form.

    Attributes:
        record_id: Backend record identifier.
        values: Field name to JSON-like value mapping.
        form_id: Owning form identifier when known.
    """

    record_id: int | str
    values: Mapping[str, object] = field(default_factory=dict)
    form_id: int | str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))


@dataclass(frozen=True)
class FormSummary:
    """Form identity as listed by a record source.

    Attributes:
        form_id: Backend form identifier.
        name: Human readable form name.
    """

    form_id: int | str
    name: str


@dataclass(frozen=True)
class Criterion:
    """One field/operator/value predicate.

    Attributes:
        field: Record value key to test.
        operator: Operator name, see ``Operator``.
        value: Raw comparison value as entered by the user.
    """

    field: str
    operator: Operator | str
    value: str


@dataclass(frozen=True)
class FieldDescriptor:
    """Field discovered from a sample record.

    Attributes:
        name: Record value key.
        kind: Guessed field kind.
    """

    name: str
    kind: FieldKind


@dataclass(frozen=True)
class RecordSnapshot:
    """Unfiltered records fetched once per form selection.

    Attributes:
        form_id: Form the records belong to.
        records: Records in source order.
    """

    form_id: int | str
    records: tuple[FormRecord, ...]


@dataclass(frozen=True)
class FilterRequest:
    """Criteria and logic supplied together by a user or spec file.

    Attributes:
        criteria: Ordered criteria list.
        logic: Combinator across criteria.
    """

    criteria: tuple[Criterion, ...] = ()
    logic: FilterLogic = FilterLogic.AND
