"""Tagged value normalization for record field lookups.

Every field lookup goes through ``normalize_value`` exactly once so the
filter engine, field discovery, and display code agree on what counts as
numeric, textual, or geographic.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import math
import re
from typing import Mapping, Union

_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class NumericValue:
    """Value that parses as a finite decimal number.

    Attributes:
        number: Parsed float value.
        text: Text form used when the other operand is not numeric.
    """

    number: float
    text: str


@dataclass(frozen=True)
class TextValue:
    """Value compared as case-insensitive text."""

    text: str


@dataclass(frozen=True)
class GeoValue:
    """Geo point captured by a location field."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Missing:
    """Absent or null field value."""


MISSING = Missing()

FieldValue = Union[NumericValue, TextValue, GeoValue, Missing]


def parse_number(text: str) -> float | None:
    """Parse a decimal literal into a finite float.

    Args:
        text: Candidate string, surrounding whitespace ignored.

    Returns:
        Parsed float, or None when text is not a finite decimal literal.
    """
    candidate = text.strip()
    if not _DECIMAL_PATTERN.fullmatch(candidate):
        return None
    number = float(candidate)
    return number if math.isfinite(number) else None


def normalize_value(raw_value: object) -> FieldValue:
    """Normalize one JSON-like field value into a tagged value.

    Args:
        raw_value: Value read from a record, possibly None.

    Returns:
        Tagged value for dispatch.
    """
    if raw_value is None:
        return MISSING
    if isinstance(raw_value, bool):
        return TextValue("true" if raw_value else "false")
    if isinstance(raw_value, (int, float)):
        try:
            number = float(raw_value)
        except OverflowError:
            return TextValue(str(raw_value))
        if math.isfinite(number):
            return NumericValue(number=number, text=_number_text(raw_value))
        return TextValue(str(raw_value))
    if isinstance(raw_value, str):
        parsed = parse_number(raw_value)
        if parsed is None:
            return TextValue(raw_value)
        return NumericValue(number=parsed, text=raw_value)
    if isinstance(raw_value, Mapping):
        geo_value = _geo_value(raw_value)
        if geo_value is not None:
            return geo_value
        return TextValue(json.dumps(raw_value, sort_keys=True, default=str))
    if isinstance(raw_value, (list, tuple)):
        return TextValue(",".join(_item_text(item) for item in raw_value))
    return TextValue(str(raw_value))


def lookup_value(values: Mapping[str, object], field_name: str) -> FieldValue:
    """Read and normalize one field from a record value mapping."""
    return normalize_value(values.get(field_name))


def _geo_value(payload: Mapping[object, object]) -> GeoValue | None:
    latitude = payload.get("latitude")
    longitude = payload.get("longitude")
    if not _is_finite_number(latitude) or not _is_finite_number(longitude):
        return None
    return GeoValue(latitude=float(latitude), longitude=float(longitude))  # type: ignore[arg-type]


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _number_text(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _item_text(item: object) -> str:
    if item is None:
        return ""
    if isinstance(item, bool):
        return "true" if item else "false"
    if isinstance(item, (int, float)):
        return _number_text(item)
    if isinstance(item, str):
        return item
    return json.dumps(item, sort_keys=True, default=str)
