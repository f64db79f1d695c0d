"""Text and JSON rendering of form records.

This module renders record values for terminal output: file references
and geo points get readable forms, nested values are shown as JSON.
"""

from __future__ import annotations

import json
from typing import Sequence

from core.constants import FILE_REFERENCE_PREFIX, GEO_DISPLAY_PRECISION
from core.types import FieldDescriptor, FormRecord, FormSummary
from query.field_discovery import operators_for_kind
from query.value_normalization import GeoValue, normalize_value


def format_field_value(raw_value: object) -> str:
    """Render one field value for display.

    Args:
        raw_value: JSON-like record value.

    Returns:
        Display text.
    """
    if isinstance(raw_value, str):
        if raw_value.startswith(FILE_REFERENCE_PREFIX):
            return f"[file] {raw_value}"
        return raw_value
    normalized = normalize_value(raw_value)
    if isinstance(normalized, GeoValue):
        return (
            f"Lat: {normalized.latitude:.{GEO_DISPLAY_PRECISION}f} | "
            f"Lon: {normalized.longitude:.{GEO_DISPLAY_PRECISION}f}"
        )
    if isinstance(raw_value, (dict, list)):
        return json.dumps(raw_value, indent=2, ensure_ascii=False, default=str)
    if raw_value is None:
        return "null"
    if isinstance(raw_value, bool):
        return "true" if raw_value else "false"
    return str(raw_value)


def format_record(record: FormRecord) -> list[str]:
    """Render a record as a header line plus one line per field."""
    lines = [f"Record {record.record_id}"]
    for key, value in record.values.items():
        rendered = format_field_value(value).replace("\n", "\n    ")
        lines.append(f"  {key}: {rendered}")
    return lines


def format_records(records: Sequence[FormRecord]) -> list[str]:
    """Render records separated by blank lines."""
    if not records:
        return ["No records found for this form."]
    lines: list[str] = []
    for index, record in enumerate(records):
        if index:
            lines.append("")
        lines.extend(format_record(record))
    return lines


def records_to_json(records: Sequence[FormRecord]) -> str:
    """Render records as a JSON array of ``{id, values}`` objects."""
    payload = [{"id": record.record_id, "values": dict(record.values)} for record in records]
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def format_form(form: FormSummary) -> str:
    """Render one form listing row."""
    return f"{form.form_id}\t{form.name}"


def format_field(field: FieldDescriptor) -> str:
    """Render one discovered field with its applicable operators."""
    operators = ",".join(item.value for item in operators_for_kind(field.kind)) or "-"
    return f"{field.name}\t{field.kind.value}\t{operators}"
