"""Shared JSON decoding for record and form payloads.

This module centralizes FormRecord and FormSummary deserialization.
It is reused by the file and HTTP record sources.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from core.errors import FormFilterSourceError
from core.logging_config import get_logger
from core.types import FormRecord, FormSummary

_LOGGER = get_logger(__name__)


def form_record_from_payload(payload: Mapping[str, Any]) -> FormRecord:
    """Deserialize a record payload.

    Args:
        payload: Record object with ``id``, ``values`` and optional ``form_id``.

    Returns:
        Parsed record.

    Raises:
        FormFilterSourceError: If the record has no id.
    """
    record_id = payload.get("id")
    if record_id is None or isinstance(record_id, (bool, dict, list)):
        raise FormFilterSourceError(
            f"Invalid record payload: expected scalar 'id', got {record_id!r}."
        )
    return FormRecord(
        record_id=record_id,
        values=decode_record_values(payload.get("values"), record_id),
        form_id=payload.get("form_id"),
    )


def form_summary_from_payload(payload: Mapping[str, Any]) -> FormSummary:
    """Deserialize a form listing payload.

    Raises:
        FormFilterSourceError: If the form has no id.
    """
    form_id = payload.get("id")
    if form_id is None or isinstance(form_id, (bool, dict, list)):
        raise FormFilterSourceError(f"Invalid form payload: expected scalar 'id', got {form_id!r}.")
    name = payload.get("name")
    return FormSummary(form_id=form_id, name=str(name) if name is not None else f"Form {form_id}")


def decode_record_values(raw_values: object, record_id: object = None) -> dict[str, object]:
    """Decode record values stored as an object or a JSON string.

    JSON text that decodes to another string is decoded again, so values
    encoded twice by a client still load.

    Undecodable values degrade to an empty mapping so one bad record
    does not abort loading the rest of the snapshot.

    Args:
        raw_values: Values object, JSON text, or None.
        record_id: Record id used for log context.

    Returns:
        Field name to value mapping.
    """
    if raw_values is None:
        return {}
    if isinstance(raw_values, Mapping):
        return {str(key): value for key, value in raw_values.items()}
    if isinstance(raw_values, str):
        try:
            decoded = json.loads(raw_values)
        except json.JSONDecodeError as error:
            _LOGGER.warning("record_values_undecodable", record_id=record_id, reason=error.msg)
            return {}
        if isinstance(decoded, str):
            return decode_record_values(decoded, record_id)
        if isinstance(decoded, dict):
            return {str(key): value for key, value in decoded.items()}
    _LOGGER.warning(
        "record_values_undecodable",
        record_id=record_id,
        reason=f"expected JSON object, got {type(raw_values).__name__}",
    )
    return {}


def expect_object_list(payload: object, context: str) -> list[Mapping[str, Any]]:
    """Validate a JSON payload as a list of objects.

    Args:
        payload: Decoded JSON payload.
        context: Description used in error messages.

    Returns:
        Payload rows.

    Raises:
        FormFilterSourceError: If payload is not a list of JSON objects.
    """
    if not isinstance(payload, list):
        raise FormFilterSourceError(
            f"Invalid {context}: expected JSON array, got {type(payload).__name__}."
        )
    rows: list[Mapping[str, Any]] = []
    for index, row in enumerate(payload, 1):
        if not isinstance(row, dict):
            raise FormFilterSourceError(
                f"Invalid {context}: item #{index} is {type(row).__name__}, expected object."
            )
        rows.append(row)
    return rows
