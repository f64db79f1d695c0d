"""Local file record source.

This module loads forms and records from a JSON or JSONL export.
A JSON file may hold ``{"forms": [...], "records": [...]}`` or a bare
record array; a JSONL file holds one record object per line.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from core.constants import SUPPORTED_RECORD_FILE_EXTENSIONS
from core.errors import FormFilterSourceError
from core.logging_config import get_logger
from core.types import FormRecord, FormSummary
from source.record_payload import (
    expect_object_list,
    form_record_from_payload,
    form_summary_from_payload,
)

_LOGGER = get_logger(__name__)


class FileRecordSource:
    """Record source backed by a local export file."""

    def __init__(self, file_path: Path) -> None:
        """Create a file source.

        Args:
            file_path: JSON or JSONL export path.
        """
        self._file_path = file_path

    def list_forms(self) -> tuple[FormSummary, ...]:
        """List forms declared in the file or referenced by records.

        Returns:
            Forms sorted by id; undeclared forms get a generated name.
        """
        form_rows, records = self._load()
        forms = {str(form.form_id): form for form in form_rows}
        for record in records:
            if record.form_id is not None and str(record.form_id) not in forms:
                forms[str(record.form_id)] = FormSummary(
                    form_id=record.form_id,
                    name=f"Form {record.form_id}",
                )
        return tuple(sorted(forms.values(), key=lambda form: _sort_key(form.form_id)))

    def fetch_records(self, form_id: int | str) -> tuple[FormRecord, ...]:
        """Return records of one form in file order.

        Args:
            form_id: Form identifier, compared by its text form.

        Returns:
            Matching records.
        """
        _, records = self._load()
        selected = tuple(record for record in records if str(record.form_id) == str(form_id))
        _LOGGER.info(
            "records_fetched",
            source=str(self._file_path),
            form_id=form_id,
            record_count=len(selected),
        )
        return selected

    def _load(self) -> tuple[tuple[FormSummary, ...], tuple[FormRecord, ...]]:
        """Read and parse the export file.

        Raises:
            FormFilterSourceError: If the file is missing or malformed.
        """
        if not self._file_path.is_file():
            raise FormFilterSourceError(
                f"Failed to read records at {self._file_path}: file does not exist. "
                "Provide an existing JSON or JSONL export."
            )
        suffix = self._file_path.suffix.lower()
        if suffix not in SUPPORTED_RECORD_FILE_EXTENSIONS:
            raise FormFilterSourceError(
                f"Unsupported record file {self._file_path}. "
                f"Supported extensions: {SUPPORTED_RECORD_FILE_EXTENSIONS}."
            )
        try:
            text = self._file_path.read_text(encoding="utf-8")
        except OSError as error:
            raise FormFilterSourceError(
                f"Failed to read records at {self._file_path}: {error}. "
                "Check file permissions and retry."
            ) from error
        if suffix == ".jsonl":
            return (), tuple(_parse_jsonl_records(self._file_path, text))
        return _parse_json_document(self._file_path, text)


def _parse_json_document(
    file_path: Path,
    text: str,
) -> tuple[tuple[FormSummary, ...], tuple[FormRecord, ...]]:
    """Parse a JSON export document.

    Args:
        file_path: Source path for error context.
        text: Raw JSON text.

    Returns:
        Pair of declared forms and records.

    Raises:
        FormFilterSourceError: If the document shape is invalid.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as error:
        raise FormFilterSourceError(
            f"Failed to parse JSON records at {file_path}: {error.msg} "
            f"(line {error.lineno}). Fix the export and retry."
        ) from error
    if isinstance(payload, list):
        record_rows = expect_object_list(payload, f"records in {file_path}")
        return (), tuple(form_record_from_payload(row) for row in record_rows)
    if not isinstance(payload, dict):
        raise FormFilterSourceError(
            f"Invalid record file {file_path}: expected JSON object or array at top level."
        )
    form_rows = expect_object_list(payload.get("forms", []), f"forms in {file_path}")
    record_rows = expect_object_list(payload.get("records", []), f"records in {file_path}")
    return (
        tuple(form_summary_from_payload(row) for row in form_rows),
        tuple(form_record_from_payload(row) for row in record_rows),
    )


def _parse_jsonl_records(file_path: Path, text: str) -> list[FormRecord]:
    """Parse one record object per non-empty line.

    Raises:
        FormFilterSourceError: If any line is invalid.
    """
    records: list[FormRecord] = []
    for line_number, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        records.append(form_record_from_payload(_parse_jsonl_line(file_path, line, line_number)))
    return records


def _parse_jsonl_line(file_path: Path, line: str, line_number: int) -> Mapping[str, Any]:
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as error:
        raise FormFilterSourceError(
            f"Invalid JSON at {file_path}:{line_number}: {error.msg}. Fix the line and retry."
        ) from error
    if not isinstance(payload, dict):
        raise FormFilterSourceError(
            f"Invalid record at {file_path}:{line_number}: expected JSON object."
        )
    return payload


def _sort_key(form_id: int | str) -> tuple[int, int, str]:
    if isinstance(form_id, int):
        return (0, form_id, "")
    return (1, 0, str(form_id))
