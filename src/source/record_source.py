"""Record source protocol and factory.

This module defines the data-source collaborator used by the SDK and
selects a concrete source from a configured URI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from core.config import FormFilterConfig
from core.constants import HTTP_SOURCE_PREFIXES
from core.errors import FormFilterConfigError
from core.types import FormRecord, FormSummary
from source.file_source import FileRecordSource
from source.rest_source import RestRecordSource


class RecordSource(Protocol):
    """Supplies forms and unfiltered record collections."""

    def list_forms(self) -> tuple[FormSummary, ...]:
        """Return available forms ordered by id."""
        ...

    def fetch_records(self, form_id: int | str) -> tuple[FormRecord, ...]:
        """Return every record of one form."""
        ...


def build_record_source(config: FormFilterConfig) -> RecordSource:
    """Create a record source for the configured URI.

    Args:
        config: Runtime configuration.

    Returns:
        HTTP source for ``http(s)://`` URIs, file source otherwise.

    Raises:
        FormFilterConfigError: If no source is configured.
    """
    if not config.source_uri:
        raise FormFilterConfigError(
            "No record source configured. Set FORMFILTER_SOURCE or pass --source "
            "with a JSON/JSONL file path or an http(s):// API base URL."
        )
    if config.source_uri.startswith(HTTP_SOURCE_PREFIXES):
        return RestRecordSource(
            base_url=config.source_uri,
            api_token=config.api_token,
            timeout_seconds=config.timeout_seconds,
        )
    return FileRecordSource(Path(config.source_uri).expanduser())
