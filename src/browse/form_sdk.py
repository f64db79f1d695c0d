"""Python SDK for form record queries.

This module exposes high-level APIs for listing forms, loading record
snapshots, discovering fields, and filtering records.
"""

from __future__ import annotations

from dataclasses import replace

from browse.record_view import RecordView
from core.config import FormFilterConfig
from core.types import FieldDescriptor, FilterRequest, FormSummary, RecordSnapshot
from query.field_discovery import discover_fields
from source.record_source import RecordSource, build_record_source


class FormFilterClient:
    """Primary SDK entry point for record queries."""

    def __init__(
        self,
        config: FormFilterConfig | None = None,
        source: RecordSource | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            source: Optional record source; built from config when omitted.

        Raises:
            FormFilterConfigError: If no source is given or configured.
        """
        self._config = config or FormFilterConfig.from_env()
        self._source = source or build_record_source(self._config)

    def list_forms(self) -> tuple[FormSummary, ...]:
        """List forms offered by the record source.

        Raises:
            FormFilterSourceError: If the source cannot be read.
        """
        return self._source.list_forms()

    def form(self, form_id: int | str) -> "FormRecords":
        """Get a record handle for one form.

        Args:
            form_id: Form identifier.

        Returns:
            Form record handle.
        """
        return FormRecords(form_id, self._source)

    def with_source(self, source_uri: str) -> "FormFilterClient":
        """Clone the client with a different source URI.

        Args:
            source_uri: File path or http(s) base URL.

        Returns:
            New SDK client instance.
        """
        return FormFilterClient(replace(self._config, source_uri=source_uri))


class FormRecords:
    """SDK handle for the records of one form."""

    def __init__(self, form_id: int | str, source: RecordSource) -> None:
        """Create form record handle.

        Args:
            form_id: Form identifier.
            source: Record source backend.
        """
        self._form_id = form_id
        self._source = source
        self._snapshot: RecordSnapshot | None = None

    @property
    def form_id(self) -> int | str:
        """Return form identifier."""
        return self._form_id

    def snapshot(self) -> RecordSnapshot:
        """Return the unfiltered records of this form.

        Records are fetched on first use and reused for every later view,
        field lookup, and filter on this handle.

        Raises:
            FormFilterSourceError: If the source cannot be read.
        """
        if self._snapshot is None:
            self._snapshot = RecordSnapshot(
                form_id=self._form_id,
                records=tuple(self._source.fetch_records(self._form_id)),
            )
        return self._snapshot

    def view(self) -> RecordView:
        """Wrap the snapshot in an unfiltered view."""
        return RecordView.of(self.snapshot())

    def fields(self) -> tuple[FieldDescriptor, ...]:
        """Discover filterable fields from the first record."""
        return discover_fields(self.snapshot().records)

    def filter(self, request: FilterRequest) -> RecordView:
        """Apply a filter request to the snapshot.

        Args:
            request: Criteria and logic.

        Returns:
            Filtered view holding the snapshot.
        """
        return self.view().apply(request)
