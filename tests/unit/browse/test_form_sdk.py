"""Unit tests for the form record SDK."""

from __future__ import annotations

from dataclasses import replace

import pytest

from browse.form_sdk import FormFilterClient
from core.config import FormFilterConfig
from core.errors import FormFilterConfigError
from core.types import Criterion, FieldKind, FilterLogic, FilterRequest, FormRecord, FormSummary
from tests.fixture_paths import fixture_path


class _CountingSource:
    """In-memory record source that counts fetches."""

    def __init__(self) -> None:
        self.fetch_count = 0

    def list_forms(self) -> tuple[FormSummary, ...]:
        return (FormSummary(form_id=1, name="Listings"),)

    def fetch_records(self, form_id: int | str) -> tuple[FormRecord, ...]:
        self.fetch_count += 1
        return (
            FormRecord(record_id=1, values={"city": "Brisbane", "price": "100"}, form_id=form_id),
            FormRecord(record_id=2, values={"city": "Sydney", "price": "50"}, form_id=form_id),
        )


def _config(source_uri: str | None = None) -> FormFilterConfig:
    return FormFilterConfig(
        source_uri=source_uri,
        api_token=None,
        timeout_seconds=5.0,
        log_level="WARNING",
    )


def test_client_lists_forms_from_source() -> None:
    """Client should delegate form listing to the source."""
    client = FormFilterClient(_config(), source=_CountingSource())

    assert client.list_forms()[0].name == "Listings"


def test_form_filter_fetches_snapshot_once() -> None:
    """Filtering should fetch the snapshot once and evaluate locally."""
    source = _CountingSource()
    client = FormFilterClient(_config(), source=source)
    request = FilterRequest(
        criteria=(Criterion(field="price", operator="lessOrEqual", value="75"),),
        logic=FilterLogic.AND,
    )

    form = client.form(1)

    first_view = form.filter(request)
    second_view = form.filter(FilterRequest())
    fields = form.fields()

    assert [record.record_id for record in first_view.records] == [2]
    assert [record.record_id for record in second_view.records] == [1, 2]
    assert [field.name for field in fields] == ["city", "price"]
    assert first_view.snapshot is second_view.snapshot
    assert source.fetch_count == 1


def test_form_fields_are_discovered_from_snapshot() -> None:
    """Field discovery should describe the first fetched record."""
    client = FormFilterClient(_config(), source=_CountingSource())

    fields = client.form(1).fields()

    assert [(field.name, field.kind) for field in fields] == [
        ("city", FieldKind.TEXT),
        ("price", FieldKind.NUMBER),
    ]


def test_client_without_source_raises_config_error() -> None:
    """A client needs a configured or injected source."""
    with pytest.raises(FormFilterConfigError):
        FormFilterClient(_config())


def test_with_source_builds_file_backed_client() -> None:
    """Cloning with a file source should read that export."""
    client = FormFilterClient(_config(), source=_CountingSource())

    file_client = client.with_source(str(fixture_path("records/forms.json")))

    assert len(file_client.list_forms()) == 3


def test_config_source_selects_file_source() -> None:
    """Configured file paths should build a file source."""
    config = replace(_config(), source_uri=str(fixture_path("records/records.jsonl")))

    snapshot = FormFilterClient(config).form(1).snapshot()

    assert snapshot.form_id == 1 and len(snapshot.records) == 2
