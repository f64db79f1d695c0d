"""Public SDK surface for formfilter.

This module provides a stable import path for library users.
It re-exports the client, the filter engine, and typed models.
"""

from __future__ import annotations

from browse.form_sdk import FormFilterClient, FormRecords
from browse.record_view import RecordView
from core.config import FormFilterConfig
from core.filter_spec import FilterSpec, load_filter_spec
from core.types import (
    Criterion,
    FieldDescriptor,
    FieldKind,
    FilterLogic,
    FilterRequest,
    FormRecord,
    FormSummary,
    Operator,
    RecordSnapshot,
)
from query.criteria_parser import parse_criterion, parse_filter_request
from query.field_discovery import discover_fields
from query.predicate_filter import apply_filter
from source.file_source import FileRecordSource
from source.rest_source import RestRecordSource

__all__ = [
    "Criterion",
    "FieldDescriptor",
    "FieldKind",
    "FileRecordSource",
    "FilterLogic",
    "FilterRequest",
    "FilterSpec",
    "FormFilterClient",
    "FormFilterConfig",
    "FormRecord",
    "FormRecords",
    "FormSummary",
    "Operator",
    "RecordSnapshot",
    "RecordView",
    "RestRecordSource",
    "apply_filter",
    "discover_fields",
    "load_filter_spec",
    "parse_criterion",
    "parse_filter_request",
]
