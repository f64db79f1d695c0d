"""formfilter CLI entry points.

This module exposes commands for listing forms, discovering fields,
and filtering record snapshots. It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Any, Sequence

from browse.form_sdk import FormFilterClient
from cli.filter_spec_command import add_filter_spec_command, run_filter_spec_command
from cli.record_display import format_field, format_form, format_records, records_to_json
from core.config import FormFilterConfig
from core.errors import FormFilterError
from core.logging_config import configure_logging
from core.types import FilterLogic
from query.criteria_parser import parse_filter_request


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="formfilter", description="Form record query CLI")
    parser.add_argument(
        "--source",
        help="Override FORMFILTER_SOURCE: JSON/JSONL file path or http(s) API base URL",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_forms_command(subparsers)
    _add_fields_command(subparsers)
    _add_records_command(subparsers)
    add_filter_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the formfilter CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.source)
        configure_logging(config.log_level)
        return _dispatch(parser, config, args)
    except FormFilterError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1


def _dispatch(
    parser: argparse.ArgumentParser,
    config: FormFilterConfig,
    args: argparse.Namespace,
) -> int:
    """Route parsed args to a command handler."""
    if args.command == "forms":
        return _run_forms_command(FormFilterClient(config))
    if args.command == "fields":
        return _run_fields_command(FormFilterClient(config), args)
    if args.command == "records":
        return _run_records_command(FormFilterClient(config), args)
    if args.command == "filter-spec":
        return run_filter_spec_command(config, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(source: str | None) -> FormFilterConfig:
    """Build config with optional source override.

    Args:
        source: Optional source URI override.

    Returns:
        Runtime configuration.
    """
    config = FormFilterConfig.from_env()
    if source:
        config = replace(config, source_uri=source)
    return config


def _run_forms_command(client: FormFilterClient) -> int:
    """Handle forms command."""
    for form in client.list_forms():
        print(format_form(form))
    return 0


def _run_fields_command(client: FormFilterClient, args: argparse.Namespace) -> int:
    """Handle fields command."""
    for field in client.form(args.form_id).fields():
        print(format_field(field))
    return 0


def _run_records_command(client: FormFilterClient, args: argparse.Namespace) -> int:
    """Handle records command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    request = parse_filter_request(args.where or [], args.logic)
    view = client.form(args.form_id).filter(request)
    if args.json:
        print(records_to_json(view.records))
        return 0
    for line in format_records(view.records):
        print(line)
    return 0


def _parse_form_id(raw_value: str) -> int | str:
    """Parse canonical numeric form ids as integers, keep other ids as text.

    Ids with leading zeros such as ``007`` stay text.
    """
    normalized = raw_value.strip()
    if normalized.isdigit() and str(int(normalized)) == normalized:
        return int(normalized)
    return normalized


def _add_forms_command(subparsers: Any) -> None:
    """Register forms subcommand."""
    subparsers.add_parser("forms", help="List forms offered by the record source")


def _add_fields_command(subparsers: Any) -> None:
    """Register fields subcommand."""
    parser = subparsers.add_parser("fields", help="Discover filterable fields of a form")
    parser.add_argument("--form-id", required=True, type=_parse_form_id, help="Form id")


def _add_records_command(subparsers: Any) -> None:
    """Register records subcommand."""
    parser = subparsers.add_parser("records", help="List and filter the records of a form")
    parser.add_argument("--form-id", required=True, type=_parse_form_id, help="Form id")
    parser.add_argument(
        "--where",
        action="append",
        nargs=3,
        metavar=("FIELD", "OPERATOR", "VALUE"),
        help="Filter criterion, e.g. --where price lessOrEqual 75 (repeatable)",
    )
    parser.add_argument(
        "--logic",
        default=FilterLogic.AND.value,
        type=str.upper,
        choices=[item.value for item in FilterLogic],
        help="Combine criteria with AND or OR",
    )
    parser.add_argument("--json", action="store_true", help="Print matching records as JSON")
