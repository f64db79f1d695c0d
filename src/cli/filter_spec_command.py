"""Filter-spec CLI command wiring.

This module registers the filter-spec subcommand and runs a YAML filter
spec against the snapshot of the form it names.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Any

from browse.form_sdk import FormFilterClient
from cli.record_display import format_records, records_to_json
from core.config import FormFilterConfig
from core.filter_spec import load_filter_spec


def add_filter_spec_command(subparsers: Any) -> None:
    """Register filter-spec subcommand."""
    parser = subparsers.add_parser(
        "filter-spec",
        help="Run a declarative YAML filter spec",
    )
    parser.add_argument("spec_file", help="Path to YAML filter-spec file")
    parser.add_argument("--json", action="store_true", help="Print matching records as JSON")


def run_filter_spec_command(config: FormFilterConfig, args: argparse.Namespace) -> int:
    """Handle filter-spec command invocation.

    The spec's ``source`` applies only when ``--source`` was not given.
    """
    spec = load_filter_spec(args.spec_file)
    if spec.source_uri and not args.source:
        config = replace(config, source_uri=spec.source_uri)
    view = FormFilterClient(config).form(spec.form_id).filter(spec.request)
    if args.json:
        print(records_to_json(view.records))
        return 0
    for line in format_records(view.records):
        print(line)
    return 0
