"""Core constants used across formfilter modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_LOG_LEVEL = "WARNING"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
HTTP_SOURCE_PREFIXES = ("http://", "https://")
SUPPORTED_RECORD_FILE_EXTENSIONS = (".json", ".jsonl")
FORM_ENDPOINT = "/form"
RECORD_ENDPOINT = "/record"
FILE_REFERENCE_PREFIX = "file:///"
GEO_DISPLAY_PRECISION = 4
FILTER_SPEC_VERSION = 1
