"""Runtime configuration model for formfilter.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os

from core.constants import DEFAULT_LOG_LEVEL, DEFAULT_TIMEOUT_SECONDS, SUPPORTED_LOG_LEVELS
from core.errors import FormFilterConfigError


@dataclass(frozen=True)
class FormFilterConfig:
    """Validated runtime configuration.

    Attributes:
        source_uri: Optional record source, a local file path or http(s) base URL.
        api_token: Optional bearer token sent by the HTTP record source.
        timeout_seconds: HTTP request timeout.
        log_level: Minimum structured log level name.
    """

    source_uri: str | None
    api_token: str | None
    timeout_seconds: float
    log_level: str

    @classmethod
    def from_env(cls) -> "FormFilterConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            FormFilterConfigError: If environment values are invalid.
        """
        source_uri = os.getenv("FORMFILTER_SOURCE") or None
        api_token = os.getenv("FORMFILTER_API_TOKEN") or None
        timeout_value = os.getenv("FORMFILTER_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        log_level_value = os.getenv("FORMFILTER_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        return cls(
            source_uri=source_uri,
            api_token=api_token,
            timeout_seconds=_parse_timeout(timeout_value),
            log_level=_parse_log_level(log_level_value),
        )


def _parse_timeout(raw_value: str) -> float:
    """Parse the HTTP timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive timeout in seconds.

    Raises:
        FormFilterConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise FormFilterConfigError(
            "Invalid FORMFILTER_TIMEOUT_SECONDS value: "
            f"expected number, got '{raw_value}'. "
            "Set FORMFILTER_TIMEOUT_SECONDS to a positive number of seconds."
        ) from error
    if not math.isfinite(timeout) or timeout <= 0:
        raise FormFilterConfigError(
            f"Invalid FORMFILTER_TIMEOUT_SECONDS value: {raw_value} must be positive."
        )
    return timeout


def _parse_log_level(raw_value: str) -> str:
    """Parse the log level environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Upper-cased log level name.

    Raises:
        FormFilterConfigError: If level is not supported.
    """
    level = raw_value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise FormFilterConfigError(
            f"Invalid FORMFILTER_LOG_LEVEL value '{raw_value}'. "
            f"Use one of: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return level
