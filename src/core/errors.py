"""formfilter exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class FormFilterError(Exception):
    """Base exception for all formfilter failures."""


class FormFilterConfigError(FormFilterError):
    """Raised for invalid runtime configuration."""


class FormFilterSourceError(FormFilterError):
    """Raised when forms or records cannot be fetched from a source."""


class FormFilterCriteriaError(FormFilterError):
    """Raised for invalid user-supplied filter criteria."""


class FormFilterSpecError(FormFilterError):
    """Raised for invalid or unsupported filter spec files."""
