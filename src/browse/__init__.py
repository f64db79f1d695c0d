"""Record browsing layer.

This module pairs record snapshots with filtered views and exposes the
SDK client used by the CLI and library callers.
"""
