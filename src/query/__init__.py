"""Client-side record query layer.

This module evaluates predicate criteria against record snapshots.
It owns value normalization, field discovery, and criteria parsing.
"""
