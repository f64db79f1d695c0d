"""Record source layer.

This module fetches forms and record snapshots from local files or a
PostgREST-style HTTP backend. The filter engine never issues requests.
"""
