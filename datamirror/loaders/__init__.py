"""
Loaders package for DataMirror.

Populate records from request parameters (single and indexed) and from result
rows.
"""

from datamirror.loaders.indexed import load_indexed, load_indexed_list
from datamirror.loaders.request import load_from_request
from datamirror.loaders.rows import load_from_row, load_rows

__all__ = [
    "load_from_request",
    "load_from_row",
    "load_indexed",
    "load_indexed_list",
    "load_rows",
]
