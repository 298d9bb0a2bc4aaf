"""
Statements package for DataMirror.

Predicate building and positional parameter binding over the same ordered
selection of significant fields.
"""

from datamirror.statements.binder import bind_parameters, bound_values
from datamirror.statements.predicate import where_clause
from datamirror.statements.selection import KeyFilter, marker_key_filter, significant_fields

__all__ = [
    "KeyFilter",
    "bind_parameters",
    "bound_values",
    "marker_key_filter",
    "significant_fields",
    "where_clause",
]
