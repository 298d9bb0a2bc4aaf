"""
Codec package for DataMirror.

This module re-exports the collaborator protocols, their default adapters and
the per-field conversion helpers so downstream code can import from
`datamirror.codec` directly.
"""

from datamirror.codec.abstract import ParameterSource, RowSource, StatementSink
from datamirror.codec.dates import looks_like_local_date, normalize_date
from datamirror.codec.escaper import escape
from datamirror.codec.sources import (
    MappingRow,
    ParameterList,
    RequestParameters,
    as_parameter_source,
    as_row_source,
)
from datamirror.codec.values import (
    is_null_or_empty,
    materialize,
    nvl,
    parse_integer,
    parse_real,
    read_value,
    write_value,
)

__all__ = [
    # Protocols
    "ParameterSource",
    "RowSource",
    "StatementSink",
    # Adapters
    "MappingRow",
    "ParameterList",
    "RequestParameters",
    "as_parameter_source",
    "as_row_source",
    # Conversions
    "escape",
    "is_null_or_empty",
    "looks_like_local_date",
    "materialize",
    "normalize_date",
    "nvl",
    "parse_integer",
    "parse_real",
    "read_value",
    "write_value",
]
