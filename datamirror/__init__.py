"""
DataMirror - generic field mapping between records and their external forms.

Maps instances of any annotated record type (dataclass, pydantic model or plain
class with ``str`` / ``int`` / ``float`` fields) to and from:

- request parameters, single or indexed (``name_1``, ``name_2``)
- relational result rows
- positional statement parameters and matching ``FIELD = ?`` predicates
- concurrency-safe maps, query strings and flat JSON text

Conversion is best-effort: per-field failures are skipped (and reported in an
error ledger for request loads) instead of aborting the operation.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "Apache-2.0"

# Public API exports
from datamirror.codec.sources import MappingRow, ParameterList, RequestParameters
from datamirror.config import Settings, get_settings
from datamirror.domain.catalog import FieldCatalog, catalog_for, fields
from datamirror.domain.models import (
    REQUEST_ERRORS_ONLOAD,
    DataMirrorError,
    FieldDescriptor,
    FieldError,
    LoadResult,
    TypeIntrospectionError,
    TypeTag,
)
from datamirror.domain.sentinels import FORCE_NULL, FORCE_ZERO, FieldValue, Sentinel
from datamirror.encoders import as_json, as_map, as_query_string
from datamirror.loaders import load_from_request, load_from_row, load_indexed, load_rows
from datamirror.mirror import DataMirror
from datamirror.statements import bind_parameters, bound_values, marker_key_filter, where_clause
from datamirror.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Catalog and models
    "FieldCatalog",
    "FieldDescriptor",
    "FieldError",
    "FieldValue",
    "LoadResult",
    "TypeTag",
    "catalog_for",
    "fields",
    # Sentinels
    "FORCE_NULL",
    "FORCE_ZERO",
    "Sentinel",
    # Errors
    "DataMirrorError",
    "REQUEST_ERRORS_ONLOAD",
    "TypeIntrospectionError",
    # Adapters
    "MappingRow",
    "ParameterList",
    "RequestParameters",
    # Operations
    "DataMirror",
    "as_json",
    "as_map",
    "as_query_string",
    "bind_parameters",
    "bound_values",
    "load_from_request",
    "load_from_row",
    "load_indexed",
    "load_rows",
    "marker_key_filter",
    "where_clause",
    # Logging
    "configure_logging",
    "get_logger",
]
