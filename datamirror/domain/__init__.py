"""
Domain package for DataMirror.

Exports the field catalog, descriptor models, sentinels and error types shared
by the codec, loaders, statements and encoders. Keep this package focused on
data definitions; conversions live in ``datamirror.codec``.
"""

from datamirror.domain.catalog import FieldCatalog, catalog_for, clear_catalog_cache, fields
from datamirror.domain.models import (
    REQUEST_ERRORS_ONLOAD,
    ConversionError,
    DataMirrorError,
    FieldAccessError,
    FieldDescriptor,
    FieldError,
    LoadResult,
    TypeIntrospectionError,
    TypeTag,
)
from datamirror.domain.sentinels import FORCE_NULL, FORCE_ZERO, FieldValue, Sentinel, ValueState

__all__ = [
    "REQUEST_ERRORS_ONLOAD",
    "ConversionError",
    "DataMirrorError",
    "FORCE_NULL",
    "FORCE_ZERO",
    "FieldAccessError",
    "FieldCatalog",
    "FieldDescriptor",
    "FieldError",
    "FieldValue",
    "LoadResult",
    "Sentinel",
    "TypeIntrospectionError",
    "TypeTag",
    "ValueState",
    "catalog_for",
    "clear_catalog_cache",
    "fields",
]
