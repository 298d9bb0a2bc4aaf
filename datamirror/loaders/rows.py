"""Populate records from relational result rows."""

from __future__ import annotations

from typing import Any, Iterable, List, TypeVar

from datamirror.codec.sources import as_row_source
from datamirror.codec.values import read_column, write_value
from datamirror.domain.catalog import catalog_for
from datamirror.domain.models import DataMirrorError, TypeIntrospectionError
from datamirror.utils.logging import get_logger

log = get_logger(__name__)

R = TypeVar("R")


def load_from_row(record: R, row: Any) -> R:
    """
    Copy each field's column (upper-cased field name) from ``row``.

    Text columns that are NULL, blank, "null" or "undefined" load as "". A
    missing or unconvertible column leaves the field as it was.
    """
    try:
        catalog = catalog_for(record)
    except TypeIntrospectionError as exc:
        log.warning("Row not loaded: %s", exc)
        return record

    source = as_row_source(row)
    for field in catalog:
        try:
            write_value(record, field, read_column(source, field))
        except DataMirrorError as exc:
            log.debug("Column not loaded: %s", exc, extra={"field": field.name})
    return record


def load_rows(record_type: Any, rows: Iterable[Any]) -> List[Any]:
    """Map every row to a fresh record of ``record_type``."""
    try:
        catalog = catalog_for(record_type)
        return [load_from_row(catalog.new_instance(), row) for row in rows]
    except TypeIntrospectionError as exc:
        log.warning("Rows not loaded: %s", exc)
        return []


__all__ = ["load_from_row", "load_rows"]
