"""
psycopg 3 helpers.

Compose record predicates as ``psycopg.sql`` fragments with ``%s`` placeholders
and map executed cursors back into records. Connections and cursors are always
supplied by the caller; nothing here opens or configures a connection.

Example
-------
    with psycopg.connect(dsn) as conn, conn.cursor() as cur:
        where, params = where_with_params(probe)
        cur.execute(sql.SQL("SELECT * FROM customer WHERE {}").format(where), params)
        customers = fetch_into(cur, Customer)
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

import psycopg
from psycopg import sql

from datamirror.config import Settings
from datamirror.domain.models import TypeIntrospectionError
from datamirror.loaders.rows import load_rows
from datamirror.statements.binder import bound_values
from datamirror.statements.selection import KeyFilter, significant_fields
from datamirror.utils.logging import get_logger

log = get_logger(__name__)


def compose_where(
    record: Any,
    exclude_keys: bool = False,
    *,
    key_filter: Optional[KeyFilter] = None,
    settings: Optional[Settings] = None,
) -> sql.Composed:
    """
    ``COL = %s AND ...`` for the significant fields of ``record``.

    Columns are emitted unquoted so PostgreSQL folds them like any other
    identifier. Clause order matches ``bound_values``.
    """
    try:
        clauses = [
            sql.SQL("{} = {}").format(sql.SQL(field.column), sql.Placeholder())
            for field, _ in significant_fields(record, exclude_keys, key_filter, settings)
        ]
    except TypeIntrospectionError as exc:
        log.warning("Predicate not composed: %s", exc)
        return sql.Composed([])
    return sql.SQL(" AND ").join(clauses)


def where_with_params(
    record: Any,
    exclude_keys: bool = False,
    *,
    key_filter: Optional[KeyFilter] = None,
    settings: Optional[Settings] = None,
) -> Tuple[sql.Composed, List[Any]]:
    where = compose_where(record, exclude_keys, key_filter=key_filter, settings=settings)
    return where, bound_values(record, exclude_keys, key_filter=key_filter, settings=settings)


def fetch_into(cursor: psycopg.Cursor[Any], record_type: Any) -> List[Any]:
    """
    Map the remaining rows of an executed cursor into new records.

    Works with tuple rows (column names come from ``cursor.description``) and
    with mapping rows such as ``psycopg.rows.dict_row``.
    """
    columns = [column.name for column in cursor.description or ()]
    rows = (
        row if isinstance(row, Mapping) else dict(zip(columns, row))
        for row in cursor.fetchall()
    )
    return load_rows(record_type, rows)


__all__ = ["compose_where", "fetch_into", "where_with_params"]
