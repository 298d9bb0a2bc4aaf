"""
Bind a record's significant fields to positional statement parameters.

The binding order matches ``where_clause``:

    sql = f"SELECT * FROM customer WHERE {where_clause(probe)}"
    cursor.execute(sql, bound_values(probe))
"""

from __future__ import annotations

from typing import Any, List, Optional, TypeVar

from datamirror.codec.abstract import StatementSink
from datamirror.codec.sources import ParameterList
from datamirror.codec.values import bind_value
from datamirror.config import Settings
from datamirror.domain.models import TypeIntrospectionError
from datamirror.statements.selection import KeyFilter, significant_fields
from datamirror.utils.logging import get_logger

log = get_logger(__name__)

S = TypeVar("S", bound=StatementSink)


def bind_parameters(
    record: Any,
    sink: S,
    exclude_keys: bool = False,
    *,
    key_filter: Optional[KeyFilter] = None,
    start: int = 1,
    settings: Optional[Settings] = None,
) -> S:
    """
    Bind every significant field of ``record`` to ``sink``.

    Slots are filled from ``start`` on, one per field. ``FORCE_ZERO`` binds a
    typed zero, ``FORCE_NULL`` a typed NULL, and text shaped like ``DD/MM/YYYY``
    is bound in ``YYYYMMDDhhmmss`` form. Errors raised by the sink itself
    propagate.
    """
    position = start
    try:
        for field, value in significant_fields(record, exclude_keys, key_filter, settings):
            position = bind_value(sink, position, field, value)
    except TypeIntrospectionError as exc:
        log.warning("Parameters not bound: %s", exc)
    return sink


def bound_values(
    record: Any,
    exclude_keys: bool = False,
    *,
    key_filter: Optional[KeyFilter] = None,
    settings: Optional[Settings] = None,
) -> List[Any]:
    """Bound values as a plain list, ready for DB-API ``execute``."""
    return bind_parameters(
        record, ParameterList(), exclude_keys, key_filter=key_filter, settings=settings
    ).values


__all__ = ["bind_parameters", "bound_values"]
