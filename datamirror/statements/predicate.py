"""Conjunctive ``FIELD = ?`` filters built from a record's significant fields."""

from __future__ import annotations

from typing import Any, Optional

from datamirror.config import Settings
from datamirror.domain.models import TypeIntrospectionError
from datamirror.statements.selection import KeyFilter, significant_fields
from datamirror.utils.logging import get_logger

log = get_logger(__name__)


def where_clause(
    record: Any,
    exclude_keys: bool = False,
    *,
    key_filter: Optional[KeyFilter] = None,
    placeholder: str = "?",
    settings: Optional[Settings] = None,
) -> str:
    """
    Render ``A = ? AND B = ?`` for the significant fields of ``record``.

    Columns are the upper-cased field names, in catalog order. Fields forced to
    NULL keep their clause. Returns "" when nothing is significant.
    """
    try:
        clauses = [
            f"{field.column} = {placeholder}"
            for field, _ in significant_fields(record, exclude_keys, key_filter, settings)
        ]
    except TypeIntrospectionError as exc:
        log.warning("Predicate not built: %s", exc)
        return ""
    return " AND ".join(clauses)


__all__ = ["where_clause"]
