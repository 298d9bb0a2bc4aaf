"""
Record -> flat JSON-like object text.

Every entry is string-valued: ``{"age":"30", "name":"Al"}``. Only significant
fields are written, as in the query string: ``FORCE_ZERO`` prints as ``"0"``
and ``FORCE_NULL`` is left out.
The output is not checked against a JSON grammar beyond the string escaping.
"""

from __future__ import annotations

from typing import Any, List, Tuple

from datamirror.codec.escaper import escape
from datamirror.codec.values import format_number, materialize
from datamirror.domain.models import TypeIntrospectionError, TypeTag
from datamirror.domain.sentinels import ValueState
from datamirror.statements.selection import significant_fields
from datamirror.utils.logging import get_logger

log = get_logger(__name__)

ENTRY_SEPARATOR = ", "


class JsonObjectBuilder:
    """Accumulates escaped ``(name, text)`` entries and renders them once."""

    def __init__(self) -> None:
        self._entries: List[Tuple[str, str]] = []

    def add(self, name: str, text: str) -> "JsonObjectBuilder":
        self._entries.append((escape(name), text))
        return self

    def __len__(self) -> int:
        return len(self._entries)

    def build(self) -> str:
        body = ENTRY_SEPARATOR.join(f'"{name}":"{text}"' for name, text in self._entries)
        return "{" + body + "}"


def as_json(record: Any) -> str:
    builder = JsonObjectBuilder()
    try:
        for field, value in significant_fields(record):
            if value.state is ValueState.FORCE_NULL:
                continue
            plain = materialize(field, value)
            if field.type_tag is TypeTag.TEXT:
                builder.add(field.name, escape(plain))
            else:
                builder.add(field.name, format_number(field, plain))
    except TypeIntrospectionError as exc:
        log.warning("JSON not built: %s", exc)
        return ""
    return builder.build()


__all__ = ["JsonObjectBuilder", "as_json"]
