"""
Record -> ``&name=value`` query string.

Only significant fields are written. ``FORCE_ZERO`` prints as ``0``;
``FORCE_NULL`` has no textual form and is left out.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple
from urllib.parse import quote_plus

from datamirror.codec.values import format_number, materialize
from datamirror.config import Settings, get_settings
from datamirror.domain.models import TypeIntrospectionError, TypeTag
from datamirror.domain.sentinels import ValueState
from datamirror.statements.selection import significant_fields
from datamirror.utils.logging import get_logger

log = get_logger(__name__)

ENCODING_ERROR_PREFIX = "*** Encoding error *** "


class QueryStringBuilder:
    """Accumulates ``(name, value)`` pairs and renders them once."""

    def __init__(self) -> None:
        self._entries: List[Tuple[str, str]] = []

    def add(self, name: str, value: str) -> "QueryStringBuilder":
        self._entries.append((name, value))
        return self

    def __len__(self) -> int:
        return len(self._entries)

    def build(self) -> str:
        return "".join(f"&{name}={value}" for name, value in self._entries)


def url_encode(text: str, encoding: str) -> str:
    """
    Form-encode ``text`` in ``encoding``.

    Characters the encoding cannot represent (or an unknown encoding) produce
    an inline error message instead of an exception.
    """
    try:
        return quote_plus(text, safe="*", encoding=encoding, errors="strict")
    except (LookupError, UnicodeEncodeError) as exc:
        return f"{ENCODING_ERROR_PREFIX}{exc}"


def as_query_string(
    record: Any,
    url_encode_text: bool = False,
    *,
    settings: Optional[Settings] = None,
) -> str:
    settings = settings or get_settings()
    builder = QueryStringBuilder()
    try:
        for field, value in significant_fields(record):
            if value.state is ValueState.FORCE_NULL:
                continue
            plain = materialize(field, value)
            if field.type_tag is TypeTag.TEXT:
                text = url_encode(plain, settings.text_encoding) if url_encode_text else plain
            else:
                text = format_number(field, plain)
            builder.add(field.name, text)
    except TypeIntrospectionError as exc:
        log.warning("Query string not built: %s", exc)
        return ""
    return builder.build()


__all__ = ["ENCODING_ERROR_PREFIX", "QueryStringBuilder", "as_query_string", "url_encode"]
