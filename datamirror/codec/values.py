"""
Per-field value codec.

Converts between a record's native field values and the external forms the
engine deals with: request parameter strings, result row columns and
positional bind slots. Every helper here raises (``FieldAccessError`` or
``ConversionError``); the loaders, statements and encoders catch those errors
per field and move on.

Significance rule: ``None``, ``""`` and numeric zero are DEFAULT and are left
out of predicates, bindings and query strings. ``FORCE_ZERO`` / ``FORCE_NULL``
stored in a numeric field override that rule and bind ``0`` / NULL.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Optional, Pattern
from urllib.parse import unquote_plus

from datamirror.codec.abstract import RowSource, StatementSink
from datamirror.codec.dates import normalize_date
from datamirror.domain.models import (
    ConversionError,
    FieldAccessError,
    FieldDescriptor,
    TypeTag,
)
from datamirror.domain.sentinels import FORCE_ZERO, FieldValue, Sentinel, ValueState

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_NULL_TOKENS = frozenset({"null", "undefined"})
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_PLAIN_REAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[dDfF]?")
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def is_null_or_empty(text: Optional[str]) -> bool:
    """True for None, blank text and the literals "null" / "undefined" (any case)."""
    if text is None:
        return True
    stripped = text.strip()
    return stripped == "" or text.lower() in _NULL_TOKENS


def nvl(text: Optional[str]) -> str:
    return "" if is_null_or_empty(text) else text  # type: ignore[return-value]


def url_decode(text: str, encoding: str) -> str:
    if _BAD_PERCENT_RE.search(text):
        raise ConversionError(f"Malformed percent escape in {text!r}")
    try:
        return unquote_plus(text, encoding=encoding, errors="strict")
    except (LookupError, UnicodeDecodeError) as exc:
        raise ConversionError(f"Cannot decode {text!r} as {encoding}: {exc}") from exc


# ---------------------------------------------------------------------------
# Numeric parsing
# ---------------------------------------------------------------------------


def parse_integer(text: Optional[str]) -> int:
    """Signed decimal integer in the 32-bit range; no surrounding whitespace."""
    if text is None or not _INTEGER_RE.fullmatch(text):
        raise ConversionError(f"Not an integer: {text!r}")
    value = int(text)
    if value < INT_MIN or value > INT_MAX:
        raise ConversionError(f"Integer out of range: {text!r}")
    return value


@lru_cache(maxsize=8)
def _localized_pattern(decimal_separator: str, grouping_separator: str) -> Pattern[str]:
    return re.compile(
        rf"(-?)([0-9][0-9{re.escape(grouping_separator)}]*)?"
        rf"(?:{re.escape(decimal_separator)}([0-9]+))?"
    )


def _parse_localized_real(text: str, decimal_separator: str, grouping_separator: str) -> float:
    """
    Parse the longest numeric prefix written with local separators.

    ``1.234,5`` -> 1234.5 and ``12,5 kg`` -> 12.5 with the Italian defaults.
    """
    match = _localized_pattern(decimal_separator, grouping_separator).match(text)
    integer_part = (match.group(2) or "").replace(grouping_separator, "")
    fraction = match.group(3) or ""
    if not integer_part and not fraction:
        raise ConversionError(f"Not a number: {text!r}")
    return float(f"{match.group(1)}{integer_part or '0'}.{fraction or '0'}")


def parse_real(
    text: Optional[str],
    decimal_separator: str = ",",
    grouping_separator: str = ".",
) -> float:
    """
    Parse a real number, plain syntax first, local format second.

    Blank input reads as 0.0.
    """
    if text is None or text.strip() == "":
        return 0.0
    candidate = text.strip()
    if _PLAIN_REAL_RE.fullmatch(candidate):
        if candidate[-1] in "dDfF":
            candidate = candidate[:-1]
        return float(candidate)
    return _parse_localized_real(text, decimal_separator, grouping_separator)


# ---------------------------------------------------------------------------
# Record access
# ---------------------------------------------------------------------------


def read_value(record: Any, field: FieldDescriptor) -> FieldValue:
    """Classify the current value of ``field`` on ``record``."""
    raw = field.get(record)

    if isinstance(raw, Sentinel):
        if not field.type_tag.is_numeric:
            raise FieldAccessError(f"{field.name}: sentinel in a text field")
        return FieldValue.force_zero() if raw is FORCE_ZERO else FieldValue.force_null()
    if raw is None:
        return FieldValue.default(None)

    if field.type_tag is TypeTag.TEXT:
        if not isinstance(raw, str):
            raise FieldAccessError(f"{field.name}: expected text, got {type(raw).__name__}")
        return FieldValue.of(raw) if raw != "" else FieldValue.default(raw)

    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise FieldAccessError(f"{field.name}: expected a number, got {type(raw).__name__}")
    if field.type_tag is TypeTag.INTEGER:
        if not isinstance(raw, int):
            raise FieldAccessError(f"{field.name}: expected an integer, got {raw!r}")
        value: Any = raw
    else:
        value = float(raw)
    return FieldValue.of(value) if value != 0 else FieldValue.default(value)


def write_value(record: Any, field: FieldDescriptor, value: Any) -> None:
    """Store a native value, a sentinel or a ``FieldValue`` on the record."""
    if isinstance(value, FieldValue):
        value = value.value
    if isinstance(value, Sentinel) and not field.type_tag.is_numeric:
        raise FieldAccessError(f"{field.name}: sentinels only apply to numeric fields")
    field.set(record, value)


def materialize(field: FieldDescriptor, value: FieldValue) -> Any:
    """The plain value a field stands for once sentinels are resolved."""
    if value.state is ValueState.FORCE_ZERO:
        return 0.0 if field.type_tag is TypeTag.REAL else 0
    if value.state is ValueState.FORCE_NULL:
        return None
    return value.value


def format_number(field: FieldDescriptor, value: Any) -> str:
    """Textual form of a numeric value: ``30`` for integers, ``1.5`` for reals."""
    if field.type_tag is TypeTag.REAL:
        return repr(float(value))
    return str(int(value))


# ---------------------------------------------------------------------------
# External representations
# ---------------------------------------------------------------------------


def assign_text(
    record: Any,
    field: FieldDescriptor,
    raw: Optional[str],
    *,
    url_decoding: bool = False,
    encoding: str = "ISO-8859-15",
    decimal_separator: str = ",",
    grouping_separator: str = ".",
) -> bool:
    """
    Assign a request parameter string to ``field``.

    Text that is null-or-empty is ignored (returns False). Numbers are parsed
    and always assigned.
    """
    if field.type_tag is TypeTag.TEXT:
        if is_null_or_empty(raw):
            return False
        value = url_decode(raw, encoding) if url_decoding else raw  # type: ignore[arg-type]
        write_value(record, field, value)
    elif field.type_tag is TypeTag.INTEGER:
        write_value(record, field, parse_integer(raw))
    else:
        write_value(record, field, parse_real(raw, decimal_separator, grouping_separator))
    return True


def read_column(row: RowSource, field: FieldDescriptor) -> Any:
    """Read ``field``'s column from a row, coerced to the field type."""
    try:
        if field.type_tag is TypeTag.TEXT:
            return nvl(row.get_text(field.column))
        if field.type_tag is TypeTag.INTEGER:
            return row.get_int(field.column)
        return row.get_real(field.column)
    except (LookupError, TypeError, ValueError, ArithmeticError) as exc:
        raise FieldAccessError(f"Column {field.column}: {exc}") from exc


def bind_value(
    sink: StatementSink, position: int, field: FieldDescriptor, value: FieldValue
) -> int:
    """
    Bind one significant value at ``position``; return the next free position.

    DEFAULT values are not bound and leave the position unchanged.
    """
    if not value.significant:
        return position

    tag = field.type_tag
    if value.state is ValueState.FORCE_NULL:
        sink.set_null(position, tag)
    elif value.state is ValueState.FORCE_ZERO:
        if tag is TypeTag.REAL:
            sink.set_real(position, 0.0)
        else:
            sink.set_int(position, 0)
    elif tag is TypeTag.TEXT:
        sink.set_text(position, normalize_date(value.value))
    elif tag is TypeTag.INTEGER:
        sink.set_int(position, value.value)
    else:
        sink.set_real(position, float(value.value))
    return position + 1


__all__ = [
    "INT_MAX",
    "INT_MIN",
    "assign_text",
    "bind_value",
    "format_number",
    "is_null_or_empty",
    "materialize",
    "nvl",
    "parse_integer",
    "parse_real",
    "read_column",
    "read_value",
    "url_decode",
    "write_value",
]
