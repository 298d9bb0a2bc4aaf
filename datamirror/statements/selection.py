"""
Significant-field selection shared by the predicate builder and the binder.

Both walk the same generator, so the Nth ``FIELD = ?`` clause and the Nth bound
value always refer to the same field.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional, Tuple

from datamirror.codec.values import read_value
from datamirror.config import Settings, get_settings
from datamirror.domain.catalog import catalog_for
from datamirror.domain.models import FieldAccessError, FieldDescriptor
from datamirror.domain.sentinels import FieldValue
from datamirror.utils.logging import get_logger

log = get_logger(__name__)

KeyFilter = Callable[[FieldDescriptor], bool]


def marker_key_filter(marker: str) -> KeyFilter:
    """Key fields are those whose upper-cased name contains ``marker``."""
    token = marker.upper()

    def _is_key(field: FieldDescriptor) -> bool:
        return token in field.column

    return _is_key


def significant_fields(
    record: Any,
    exclude_keys: bool = False,
    key_filter: Optional[KeyFilter] = None,
    settings: Optional[Settings] = None,
) -> Iterator[Tuple[FieldDescriptor, FieldValue]]:
    """
    Yield ``(field, value)`` for every non-default field in catalog order.

    Raises ``TypeIntrospectionError`` on first iteration if the record type has
    no mappable fields. Unreadable fields are skipped. Without a ``key_filter``,
    key fields are matched by ``settings.key_marker``.
    """
    catalog = catalog_for(record)
    if exclude_keys and key_filter is None:
        key_filter = marker_key_filter((settings or get_settings()).key_marker)

    for field in catalog:
        if exclude_keys and key_filter(field):  # type: ignore[misc]
            continue
        try:
            value = read_value(record, field)
        except FieldAccessError as exc:
            log.debug("Field skipped: %s", exc, extra={"field": field.name})
            continue
        if value.significant:
            yield field, value


__all__ = ["KeyFilter", "marker_key_filter", "significant_fields"]
