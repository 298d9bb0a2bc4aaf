"""
Record -> concurrency-safe mapping.

The resulting mapping is meant to be shared between threads, so every access
goes through a re-entrant lock.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterator, List, MutableMapping, Tuple

from datamirror.codec.values import materialize, read_value
from datamirror.domain.catalog import catalog_for
from datamirror.domain.models import FieldAccessError, TypeIntrospectionError
from datamirror.utils.logging import get_logger

log = get_logger(__name__)


class SynchronizedDict(MutableMapping[str, Any]):
    """Dict wrapper whose single and compound operations hold one RLock."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self._lock = threading.RLock()
        self._data: Dict[str, Any] = dict(*args, **kwargs)

    def __getitem__(self, key: str) -> Any:
        with self._lock:
            return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def __delitem__(self, key: str) -> None:
        with self._lock:
            del self._data[key]

    def __iter__(self) -> Iterator[str]:
        # Iterate over a snapshot so writers never invalidate readers.
        with self._lock:
            return iter(list(self._data))

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __repr__(self) -> str:
        with self._lock:
            return f"SynchronizedDict({self._data!r})"

    def setdefault(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.setdefault(key, default)

    def update(self, *args: Any, **kwargs: Any) -> None:  # type: ignore[override]
        with self._lock:
            self._data.update(*args, **kwargs)

    def items(self) -> List[Tuple[str, Any]]:  # type: ignore[override]
        with self._lock:
            return list(self._data.items())

    def values(self) -> List[Any]:  # type: ignore[override]
        with self._lock:
            return list(self._data.values())

    def copy(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._data)


def as_map(record: Any) -> SynchronizedDict:
    """
    Field name -> current value, in catalog order.

    Sentinels are resolved (``FORCE_ZERO`` -> 0, ``FORCE_NULL`` -> None);
    unreadable fields are left out.
    """
    result = SynchronizedDict()
    try:
        catalog = catalog_for(record)
    except TypeIntrospectionError as exc:
        log.warning("Map not built: %s", exc)
        return result

    for field in catalog:
        try:
            value = read_value(record, field)
        except FieldAccessError as exc:
            log.debug("Field skipped: %s", exc, extra={"field": field.name})
            continue
        result[field.name] = materialize(field, value)
    return result


__all__ = ["SynchronizedDict", "as_map"]
