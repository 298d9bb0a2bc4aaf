"""
Populate several records from one set of indexed request parameters.

Keys look like ``<field><sep><instance>``, e.g. ``name_1`` / ``age_1`` /
``name_2``. Each distinct instance key gets its own blank record; parameters of
the same instance need not be contiguous.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from datamirror.codec.sources import as_parameter_source
from datamirror.codec.values import assign_text
from datamirror.config import Settings, get_settings
from datamirror.domain.catalog import catalog_for
from datamirror.domain.models import DataMirrorError, TypeIntrospectionError
from datamirror.utils.logging import get_logger

log = get_logger(__name__)


def load_indexed(
    prototype: Any,
    params: Any,
    *,
    separator: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    """
    Build one record per instance key.

    ``prototype`` is the record type or any instance of it; new records come
    from its no-argument constructor. Keys are split at the first separator, so
    instance keys may contain it; record types with snake_case field names need
    another separator. Keys without a separator are ignored.
    Failed conversions are logged and skipped; there is no error ledger.

    Returns
    -------
    dict
        Instance key -> record, in first-seen order.
    """
    settings = settings or get_settings()
    sep = separator or settings.index_separator

    try:
        catalog = catalog_for(prototype)
    except TypeIntrospectionError as exc:
        log.warning("Indexed parameters not loaded: %s", exc)
        return {}

    source = as_parameter_source(params)
    records: Dict[str, Any] = {}
    for key in source.keys():
        name, found, instance_key = key.partition(sep)
        if not found:
            continue

        record = records.get(instance_key)
        if record is None:
            try:
                record = catalog.new_instance()
            except TypeIntrospectionError as exc:
                log.warning("Indexed parameters not loaded: %s", exc)
                return {}
            records[instance_key] = record

        field = catalog.get(name)
        if field is None:
            continue
        raw = source.get(key)
        try:
            assign_text(
                record,
                field,
                raw,
                encoding=settings.text_encoding,
                decimal_separator=settings.decimal_separator,
                grouping_separator=settings.grouping_separator,
            )
        except DataMirrorError as exc:
            log.debug(
                "Indexed parameter not loaded: %s",
                exc,
                extra={"field": name, "instance": instance_key, "value": raw},
            )

    return records


def load_indexed_list(prototype: Any, params: Any, **kwargs: Any) -> List[Any]:
    return list(load_indexed(prototype, params, **kwargs).values())


__all__ = ["load_indexed", "load_indexed_list"]
