"""
Populate a record from request parameters.

Every parameter whose key equals a field name is converted to the field type
and assigned. Conversion failures never abort the load: the field keeps its
previous value and the (name, raw value) pair goes into a bounded error ledger
returned with the record.

Usage:
    from datamirror.loaders import load_from_request

    result = load_from_request(Customer(), {"name": "Al", "age": "x"})
    result.record.name     # "Al"
    result.errors          # [FieldError(name="age", raw_value="x")]
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from datamirror.codec.abstract import has_attribute_channel
from datamirror.codec.sources import as_parameter_source
from datamirror.codec.values import assign_text
from datamirror.config import Settings, get_settings
from datamirror.domain.catalog import catalog_for
from datamirror.domain.models import (
    REQUEST_ERRORS_ONLOAD,
    DataMirrorError,
    FieldError,
    LoadResult,
    TypeIntrospectionError,
)
from datamirror.utils.logging import get_logger

log = get_logger(__name__)

R = TypeVar("R")


def load_from_request(
    record: R,
    params: Any,
    url_decode: bool = False,
    *,
    settings: Optional[Settings] = None,
) -> LoadResult[R]:
    """
    Load ``record`` from a parameter source.

    Parameters
    ----------
    record : Any
        Record instance to populate in place.
    params : ParameterSource | Mapping
        Request parameters; plain mappings (``str`` or list values) are wrapped.
    url_decode : bool
        Percent-decode text values with the configured legacy encoding first.
    settings : Settings, optional
        Overrides ``get_settings()``.

    Returns
    -------
    LoadResult
        The record plus at most ``settings.error_ledger_size`` field errors.
        When errors exist and the source has ``set_attribute``, the ledger is
        also attached to it under ``REQUEST_ERRORS_ONLOAD``.
    """
    settings = settings or get_settings()
    result: LoadResult[R] = LoadResult(record)

    try:
        catalog = catalog_for(record)
    except TypeIntrospectionError as exc:
        log.warning("Request parameters not loaded: %s", exc)
        return result

    source = as_parameter_source(params)
    failures = 0
    for name in source.keys():
        field = catalog.get(name)
        if field is None:
            continue
        raw = source.get(name)
        try:
            assign_text(
                record,
                field,
                raw,
                url_decoding=url_decode,
                encoding=settings.text_encoding,
                decimal_separator=settings.decimal_separator,
                grouping_separator=settings.grouping_separator,
            )
        except DataMirrorError as exc:
            failures += 1
            log.debug("Parameter not loaded: %s", exc, extra={"field": name, "value": raw})
            if len(result.errors) < settings.error_ledger_size:
                result.errors.append(FieldError(name=name, raw_value=raw))

    if failures > len(result.errors):
        log.debug(
            "Error ledger full, %d failures not recorded",
            failures - len(result.errors),
            extra={"record_type": type(record).__name__},
        )
    if result.errors and has_attribute_channel(source):
        source.set_attribute(REQUEST_ERRORS_ONLOAD, list(result.errors))  # type: ignore[attr-defined]
    return result


__all__ = ["load_from_request"]
