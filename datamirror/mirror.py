"""
DataMirror facade: every mapping operation bound to one record.

Usage:
    from datamirror import DataMirror, ParameterList

    mirror = DataMirror.on(customer)
    sql = f"SELECT * FROM customer WHERE {mirror.where_clause()}"
    params = mirror.prepare(ParameterList()).values
    mirror.as_json()
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Optional, TypeVar

from datamirror.codec.abstract import StatementSink
from datamirror.config import Settings
from datamirror.domain.catalog import catalog_for
from datamirror.domain.models import LoadResult, TypeIntrospectionError
from datamirror.encoders.json_text import as_json
from datamirror.encoders.mapping import SynchronizedDict, as_map
from datamirror.encoders.query_string import as_query_string
from datamirror.loaders.indexed import load_indexed
from datamirror.loaders.request import load_from_request
from datamirror.loaders.rows import load_from_row
from datamirror.statements.binder import bind_parameters
from datamirror.statements.predicate import where_clause
from datamirror.statements.selection import KeyFilter

R = TypeVar("R")
S = TypeVar("S", bound=StatementSink)


class DataMirror(Generic[R]):
    """
    Maps one record to and from its external representations.

    ``key_filter`` decides which fields count as key fields when a caller asks
    to exclude them; by default any field whose name contains the configured
    key marker.
    """

    def __init__(
        self,
        record: R,
        *,
        key_filter: Optional[KeyFilter] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._record = record
        self._key_filter = key_filter
        self._settings = settings

    @classmethod
    def on(cls, record: R, **kwargs: Any) -> "DataMirror[R]":
        return cls(record, **kwargs)

    @property
    def data(self) -> R:
        return self._record

    def set(self, record: R) -> "DataMirror[R]":
        self._record = record
        return self

    # Outputs

    def as_map(self) -> SynchronizedDict:
        return as_map(self._record)

    def as_query_string(self, url_encode: bool = False) -> str:
        return as_query_string(self._record, url_encode, settings=self._settings)

    def as_json(self) -> str:
        return as_json(self._record)

    def where_clause(self, exclude_keys: bool = False, placeholder: str = "?") -> str:
        return where_clause(
            self._record,
            exclude_keys,
            key_filter=self._key_filter,
            placeholder=placeholder,
            settings=self._settings,
        )

    def prepare(self, sink: S, exclude_keys: bool = False, start: int = 1) -> S:
        return bind_parameters(
            self._record,
            sink,
            exclude_keys,
            key_filter=self._key_filter,
            start=start,
            settings=self._settings,
        )

    # Inputs

    def load_from_request(self, params: Any, url_decode: bool = False) -> LoadResult[R]:
        return load_from_request(self._record, params, url_decode, settings=self._settings)

    def load_from_row(self, row: Any) -> R:
        return load_from_row(self._record, row)

    def load_indexed(self, params: Any, separator: Optional[str] = None) -> Dict[str, R]:
        """Records of the mirrored record's type, one per instance key."""
        return load_indexed(self._record, params, separator=separator, settings=self._settings)

    def describe(self) -> str:
        try:
            return catalog_for(self._record).describe(self._record)
        except TypeIntrospectionError:
            return f"[{type(self._record).__name__}]"

    def __repr__(self) -> str:
        return f"DataMirror({self.describe()})"


__all__ = ["DataMirror"]
