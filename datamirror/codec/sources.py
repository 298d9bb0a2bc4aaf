"""
Default adapters for the engine's collaborators.

- ``RequestParameters``: an in-memory parameter multimap with an attribute
  side channel, buildable from a mapping or a query string.
- ``MappingRow``: a row source over any mapping (DB-API dict rows, psycopg
  ``dict_row`` results), with case-insensitive column lookup.
- ``ParameterList``: a statement sink collecting positional values for
  DB-API ``cursor.execute(sql, params)``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import parse_qsl

from datamirror.codec.abstract import ParameterSource, RowSource
from datamirror.domain.models import TypeTag

ParameterValues = Union[
    Mapping[str, Union[str, Sequence[str], None]],
    Iterable[Tuple[str, Optional[str]]],
]


class RequestParameters:
    """
    Parameter multimap backed by a dict of lists.

    ``get`` returns the first value of a key, like a servlet request's
    ``getParameter``. ``attributes`` receives out-of-band diagnostics such as
    the error ledger of a load.
    """

    def __init__(self, values: ParameterValues = ()) -> None:
        self._values: Dict[str, List[Optional[str]]] = {}
        self.attributes: Dict[str, Any] = {}
        items = values.items() if isinstance(values, Mapping) else values
        for key, value in items:
            bucket = self._values.setdefault(str(key), [])
            if value is None or isinstance(value, str):
                bucket.append(value)
            else:
                bucket.extend(value)

    @classmethod
    def from_query_string(cls, query: str, encoding: str = "utf-8") -> "RequestParameters":
        """Parse ``a=1&b=x`` (a leading ``?`` or ``&`` is ignored), decoding with ``encoding``."""
        pairs = parse_qsl(query.lstrip("?&"), keep_blank_values=True, encoding=encoding)
        return cls(pairs)

    def keys(self) -> List[str]:
        return list(self._values)

    def get(self, key: str) -> Optional[str]:
        values = self._values.get(key)
        return values[0] if values else None

    def getlist(self, key: str) -> List[Optional[str]]:
        return list(self._values.get(key, ()))

    def items(self) -> List[Tuple[str, Optional[str]]]:
        """Every (key, value) pair, repeated keys included."""
        return [(key, value) for key, values in self._values.items() for value in values]

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"RequestParameters({self._values!r})"


def as_parameter_source(params: Any) -> ParameterSource:
    """Accept a ParameterSource, or wrap a plain mapping / multimap."""
    if isinstance(params, RequestParameters):
        return params
    if isinstance(params, Mapping):
        return RequestParameters(params)
    if isinstance(params, ParameterSource):
        return params
    raise TypeError(f"Unsupported parameter source: {type(params).__name__}")


class MappingRow:
    """Row source over a mapping; column names match case-insensitively."""

    def __init__(self, row: Mapping[str, Any]) -> None:
        self._row = {str(key).upper(): value for key, value in row.items()}

    def _lookup(self, column: str) -> Any:
        return self._row[column.upper()]

    def get_text(self, column: str) -> Optional[str]:
        value = self._lookup(column)
        return None if value is None else str(value)

    def get_int(self, column: str) -> int:
        value = self._lookup(column)
        return 0 if value is None else int(value)

    def get_real(self, column: str) -> float:
        value = self._lookup(column)
        return 0.0 if value is None else float(value)


def as_row_source(row: Any) -> RowSource:
    if isinstance(row, Mapping):
        return MappingRow(row)
    if isinstance(row, RowSource):
        return row
    raise TypeError(f"Unsupported row source: {type(row).__name__}")


class ParameterList:
    """
    Statement sink collecting bind values in slot order.

    Slots are 1-based; binding slot N requires slots 1..N-1 to be bound already.
    Re-binding an existing slot replaces its value.
    """

    def __init__(self) -> None:
        self._values: List[Any] = []
        self._types: List[TypeTag] = []

    def _put(self, position: int, value: Any, type_tag: TypeTag) -> None:
        index = position - 1
        if index < 0 or index > len(self._values):
            raise IndexError(f"Bind position {position} out of range (next slot is {len(self._values) + 1})")
        if index == len(self._values):
            self._values.append(value)
            self._types.append(type_tag)
        else:
            self._values[index] = value
            self._types[index] = type_tag

    def set_text(self, position: int, value: str) -> None:
        self._put(position, value, TypeTag.TEXT)

    def set_int(self, position: int, value: int) -> None:
        self._put(position, value, TypeTag.INTEGER)

    def set_real(self, position: int, value: float) -> None:
        self._put(position, value, TypeTag.REAL)

    def set_null(self, position: int, type_tag: TypeTag) -> None:
        self._put(position, None, type_tag)

    @property
    def values(self) -> List[Any]:
        return list(self._values)

    @property
    def types(self) -> List[TypeTag]:
        return list(self._types)

    def as_tuple(self) -> Tuple[Any, ...]:
        return tuple(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ParameterList({self._values!r})"


__all__ = [
    "MappingRow",
    "ParameterList",
    "RequestParameters",
    "as_parameter_source",
    "as_row_source",
]
