"""
Collaborator interfaces consumed by the mapping engine.

The engine never talks to a web framework or a database driver directly; it
reads request parameters through ``ParameterSource``, result rows through
``RowSource`` and writes positional bind values into a ``StatementSink``.
Adapters for plain mappings and DB-API parameter lists live in
``datamirror.codec.sources``.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from datamirror.domain.models import TypeTag


@runtime_checkable
class ParameterSource(Protocol):
    """
    Request parameters: a multimap of string keys to string values.

    ``get`` returns the first value of a key, or None when the key is absent.
    Sources that also offer ``set_attribute(name, value)`` receive the error
    ledger of a request load.
    """

    def keys(self) -> Iterable[str]:
        ...

    def get(self, key: str) -> Optional[str]:
        ...


@runtime_checkable
class RowSource(Protocol):
    """
    One relational row, addressed by upper-cased column name.

    Lookups raise ``KeyError`` for unknown columns. SQL NULL reads as None for
    text and as zero for numbers.
    """

    def get_text(self, column: str) -> Optional[str]:
        ...

    def get_int(self, column: str) -> int:
        ...

    def get_real(self, column: str) -> float:
        ...


@runtime_checkable
class StatementSink(Protocol):
    """
    Positional bind slots of a parameterized statement.

    Positions are 1-based and follow the order of the ``?`` placeholders.
    """

    def set_text(self, position: int, value: str) -> None:
        ...

    def set_int(self, position: int, value: int) -> None:
        ...

    def set_real(self, position: int, value: float) -> None:
        ...

    def set_null(self, position: int, type_tag: TypeTag) -> None:
        ...


def has_attribute_channel(source: Any) -> bool:
    return callable(getattr(source, "set_attribute", None))


__all__ = ["ParameterSource", "RowSource", "StatementSink", "has_attribute_channel"]
