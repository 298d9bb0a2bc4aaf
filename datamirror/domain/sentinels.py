"""
Force-zero / force-null conventions.

A numeric field holding ``0`` is indistinguishable from an unset field and is
skipped by predicates, bindings and textual outputs. Callers that need a real
zero or a SQL NULL persisted assign one of the ``Sentinel`` members instead:

    order.discount = FORCE_ZERO   # binds 0
    order.parent_id = FORCE_NULL  # binds NULL

Record annotations may include the sentinel type (``int | Sentinel``) for
static checkers; the catalog ignores it when resolving the field type.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, NamedTuple


class Sentinel(Enum):
    FORCE_ZERO = "force-zero"
    FORCE_NULL = "force-null"

    def __repr__(self) -> str:
        return self.name


FORCE_ZERO = Sentinel.FORCE_ZERO
FORCE_NULL = Sentinel.FORCE_NULL


class ValueState(str, Enum):
    DEFAULT = "default"
    VALUE = "value"
    FORCE_ZERO = "force_zero"
    FORCE_NULL = "force_null"


class FieldValue(NamedTuple):
    """
    Explicit state of one field on one record.

    ``value`` keeps the stored value for DEFAULT (``None``, ``""`` or zero) so
    encoders can still tell an empty string from a missing one.
    """

    state: ValueState
    value: Any = None

    @property
    def significant(self) -> bool:
        return self.state is not ValueState.DEFAULT

    @classmethod
    def default(cls, value: Any = None) -> "FieldValue":
        return cls(ValueState.DEFAULT, value)

    @classmethod
    def of(cls, value: Any) -> "FieldValue":
        return cls(ValueState.VALUE, value)

    @classmethod
    def force_zero(cls) -> "FieldValue":
        return cls(ValueState.FORCE_ZERO, Sentinel.FORCE_ZERO)

    @classmethod
    def force_null(cls) -> "FieldValue":
        return cls(ValueState.FORCE_NULL, Sentinel.FORCE_NULL)


__all__ = ["FORCE_NULL", "FORCE_ZERO", "FieldValue", "Sentinel", "ValueState"]
