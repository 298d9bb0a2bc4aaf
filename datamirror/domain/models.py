"""
Domain models for DataMirror.

Defines the field descriptor table entries, the per-field conversion error
recorded while loading request parameters, the load result returned to callers,
and the exception hierarchy raised by the catalog and the value codec.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

R = TypeVar("R")

REQUEST_ERRORS_ONLOAD = "requestErrorsOnLoad"


class DataMirrorError(Exception):
    """Base class for mapping errors."""


class TypeIntrospectionError(DataMirrorError):
    """The record type exposes no mappable fields."""


class FieldAccessError(DataMirrorError):
    """A field could not be read or written on a record."""


class ConversionError(DataMirrorError, ValueError):
    """A raw value could not be converted to the field type."""


class TypeTag(str, Enum):
    """Semantic type of a mapped field."""

    TEXT = "text"
    INTEGER = "integer"
    REAL = "real"

    @property
    def is_numeric(self) -> bool:
        return self is not TypeTag.TEXT


class FieldDescriptor(BaseModel):
    """
    Catalog entry naming a record field and its semantic type.

    Access goes through plain attribute get/set on the record.
    """

    name: str = Field(..., description="Attribute name on the record.")
    type_tag: TypeTag = Field(..., description="Semantic type of the field.")

    model_config = {
        "frozen": True,
    }

    @property
    def column(self) -> str:
        """Column / placeholder name: the uppercased field name."""
        return self.name.upper()

    def get(self, record: Any) -> Any:
        try:
            return getattr(record, self.name)
        except AttributeError as exc:
            raise FieldAccessError(f"{type(record).__name__}.{self.name} is not readable") from exc

    def set(self, record: Any, value: Any) -> None:
        try:
            setattr(record, self.name, value)
        except (AttributeError, TypeError, ValueError) as exc:
            raise FieldAccessError(f"{type(record).__name__}.{self.name} is not writable") from exc


class FieldError(BaseModel):
    """A (field name, raw value) pair that failed conversion."""

    name: str
    raw_value: Optional[str] = None

    model_config = {
        "frozen": True,
    }

    def as_pair(self) -> tuple[str, Optional[str]]:
        return (self.name, self.raw_value)


@dataclass
class LoadResult(Generic[R]):
    """
    Outcome of loading a record from request parameters.

    ``errors`` is the bounded error ledger; an empty list means every matching
    parameter converted cleanly.
    """

    record: R
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


__all__ = [
    "REQUEST_ERRORS_ONLOAD",
    "ConversionError",
    "DataMirrorError",
    "FieldAccessError",
    "FieldDescriptor",
    "FieldError",
    "LoadResult",
    "TypeIntrospectionError",
    "TypeTag",
]
