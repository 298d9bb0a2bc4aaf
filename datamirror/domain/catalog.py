"""
Field catalog: the type-tagged descriptor table of a record type.

A record type is any class whose fields are declared through annotations:
dataclasses, pydantic models, or plain annotated classes. Only ``str``, ``int``
and ``float`` fields are mapped (optionally wrapped in ``Optional``,
``Annotated`` or a union with ``Sentinel``); everything else is left alone.

Catalogs are built once per record type and shared by every mapping call:

    from datamirror.domain.catalog import catalog_for

    catalog = catalog_for(Customer)
    [f.name for f in catalog]     # ascending by upper-cased name
"""
from __future__ import annotations

import dataclasses
import threading
import types
from typing import (
    Annotated,
    Any,
    ClassVar,
    Dict,
    Iterator,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel

from datamirror.domain.models import (
    DataMirrorError,
    FieldDescriptor,
    TypeIntrospectionError,
    TypeTag,
)
from datamirror.domain.sentinels import Sentinel

_SCALAR_TAGS: Dict[Any, TypeTag] = {
    str: TypeTag.TEXT,
    int: TypeTag.INTEGER,
    float: TypeTag.REAL,
}

_IGNORED_UNION_MEMBERS = (type(None), Sentinel)


def _resolve_tag(hint: Any) -> Optional[TypeTag]:
    """Map an annotation to a type tag, or None when the field is not mapped."""
    origin = get_origin(hint)
    if origin is Annotated:
        return _resolve_tag(get_args(hint)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(hint) if arg not in _IGNORED_UNION_MEMBERS]
        tags = {_resolve_tag(arg) for arg in members}
        if len(tags) == 1:
            return tags.pop()
        return None
    if isinstance(hint, type):
        return _SCALAR_TAGS.get(hint)
    return None


def _declared_fields(record_type: type) -> Dict[str, Any]:
    """Field name -> annotation, in declaration order."""
    if issubclass(record_type, BaseModel):
        return {name: info.annotation for name, info in record_type.model_fields.items()}

    try:
        hints = get_type_hints(record_type, include_extras=True)
    except Exception as exc:
        raise TypeIntrospectionError(
            f"Cannot resolve annotations of {record_type.__name__}: {exc}"
        ) from exc

    if dataclasses.is_dataclass(record_type):
        return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(record_type)}
    return {
        name: hint
        for name, hint in hints.items()
        if get_origin(hint) is not ClassVar and hint is not ClassVar
    }


class FieldCatalog:
    """
    Immutable, ordered descriptor table of one record type.

    Fields are sorted ascending by ``name.upper()``; predicate building and
    parameter binding both depend on this order.
    """

    __slots__ = ("_record_type", "_fields", "_by_name")

    def __init__(self, record_type: type, descriptors: Tuple[FieldDescriptor, ...]) -> None:
        self._record_type = record_type
        self._fields = tuple(sorted(descriptors, key=lambda d: d.name.upper()))
        self._by_name = {d.name: d for d in self._fields}

    @classmethod
    def introspect(cls, record_type: type) -> "FieldCatalog":
        if not isinstance(record_type, type):
            raise TypeIntrospectionError(f"{record_type!r} is not a record type")

        descriptors = []
        for name, hint in _declared_fields(record_type).items():
            if name.startswith("_"):
                continue
            tag = _resolve_tag(hint)
            if tag is None:
                continue
            descriptors.append(FieldDescriptor(name=name, type_tag=tag))

        if not descriptors:
            raise TypeIntrospectionError(
                f"{record_type.__name__} exposes no text, integer or real fields"
            )
        return cls(record_type, tuple(descriptors))

    @property
    def record_type(self) -> type:
        return self._record_type

    @property
    def fields(self) -> Tuple[FieldDescriptor, ...]:
        return self._fields

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FieldCatalog({self._record_type.__name__}, {list(self.names())})"

    def names(self) -> Tuple[str, ...]:
        return tuple(d.name for d in self._fields)

    def get(self, name: str) -> Optional[FieldDescriptor]:
        """Exact (case-sensitive) lookup by field name."""
        return self._by_name.get(name)

    def new_instance(self) -> Any:
        """Create a blank record through the type's no-argument constructor."""
        try:
            return self._record_type()
        except Exception as exc:
            raise TypeIntrospectionError(
                f"{self._record_type.__name__} cannot be built without arguments"
            ) from exc

    def describe(self, record: Any) -> str:
        parts = []
        for descriptor in self._fields:
            try:
                value = descriptor.get(record)
            except DataMirrorError:
                value = "{error}"
            parts.append(f"{descriptor.name}:{value}")
        return f"[{self._record_type.__name__}] " + ", ".join(parts)


_CATALOGS: Dict[type, FieldCatalog] = {}
_lock = threading.Lock()


def catalog_for(record_or_type: Any) -> FieldCatalog:
    """
    Return the cached catalog of a record type (or of a record's type).

    The first call for a type introspects it under a lock; later calls are
    lock-free dictionary reads.

    Raises
    ------
    TypeIntrospectionError
        If the type exposes no mappable fields.
    """
    record_type = record_or_type if isinstance(record_or_type, type) else type(record_or_type)
    catalog = _CATALOGS.get(record_type)
    if catalog is not None:
        return catalog
    with _lock:
        catalog = _CATALOGS.get(record_type)
        if catalog is None:
            catalog = FieldCatalog.introspect(record_type)
            _CATALOGS[record_type] = catalog
        return catalog


def fields(record_or_type: Any) -> Tuple[FieldDescriptor, ...]:
    return catalog_for(record_or_type).fields


def clear_catalog_cache() -> None:
    with _lock:
        _CATALOGS.clear()


__all__ = ["FieldCatalog", "catalog_for", "clear_catalog_cache", "fields"]
