"""Tag discovery over record field metadata.

Supported record classes and where their fields declare tags:

- dataclasses: ``field(metadata={"db": "name"})``
- pydantic models: ``Field(json_schema_extra={"db": "name"})``
- SQLAlchemy mapped classes: ``mapped_column(info={"db": "name"})``

The per-class field table is built once and cached.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel
from pydantic.fields import FieldInfo
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import ColumnProperty, InstanceState, Mapper

from partial.errors import RecordKindError

RecordKind = Literal["dataclass", "pydantic", "orm"]


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A record field that declares the requested tag."""

    name: str
    tag: str
    index: int


@dataclass(frozen=True, slots=True)
class _DeclaredField:
    name: str
    tags: Mapping[str, Any]


def record_kind(obj: Any) -> RecordKind | None:
    """Classify a record instance, or return ``None`` when ``obj`` is not one."""

    if obj is None or isinstance(obj, type):
        return None
    if isinstance(sa_inspect(obj, raiseerr=False), InstanceState):
        return "orm"
    if dataclasses.is_dataclass(obj):
        return "dataclass"
    if isinstance(obj, BaseModel):
        return "pydantic"
    return None


def record_class_kind(record_type: Any) -> RecordKind | None:
    """Classify a record class, or return ``None`` when it is not one."""

    if not isinstance(record_type, type):
        return None
    if isinstance(sa_inspect(record_type, raiseerr=False), Mapper):
        return "orm"
    if dataclasses.is_dataclass(record_type):
        return "dataclass"
    if issubclass(record_type, BaseModel):
        return "pydantic"
    return None


def fields_with_tag(tag: str, record_type: type) -> list[FieldDescriptor]:
    """Return fields of ``record_type`` declaring ``tag``, in declaration order.

    Fields without the tag are skipped. An empty list means nothing matched.
    """

    kind = record_class_kind(record_type)
    if kind is None:
        raise RecordKindError(f"expected a record type, got {describe_type(record_type)}")
    return [
        FieldDescriptor(name=declared.name, tag=str(declared.tags[tag]), index=index)
        for index, declared in enumerate(_declared_fields(record_type, kind))
        if tag in declared.tags
    ]


def describe_type(value: Any) -> str:
    """Readable type name used in error messages."""

    value_type = value if isinstance(value, type) else type(value)
    module = value_type.__module__
    if module == "builtins":
        return value_type.__qualname__
    return f"{module}.{value_type.__qualname__}"


@lru_cache(maxsize=None)
def _declared_fields(record_type: type, kind: RecordKind) -> tuple[_DeclaredField, ...]:
    if kind == "dataclass":
        return tuple(
            _DeclaredField(name=field.name, tags=field.metadata)
            for field in dataclasses.fields(record_type)
        )
    if kind == "pydantic":
        return tuple(
            _DeclaredField(name=name, tags=_pydantic_tags(info))
            for name, info in record_type.model_fields.items()
        )
    mapper = sa_inspect(record_type)
    return tuple(
        _DeclaredField(name=prop.key, tags=_column_tags(prop))
        for prop in mapper.column_attrs
    )


def _pydantic_tags(info: FieldInfo) -> Mapping[str, Any]:
    # Callable json_schema_extra mutates a schema; it declares no tags.
    extra = info.json_schema_extra
    return extra if isinstance(extra, dict) else {}


def _column_tags(prop: ColumnProperty) -> Mapping[str, Any]:
    tags: dict[str, Any] = {}
    for column in prop.columns:
        tags.update(getattr(column, "info", {}))
    tags.update(prop.info)
    return tags
