"""SQLAlchemy update helpers driven by partial extraction.

Tag values name column attributes of the target model, so a PATCH payload
declared as a pydantic model or dataclass maps straight onto an ORM update.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement, Update, inspect as sa_inspect, update
from sqlalchemy.orm import Mapper

from partial.errors import RecordKindError, UnmappedColumnError
from partial.extractor import extract
from partial.tags import describe_type


def update_values(model: type, record: Any, tag: str | None = None) -> dict[str, Any]:
    """Extract ``record`` and verify every key is a column attribute of ``model``."""

    columns = _column_keys(model)
    values = extract(record, tag)
    unknown = sorted(key for key in values if key not in columns)
    if unknown:
        raise UnmappedColumnError(
            f"{describe_type(model)} has no column attribute(s): {', '.join(unknown)}"
        )
    return values


def build_update(
    model: type,
    record: Any,
    *criteria: ColumnElement[bool],
    tag: str | None = None,
) -> Update | None:
    """Build ``UPDATE model SET ... WHERE criteria`` from ``record``.

    Returns ``None`` when ``record`` has no non-zero tagged fields.
    """

    values = update_values(model, record, tag)
    if not values:
        return None
    return update(model).where(*criteria).values(**values)


def apply_partial(target: Any, record: Any, tag: str | None = None) -> dict[str, Any]:
    """Set the extracted values of ``record`` on ORM instance ``target``."""

    values = update_values(type(target), record, tag)
    for key, value in values.items():
        setattr(target, key, value)
    return values


def _column_keys(model: type) -> set[str]:
    mapper = sa_inspect(model, raiseerr=False) if isinstance(model, type) else None
    if not isinstance(mapper, Mapper):
        raise RecordKindError(f"expected a mapped model class, got {describe_type(model)}")
    return {prop.key for prop in mapper.column_attrs}
