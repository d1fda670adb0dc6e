"""Sparse extraction of tagged, non-zero record fields.

``extract`` turns a record into ``{tag value: field value}`` for every field
that declares the requested tag and does not hold its type's zero value. The
result is meant for partial updates: fields left at their default never reach
the update set.
"""

from __future__ import annotations

import logging
from typing import Any

from partial.capability import PartialValue
from partial.config import get_settings
from partial.errors import CapabilityError, DuplicateTagError, RecordKindError, RecordTypeError
from partial.tags import describe_type, fields_with_tag, record_kind
from partial.values import NOT_PRIMITIVE, coerce_primitive, is_zero

logger = logging.getLogger(__name__)


def extract(record: Any, tag: str | None = None) -> dict[str, Any]:
    """Return the non-zero fields of ``record`` that declare ``tag``, keyed by tag value.

    ``tag`` defaults to ``Settings.default_tag``. Any failure aborts the whole
    call; a partially built mapping is never returned.
    """

    tag_name = tag if tag is not None else get_settings().default_tag
    if record is None:
        raise RecordTypeError("cannot resolve record type of None")
    if record_kind(record) is None:
        raise RecordKindError(f"expected a record instance, got {describe_type(record)}")

    descriptors = fields_with_tag(tag_name, type(record))

    values: dict[str, Any] = {}
    seen: dict[str, str] = {}
    for descriptor in descriptors:
        first = seen.get(descriptor.tag)
        if first is not None:
            raise DuplicateTagError(
                f"fields {first!r} and {descriptor.name!r} of {describe_type(record)} "
                f"share {tag_name!r} tag value {descriptor.tag!r}"
            )
        seen[descriptor.tag] = descriptor.name

        current = getattr(record, descriptor.name)
        if is_zero(current):
            logger.debug("Skipping zero-valued field %s.%s", type(record).__name__, descriptor.name)
            continue

        coerced = coerce_primitive(current)
        if coerced is NOT_PRIMITIVE:
            coerced = _convert(current, field_name=descriptor.name)
        values[descriptor.tag] = coerced

    return values


def _convert(current: Any, *, field_name: str) -> Any:
    if not isinstance(current, PartialValue):
        raise CapabilityError(
            f"{describe_type(current)} (field {field_name!r}) does not implement PartialValue"
        )
    logger.debug("Converting field %s through %s.partial_value", field_name, type(current).__name__)
    return current.partial_value(current)
