"""Sparse, tag-driven extraction of record fields for partial updates."""

from partial.capability import PartialValue
from partial.errors import (
    CapabilityError,
    ConversionError,
    DuplicateTagError,
    ExtractError,
    RecordKindError,
    RecordTypeError,
    UnmappedColumnError,
)
from partial.extractor import extract
from partial.tags import FieldDescriptor, fields_with_tag, record_kind
from partial.values import is_zero

__all__ = [
    "CapabilityError",
    "ConversionError",
    "DuplicateTagError",
    "ExtractError",
    "FieldDescriptor",
    "PartialValue",
    "RecordKindError",
    "RecordTypeError",
    "UnmappedColumnError",
    "extract",
    "fields_with_tag",
    "is_zero",
    "record_kind",
]
