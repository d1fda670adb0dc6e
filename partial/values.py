"""Zero-value detection and primitive coercion."""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Sized
from typing import Any, Final

from pydantic import BaseModel

NOT_PRIMITIVE: Final = object()

_PRIMITIVE_TYPES: tuple[type, ...] = (bool, int, float, complex, str)


def is_primitive(value: Any) -> bool:
    """Return whether ``value`` is coerced directly rather than through ``PartialValue``."""

    return isinstance(value, _PRIMITIVE_TYPES)


def is_zero(value: Any) -> bool:
    """Return whether ``value`` is the natural default of its type.

    ``None``, ``False``, ``0``, ``""`` and empty containers are zero. Floats
    and complex numbers are zero only at positive zero; ``-0.0`` is a value.
    A nested dataclass or pydantic model is zero when every one of its fields
    is zero. A record met again while its own fields are being checked counts
    as non-zero, so reference cycles terminate.
    """

    return _is_zero(value, set())


def _is_zero(value: Any, visiting: set[int]) -> bool:
    if value is None:
        return True
    if isinstance(value, float):
        return _is_positive_zero(value)
    if isinstance(value, complex):
        return _is_positive_zero(value.real) and _is_positive_zero(value.imag)
    if is_primitive(value):
        return not value
    if isinstance(value, Sized):
        return len(value) == 0
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        names = [field.name for field in dataclasses.fields(value)]
    elif isinstance(value, BaseModel):
        names = list(type(value).model_fields)
    else:
        return False

    if id(value) in visiting:
        return False
    visiting.add(id(value))
    try:
        return all(_is_zero(getattr(value, name), visiting) for name in names)
    finally:
        visiting.discard(id(value))


def _is_positive_zero(number: float) -> bool:
    return number == 0.0 and math.copysign(1.0, number) > 0


def coerce_primitive(value: Any) -> Any:
    """Coerce a primitive (or a subclass such as an ``IntEnum`` member) to its builtin type.

    Returns ``NOT_PRIMITIVE`` for every other value.
    """

    # bool before int: bool is an int subclass.
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, complex):
        return complex(value)
    if isinstance(value, str):
        return str.__str__(value)
    return NOT_PRIMITIVE
