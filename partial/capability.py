"""Conversion contract for field types that are not primitives."""

from abc import ABC, abstractmethod
from typing import Any


class PartialValue(ABC):
    """Capability required of non-primitive field values.

    Subclass it, or simply define a callable ``partial_value`` method: the
    ``isinstance`` check is structural.
    """

    @abstractmethod
    def partial_value(self, current: Any) -> Any:
        """Convert the field's current value into the value placed in the mapping."""

    @classmethod
    def __subclasshook__(cls, subclass: type) -> bool:
        if cls is not PartialValue:
            return NotImplemented
        for base in subclass.__mro__:
            if "partial_value" in vars(base):
                return callable(vars(base)["partial_value"]) or NotImplemented
        return NotImplemented
