"""Exception types raised while extracting partial values from records."""


class ExtractError(RuntimeError):
    """Base class for every extraction failure."""


class RecordKindError(ExtractError):
    """Input is not a record instance (dataclass, pydantic model, or ORM row)."""


class RecordTypeError(RecordKindError):
    """Type metadata could not be resolved for the input."""


class DuplicateTagError(ExtractError):
    """Two fields of one record declare the same tag value."""


class CapabilityError(ExtractError):
    """A non-primitive field value does not implement ``PartialValue``."""


class ConversionError(ExtractError):
    """Raised by ``PartialValue`` implementations when a value cannot be converted."""


class UnmappedColumnError(ExtractError):
    """Extracted keys do not name column attributes of the target model."""
