"""Custom exceptions for the conversion engine."""

from typing import Any, Optional


class CrosswalkError(Exception):
    """Base class for all conversion errors."""


class StructuralError(CrosswalkError):
    """Configuration mistake that aborts the triggering operation.

    Raised for a message-level target mismatch or a registry lookup miss.
    These indicate a broken schema or registry setup, not bad data.
    """

    def __init__(self, message: str, kind: str = "structural"):
        super().__init__(message)
        self.kind = kind

    @classmethod
    def target_mismatch(cls, schema: str, target: str) -> "StructuralError":
        """Create error for a message annotated with a target other than Record."""
        return cls(
            f"{schema} targets {target!r}; only 'Record' is supported",
            kind="target_mismatch",
        )

    @classmethod
    def not_found(cls, registry: str, name: str) -> "StructuralError":
        """Create error for an unregistered parser/validator/serializer name."""
        return cls(f"{registry} {name!r} not found", kind="not_found")


class FieldConversionError(CrosswalkError):
    """A single field could not be converted; remaining fields continue.

    Wraps parser failures, registry misses hit while processing a field,
    and required-field-absent conditions.
    """

    def __init__(self, field: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.cause = cause

    @classmethod
    def required_missing(cls, field: str) -> "FieldConversionError":
        return cls(field, "required field is missing")

    @classmethod
    def from_exception(cls, field: str, error: BaseException) -> "FieldConversionError":
        return cls(field, str(error), cause=error)


class ValidationError(CrosswalkError):
    """Advisory validation failure; the record is still fully populated."""

    def __init__(self, field: str, value: Any, rule: str, message: str):
        super().__init__(f"{field}: {rule}: {message}" if field else f"{rule}: {message}")
        self.field = field
        self.value = value
        self.rule = rule
        self.message = message

    def with_field(self, field: str) -> "ValidationError":
        """Copy of this error attributed to a source field."""
        return ValidationError(field, self.value, self.rule, self.message)
