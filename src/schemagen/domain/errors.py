"""Domain error definitions."""

from __future__ import annotations


class SchemaGenError(RuntimeError):
    """Base class for errors raised by schema cataloging and generation."""


class EntryPointNotFoundError(SchemaGenError):
    """Raised when no readme can be found for a base path."""

    def __init__(self, message: str, *, base_path: str) -> None:
        super().__init__(message)
        self.base_path = base_path


class InvalidReferenceError(SchemaGenError):
    """Raised when a reference points outside of the trusted schema location."""


class MalformedSchemaError(SchemaGenError):
    """Raised when a referenced schema lacks the expected resource enumerations."""


class GenerationFailure(SchemaGenError):
    """Raised by a schema generator when generating an entry fails."""
