"""errors.py - Located diagnostics raised while resolving a struct transform.

Every error carries a :class:`SourceLocation` pointing at the struct (and,
where one is to blame, the field) so the caller can attribute it.  Resolution
is all-or-nothing: the first error raised aborts that struct.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """Where in the struct description an error originated."""

    struct_name: str
    field_name: str | None = None
    declaration_index: int | None = None

    def __str__(self) -> str:
        if self.field_name is None:
            return self.struct_name
        return f"{self.struct_name}.{self.field_name}"

    def to_dict(self) -> dict[str, object]:
        return {
            "struct": self.struct_name,
            "field": self.field_name,
            "index": self.declaration_index,
        }


class BoolPackError(Exception):
    """Base class for every resolution failure."""

    kind = "Error"

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self) -> str:
        if self.location is None:
            return self.message
        return f"{self.location}: {self.message}"

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dict for JSON output."""
        return {
            "kind": self.kind,
            "message": self.message,
            "location": self.location.to_dict() if self.location else None,
        }


class AmbiguousConfigError(BoolPackError):
    """More than one configuration block targets the same field."""

    kind = "AmbiguousConfig"


class InvalidFieldTypeError(BoolPackError):
    """Configuration attached to a non-boolean (or non-existent) field."""

    kind = "InvalidFieldType"


class OutOfRangeError(BoolPackError):
    """Too many flags for the declared or selected container width."""

    kind = "OutOfRange"


class InvalidDefaultError(BoolPackError):
    """``default = true`` requested while the container is inline."""

    kind = "InvalidDefault"


class MalformedTemplateError(BoolPackError):
    """Name template lacks its ``%`` marker or has an invalid fragment."""

    kind = "MalformedTemplate"


class UnknownOptionError(BoolPackError):
    """Unrecognised configuration key, or a value of the wrong shape."""

    kind = "UnknownOption"
