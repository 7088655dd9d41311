"""Typed exceptions raised by the field mapping helpers.

Every class carries a machine-readable ``code`` so callers (usually a REST
transport layer) can branch on the type or the code instead of parsing
messages. Each one also derives from the closest builtin so existing
``except AttributeError`` / ``except ValueError`` handlers keep working.

    FieldMapError (base)
    +-- FieldAccessError            (AttributeError)
    +-- DuplicateFieldNameError     (ValueError)
    +-- UnsupportedRecordTypeError  (TypeError)

Date parsing never raises; it degrades to ``None``.
"""
from __future__ import annotations

__all__ = [
    "FieldMapError",
    "FieldAccessError",
    "DuplicateFieldNameError",
    "UnsupportedRecordTypeError",
]


class FieldMapError(Exception):
    """Base class for field mapping errors."""

    code: str = "FIELD_MAP_ERROR"


class FieldAccessError(FieldMapError, AttributeError):
    """A record does not expose a field declared in its metadata.

    Indicates caller misuse: a record of the wrong type was passed for the
    metadata in use.
    """

    code = "FIELD_ACCESS_ERROR"

    def __init__(self, record_type: str, field: str):
        self.record_type = record_type
        self.field = field
        super().__init__(f"Record of type {record_type} has no field '{field}'")


class DuplicateFieldNameError(FieldMapError, ValueError):
    """Two eligible fields resolve to the same Salesforce field name."""

    code = "DUPLICATE_FIELD_NAME"

    def __init__(self, record_type: str, field_name: str, fields: tuple[str, str]):
        self.record_type = record_type
        self.field_name = field_name
        self.fields = fields
        super().__init__(
            f"{record_type}: fields '{fields[0]}' and '{fields[1]}' both map to "
            f"Salesforce field '{field_name}'"
        )


class UnsupportedRecordTypeError(FieldMapError, TypeError):
    """Field metadata cannot be derived from the given class."""

    code = "UNSUPPORTED_RECORD_TYPE"

    def __init__(self, record_type: object):
        self.record_type = record_type
        super().__init__(
            f"Cannot derive field metadata from {record_type!r}; expected a class with "
            "annotated fields or an explicit RecordMetadata table"
        )
