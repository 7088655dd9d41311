"""Public facade for Salesforce field mapping and datetime conversion.

A transport layer holding a record and an operation context asks this module
which fields to send and under which names, and converts datetimes to and
from the Salesforce wire format. The work is delegated to the
``salesforce_fieldmap.mapping`` package.

Public Functions:
    eligible_field_names: Salesforce field names selected for a rank
    field_values: Salesforce field -> string value payload for a record
    identifier_fields_of_type: Identifier fields -> linked record type
    to_remote_string: datetime -> "YYYY-MM-DDTHH:MM:SSZ"
    from_remote_string: lenient date/time text -> aware UTC datetime
"""
from __future__ import annotations

from .mapping.metadata import FieldEntry, RecordMetadata, metadata_for, register_metadata
from .mapping.selection import (
    eligible_field_names,
    field_values,
    identifier_fields_of_type,
    is_eligible,
)
from .mapping.time_utils import from_remote_string, to_remote_string

__all__ = [
    "eligible_field_names",
    "field_values",
    "identifier_fields_of_type",
    "to_remote_string",
    "from_remote_string",
    # Table helpers
    "FieldEntry",
    "RecordMetadata",
    "metadata_for",
    "register_metadata",
    "is_eligible",
]
