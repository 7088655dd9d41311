"""Declarative Salesforce field mapping and datetime conversion.

Typical use from a REST transport layer::

    from salesforce_fieldmap import SalesforceField, field_values

    class Contact(BaseModel):
        Name: Annotated[str, SalesforceField()]
        Email: Annotated[Optional[str], SalesforceField(rank=2, field_name="Email__c")] = None

    payload = field_values(Contact, contact, rank=2)
"""
from __future__ import annotations

from .exceptions import (
    DuplicateFieldNameError,
    FieldAccessError,
    FieldMapError,
    UnsupportedRecordTypeError,
)
from .mapper import (
    FieldEntry,
    RecordMetadata,
    eligible_field_names,
    field_values,
    from_remote_string,
    identifier_fields_of_type,
    metadata_for,
    register_metadata,
    to_remote_string,
)
from .models.descriptor import SalesforceField, SalesforceIdField

__all__ = [
    "SalesforceField",
    "SalesforceIdField",
    "FieldEntry",
    "RecordMetadata",
    "metadata_for",
    "register_metadata",
    "eligible_field_names",
    "field_values",
    "identifier_fields_of_type",
    "to_remote_string",
    "from_remote_string",
    "FieldMapError",
    "FieldAccessError",
    "DuplicateFieldNameError",
    "UnsupportedRecordTypeError",
]
