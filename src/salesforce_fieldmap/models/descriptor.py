"""Descriptors controlling how a record field is exchanged with Salesforce.

A descriptor is attached to each field of a record type, either through an
explicit metadata table or beside the field itself with
``typing.Annotated[str, SalesforceField(rank=2)]``. It is purely declarative:
the selection helpers in ``salesforce_fieldmap.mapping.selection`` read it,
nothing mutates it.

Rank semantics:
    0  -> field is always eligible, whatever rank is requested
    k  -> field is eligible only when the requested rank is >= k

Descriptors are frozen dataclasses rather than pydantic models: pydantic
treats any ``Annotated`` extra exposing ``__get_pydantic_core_schema__`` as a
schema override, which would hijack validation of the annotated field.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

__all__ = ["SalesforceField", "SalesforceIdField"]


@dataclass(frozen=True, kw_only=True)
class SalesforceField:
    """Controls whether and how a field is exchanged with Salesforce."""

    # Exclude this field when pulling or pushing to Salesforce
    ignore: bool = False
    # Exclude when serializing an update payload. Carried as data only; the
    # selection helpers never consult it.
    ignore_on_update: bool = False
    # Salesforce field id; the attribute name is used when blank
    field_name: Optional[str] = None
    rank: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.rank, bool) or not isinstance(self.rank, int) or self.rank < 0:
            raise ValueError(f"rank must be a non-negative integer, got {self.rank!r}")

    def resolved_name(self, declared_name: str) -> str:
        """Return the external field name for an attribute called ``declared_name``."""
        if self.field_name and self.field_name.strip():
            return self.field_name
        return declared_name


@dataclass(frozen=True, kw_only=True)
class SalesforceIdField(SalesforceField):
    """Identifier field pointing at another record type.

    ``linked_type`` is the record class the identifier refers to (e.g. an
    ``AccountId`` attribute on a contact links to ``Account``). It is required;
    a plain ``SalesforceField`` is used for fields without a linked type.
    """

    linked_type: type[Any]

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.linked_type, type):
            raise TypeError(f"linked_type must be a class, got {self.linked_type!r}")
