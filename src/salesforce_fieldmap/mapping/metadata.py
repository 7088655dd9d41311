"""Statically declared field metadata tables for record types.

A ``RecordMetadata`` is the ordered list of a record type's declared fields,
each paired with its ``SalesforceField`` descriptor (or ``None`` when the field
is not exchanged with Salesforce). The selection helpers only ever walk this
table; they never introspect record instances.

Tables come from one of three places, checked in this order by
``metadata_for``:

1. an explicit ``RecordMetadata`` passed by the caller;
2. a table attached with ``register_metadata`` (stored on the
   ``__salesforce_fields__`` class attribute). A subclass of a registered
   class gets the inherited table extended with its own annotated fields;
3. ``Annotated`` descriptors declared beside the fields of a pydantic model,
   dataclass, ``NamedTuple`` or plain annotated class, read from the class
   definition by ``RecordMetadata.from_model``.

Nothing is cached: every call re-derives the table from the class as it is
currently defined.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Iterable, Iterator, Mapping, Optional, get_origin, get_type_hints

from pydantic import BaseModel

from ..exceptions import UnsupportedRecordTypeError
from ..models.descriptor import SalesforceField

__all__ = ["FieldEntry", "RecordMetadata", "metadata_for", "register_metadata", "METADATA_ATTR"]

logger = logging.getLogger(__name__)

METADATA_ATTR = "__salesforce_fields__"


@dataclass(frozen=True)
class FieldEntry:
    name: str
    descriptor: Optional[SalesforceField] = None


def _first_descriptor(extras: Iterable[Any]) -> Optional[SalesforceField]:
    # At most one descriptor per field; the first declared wins.
    for extra in extras:
        if isinstance(extra, SalesforceField):
            return extra
    return None


@dataclass(frozen=True)
class RecordMetadata:
    """Ordered field -> descriptor table for one record type."""

    record_type: type
    fields: tuple[FieldEntry, ...] = ()

    def __iter__(self) -> Iterator[FieldEntry]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def type_name(self) -> str:
        return getattr(self.record_type, "__name__", repr(self.record_type))

    def descriptor(self, name: str) -> Optional[SalesforceField]:
        """Return the descriptor declared for attribute ``name``, if any."""
        for entry in self.fields:
            if entry.name == name:
                return entry.descriptor
        return None

    @classmethod
    def build(
        cls,
        record_type: type,
        table: Mapping[str, Optional[SalesforceField]],
    ) -> "RecordMetadata":
        """Build a hand-written table; mapping order is the declaration order."""
        entries = []
        for name, descriptor in table.items():
            if descriptor is not None and not isinstance(descriptor, SalesforceField):
                raise TypeError(
                    f"{record_type.__name__}.{name}: expected a SalesforceField, "
                    f"got {type(descriptor).__name__}"
                )
            entries.append(FieldEntry(name=name, descriptor=descriptor))
        return cls(record_type=record_type, fields=tuple(entries))

    @classmethod
    def from_model(cls, record_type: type) -> "RecordMetadata":
        """Derive the table from ``Annotated`` descriptors on a record class.

        Pydantic models are read through ``model_fields`` (declaration order,
        non-pydantic ``Annotated`` extras kept in ``FieldInfo.metadata``).
        Dataclasses, ``NamedTuple`` classes and plain annotated classes are
        read from their type hints resolved with ``include_extras=True``;
        inherited annotations come first, ``ClassVar`` hints are skipped.

        Raises:
            UnsupportedRecordTypeError: ``record_type`` is not a class, declares
                no annotated fields, or its annotations cannot be resolved.
        """
        if not isinstance(record_type, type):
            raise UnsupportedRecordTypeError(record_type)
        if issubclass(record_type, BaseModel):
            entries = tuple(
                FieldEntry(name=name, descriptor=_first_descriptor(info.metadata))
                for name, info in record_type.model_fields.items()
            )
        else:
            try:
                hints = get_type_hints(record_type, include_extras=True)
            except (NameError, TypeError) as e:
                raise UnsupportedRecordTypeError(record_type) from e
            if dataclasses.is_dataclass(record_type):
                names = [f.name for f in dataclasses.fields(record_type)]
            else:
                names = [name for name, hint in hints.items() if not _is_classvar(hint)]
            if not names:
                raise UnsupportedRecordTypeError(record_type)
            entries = tuple(
                FieldEntry(name=name, descriptor=_annotated_descriptor(hints.get(name)))
                for name in names
            )
        logger.debug(
            "Derived metadata for %s: %d fields, %d mapped",
            record_type.__name__,
            len(entries),
            sum(1 for e in entries if e.descriptor is not None),
        )
        return cls(record_type=record_type, fields=entries)


def _is_classvar(hint: Any) -> bool:
    if get_origin(hint) is Annotated:
        hint = hint.__origin__
    return hint is ClassVar or get_origin(hint) is ClassVar


def _annotated_descriptor(hint: Any) -> Optional[SalesforceField]:
    if hint is None or get_origin(hint) is not Annotated:
        return None
    return _first_descriptor(hint.__metadata__)


def register_metadata(
    record_type: type,
    table: Mapping[str, Optional[SalesforceField]],
) -> RecordMetadata:
    """Attach an explicit table to ``record_type`` and return it.

    Used for classes whose fields cannot carry ``Annotated`` descriptors, or
    when a descriptor refers to the class being defined (e.g. ``Contact.Id``
    linking back to ``Contact``). Subclasses extend the table with their own
    annotated fields, see ``metadata_for``.
    """
    metadata = RecordMetadata.build(record_type, table)
    setattr(record_type, METADATA_ATTR, metadata)
    return metadata


def _registered_ancestor(target: type) -> Optional[RecordMetadata]:
    """Return the table registered on the nearest class in ``target``'s MRO."""
    for klass in target.__mro__:
        attached = vars(klass).get(METADATA_ATTR)
        if isinstance(attached, RecordMetadata):
            return attached
    return None


def _extend(inherited: RecordMetadata, target: type) -> RecordMetadata:
    # Inherited entries keep their position; fields the subclass declares on
    # top are appended in declaration order.
    try:
        derived = RecordMetadata.from_model(target)
    except UnsupportedRecordTypeError:
        derived = RecordMetadata(record_type=target)
    known = {entry.name for entry in inherited}
    added = tuple(entry for entry in derived if entry.name not in known)
    logger.debug(
        "%s extends the table registered on %s with %d fields",
        target.__name__,
        inherited.type_name,
        len(added),
    )
    return RecordMetadata(record_type=target, fields=inherited.fields + added)


def metadata_for(target: Any) -> RecordMetadata:
    """Resolve ``target`` (a table or a record class) to its metadata table.

    A table registered on the class itself is returned as is. A table
    registered on a base class is extended with the subclass's own annotated
    fields, re-derived on every call.
    """
    if isinstance(target, RecordMetadata):
        return target
    if not isinstance(target, type):
        raise UnsupportedRecordTypeError(target)
    registered = _registered_ancestor(target)
    if registered is None:
        return RecordMetadata.from_model(target)
    if registered.record_type is target:
        return registered
    return _extend(registered, target)
