"""Field selection: which fields of a record go on the wire, and under which name.

All helpers walk a ``RecordMetadata`` table in declaration order and apply the
same eligibility rule:

    descriptor present
    and not descriptor.ignore
    and (rank == 0 or descriptor.rank == 0 or descriptor.rank <= rank)

A requested rank of 0 selects every non-ignored mapped field. A positive rank
selects the rank-0 fields (always sent) plus those whose own rank is within
the threshold. Output order is always declaration order, never rank order.

``ignore_on_update`` is deliberately not part of the rule; deciding what an
update payload omits is left to the transport layer.

Duplicate Salesforce names:
    default  -> later field overwrites the earlier value (dict semantics; the
                key keeps its first position). The names list keeps both.
    strict   -> DuplicateFieldNameError
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..config import get_settings
from ..exceptions import DuplicateFieldNameError, FieldAccessError
from ..models.descriptor import SalesforceField, SalesforceIdField
from .metadata import RecordMetadata, metadata_for

__all__ = [
    "is_eligible",
    "eligible_field_names",
    "field_values",
    "identifier_fields_of_type",
]

logger = logging.getLogger(__name__)


def is_eligible(descriptor: Optional[SalesforceField], rank: int) -> bool:
    """Return True when a field with ``descriptor`` is selected for ``rank``."""
    if descriptor is None or descriptor.ignore:
        return False
    return rank == 0 or descriptor.rank <= rank


def _check_rank(rank: int) -> None:
    if isinstance(rank, bool) or not isinstance(rank, int) or rank < 0:
        raise ValueError(f"rank must be a non-negative integer, got {rank!r}")


def _resolve_strict(strict: Optional[bool]) -> bool:
    if strict is None:
        return get_settings().STRICT_FIELD_NAMES
    return strict


def _eligible(metadata: RecordMetadata, rank: int, strict: bool) -> Iterator[Tuple[str, str]]:
    """Yield ``(attribute, salesforce_name)`` for every selected field."""
    seen: Dict[str, str] = {}
    for entry in metadata:
        descriptor = entry.descriptor
        if descriptor is None or not is_eligible(descriptor, rank):
            continue
        sf_name = descriptor.resolved_name(entry.name)
        previous = seen.get(sf_name)
        if previous is not None:
            if strict:
                raise DuplicateFieldNameError(metadata.type_name, sf_name, (previous, entry.name))
            logger.warning(
                "%s: field '%s' overrides '%s' for Salesforce field '%s'",
                metadata.type_name,
                entry.name,
                previous,
                sf_name,
            )
        seen[sf_name] = entry.name
        yield entry.name, sf_name


def eligible_field_names(
    record_type: Any,
    rank: int = 0,
    *,
    strict: Optional[bool] = None,
) -> List[str]:
    """List the Salesforce field names selected for ``rank``.

    Args:
        record_type: Record class or explicit ``RecordMetadata`` table
        rank: Requested rank; 0 selects every non-ignored mapped field
        strict: Raise on duplicate Salesforce names (default from settings)

    Returns:
        Field names in declaration order; empty when nothing qualifies
    """
    _check_rank(rank)
    metadata = metadata_for(record_type)
    return [sf_name for _attr, sf_name in _eligible(metadata, rank, _resolve_strict(strict))]


def field_values(
    record_type: Any,
    record: Any,
    rank: int = 0,
    *,
    strict: Optional[bool] = None,
) -> Dict[str, str]:
    """Build the Salesforce field -> string value payload for ``record``.

    Values are stringified with ``str()``; ``None`` becomes ``""`` so the
    entry is always present. Dates are not converted here; run them through
    ``to_remote_string`` on the record beforehand if the wire format matters.

    Args:
        record_type: Record class or explicit ``RecordMetadata`` table
        record: Instance the values are read from
        rank: Requested rank; 0 selects every non-ignored mapped field
        strict: Raise on duplicate Salesforce names (default from settings)

    Returns:
        Insertion-ordered mapping following declaration order

    Raises:
        FieldAccessError: ``record`` lacks a field declared in the metadata
    """
    _check_rank(rank)
    metadata = metadata_for(record_type)
    values: Dict[str, str] = {}
    for attr, sf_name in _eligible(metadata, rank, _resolve_strict(strict)):
        try:
            value = getattr(record, attr)
        except AttributeError as e:
            raise FieldAccessError(type(record).__name__, attr) from e
        values[sf_name] = "" if value is None else str(value)
    return values


def identifier_fields_of_type(
    record: Any,
    linked_type: Optional[type] = None,
    *,
    metadata: Optional[RecordMetadata] = None,
) -> Dict[str, type]:
    """Map identifier fields of ``record`` to the record type they point at.

    Only fields declared with ``SalesforceIdField`` are considered; rank plays
    no part. With ``linked_type`` set, only identifiers linking to exactly that
    class are returned.

    Args:
        record: Record instance; its class provides the metadata by default
        linked_type: Optional filter on the linked record class
        metadata: Explicit table overriding the record's class metadata
    """
    table = metadata if metadata is not None else metadata_for(type(record))
    ids: Dict[str, type] = {}
    for entry in table:
        descriptor = entry.descriptor
        if not isinstance(descriptor, SalesforceIdField) or descriptor.ignore:
            continue
        if linked_type is None or descriptor.linked_type is linked_type:
            ids[descriptor.resolved_name(entry.name)] = descriptor.linked_type
    return ids
