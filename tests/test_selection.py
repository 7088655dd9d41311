from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

import pytest
from pydantic import BaseModel

from salesforce_fieldmap.exceptions import DuplicateFieldNameError, FieldAccessError
from salesforce_fieldmap.mapper import (
    RecordMetadata,
    eligible_field_names,
    field_values,
    register_metadata,
    to_remote_string,
)
from salesforce_fieldmap.models.descriptor import SalesforceField, SalesforceIdField


class Contact(BaseModel):
    Id: Optional[str] = None
    Name: str = ""
    Email: Optional[str] = None
    InternalNotes: Optional[str] = None
    Unmapped: Optional[str] = None


# Contact.Id links back to Contact, so the table is attached after the class exists.
register_metadata(
    Contact,
    {
        "Id": SalesforceIdField(linked_type=Contact),
        "Name": SalesforceField(),
        "Email": SalesforceField(rank=2, field_name="Email__c"),
        "InternalNotes": SalesforceField(ignore=True),
    },
)


class Opportunity(BaseModel):
    Name: Annotated[str, SalesforceField()]
    Amount: Annotated[Optional[float], SalesforceField(rank=1)] = None
    StageName: Annotated[Optional[str], SalesforceField(rank=3)] = None
    CloseDate: Annotated[Optional[str], SalesforceField(rank=2)] = None
    Secret: Annotated[Optional[str], SalesforceField(ignore=True, rank=1)] = None
    Cached: Optional[str] = None


def _contact(**overrides) -> Contact:
    data = {"Id": "003000000000001", "Name": "Ada Lovelace", "Email": "ada@example.com"}
    data.update(overrides)
    return Contact(**data)


def test_contact_scenario_rank_one():
    assert eligible_field_names(Contact, 1) == ["Id", "Name"]


def test_contact_scenario_rank_two():
    assert eligible_field_names(Contact, 2) == ["Id", "Name", "Email__c"]


def test_contact_scenario_rank_zero_includes_every_mapped_field():
    assert eligible_field_names(Contact, 0) == ["Id", "Name", "Email__c"]


@pytest.mark.parametrize("rank", [0, 1, 2, 3, 10])
def test_ignored_and_unmapped_fields_never_appear(rank):
    names = eligible_field_names(Contact, rank)
    values = field_values(Contact, _contact(InternalNotes="vip", Unmapped="x"), rank)
    for absent in ("InternalNotes", "Unmapped"):
        assert absent not in names
        assert absent not in values


def test_rank_zero_ignores_individual_ranks():
    assert eligible_field_names(Opportunity, 0) == ["Name", "Amount", "StageName", "CloseDate"]


@pytest.mark.parametrize(
    "rank,expected",
    [
        (1, ["Name", "Amount"]),
        (2, ["Name", "Amount", "CloseDate"]),
        (3, ["Name", "Amount", "StageName", "CloseDate"]),
    ],
)
def test_positive_rank_threshold_keeps_declaration_order(rank, expected):
    assert eligible_field_names(Opportunity, rank) == expected


def test_field_values_stringifies_in_declaration_order():
    opp = Opportunity(Name="Big deal", Amount=1500.5, StageName="Prospecting", CloseDate="2024-06-30")
    values = field_values(Opportunity, opp, 3)
    assert list(values) == ["Name", "Amount", "StageName", "CloseDate"]
    assert values == {
        "Name": "Big deal",
        "Amount": "1500.5",
        "StageName": "Prospecting",
        "CloseDate": "2024-06-30",
    }


def test_field_values_null_becomes_empty_string():
    values = field_values(Contact, _contact(Email=None), 2)
    assert values == {"Id": "003000000000001", "Name": "Ada Lovelace", "Email__c": ""}


def test_field_values_uses_external_names():
    values = field_values(Contact, _contact(), 2)
    assert values["Email__c"] == "ada@example.com"
    assert "Email" not in values


def test_datetimes_are_converted_by_the_caller():
    class Event(BaseModel):
        Subject: str
        ActivityDateTime: Optional[str] = None

    table = RecordMetadata.build(
        Event, {"Subject": SalesforceField(), "ActivityDateTime": SalesforceField()}
    )
    event = Event(Subject="Call", ActivityDateTime=to_remote_string(datetime(2024, 3, 5, 14, 30)))
    assert field_values(table, event) == {"Subject": "Call", "ActivityDateTime": "2024-03-05T14:30:00Z"}


def test_no_eligible_fields_yields_empty_results():
    class Bare(BaseModel):
        Name: str = ""

    assert eligible_field_names(Bare, 0) == []
    assert field_values(Bare, Bare(Name="x"), 0) == {}


def test_wrong_record_for_metadata_raises_field_access_error():
    opp = Opportunity(Name="Deal")
    with pytest.raises(FieldAccessError) as exc_info:
        field_values(Contact, opp, 0)
    assert exc_info.value.field == "Id"
    assert exc_info.value.record_type == "Opportunity"
    assert isinstance(exc_info.value.__cause__, AttributeError)


def test_negative_rank_is_rejected():
    with pytest.raises(ValueError):
        eligible_field_names(Contact, -1)
    with pytest.raises(ValueError):
        field_values(Contact, _contact(), -1)


class Account(BaseModel):
    Phone: Optional[str] = None
    Fax: Optional[str] = None
    Name: Optional[str] = None


_DUPLICATE_TABLE = RecordMetadata.build(
    Account,
    {
        "Phone": SalesforceField(field_name="Phone"),
        "Name": SalesforceField(),
        "Fax": SalesforceField(field_name="Phone"),
    },
)


def test_duplicate_names_later_field_overwrites_by_default():
    account = Account(Phone="111", Fax="222", Name="Acme")
    values = field_values(_DUPLICATE_TABLE, account, strict=False)
    assert values == {"Phone": "222", "Name": "Acme"}
    assert list(values) == ["Phone", "Name"]
    assert eligible_field_names(_DUPLICATE_TABLE, strict=False) == ["Phone", "Name", "Phone"]


def test_duplicate_names_rejected_in_strict_mode():
    account = Account(Phone="111", Fax="222")
    with pytest.raises(DuplicateFieldNameError) as exc_info:
        field_values(_DUPLICATE_TABLE, account, strict=True)
    assert exc_info.value.fields == ("Phone", "Fax")
    assert exc_info.value.code == "DUPLICATE_FIELD_NAME"
    with pytest.raises(DuplicateFieldNameError):
        eligible_field_names(_DUPLICATE_TABLE, strict=True)


def test_strict_default_comes_from_settings(monkeypatch):
    monkeypatch.setenv("STRICT_FIELD_NAMES", "true")
    with pytest.raises(DuplicateFieldNameError):
        eligible_field_names(_DUPLICATE_TABLE)


def test_duplicate_outside_requested_rank_is_not_a_collision():
    table = RecordMetadata.build(
        Account,
        {
            "Phone": SalesforceField(rank=1),
            "Fax": SalesforceField(rank=2, field_name="Phone"),
        },
    )
    assert eligible_field_names(table, 1, strict=True) == ["Phone"]


def test_ignore_on_update_does_not_filter_payload():
    table = RecordMetadata.build(
        Account,
        {"Name": SalesforceField(), "Phone": SalesforceField(ignore_on_update=True)},
    )
    assert field_values(table, Account(Name="Acme", Phone="555")) == {"Name": "Acme", "Phone": "555"}
