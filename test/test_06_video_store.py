# pylint: disable = missing-docstring

from datetime import datetime
import typing

import pytest

import shape_validation as sv
from shape_validation import (
    and_,
    is_iterable,
    is_number,
    is_string,
    is_value_of,
    iterable_validator,
    or_,
    number_between,
    validation_tree,
    validator_map,
)


def is_id_type(prefix: str) -> typing.Any:
    return and_(is_string, lambda id: id.startswith(prefix))


def _parse_date(time: str) -> bool:
    try:
        datetime.fromisoformat(time)
    except ValueError:
        return False
    return True


is_non_empty_string = and_(is_string, lambda x: len(x) >= 1)
is_parseable_date = and_(is_string, _parse_date)

is_address = validator_map({
    "city": is_non_empty_string,
    "street": is_non_empty_string,
    "code": is_non_empty_string,
})

is_primary_contact = validation_tree({
    "label": sv.test(lambda label: label in ("HOME", "MOBILE")),
    "phone": is_non_empty_string,
    "address": is_address,
})

is_secondary_contact = validation_tree({
    "label": sv.test(lambda label: label in ("MOBILE", "BUSINESS")),
    "phone": is_non_empty_string,
})

is_vhs = validator_map({
    "id": is_id_type("video:"),
    "type": is_value_of("VHS"),
    "year": and_(is_number, number_between(1989, 2003)),
    "title": is_non_empty_string,
})

is_dvd = validator_map({
    "id": is_id_type("video:"),
    "type": is_value_of("DVD"),
    "year": and_(is_number, number_between(1998, 2008)),
    "title": is_non_empty_string,
})

is_video = or_(is_vhs, is_dvd)

is_contact_options = and_(
    is_iterable,
    sv.test(lambda items: len(items) >= 1 and is_primary_contact(items[0])),
    iterable_validator(or_(is_primary_contact, is_secondary_contact)),
)

is_transaction = validation_tree({
    "id": is_id_type("transaction:"),
    "time": is_parseable_date,
    "due_date": is_parseable_date,
    "customer": {
        "id": is_id_type("customer:"),
        "name": {"given": is_non_empty_string, "family": is_non_empty_string},
        "contact_options": is_contact_options,
    },
    "items": iterable_validator(is_video),
})

is_rentals = iterable_validator(is_transaction)


def _transaction(**overrides: typing.Any) -> typing.Dict[str, typing.Any]:
    transaction: typing.Dict[str, typing.Any] = {
        "id": "transaction:0001",
        "time": "1999-03-31T18:30:00",
        "due_date": "1999-04-02",
        "customer": {
            "id": "customer:42",
            "name": {"given": "Neo", "family": "Anderson"},
            "contact_options": [
                {
                    "label": "HOME",
                    "phone": "555-0199",
                    "address": {"city": "Mega City", "street": "Main St", "code": "101"},
                },
                {"label": "BUSINESS", "phone": "555-0100"},
            ],
        },
        "items": [
            {"id": "video:matrix-vhs", "type": "VHS", "year": 1999, "title": "The Matrix"},
            {"id": "video:matrix-dvd", "type": "DVD", "year": 2001, "title": "The Matrix"},
        ],
    }
    transaction.update(overrides)
    return transaction


def test_valid_transaction() -> None:
    assert is_transaction(_transaction())
    assert is_transaction(_transaction(items=[]))
    assert is_rentals([_transaction(), _transaction(id="transaction:0002")])
    assert is_rentals([])


_invalid_overrides: typing.List[typing.Dict[str, typing.Any]] = [
    {"id": "customer:0001"},
    {"time": "yesterday"},
    {"due_date": None},
    {"items": [{"id": "video:x", "type": "VHS", "year": 2005, "title": "X"}]},
    {"items": [{"id": "video:x", "type": "Blu-ray", "year": 2005, "title": "X"}]},
    {"items": [{"id": "video:x", "type": "DVD", "year": 2005, "title": ""}]},
    {"items": {"id": "video:x", "type": "DVD", "year": 2005, "title": "X"}},
    {"items": "video:x"},
    {"customer": None},
    {"customer": {
        "id": "customer:42",
        "name": {"given": "Neo", "family": "Anderson"},
        "contact_options": [{"label": "BUSINESS", "phone": "555-0100"}],
    }},
    {"customer": {
        "id": "customer:42",
        "name": {"given": "Neo"},
        "contact_options": [{
            "label": "MOBILE",
            "phone": "555-0199",
            "address": {"city": "Mega City", "street": "Main St", "code": "101"},
        }],
    }},
]

@pytest.mark.parametrize("overrides", _invalid_overrides)
def test_invalid_transaction(overrides: typing.Dict[str, typing.Any]) -> None:
    assert not is_transaction(_transaction(**overrides))
    assert not is_rentals([_transaction(), _transaction(**overrides)])


def test_video_years() -> None:
    vhs = {"id": "video:x", "type": "VHS", "title": "X"}
    assert is_video({**vhs, "year": 1989})
    assert is_video({**vhs, "year": 2002})
    assert not is_video({**vhs, "year": 2003})
    dvd = {**vhs, "type": "DVD"}
    assert is_video({**dvd, "year": 2003})
    assert not is_video({**dvd, "year": 1997})


def test_chained_lookup() -> None:
    transaction = _transaction()
    given = is_rentals["customer"]["name"]["given"] # type: ignore
    assert given is is_transaction["customer"]["name"]["given"] # type: ignore
    assert given(transaction["customer"]["name"]["given"])
    assert not given("")
    is_customer = is_transaction["customer"]
    assert is_customer(transaction["customer"])
    assert is_transaction["customer"]["contact_options"] is is_contact_options # type: ignore
    assert is_address(transaction["customer"]["contact_options"][0]["address"])
