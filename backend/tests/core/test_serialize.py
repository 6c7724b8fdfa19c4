"""Record-to-wire serializer — exact numerics as strings, empty as [], failures typed.

Tests:
    - Zero, fractional and 16-digit values survive serialize → JSON → parse
    - BigInteger/Numeric columns are strings even when small
    - Unsupported types and non-finite numbers raise SerializationError
"""

import json
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

import pytest

from backoffice.core.errors import SerializationError
from backoffice.core.serialize import (
    MAX_SAFE_INTEGER, decimal_string, serialize_record, serialize_records, to_wire,
)
from backoffice.models.customer import Customer
from backoffice.models.investment import InvestmentCompany, InvestorPortfolio
from backoffice.models.seller import Seller


@pytest.mark.parametrize("value,expected", [
    (Decimal("0"), "0"),
    (Decimal("0.00"), "0.00"),
    (Decimal("1234.5678"), "1234.5678"),
    (Decimal("9999999999999999"), "9999999999999999"),
    (9999999999999999, "9999999999999999"),
    (Decimal("1E+2"), "100"),
    (Decimal("-0.05"), "-0.05"),
])
def test_exact_values_round_trip_through_json(value, expected):
    wire = json.loads(json.dumps(to_wire({"v": value}, exact_keys={"v"})))
    assert wire["v"] == expected
    assert Decimal(wire["v"]) == Decimal(value)


def test_decimal_never_uses_exponent_form():
    assert decimal_string(Decimal("1E-7")) == "0.0000001"
    assert decimal_string("1E+2") == "100"
    assert decimal_string("12.50") == "12.50"


def test_plain_ints_stay_numbers_inside_safe_range():
    assert to_wire(MAX_SAFE_INTEGER) == MAX_SAFE_INTEGER
    assert to_wire(-MAX_SAFE_INTEGER) == -MAX_SAFE_INTEGER


def test_plain_ints_beyond_safe_range_become_strings():
    assert to_wire(MAX_SAFE_INTEGER + 1) == str(MAX_SAFE_INTEGER + 1)
    assert to_wire(-(MAX_SAFE_INTEGER + 1)) == str(-(MAX_SAFE_INTEGER + 1))


def test_other_values_pass_through_or_convert():
    uid = uuid4()

    class Colour(str, Enum):
        RED = "red"

    wire = to_wire({
        "flag": True, "name": "x", "none": None, "ratio": 0.5,
        "at": datetime(2026, 3, 1, 12, tzinfo=timezone.utc),
        "day": date(2026, 3, 1), "id": uid, "colour": Colour.RED,
        "nested": [{"amount": Decimal("1.10")}],
    })
    assert wire == {
        "flag": True, "name": "x", "none": None, "ratio": 0.5,
        "at": "2026-03-01T12:00:00+00:00", "day": "2026-03-01",
        "id": str(uid), "colour": "red",
        "nested": [{"amount": "1.10"}],
    }


def test_exact_keys_apply_at_any_depth():
    wire = to_wire({"lots": [{"shares": 5}]}, exact_keys={"shares"})
    assert wire == {"lots": [{"shares": "5"}]}


def test_empty_collections_are_empty_sequences():
    assert to_wire([]) == []
    assert serialize_records([]) == []
    assert serialize_records(None) == []


@pytest.mark.parametrize("bad", [
    object(), {1, 2}, b"bytes", float("nan"), Decimal("Infinity"),
])
def test_unsupported_values_raise(bad):
    with pytest.raises(SerializationError):
        to_wire({"v": bad})


def test_non_string_mapping_keys_raise():
    with pytest.raises(SerializationError):
        to_wire({1: "x"})


@pytest.mark.parametrize("bad", [True, "abc", [1]])
def test_decimal_string_rejects_non_numbers(bad):
    with pytest.raises(SerializationError):
        decimal_string(bad)


def test_record_exact_columns_are_strings_even_when_small():
    company = InvestmentCompany(
        id=UUID(int=1), name="Alpha", ticker=None,
        current_price=Decimal("12.500000"), total_shares=5,
    )
    out = serialize_record(company)
    assert out == {
        "id": str(UUID(int=1)), "name": "Alpha", "ticker": None,
        "current_price": "12.500000", "total_shares": "5",
    }


def test_record_bigint_beyond_float_precision():
    holding = InvestorPortfolio(
        id=uuid4(), investor_id=uuid4(), company_id=uuid4(),
        shares=9999999999999999, avg_price=Decimal("0"),
    )
    out = json.loads(json.dumps(serialize_record(holding)))
    assert out["shares"] == "9999999999999999"
    assert out["avg_price"] == "0"


def test_record_exclude_and_relationships():
    seller = Seller(id=uuid4(), name="Seller One")
    customer = Customer(
        id=uuid4(), name="Bar", seller=seller,
        credit_limit=Decimal("10.00"), available_credit=Decimal("0.00"),
    )
    out = serialize_record(customer, exclude=("cpf_cnpj",), relationships=("seller",))
    assert "cpf_cnpj" not in out
    assert out["credit_limit"] == "10.00"
    assert out["seller"]["name"] == "Seller One"


def test_record_unknown_relationship_raises():
    with pytest.raises(SerializationError):
        serialize_record(Seller(id=uuid4(), name="S"), relationships=("orders",))


def test_non_mapped_object_raises():
    with pytest.raises(SerializationError):
        serialize_record(object())
