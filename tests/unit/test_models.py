"""Unit tests for TransactionRequest validation"""

import pytest
from decimal import Decimal
from pydantic import ValidationError
from mpg_gateway.domain.exceptions import AmountOverflow
from mpg_gateway.domain.models import DEFAULT_GATEWAY_URL, TransactionRequest

BASE = {
    "acquirer_id": "407387",
    "merchant_id": "9800001234",
    "order_id": "ORD100",
    "amount": Decimal("125.50"),
    "return_url": "https://shop.example.mv/payment/callback",
}


def test_defaults_match_mvr_gateway():
    request = TransactionRequest(**BASE)

    assert request.purchase_currency == "462"
    assert request.currency_exponent == 2
    assert request.protocol_version == "1.0.0"
    assert request.signature_method == "SHA1"
    assert request.gateway_url == DEFAULT_GATEWAY_URL
    assert request.canonical_amount == "000000012550"


def test_float_amount_is_converted_exactly():
    request = TransactionRequest(**{**BASE, "amount": 125.5})

    assert request.amount == Decimal("125.5")
    assert request.canonical_amount == "000000012550"


def test_request_is_frozen():
    request = TransactionRequest(**BASE)

    with pytest.raises(ValidationError):
        request.amount = Decimal("1")


@pytest.mark.parametrize("field", ["acquirer_id", "merchant_id", "order_id", "amount", "return_url"])
def test_required_fields(field):
    data = {k: v for k, v in BASE.items() if k != field}

    with pytest.raises(ValidationError):
        TransactionRequest(**data)


@pytest.mark.parametrize(
    "field,value",
    [
        ("merchant_id", ""),
        ("merchant_id", "M1"),
        ("merchant_id", "980000123"),
        ("merchant_id", "98000012345"),
        ("merchant_id", "98000O1234"),
        ("acquirer_id", "A1"),
        ("acquirer_id", "40738"),
        ("acquirer_id", "4073870"),
        ("order_id", "ORD/100"),
        ("order_id", "ORD100\n"),
        ("purchase_currency", "MVR"),
        ("purchase_currency", "4620"),
        ("currency_exponent", -1),
        ("currency_exponent", 7),
        ("amount", Decimal("-1")),
        ("amount", "NaN"),
        ("return_url", ""),
    ],
)
def test_rejects_malformed_fields(field, value):
    """Signed fields are restricted so delimiter-free concatenation stays unambiguous"""
    with pytest.raises(ValidationError):
        TransactionRequest(**{**BASE, field: value})


def test_order_id_allows_dash_and_underscore():
    request = TransactionRequest(**{**BASE, "order_id": "INV-2024_0001"})
    assert request.order_id == "INV-2024_0001"


def test_amount_overflow_rejected_at_construction():
    with pytest.raises(AmountOverflow):
        TransactionRequest(**{**BASE, "amount": Decimal("10000000000")})


@pytest.mark.parametrize(
    "shifted",
    [
        # AcqID absorbs the first OrderID character
        {"acquirer_id": "407387O", "order_id": "RD100"},
        # OrderID absorbs the last AcqID digit
        {"acquirer_id": "40738", "order_id": "7ORD100"},
        # MerID and AcqID trade a digit
        {"merchant_id": "98000012344", "acquirer_id": "07387"},
        {"merchant_id": "980000123", "acquirer_id": "4407387"},
    ],
)
def test_fields_cannot_shift_across_signed_boundaries(shifted):
    """A request whose signature text equals the original's under a shifted boundary is rejected"""
    original = "".join(BASE[k] for k in ("merchant_id", "acquirer_id", "order_id"))
    data = {**BASE, **shifted}
    assert "".join(data[k] for k in ("merchant_id", "acquirer_id", "order_id")) == original

    with pytest.raises(ValidationError):
        TransactionRequest(**data)
