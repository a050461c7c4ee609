"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from pydantic import SecretStr
from mpg_gateway.config import Settings
from mpg_gateway.domain.models import TransactionRequest
from mpg_gateway.signer import PaymentRequestSigner


@pytest.fixture
def secret() -> SecretStr:
    """Shared transaction secret used for signing in tests"""
    return SecretStr("s3cret")


@pytest.fixture
def sample_request() -> TransactionRequest:
    """Reference request: ORD100 for 125.50 MVR"""
    return TransactionRequest(
        acquirer_id="407387",
        merchant_id="9800001234",
        order_id="ORD100",
        amount=Decimal("125.5"),
        return_url="https://shop.example.mv/payment/callback",
        purchase_currency="462",
        currency_exponent=2,
    )


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings built from explicit values, ignoring any local .env"""
    for name in ("MPG_ACQUIRER_ID", "MPG_MERCHANT_ID", "MPG_TRANSACTION_SECRET", "MPG_RETURN_URL"):
        monkeypatch.delenv(name, raising=False)
    return Settings(
        _env_file=None,
        acquirer_id="407387",
        merchant_id="9800001234",
        transaction_secret="s3cret",
        return_url="https://shop.example.mv/payment/callback",
    )


@pytest.fixture
def signer(settings: Settings) -> PaymentRequestSigner:
    """Signer configured from test settings"""
    return PaymentRequestSigner.from_settings(settings)


@pytest.fixture
def success_response() -> dict[str, str]:
    """Approved callback payload as POSTed by the gateway"""
    return {
        "ResponseCode": "1",
        "OrderID": "ORD100",
        "ReasonCode": "1",
        "ReasonCodeDesc": "Transaction is approved.",
        "ReferenceNo": "123456789012",
        "AuthCode": "A1B2C3",
        "PaddedCardNo": "XXXXXXXXXXXX1234",
        "Signature": "",
    }
