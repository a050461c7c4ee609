"""Domain models for gateway requests and normalized responses"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mpg_gateway.domain.amount import canonicalize_amount

DEFAULT_GATEWAY_URL = (
    "https://egateway.bankofmaldives.com.mv/SENTRY/PaymentGateway/Application/RedirectLink.aspx"
)

# Signed fields are concatenated without delimiters. MerID and AcqID are
# fixed-width digits and PurchaseAmt + PurchaseCurrency are a fixed 15-digit
# tail, so OrderID is the only variable-width field and every boundary is
# fixed by position.
MERCHANT_ID_LENGTH = 10
ACQUIRER_ID_LENGTH = 6
MERCHANT_ID_PATTERN = rf"^[0-9]{{{MERCHANT_ID_LENGTH}}}$"
ACQUIRER_ID_PATTERN = rf"^[0-9]{{{ACQUIRER_ID_LENGTH}}}$"
ORDER_ID_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"
CURRENCY_CODE_PATTERN = r"^[0-9]{3}$"


class ResponseOutcome(str, Enum):
    """Normalized outcome of a gateway response code"""

    SUCCESS = "success"
    REJECTED = "rejected"
    FAILED = "failed"


class TransactionRequest(BaseModel):
    """
    One payment-initiation request, validated once and immutable afterward.

    The transaction secret is not a field; the signing functions receive
    it per call.
    """

    model_config = ConfigDict(frozen=True)

    acquirer_id: str = Field(..., pattern=ACQUIRER_ID_PATTERN)
    merchant_id: str = Field(..., pattern=MERCHANT_ID_PATTERN)
    order_id: str = Field(..., pattern=ORDER_ID_PATTERN)
    amount: Decimal = Field(..., ge=0)
    return_url: str = Field(..., min_length=1)
    purchase_currency: str = Field("462", pattern=CURRENCY_CODE_PATTERN)  # MVR: 462, USD: 840
    currency_exponent: int = Field(2, ge=0, le=6)
    protocol_version: str = Field("1.0.0", min_length=1)
    signature_method: str = "SHA1"
    gateway_url: str = Field(DEFAULT_GATEWAY_URL, min_length=1)

    @field_validator("amount", mode="before")
    @classmethod
    def _float_via_str(cls, value: Any) -> Any:
        # 125.5 -> Decimal("125.5"), not the binary expansion
        if isinstance(value, float):
            return str(value)
        return value

    @model_validator(mode="after")
    def _amount_fits_field(self) -> "TransactionRequest":
        # Raises AmountOverflow directly rather than a ValidationError
        canonicalize_amount(self.amount, self.currency_exponent)
        return self

    @property
    def canonical_amount(self) -> str:
        """PurchaseAmt value: amount in minor units, zero-padded to 12 digits"""
        return canonicalize_amount(self.amount, self.currency_exponent)


# Ordered field name -> value mapping POSTed to the gateway
SignedRequestFields = Dict[str, str]


@dataclass(frozen=True)
class NormalizedResult:
    """Gateway response after shape validation and code mapping"""

    response_code: str
    response_description: str
    outcome: ResponseOutcome
    order_id: str
    reason_code: str
    reason_description: str
    reference_no: str = ""
    auth_code: str = ""
    card_no: str = ""  # PaddedCardNo, already masked by the gateway
    signature: str = ""

    @property
    def approved(self) -> bool:
        return self.outcome is ResponseOutcome.SUCCESS
