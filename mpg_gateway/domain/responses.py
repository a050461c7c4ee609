"""Response interpreter - validates and normalizes gateway callback fields"""

from collections.abc import Mapping
from typing import Any, Dict, Tuple

from mpg_gateway.domain.exceptions import MalformedResponse
from mpg_gateway.domain.models import NormalizedResult, ResponseOutcome

REQUIRED_RESPONSE_FIELDS = ("ResponseCode", "OrderID", "ReasonCode", "ReasonCodeDesc")

SUCCESS_MESSAGE = "Transaction successful!"
REJECTED_MESSAGE = "Transaction was rejected. Please contact your bank."
FAILED_MESSAGE = "Something went wrong. Please try again..."

RESPONSE_CODE_TABLE: Dict[str, Tuple[ResponseOutcome, str]] = {
    "1": (ResponseOutcome.SUCCESS, SUCCESS_MESSAGE),
    "2": (ResponseOutcome.REJECTED, REJECTED_MESSAGE),
    "3": (ResponseOutcome.REJECTED, REJECTED_MESSAGE),
    "4": (ResponseOutcome.REJECTED, REJECTED_MESSAGE),
    "11": (ResponseOutcome.REJECTED, REJECTED_MESSAGE),
}


def describe_response_code(code: Any) -> Tuple[ResponseOutcome, str]:
    """
    Map a gateway ResponseCode to an outcome and a human-readable message.

    Unknown codes map to the generic failure message so that new gateway
    codes never break response handling.
    """
    return RESPONSE_CODE_TABLE.get(
        str(code).strip(),
        (ResponseOutcome.FAILED, FAILED_MESSAGE),
    )


def _optional(response: Mapping, key: str) -> str:
    value = response.get(key)
    return "" if value is None else str(value)


def process_response(response: Any) -> NormalizedResult:
    """
    Validate a raw gateway response and normalize it.

    Requirements:
    - ResponseCode, OrderID, ReasonCode, ReasonCodeDesc must be present
    - ReferenceNo, AuthCode, PaddedCardNo, Signature default to ""
    - Signature is carried through but not verified here

    Raises:
        MalformedResponse: Input is not a mapping or lacks a required field
    """
    if not isinstance(response, Mapping):
        raise MalformedResponse()

    missing = tuple(f for f in REQUIRED_RESPONSE_FIELDS if response.get(f) is None)
    if missing:
        raise MalformedResponse(missing)

    response_code = str(response["ResponseCode"]).strip()
    outcome, description = describe_response_code(response_code)

    return NormalizedResult(
        response_code=response_code,
        response_description=description,
        outcome=outcome,
        order_id=str(response["OrderID"]),
        reason_code=str(response["ReasonCode"]),
        reason_description=str(response["ReasonCodeDesc"]),
        reference_no=_optional(response, "ReferenceNo"),
        auth_code=_optional(response, "AuthCode"),
        card_no=_optional(response, "PaddedCardNo"),
        signature=_optional(response, "Signature"),
    )
