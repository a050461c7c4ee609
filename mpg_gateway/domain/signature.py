"""Signature engine - keyed SHA1 digest over the signed transaction fields"""

import base64
import hashlib
import hmac
from enum import Enum
from typing import Callable, Dict, Optional

from pydantic import SecretStr

from mpg_gateway.domain.exceptions import UnsupportedSignatureMethod
from mpg_gateway.domain.models import TransactionRequest


class SignatureMethod(str, Enum):
    """Signature methods accepted by the gateway"""

    SHA1 = "SHA1"


_DIGESTS: Dict[SignatureMethod, Callable] = {
    SignatureMethod.SHA1: hashlib.sha1,
}


def resolve_signature_method(name: str) -> SignatureMethod:
    """Map a configured method name to a SignatureMethod or raise UnsupportedSignatureMethod"""
    try:
        return SignatureMethod(name)
    except ValueError as e:
        raise UnsupportedSignatureMethod(str(name)) from e


def compose_signature_text(
    secret: SecretStr,
    merchant_id: str,
    acquirer_id: str,
    order_id: str,
    purchase_amount: str,
    purchase_currency: str,
) -> str:
    """
    Concatenate the signed fields in gateway order, with no delimiters.

    Order: secret, MerID, AcqID, OrderID, PurchaseAmt, PurchaseCurrency.
    No format checks happen here; build_signature_text supplies values
    already validated by TransactionRequest.
    """
    return (
        secret.get_secret_value()
        + merchant_id
        + acquirer_id
        + order_id
        + purchase_amount
        + purchase_currency
    )


def build_signature_text(secret: SecretStr, request: TransactionRequest) -> str:
    """
    Signature text for a validated request.

    MerID (10 digits) and AcqID (6 digits) have fixed widths, and the amount
    and currency form a fixed 15-digit tail, so no field's characters can
    move into a neighbouring field without changing the text.
    """
    return compose_signature_text(
        secret,
        request.merchant_id,
        request.acquirer_id,
        request.order_id,
        request.canonical_amount,
        request.purchase_currency,
    )


def digest_signature_text(text: str, method: str = SignatureMethod.SHA1.value) -> str:
    """
    base64 of the raw digest of the UTF-8 signature text.

    Raises:
        UnsupportedSignatureMethod: method is not SHA1
    """
    digest = _DIGESTS[resolve_signature_method(method)](text.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def generate_signature(secret: SecretStr, request: TransactionRequest) -> str:
    """
    Compute the request signature: base64(SHA1(signature text)).

    Raises:
        UnsupportedSignatureMethod: request.signature_method is not SHA1
        AmountOverflow: amount does not fit the PurchaseAmt field
    """
    method = resolve_signature_method(request.signature_method)
    return digest_signature_text(build_signature_text(secret, request), method.value)


def verify_signature(
    secret: SecretStr,
    request: TransactionRequest,
    candidate: Optional[str],
) -> bool:
    """Recompute the signature for `request` and compare in constant time"""
    if not candidate:
        return False
    expected = generate_signature(secret, request)
    return hmac.compare_digest(expected.encode("ascii"), str(candidate).encode("utf-8"))
