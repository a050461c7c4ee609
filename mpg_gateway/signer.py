"""PaymentRequestSigner - signs outbound MPG requests and interprets responses"""

from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from pydantic import SecretStr

from mpg_gateway.config import Settings, get_settings
from mpg_gateway.domain.exceptions import MalformedResponse, UnsupportedSignatureMethod
from mpg_gateway.domain.models import NormalizedResult, SignedRequestFields, TransactionRequest
from mpg_gateway.domain.responses import process_response
from mpg_gateway.domain.signature import generate_signature, resolve_signature_method, verify_signature
from mpg_gateway.infrastructure.observability.logging import (
    log_form_generated,
    log_response_processed,
    log_signature_check,
    logger,
    setup_logging,
)
from mpg_gateway.infrastructure.observability.metrics import (
    malformed_response_counter,
    record_signature_check,
    requests_signed_counter,
    response_counter,
    unsupported_signature_method_counter,
)

SecretProvider = Callable[[], SecretStr]


class PaymentRequestSigner:
    """
    Builds signed form data for the gateway and normalizes its callbacks.

    The transaction secret is never held on the instance: `secret_provider`
    is called once per sign/verify operation. Instances keep no per-call
    state and can be shared between threads.
    """

    def __init__(self, secret_provider: SecretProvider, defaults: Optional[Dict[str, Any]] = None):
        self._secret_provider = secret_provider
        self.defaults: Dict[str, Any] = dict(defaults or {})

    @classmethod
    def from_settings(cls, settings: Settings) -> "PaymentRequestSigner":
        """Create a signer whose merchant defaults and secret come from settings"""
        return cls(
            secret_provider=lambda: settings.transaction_secret,
            defaults={
                "acquirer_id": settings.acquirer_id,
                "merchant_id": settings.merchant_id,
                "return_url": settings.return_url,
                "purchase_currency": settings.purchase_currency,
                "currency_exponent": settings.purchase_currency_exponent,
                "protocol_version": settings.version,
                "signature_method": settings.signature_method,
                "gateway_url": settings.gateway_url,
            },
        )

    def create_request(self, order_id: str, amount: Decimal | int | float | str, **overrides: Any) -> TransactionRequest:
        """Build a validated TransactionRequest from merchant defaults plus per-order values"""
        return TransactionRequest(**{**self.defaults, **overrides, "order_id": order_id, "amount": amount})

    def _check_signature_method(self, request: TransactionRequest) -> None:
        """Count, log and re-raise an unsupported method before any secret is fetched"""
        try:
            resolve_signature_method(request.signature_method)
        except UnsupportedSignatureMethod as e:
            unsupported_signature_method_counter.inc()
            logger.error(
                "Unsupported signature method",
                extra={"order_id": request.order_id, "signature_method": e.method},
            )
            raise

    def generate_signature(self, request: TransactionRequest) -> str:
        """
        Sign the request with the current transaction secret.

        Raises:
            UnsupportedSignatureMethod: Method other than SHA1 configured
        """
        self._check_signature_method(request)
        return generate_signature(self._secret_provider(), request)

    def generate_form_data(self, request: TransactionRequest) -> SignedRequestFields:
        """
        Generate the field set to be POSTed to the gateway.

        Keys, in order: Version, MerID, AcqID, MerRespURL, PurchaseCurrency,
        PurchaseCurrencyExponent, OrderID, SignatureMethod, PurchaseAmt,
        Url, Signature.
        """
        purchase_amount = request.canonical_amount
        form_data: SignedRequestFields = {
            "Version": request.protocol_version,
            "MerID": request.merchant_id,
            "AcqID": request.acquirer_id,
            "MerRespURL": request.return_url,
            "PurchaseCurrency": request.purchase_currency,
            "PurchaseCurrencyExponent": str(request.currency_exponent),
            "OrderID": request.order_id,
            "SignatureMethod": request.signature_method,
            "PurchaseAmt": purchase_amount,
            "Url": request.gateway_url,
            "Signature": self.generate_signature(request),
        }

        requests_signed_counter.labels(currency=request.purchase_currency).inc()
        log_form_generated(
            order_id=request.order_id,
            merchant_id=request.merchant_id,
            purchase_amount=purchase_amount,
            currency=request.purchase_currency,
        )
        return form_data

    def validate_signature(self, request: TransactionRequest, signature: Optional[str]) -> bool:
        """
        Check a signature against the one expected for `request` (constant-time).

        Raises:
            UnsupportedSignatureMethod: Method other than SHA1 configured
        """
        self._check_signature_method(request)
        valid = verify_signature(self._secret_provider(), request, signature)
        record_signature_check(valid)
        log_signature_check(request.order_id, valid, "" if valid else "signature")
        return valid

    def process_response(self, response: Any) -> NormalizedResult:
        """
        Validate and normalize a gateway response (usually the callback POST body).

        Raises:
            MalformedResponse: A required field is missing
        """
        try:
            result = process_response(response)
        except MalformedResponse as e:
            malformed_response_counter.inc()
            logger.warning(
                "Malformed gateway response",
                extra={"step": "response_rejected", "missing_fields": list(e.missing_fields)},
            )
            raise

        response_counter.labels(outcome=result.outcome.value).inc()
        log_response_processed(
            order_id=result.order_id,
            response_code=result.response_code,
            outcome=result.outcome.value,
            reason_code=result.reason_code,
        )
        return result

    def verify_response(self, request: TransactionRequest, result: NormalizedResult) -> bool:
        """
        Authenticate a normalized response against the request it answers.

        Returns False when the response is for a different order or its
        signature does not match.
        """
        self._check_signature_method(request)
        if result.order_id != request.order_id:
            record_signature_check(False)
            log_signature_check(request.order_id, False, "order_id")
            return False
        return self.validate_signature(request, result.signature)


def create_signer(settings: Optional[Settings] = None) -> PaymentRequestSigner:
    """Configure logging from settings and build a signer; settings default to MPG_* env"""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.service_name)
    return PaymentRequestSigner.from_settings(settings)
