"""Prometheus metrics for request signing and gateway response handling"""

from prometheus_client import Counter

# Outbound
requests_signed_counter = Counter(
    "mpg_requests_signed_total",
    "Payment requests signed for the gateway",
    ["currency"],
)

unsupported_signature_method_counter = Counter(
    "mpg_unsupported_signature_method_total",
    "Signing attempts rejected for an unsupported signature method",
)

# Inbound
response_counter = Counter(
    "mpg_responses_total",
    "Gateway responses processed",
    ["outcome"],  # success | rejected | failed
)

malformed_response_counter = Counter(
    "mpg_malformed_responses_total",
    "Gateway responses missing required fields",
)

signature_verification_counter = Counter(
    "mpg_signature_verifications_total",
    "Signature verifications by result",
    ["result"],  # valid | mismatch
)


def record_signature_check(valid: bool) -> None:
    """Record a verification outcome for spoofed-response monitoring"""
    result = "valid" if valid else "mismatch"
    signature_verification_counter.labels(result=result).inc()
