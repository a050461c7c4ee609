"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidAmount(DomainException):
    """Amount or currency exponent cannot be represented (negative, NaN, non-digit)"""

    pass


class AmountOverflow(DomainException):
    """Canonical amount does not fit in the fixed-width PurchaseAmt field"""

    def __init__(self, length: int, width: int):
        super().__init__(f"Amount needs {length} digits, PurchaseAmt field holds {width}")
        self.length = length
        self.width = width


class UnsupportedSignatureMethod(DomainException):
    """Configured signature method is not supported by the gateway"""

    def __init__(self, method: str):
        super().__init__(f"Unsupported signature method: {method!r}")
        self.method = method


class MalformedResponse(DomainException):
    """Gateway response is missing required fields"""

    def __init__(self, missing_fields: tuple[str, ...] = ()):
        if missing_fields:
            message = f"Invalid response: missing {', '.join(missing_fields)}"
        else:
            message = "Invalid response"
        super().__init__(message)
        self.missing_fields = missing_fields
