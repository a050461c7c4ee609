"""Amount canonicalization for the fixed-width PurchaseAmt field"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from mpg_gateway.domain.exceptions import AmountOverflow, InvalidAmount

AMOUNT_FIELD_WIDTH = 12


def to_decimal(amount: Decimal | int | float | str) -> Decimal:
    """Convert a caller-supplied amount to Decimal (floats go through str)"""
    if isinstance(amount, bool):
        raise InvalidAmount(f"Invalid amount: {amount!r}")
    if isinstance(amount, float):
        amount = str(amount)
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidAmount(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise InvalidAmount(f"Amount must be finite: {amount!r}")
    return value


def canonicalize_amount(
    amount: Decimal | int | float | str,
    exponent: int,
    width: int = AMOUNT_FIELD_WIDTH,
) -> str:
    """
    Render an amount in minor units as a zero-padded digit string.

    The amount is scaled by 10**exponent and rounded half away from zero,
    so 0.125 at exponent 2 becomes 13 minor units.

    Raises:
        InvalidAmount: Negative or non-finite amount, or negative exponent
        AmountOverflow: Digits do not fit in `width` characters

    Example:
        canonicalize_amount(Decimal("125.5"), 2) -> "000000012550"
    """
    if isinstance(exponent, bool) or not isinstance(exponent, int) or exponent < 0:
        raise InvalidAmount(f"Currency exponent must be a non-negative integer: {exponent!r}")

    value = to_decimal(amount)
    if value < 0:
        raise InvalidAmount(f"Amount must not be negative: {value}")

    # Integer digits of the scaled amount before rounding; rounding can add one more
    if value and value.adjusted() + exponent + 1 > width:
        raise AmountOverflow(value.adjusted() + exponent + 1, width)

    # Round the exact value once, then shift; width + 2 digits hold any result
    with localcontext() as ctx:
        ctx.prec = width + 2
        rounded = value.quantize(Decimal(1).scaleb(-exponent), rounding=ROUND_HALF_UP)
        digits = str(int(rounded.scaleb(exponent)))

    if len(digits) > width:
        raise AmountOverflow(len(digits), width)

    return digits.rjust(width, "0")


def parse_canonical_amount(value: str, exponent: int) -> Decimal:
    """Convert a PurchaseAmt digit string back to a major-unit Decimal"""
    if not value or not value.isascii() or not value.isdigit():
        raise InvalidAmount(f"Canonical amount must be ASCII digits: {value!r}")
    if exponent < 0:
        raise InvalidAmount(f"Currency exponent must be non-negative: {exponent!r}")
    return Decimal(int(value)).scaleb(-exponent)
