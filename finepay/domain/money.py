"""Currency arithmetic.

All amounts are ``Decimal``. Both rounding steps use ROUND_HALF_UP
(half away from zero): first to two decimal places in the settlement
currency, then to integer minor units for the processor.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
MINOR_UNITS_PER_MAJOR = Decimal("100")


@dataclass(frozen=True)
class ConvertedAmount:
    """Local amount converted to the settlement currency."""

    source_amount: Decimal
    rate: Decimal
    settlement_amount: Decimal
    minor_units: int


def to_settlement_amount(amount: Decimal, rate: Decimal) -> Decimal:
    return (amount * rate).quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(amount: Decimal) -> int:
    return int((amount * MINOR_UNITS_PER_MAJOR).to_integral_value(rounding=ROUND_HALF_UP))


def convert_amount(amount: Decimal, rate: Decimal) -> ConvertedAmount:
    """Convert ``amount`` with ``rate`` and derive processor minor units.

    >>> convert_amount(Decimal("5000"), Decimal("0.0031")).minor_units
    1550
    """
    settlement = to_settlement_amount(amount, rate)
    return ConvertedAmount(
        source_amount=amount,
        rate=rate,
        settlement_amount=settlement,
        minor_units=to_minor_units(settlement),
    )


def is_valid_amount(value: Decimal) -> bool:
    """Finite and non-negative."""
    return value.is_finite() and value >= 0


def is_valid_rate(value: Decimal) -> bool:
    """Finite and strictly positive."""
    return value.is_finite() and value > 0
