"""Quote pricing: markup application with fixed-point decimals.

finalPrice = baseCost * (1 + markupPercent / 100), rounded once to the
currency quantum with ROUND_HALF_UP.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from casework.domain.exceptions import InvalidAmountException

DEFAULT_QUANTUM = Decimal("0.01")
_HUNDRED = Decimal(100)


@dataclass(frozen=True)
class PricingConfig:
    """Finance defaults snapshot handed to the quote module per call."""

    default_markup_percent: Decimal = Decimal("20")
    default_apostille_price: Decimal | None = None
    quantum: Decimal = DEFAULT_QUANTUM


def to_decimal(value: Any, field: str) -> Decimal:
    """Convert an int/str/Decimal to Decimal; floats go through str() to avoid binary noise."""
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise InvalidAmountException(field, value) from e
    if not result.is_finite():
        raise InvalidAmountException(field, value)
    return result


def compute_final_price(
    base_cost: Decimal,
    markup_percent: Decimal,
    quantum: Decimal = DEFAULT_QUANTUM,
) -> Decimal:
    """Apply markup to base cost and round half up to the smallest currency unit.

    Example:
        >>> compute_final_price(Decimal("150"), Decimal("20"))
        Decimal('180.00')
        >>> compute_final_price(Decimal("10.05"), Decimal("10"))
        Decimal('11.06')
    """
    if base_cost <= 0:
        raise InvalidAmountException("base_cost", base_cost)
    if markup_percent < 0:
        raise InvalidAmountException("markup_percent", markup_percent)
    raw = base_cost * (1 + markup_percent / _HUNDRED)
    return raw.quantize(quantum, rounding=ROUND_HALF_UP)
