"""
Data models for the delivery pricing engine.

Uses dataclasses for structured, type-safe data representation.
Monetary amounts are Decimal; distances are float kilometres.
"""
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from .errors import OutOfRangeError


CENTS = Decimal("0.01")

Money = Union[Decimal, float, int, str]


def to_money(value: Money) -> Decimal:
    """Coerce a monetary input to Decimal without float artefacts (49.99 stays 49.99)."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"{value!r} is not a valid monetary amount") from None


@dataclass(frozen=True)
class DeliveryOrder:
    """
    A single order to price.

    The cart subtotal is checked as soon as the order is built. The distance is
    not: an out-of-range distance only fails when a fee is calculated.
    """
    cart_subtotal: Decimal
    distance_km: float
    is_rush_hour: bool = False

    def __post_init__(self):
        subtotal = to_money(self.cart_subtotal)
        if subtotal.is_nan() or subtotal < 0:
            raise OutOfRangeError(
                "Cart subtotal cannot be negative.",
                details={"field": "cart_subtotal", "value": str(subtotal)},
            )
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'cart_subtotal', subtotal)
        object.__setattr__(self, 'distance_km', float(self.distance_km))
        object.__setattr__(self, 'is_rush_hour', bool(self.is_rush_hour))


@dataclass
class TraceStep:
    """A single step in the fee resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class FeeResult:
    """Complete result of a fee calculation."""
    fee: Decimal
    base_fee: Decimal
    adjusted_fee: Decimal
    distance_tier: str
    rush_hour_applied: bool = False
    free_delivery_applied: bool = False
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Flat JSON-friendly form, money rendered with two decimals."""
        return {
            "fee": f"{self.fee:.2f}",
            "base_fee": f"{self.base_fee:.2f}",
            "adjusted_fee": f"{self.adjusted_fee:.2f}",
            "distance_tier": self.distance_tier,
            "rush_hour_applied": self.rush_hour_applied,
            "free_delivery_applied": self.free_delivery_applied,
            "trace": [
                {"step": t.step, "description": t.description, "value": t.value}
                for t in self.trace
            ],
        }
