"""
Error taxonomy for delivery fee calculation.

Each error carries a stable ``code`` so callers (console, API, UI) can report
a targeted message instead of a generic failure.
"""
from typing import Any, Optional


class DeliveryPricingError(Exception):
    """Base class for every failure raised by the pricing engine."""

    code = "pricing_error"

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


class MissingOrderError(DeliveryPricingError, ValueError):
    """The order itself was not supplied."""

    code = "missing_input"


class OutOfRangeError(DeliveryPricingError, ValueError):
    """A numeric field is outside its valid domain (negative subtotal or distance)."""

    code = "out_of_range"


class InvalidStateError(DeliveryPricingError, RuntimeError):
    """The distance is valid as a number but beyond the supported delivery radius."""

    code = "invalid_state"
