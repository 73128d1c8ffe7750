"""
Delivery Pricing Engine - Core fee resolution logic with traceability.

Resolution order:
1. Validate the order (present, distance within 0-max km, non-negative subtotal)
2. Look up the base fee from the distance tier
3. Apply the rush hour surcharge
4. Apply the free delivery override
"""
import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..config.settings import get_settings, Settings
from .errors import InvalidStateError, MissingOrderError, OutOfRangeError
from .models import CENTS, DeliveryOrder, FeeResult, to_money


logger = logging.getLogger(__name__)

ZERO_FEE = Decimal("0.00")


class DeliveryPricingEngine:
    """
    Calculates delivery fees from distance, rush hour status and cart subtotal.

    The engine holds no per-call state; one instance can serve any number of
    orders from any thread.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def calculate_fee(self, order: Optional[DeliveryOrder]) -> Decimal:
        """
        Calculate the delivery fee for an order.

        Raises:
            MissingOrderError: order is None
            OutOfRangeError: negative distance or cart subtotal
            InvalidStateError: distance beyond the maximum supported distance
        """
        return self.calculate(order).fee

    def calculate(self, order: Optional[DeliveryOrder]) -> FeeResult:
        """
        Calculate the fee with a full trace of each resolution step.

        Args:
            order: DeliveryOrder (or any object with the same attributes)

        Returns:
            FeeResult with final fee, intermediate fees and trace
        """
        if order is None:
            logger.info("Rejected fee calculation: no order supplied")
            raise MissingOrderError("Order is required.", details={"field": "order"})

        distance = float(order.distance_km)
        self._validate_distance(distance)
        subtotal = self._validate_subtotal(order.cart_subtotal)

        tier, base_fee = self.get_base_fee(distance)
        result = FeeResult(
            fee=ZERO_FEE,
            base_fee=base_fee,
            adjusted_fee=base_fee,
            distance_tier=tier,
        )
        result.add_trace("Distance Tier", f"{distance:g} km falls in {tier} tier", f"${base_fee:.2f}")

        # Surcharge is always computed, even when free delivery discards it
        result.adjusted_fee = self.apply_rush_hour_surcharge(base_fee, order.is_rush_hour)
        result.rush_hour_applied = bool(order.is_rush_hour)
        if result.rush_hour_applied:
            result.add_trace(
                "Rush Hour",
                f"Surcharge × {self.settings.rush_hour_multiplier}",
                f"${result.adjusted_fee:.2f}",
            )
        else:
            result.add_trace("Rush Hour", "No surcharge")

        if self.qualifies_for_free_delivery(subtotal):
            result.free_delivery_applied = True
            result.fee = ZERO_FEE
            result.add_trace(
                "Free Delivery",
                f"Cart ${subtotal:.2f} qualifies (threshold ${self.settings.free_delivery_threshold:.2f})",
                f"${ZERO_FEE:.2f}",
            )
        else:
            result.fee = result.adjusted_fee
            result.add_trace("Free Delivery", f"Cart ${subtotal:.2f} does not qualify")

        logger.debug(
            "Delivery fee %s (tier=%s, rush=%s, free=%s)",
            result.fee, tier, result.rush_hour_applied, result.free_delivery_applied,
        )
        return result

    def _validate_distance(self, distance_km: float):
        if math.isnan(distance_km) or distance_km < 0:
            logger.info("Rejected fee calculation: distance %s km", distance_km)
            raise OutOfRangeError(
                "Distance cannot be negative.",
                details={"field": "distance_km", "value": str(distance_km)},
            )

        max_km = self.settings.max_distance_km
        if distance_km > max_km:
            logger.info("Rejected fee calculation: distance %s km over %s km", distance_km, max_km)
            raise InvalidStateError(
                f"Distance of {distance_km} km exceeds the maximum supported distance of {max_km} km.",
                details={"field": "distance_km", "value": str(distance_km), "max_distance_km": max_km},
            )

    def _validate_subtotal(self, cart_subtotal) -> Decimal:
        # DeliveryOrder already guarantees this; other order-like objects may not
        subtotal = to_money(cart_subtotal)
        if subtotal.is_nan() or subtotal < 0:
            logger.info("Rejected fee calculation: cart subtotal %s", subtotal)
            raise OutOfRangeError(
                "Cart subtotal cannot be negative.",
                details={"field": "cart_subtotal", "value": str(subtotal)},
            )
        return subtotal

    def get_base_fee(self, distance_km: float) -> tuple[str, Decimal]:
        """Return (tier name, base fee); each threshold belongs to the tier above it."""
        s = self.settings
        if distance_km < s.short_distance_threshold_km:
            return "SHORT", s.short_distance_fee
        if distance_km < s.medium_distance_threshold_km:
            return "MEDIUM", s.medium_distance_fee
        return "LONG", s.long_distance_fee

    def apply_rush_hour_surcharge(self, base_fee: Decimal, is_rush_hour: bool) -> Decimal:
        if not is_rush_hour:
            return base_fee
        return (base_fee * self.settings.rush_hour_multiplier).quantize(CENTS, rounding=ROUND_HALF_UP)

    def qualifies_for_free_delivery(self, cart_subtotal: Decimal) -> bool:
        """
        Strict comparison by default: a cart of exactly the threshold still pays.

        Set ``free_delivery_inclusive`` to honour the "threshold or more" rule.
        """
        threshold = self.settings.free_delivery_threshold
        if self.settings.free_delivery_inclusive:
            return cart_subtotal >= threshold
        return cart_subtotal > threshold

    def fee_schedule(self) -> list[dict]:
        """Distance tiers with their normal and rush hour fees, for display."""
        s = self.settings
        tiers = [
            ("SHORT", 0.0, s.short_distance_threshold_km, s.short_distance_fee),
            ("MEDIUM", s.short_distance_threshold_km, s.medium_distance_threshold_km, s.medium_distance_fee),
            ("LONG", s.medium_distance_threshold_km, s.max_distance_km, s.long_distance_fee),
        ]
        return [
            {
                "tier": name,
                "from_km": low,
                "to_km": high,
                "upper_inclusive": name == "LONG",
                "base_fee": f"{fee:.2f}",
                "rush_hour_fee": f"{self.apply_rush_hour_surcharge(fee, True):.2f}",
            }
            for name, low, high, fee in tiers
        ]
