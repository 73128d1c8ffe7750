import pytest
import sys
import os
from decimal import Decimal

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from delivery_pricing.config.settings import Settings
from delivery_pricing.engine import (
    DeliveryOrder, DeliveryPricingEngine, InvalidStateError, MissingOrderError, OutOfRangeError,
)


@pytest.fixture
def engine():
    return DeliveryPricingEngine(Settings())


def order(cart="25.00", distance=6.0, rush=False):
    return DeliveryOrder(cart_subtotal=Decimal(cart), distance_km=distance, is_rush_hour=rush)


def test_typical_lunch_order(engine):
    """6 km, $30 cart, off-peak: medium tier fee, no surcharge, no free delivery."""
    assert engine.calculate_fee(order("30.00", 6.0)) == Decimal("5.00")


@pytest.mark.parametrize("distance,expected", [
    (3.0, "2.00"),
    (7.5, "5.00"),
    (15.0, "10.00"),
])
def test_distance_tiers(engine, distance, expected):
    assert engine.calculate_fee(order("25.00", distance)) == Decimal(expected)


@pytest.mark.parametrize("distance,expected", [
    (0.0, "2.00"),
    (4.999, "2.00"),
    (5.0, "5.00"),
    (9.999, "5.00"),
    (10.0, "10.00"),
    (100.0, "10.00"),
])
def test_tier_boundaries_belong_to_upper_tier(engine, distance, expected):
    assert engine.calculate_fee(order("25.00", distance)) == Decimal(expected)


def test_rush_hour_surcharge(engine):
    fee = engine.calculate_fee(order("30.00", 6.0, rush=True))
    assert fee == Decimal("7.50")
    assert str(fee) == "7.50"


@pytest.mark.parametrize("distance", [0.0, 3.0, 5.0, 9.5, 10.0, 42.0, 100.0])
def test_rush_hour_is_one_and_a_half_times_normal(engine, distance):
    normal = engine.calculate_fee(order("20.00", distance))
    rush = engine.calculate_fee(order("20.00", distance, rush=True))
    assert rush == normal * Decimal("1.5")


def test_free_delivery_overrides_rush_hour(engine):
    result = engine.calculate(order("100.00", 6.0, rush=True))

    assert result.fee == Decimal("0.00")
    # the surcharge is still computed before being discarded
    assert result.adjusted_fee == Decimal("7.50")
    assert result.rush_hour_applied
    assert result.free_delivery_applied


@pytest.mark.parametrize("distance", [0.0, 4.0, 7.0, 50.0, 100.0])
@pytest.mark.parametrize("rush", [False, True])
def test_free_delivery_regardless_of_distance_or_rush(engine, distance, rush):
    assert engine.calculate_fee(order("50.01", distance, rush)) == Decimal("0.00")


@pytest.mark.parametrize("cart,expected", [
    ("49.99", "5.00"),
    ("50.00", "5.00"),  # strict threshold: exactly 50.00 still pays
    ("50.01", "0.00"),
])
def test_free_delivery_threshold_is_strict_by_default(engine, cart, expected):
    assert engine.calculate_fee(order(cart, 6.0)) == Decimal(expected)


@pytest.mark.parametrize("cart,expected", [
    ("49.99", "5.00"),
    ("50.00", "0.00"),
    ("50.01", "0.00"),
])
def test_free_delivery_threshold_inclusive_setting(cart, expected):
    engine = DeliveryPricingEngine(Settings(free_delivery_inclusive=True))
    assert engine.calculate_fee(order(cart, 6.0)) == Decimal(expected)


def test_missing_order(engine):
    with pytest.raises(MissingOrderError) as exc:
        engine.calculate_fee(None)
    assert "required" in str(exc.value)


@pytest.mark.parametrize("distance", [-0.001, -1.0, -500.0])
def test_negative_distance(engine, distance):
    with pytest.raises(OutOfRangeError) as exc:
        engine.calculate_fee(order("25.00", distance))
    assert "cannot be negative" in exc.value.message


@pytest.mark.parametrize("distance", [100.001, 101.0, 1000.0])
def test_distance_over_maximum(engine, distance):
    with pytest.raises(InvalidStateError) as exc:
        engine.calculate_fee(order("25.00", distance))
    assert "exceeds the maximum supported distance of 100.0 km" in exc.value.message


def test_nan_distance_rejected(engine):
    with pytest.raises(OutOfRangeError):
        engine.calculate_fee(order("25.00", float("nan")))


def test_distance_checked_before_subtotal(engine):
    """Order-like objects skip construction checks; distance errors still come first."""
    class LooseOrder:
        cart_subtotal = Decimal("-1")
        distance_km = 150.0
        is_rush_hour = False

    with pytest.raises(InvalidStateError):
        engine.calculate_fee(LooseOrder())

    LooseOrder.distance_km = 2.0
    with pytest.raises(OutOfRangeError) as exc:
        engine.calculate_fee(LooseOrder())
    assert "Cart subtotal" in exc.value.message


def test_invalid_distance_only_fails_on_calculation(engine):
    o = order("25.00", 250.0)
    assert o.distance_km == 250.0
    with pytest.raises(InvalidStateError):
        engine.calculate_fee(o)


def test_calculation_is_deterministic(engine):
    o = order("12.34", 8.2, rush=True)
    assert {engine.calculate_fee(o) for _ in range(5)} == {Decimal("7.50")}


def test_trace_records_each_step(engine):
    result = engine.calculate(order("30.00", 12.0, rush=True))

    steps = [t.step for t in result.trace]
    assert steps == ["Distance Tier", "Rush Hour", "Free Delivery"]
    assert result.distance_tier == "LONG"
    assert result.fee == Decimal("15.00")
    assert "LONG tier" in result.get_trace_text()


def test_result_to_dict(engine):
    data = engine.calculate(order("30.00", 3.0, rush=True)).to_dict()

    assert data["fee"] == "3.00"
    assert data["base_fee"] == "2.00"
    assert data["distance_tier"] == "SHORT"
    assert data["free_delivery_applied"] is False
    assert len(data["trace"]) == 3


def test_fee_schedule(engine):
    schedule = engine.fee_schedule()

    assert [row["tier"] for row in schedule] == ["SHORT", "MEDIUM", "LONG"]
    assert [row["base_fee"] for row in schedule] == ["2.00", "5.00", "10.00"]
    assert [row["rush_hour_fee"] for row in schedule] == ["3.00", "7.50", "15.00"]
    assert schedule[-1]["to_km"] == 100.0
    assert schedule[-1]["upper_inclusive"] is True


def test_custom_schedule():
    settings = Settings(
        short_distance_threshold_km=3.0,
        medium_distance_threshold_km=8.0,
        max_distance_km=20.0,
        long_distance_fee=Decimal("12.00"),
        rush_hour_multiplier=Decimal("2"),
    )
    engine = DeliveryPricingEngine(settings)

    assert engine.calculate_fee(order("10.00", 3.0)) == Decimal("5.00")
    assert engine.calculate_fee(order("10.00", 8.0, rush=True)) == Decimal("24.00")
    with pytest.raises(InvalidStateError):
        engine.calculate_fee(order("10.00", 21.0))
