"""
Centralized settings for the delivery pricing engine.

Defaults match the published fee schedule. Every value can be overridden
through a DELIVERY_* environment variable; settings are read once at startup.
"""
import math
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional


ENV_PREFIX = "DELIVERY_"

_TRUE_VALUES = ("1", "true", "yes", "y", "on")

_MONEY_FIELDS = (
    'short_distance_fee', 'medium_distance_fee', 'long_distance_fee',
    'rush_hour_multiplier', 'free_delivery_threshold',
)
_DISTANCE_FIELDS = ('short_distance_threshold_km', 'medium_distance_threshold_km', 'max_distance_km')


def _env_decimal(env: Mapping[str, str], name: str, default: str) -> Decimal:
    raw = env.get(ENV_PREFIX + name, default)
    try:
        return Decimal(raw.strip())
    except InvalidOperation:
        raise ValueError(f"{ENV_PREFIX}{name}: {raw!r} is not a decimal number") from None


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name}: {raw!r} is not a number") from None


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(ENV_PREFIX + name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    """Fee schedule settings with sensible defaults."""

    # Distance tiers (upper bounds are exclusive)
    short_distance_threshold_km: float = 5.0
    medium_distance_threshold_km: float = 10.0
    max_distance_km: float = 100.0

    # Base fees per tier
    short_distance_fee: Decimal = Decimal("2.00")
    medium_distance_fee: Decimal = Decimal("5.00")
    long_distance_fee: Decimal = Decimal("10.00")

    rush_hour_multiplier: Decimal = Decimal("1.5")

    # Free delivery: cart must be strictly above the threshold unless inclusive
    free_delivery_threshold: Decimal = Decimal("50.00")
    free_delivery_inclusive: bool = False

    def __post_init__(self):
        # frozen dataclass: normalise through object.__setattr__
        for name in _MONEY_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                try:
                    value = Decimal(str(value).strip())
                except InvalidOperation:
                    raise ValueError(f"{name}: {value!r} is not a decimal number") from None
            if not value.is_finite() or value < 0:
                raise ValueError(f"{name} must be a finite, non-negative amount (got {value}).")
            object.__setattr__(self, name, value)

        for name in _DISTANCE_FIELDS:
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite (got {value}).")
            object.__setattr__(self, name, value)

        if not (0 < self.short_distance_threshold_km
                < self.medium_distance_threshold_km
                <= self.max_distance_km):
            raise ValueError(
                "Distance thresholds must satisfy 0 < short < medium <= max "
                f"(got {self.short_distance_threshold_km}, "
                f"{self.medium_distance_threshold_km}, {self.max_distance_km})."
            )
        if self.rush_hour_multiplier < 1:
            raise ValueError(
                f"Rush hour multiplier must be at least 1 (got {self.rush_hour_multiplier})."
            )

    @classmethod
    def load(cls, env: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Load settings from the environment, falling back to defaults."""
        env = os.environ if env is None else env
        defaults = cls()

        return cls(
            short_distance_threshold_km=_env_float(
                env, 'SHORT_THRESHOLD_KM', defaults.short_distance_threshold_km),
            medium_distance_threshold_km=_env_float(
                env, 'MEDIUM_THRESHOLD_KM', defaults.medium_distance_threshold_km),
            max_distance_km=_env_float(env, 'MAX_DISTANCE_KM', defaults.max_distance_km),
            short_distance_fee=_env_decimal(env, 'SHORT_FEE', str(defaults.short_distance_fee)),
            medium_distance_fee=_env_decimal(env, 'MEDIUM_FEE', str(defaults.medium_distance_fee)),
            long_distance_fee=_env_decimal(env, 'LONG_FEE', str(defaults.long_distance_fee)),
            rush_hour_multiplier=_env_decimal(
                env, 'RUSH_MULTIPLIER', str(defaults.rush_hour_multiplier)),
            free_delivery_threshold=_env_decimal(
                env, 'FREE_THRESHOLD', str(defaults.free_delivery_threshold)),
            free_delivery_inclusive=_env_bool(
                env, 'FREE_DELIVERY_INCLUSIVE', defaults.free_delivery_inclusive),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings():
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
