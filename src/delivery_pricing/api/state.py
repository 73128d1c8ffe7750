"""Shared engine instance for the API routers."""
from ..engine import DeliveryPricingEngine

engine = DeliveryPricingEngine()
