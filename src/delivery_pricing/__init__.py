"""
Delivery Pricing Package

Delivery fee calculation for single orders.
Resolves the fee using Distance Tier → Rush Hour Surcharge → Free Delivery pipeline.
"""

__version__ = "1.0.0"
