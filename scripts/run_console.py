#!/usr/bin/env python
"""
Run the interactive delivery fee prompt.

Usage:
    python scripts/run_console.py [--inclusive-free-delivery] [--verbose]
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from delivery_pricing.config.settings import get_settings
from delivery_pricing.console import PromptLoop
from delivery_pricing.engine import DeliveryPricingEngine


def main():
    parser = argparse.ArgumentParser(description="Interactive delivery fee calculator")
    parser.add_argument(
        "--inclusive-free-delivery",
        action="store_true",
        help="Give free delivery to carts at the threshold, not only above it",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log each calculation")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = get_settings()
    if args.inclusive_free_delivery:
        from dataclasses import replace
        settings = replace(settings, free_delivery_inclusive=True)

    try:
        PromptLoop(engine=DeliveryPricingEngine(settings)).run()
    except KeyboardInterrupt:
        print("\nStopped.")


if __name__ == "__main__":
    main()
