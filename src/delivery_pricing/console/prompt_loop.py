"""
Interactive terminal front end for the delivery pricing engine.

Reads cart subtotal, distance and rush hour flag, prints the fee, and keeps
looping until the user declines another order. Parsing text input is owned
here; pricing rules stay in the engine.
"""
import sys
from decimal import Decimal, InvalidOperation
from typing import Optional, TextIO

from ..engine import DeliveryOrder, DeliveryPricingEngine, DeliveryPricingError


RULE = "=" * 40
DIVIDER = "-" * 40


class InputClosed(Exception):
    """Raised when the input stream reaches EOF."""


class PromptLoop:
    """Prompt → calculate → print cycle over injectable streams."""

    def __init__(
        self,
        engine: Optional[DeliveryPricingEngine] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.engine = engine or DeliveryPricingEngine()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def _print(self, text: str = ""):
        self.stdout.write(text + "\n")

    def _ask(self, prompt: str) -> str:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise InputClosed()
        return line.strip()

    def _error(self, message: str):
        self._print(f"Error: {message}")
        self._print()

    def run(self) -> int:
        """Run until the user stops or input ends. Returns the number of fees printed."""
        self._print(RULE)
        self._print("   Delivery Pricing Engine")
        self._print(RULE)
        self._print()

        calculated = 0
        try:
            while True:
                try:
                    if not self._run_once():
                        continue
                    calculated += 1

                    if self._ask("Calculate another order? (y/n): ").lower() != "y":
                        break
                    self._print()
                except DeliveryPricingError as e:
                    self._error(e.message)
                except (InvalidOperation, ValueError):
                    self._error("Invalid input format. Please enter valid numbers.")
        except InputClosed:
            self._print()

        self._print()
        self._print(RULE)
        self._print("Thank you for using the Delivery Pricing Engine!")
        self._print(RULE)
        return calculated

    def _run_once(self) -> bool:
        """One order. Returns False when the iteration was abandoned on empty input."""
        cart_input = self._ask("Enter cart subtotal ($): ")
        if not cart_input:
            self._error("Cart subtotal cannot be empty.")
            return False
        cart_subtotal = Decimal(cart_input)

        distance_input = self._ask("Enter distance (km): ")
        if not distance_input:
            self._error("Distance cannot be empty.")
            return False
        distance = float(distance_input)

        is_rush_hour = self._ask("Is rush hour? (y/n): ").lower() == "y"

        order = DeliveryOrder(
            cart_subtotal=cart_subtotal,
            distance_km=distance,
            is_rush_hour=is_rush_hour,
        )
        fee = self.engine.calculate_fee(order)

        self._print()
        self._print(DIVIDER)
        self._print("Order Details:")
        self._print(f"  Cart Subtotal: ${cart_subtotal:.2f}")
        self._print(f"  Distance: {distance:.1f} km")
        self._print(f"  Rush Hour: {'Yes' if is_rush_hour else 'No'}")
        self._print(f"  Delivery Fee: ${fee:.2f}")
        self._print(DIVIDER)
        self._print()
        return True


def main() -> int:
    PromptLoop().run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
