"""
Controllers Package

High-level pin operations built on a GPIOInterface backend.
"""

from hardware.controllers.interrupt_waiter import InterruptWaiter, parse_edge
from hardware.controllers.pin_controller import PinController

# Public API (sorted alphabetically)
__all__ = [
    "InterruptWaiter",
    "PinController",
    "parse_edge",
]
