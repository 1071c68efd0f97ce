"""
Hardware Interfaces Package

Exposes the abstract GPIO backend contract and its value types.
"""

from hardware.interfaces.gpio_interface import (
    AltFunction,
    EdgeDetection,
    GPIOError,
    GPIOInterface,
    PinMode,
    PinState,
    PullMode,
    PwmMode,
)

# Public API (sorted alphabetically)
__all__ = [
    "AltFunction",
    "EdgeDetection",
    "GPIOError",
    "GPIOInterface",
    "PinMode",
    "PinState",
    "PullMode",
    "PwmMode",
]
