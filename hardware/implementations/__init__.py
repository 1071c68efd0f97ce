"""
Hardware Implementations Package

Exposes concrete implementations of the GPIO interface.
"""

from hardware.implementations.mock_gpio import MockGPIO
from hardware.implementations.pigpio_gpio import PigpioGPIO
from hardware.implementations.rpi_gpio import RaspberryPiGPIO

# Public API (sorted alphabetically)
__all__ = [
    "MockGPIO",
    "PigpioGPIO",
    "RaspberryPiGPIO",
]
