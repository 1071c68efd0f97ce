"""
Hardware Module

GPIO hardware abstraction for the Raspberry Pi.

Public API:
    - HardwareFactory: Factory for creating GPIO backends
    - GPIOInterface: GPIO contract
    - GPIOError: Hardware operation failure
    - NumberingScheme: How pin numbers are interpreted

The controllers (PinController, InterruptWaiter) route pins to extension
nodes and are imported from hardware.controllers, not re-exported here;
extensions import this package's interfaces.

Usage:
    from hardware import HardwareFactory, NumberingScheme
    from hardware.controllers import PinController

    pins = PinController(HardwareFactory.create_gpio(), NumberingScheme.WPI)
    pins.toggle(0)
"""

from hardware.constants import NumberingScheme
from hardware.factory import HardwareFactory
from hardware.interfaces.gpio_interface import GPIOError, GPIOInterface

__all__ = [
    "GPIOError",
    "GPIOInterface",
    "HardwareFactory",
    "NumberingScheme",
]
