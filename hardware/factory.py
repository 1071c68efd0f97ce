"""
Hardware Factory

Factory pattern for creating GPIO backends.

The command-line tool must not silently pretend: "auto" tries the pigpio
daemon first, then RPi.GPIO, and fails if neither is usable. The simulated
backend is only used when asked for (`gpio -z`, GPIO_BACKEND=mock).
"""

import logging
from typing import Literal, Optional

from config import settings
from hardware.implementations.mock_gpio import MockGPIO
from hardware.implementations.pigpio_gpio import PigpioGPIO
from hardware.implementations.rpi_gpio import RaspberryPiGPIO
from hardware.interfaces.gpio_interface import GPIOError, GPIOInterface

# Type aliases for better type hints
BackendMode = Literal["auto", "pigpio", "rpigpio", "mock"]

BACKEND_MODES = ("auto", "pigpio", "rpigpio", "mock")


class HardwareFactory:
    """
    Factory for creating GPIO interface implementations.

    Usage:
        # Whatever GPIO_BACKEND says (default "auto")
        gpio = HardwareFactory.create_gpio()

        # Force simulation (dry runs, tests)
        gpio = HardwareFactory.create_gpio(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_gpio(
        cls,
        mode: Optional[BackendMode] = None,
    ) -> GPIOInterface:
        """
        Create a GPIO interface instance.

        Args:
            mode: "auto", "pigpio", "rpigpio" or "mock";
                  None reads GPIO_BACKEND from config.settings

        Returns:
            GPIOInterface implementation

        Raises:
            GPIOError: If the requested backend is not usable
        """
        mode = mode or settings.GPIO_BACKEND

        if mode not in BACKEND_MODES:
            raise GPIOError(
                f"Unknown GPIO backend '{mode}' (expected one of: {', '.join(BACKEND_MODES)})",
            )

        if mode == "mock":
            cls._logger.info("Creating Mock GPIO (forced)")
            return MockGPIO()

        if mode == "pigpio":
            gpio = PigpioGPIO()
            cls._logger.info("Creating pigpio GPIO (forced)")
            return gpio

        if mode == "rpigpio":
            gpio = RaspberryPiGPIO()
            cls._logger.info("Creating RPi.GPIO GPIO (forced)")
            return gpio

        # mode == "auto" - pigpio daemon first, then RPi.GPIO
        failures = []
        for backend in (PigpioGPIO, RaspberryPiGPIO):
            try:
                gpio = backend()
                cls._logger.info(f"Creating {backend.__name__} (auto-detected)")
                return gpio
            except GPIOError as e:
                cls._logger.debug(f"{backend.__name__} not available: {e}")
                failures.append(str(e))

        raise GPIOError("No GPIO backend available: " + "; ".join(failures))
