"""
GPIO Utilities

Shared helpers for the command handlers: converting command-line tokens
into pin levels and lists, and releasing a backend without letting
cleanup errors mask the command's own result.
"""

import logging
from typing import Optional

from hardware.interfaces.gpio_interface import GPIOInterface, PinState

# `gpio write` words for the two levels
HIGH_WORDS = ("up", "on")
LOW_WORDS = ("down", "off")


def safe_gpio_cleanup(
    gpio: Optional[GPIOInterface],
    pins: Optional[list[int]] = None,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Release a backend's callbacks and connection, logging any failure.

    Pin functions and levels are left alone; a command such as
    `gpio mode 17 out` has to outlive the process.

    Args:
        gpio: GPIO interface to clean up, or None
        pins: Specific pins to release, or None for all
        logger: Optional logger for error messages
    """
    if gpio is None:
        return

    try:
        gpio.cleanup(pins)
    except Exception as e:
        if logger:
            logger.error(f"Error during GPIO cleanup: {e}")


def parse_pin_state(text: str) -> PinState:
    """
    Level for a `gpio write` value token.

    "up"/"on" are HIGH, "down"/"off" LOW (case-insensitive); otherwise
    the token is a number and any non-zero value is HIGH.

    Raises:
        ValueError: If the token is neither a level word nor a number
    """
    word = text.lower()
    if word in HIGH_WORDS:
        return PinState.HIGH
    if word in LOW_WORDS:
        return PinState.LOW
    return PinState.HIGH if int(text) != 0 else PinState.LOW


def parse_pin_list(text: str) -> list[int]:
    """
    Pins of an mwfi list such as "4,17,27".

    Raises:
        ValueError: If an element is not a number
    """
    return [int(part) for part in text.split(",") if part.strip()]


def check_gpio_available(
    gpio: GPIOInterface,
    logger: Optional[logging.Logger] = None
) -> bool:
    """
    Check if GPIO hardware is available and log appropriate message.

    Args:
        gpio: GPIO interface to check
        logger: Optional logger for messages

    Returns:
        True if real hardware available, False if simulated
    """
    is_available = gpio.is_available()

    if logger:
        if is_available:
            logger.debug("Running on real GPIO hardware")
        else:
            logger.debug("Running in GPIO simulation mode")

    return is_available
