"""
Hardware Utilities Package

Public API:
    - check_gpio_available: Log whether the backend drives real hardware
    - parse_pin_list: Parse a comma separated pin list
    - parse_pin_state: Parse a `gpio write` value
    - safe_gpio_cleanup: Release a backend with error handling
"""

from hardware.utils.gpio_utils import (
    check_gpio_available,
    parse_pin_list,
    parse_pin_state,
    safe_gpio_cleanup,
)

# Public API
__all__ = [
    "check_gpio_available",
    "parse_pin_list",
    "parse_pin_state",
    "safe_gpio_cleanup",
]
