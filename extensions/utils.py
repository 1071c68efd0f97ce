"""Helpers shared by extension implementations."""

from extensions.interfaces.extension_interface import ExtensionError


def parse_i2c_address(name: str, text: str) -> int:
    """
    Parse a 7-bit I2C address given as decimal, 0x hex or 0 octal.

    Raises:
        ExtensionError: If the text is not a number in 0x03-0x77
    """
    try:
        address = int(text, 0)
    except ValueError:
        raise ExtensionError(f"{name}: invalid I2C address: {text}") from None
    if not 0x03 <= address <= 0x77:
        raise ExtensionError(f"{name}: I2C address out of range: {text}")
    return address
