"""
MCP23017 Extension

16-bit I2C I/O expander, loaded with `-x mcp23017:<pinBase>:<i2cAddress>`.
Pins pinBase+0..7 are port A, pinBase+8..15 port B.

Uses the Adafruit CircuitPython driver through Blinka; the libraries are
imported when the extension is loaded so the rest of the tool works
without them.
"""

import logging

from extensions.interfaces.extension_interface import ExtensionError, ExtensionNode
from extensions.utils import parse_i2c_address
from hardware.interfaces.gpio_interface import PinMode, PinState, PullMode


class Mcp23017Node(ExtensionNode):
    """Digital I/O through an MCP23017"""

    name = "mcp23017"
    pin_count = 16

    def __init__(self, pin_base: int, device):
        super().__init__(pin_base)
        self.logger = logging.getLogger(__name__)
        self.device = device

    @classmethod
    def from_params(cls, pin_base: int, params: list[str]) -> "Mcp23017Node":
        if len(params) != 1:
            raise ExtensionError("mcp23017: expected mcp23017:pinBase:i2cAddress")
        address = parse_i2c_address(cls.name, params[0])

        try:
            import board
            import busio
            from adafruit_mcp230xx.mcp23017 import MCP23017
        except (ImportError, NotImplementedError, RuntimeError) as e:
            raise ExtensionError(f"mcp23017: I2C support not available: {e}") from e

        try:
            i2c_bus = busio.I2C(board.SCL, board.SDA)
            device = MCP23017(i2c_bus, address=address)
        except (OSError, ValueError) as e:
            raise ExtensionError(f"mcp23017: no device at 0x{address:02X}: {e}") from e

        return cls(pin_base, device)

    def _pin(self, offset: int):
        return self.device.get_pin(offset)

    def pin_mode(self, offset: int, mode: PinMode) -> None:
        import digitalio

        if mode == PinMode.INPUT:
            direction = digitalio.Direction.INPUT
        elif mode == PinMode.OUTPUT:
            direction = digitalio.Direction.OUTPUT
        else:
            raise self._unsupported(f"pin mode {mode.value}")

        try:
            self._pin(offset).direction = direction
        except OSError as e:
            raise ExtensionError(f"mcp23017: mode change of pin {offset} failed: {e}") from e
        self.logger.debug(f"mcp23017 pin {offset} -> {mode.value}")

    def set_pull(self, offset: int, pull_mode: PullMode) -> None:
        import digitalio

        if pull_mode == PullMode.DOWN:
            raise self._unsupported("pull down")
        try:
            self._pin(offset).pull = digitalio.Pull.UP if pull_mode == PullMode.UP else None
        except OSError as e:
            raise ExtensionError(f"mcp23017: pull change of pin {offset} failed: {e}") from e

    def digital_read(self, offset: int) -> PinState:
        try:
            return PinState.HIGH if self._pin(offset).value else PinState.LOW
        except OSError as e:
            raise ExtensionError(f"mcp23017: read of pin {offset} failed: {e}") from e

    def digital_write(self, offset: int, state: PinState) -> None:
        try:
            self._pin(offset).value = state == PinState.HIGH
        except OSError as e:
            raise ExtensionError(f"mcp23017: write of pin {offset} failed: {e}") from e
