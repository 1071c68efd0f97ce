"""
ADS1115 Extension

4-channel 16-bit I2C ADC, loaded with `-x ads1115:<pinBase>:<i2cAddress>`.
`gpio aread <pinBase+n>` returns the raw reading of single-ended channel n.
"""

from extensions.interfaces.extension_interface import ExtensionError, ExtensionNode
from extensions.utils import parse_i2c_address


class Ads1115Node(ExtensionNode):
    """Analog inputs through an ADS1115"""

    name = "ads1115"
    pin_count = 4

    def __init__(self, pin_base: int, device, analog_in_factory):
        super().__init__(pin_base)
        self.device = device
        self._analog_in = analog_in_factory

    @classmethod
    def from_params(cls, pin_base: int, params: list[str]) -> "Ads1115Node":
        if len(params) != 1:
            raise ExtensionError("ads1115: expected ads1115:pinBase:i2cAddress")
        address = parse_i2c_address(cls.name, params[0])

        try:
            import adafruit_ads1x15.ads1115 as ads1115
            import board
            import busio
            from adafruit_ads1x15.analog_in import AnalogIn
        except (ImportError, NotImplementedError, RuntimeError) as e:
            raise ExtensionError(f"ads1115: I2C support not available: {e}") from e

        try:
            i2c_bus = busio.I2C(board.SCL, board.SDA)
            device = ads1115.ADS1115(i2c_bus, address=address)
        except (OSError, ValueError) as e:
            raise ExtensionError(f"ads1115: no device at 0x{address:02X}: {e}") from e

        return cls(pin_base, device, AnalogIn)

    def analog_read(self, offset: int) -> int:
        try:
            return self._analog_in(self.device, offset).value
        except (OSError, ValueError) as e:
            raise ExtensionError(f"ads1115: read of channel {offset} failed: {e}") from e
