"""
Extension Node Interface

An extension node adds pins beyond the SoC's own GPIOs: an I/O expander or
an ADC hanging off I2C, loaded with `gpio -x name:pinBase:params`. A node
owns the pin numbers [pin_base, pin_base + pin_count) and the pin
controller routes any pin in that range to it, passing the offset from
pin_base.

Nodes implement only what their chip can do; everything else raises
ExtensionError naming the node.
"""

from abc import ABC, abstractmethod

from hardware.interfaces.gpio_interface import PinMode, PinState, PullMode


class ExtensionError(Exception):
    """An extension could not be loaded or cannot perform a request."""


class ExtensionNode(ABC):
    """
    Base class for extension nodes.

    Subclasses set ``name`` and ``pin_count`` and provide ``from_params``,
    which builds a node from the colon-separated parameters that follow
    the pin base in the extension spec.
    """

    name = "extension"
    pin_count = 0

    def __init__(self, pin_base: int):
        self.pin_base = pin_base

    @classmethod
    @abstractmethod
    def from_params(cls, pin_base: int, params: list[str]) -> "ExtensionNode":
        """
        Create the node from its spec parameters.

        Raises:
            ExtensionError: If parameters are missing/invalid or the chip
                            does not answer
        """

    @property
    def pin_max(self) -> int:
        """Last pin number owned by this node"""
        return self.pin_base + self.pin_count - 1

    def owns(self, pin: int) -> bool:
        return self.pin_base <= pin <= self.pin_max

    def _unsupported(self, what: str) -> ExtensionError:
        return ExtensionError(f"{self.name}: {what} is not supported")

    def pin_mode(self, offset: int, mode: PinMode) -> None:
        raise self._unsupported(f"pin mode {mode.value}")

    def set_pull(self, offset: int, pull_mode: PullMode) -> None:
        raise self._unsupported(f"pull {pull_mode.value}")

    def digital_read(self, offset: int) -> PinState:
        raise self._unsupported("digital read")

    def digital_write(self, offset: int, state: PinState) -> None:
        raise self._unsupported("digital write")

    def analog_read(self, offset: int) -> int:
        raise self._unsupported("analog read")

    def analog_write(self, offset: int, value: int) -> None:
        raise self._unsupported("analog write")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} pins {self.pin_base}-{self.pin_max}>"
