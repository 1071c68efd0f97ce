"""
Pin Controller

The facade every command handler talks to instead of the raw backend.

Responsibilities:
- Translate the pin number typed by the user into a BCM GPIO according to
  the numbering scheme chosen at startup (-b, -p, -w, -z)
- Route pins at or above 64 to the extension node that owns them
- Turn user-level requests (mode names, blink, byte I/O) into backend calls

The controller never touches /sys/class/gpio; export handling lives in
system.sysfs_gpio and works without any hardware setup.
"""

import logging
import time
from typing import Callable, Optional

from config.settings import BLINK_INTERVAL
from extensions.interfaces.extension_interface import ExtensionError, ExtensionNode
from hardware.constants import (
    BYTE_PIN_COUNT,
    CLOCK_PIN_FUNCTIONS,
    EXTENSION_PIN_BASE,
    PHYS_TO_BCM,
    PWM_PIN_FUNCTIONS,
    WPI_TO_BCM,
    NumberingScheme,
)
from hardware.interfaces.gpio_interface import (
    AltFunction,
    GPIOError,
    GPIOInterface,
    PinMode,
    PinState,
    PullMode,
    PwmMode,
)


class PinController:
    """
    Pin-level operations in the user's numbering scheme.

    Usage:
        pins = PinController(gpio, NumberingScheme.PHYS, layout=2)
        pins.set_mode(11, PinMode.OUTPUT)   # physical 11 is GPIO 17
        pins.write(11, PinState.HIGH)
    """

    def __init__(
        self,
        gpio: GPIOInterface,
        scheme: NumberingScheme = NumberingScheme.GPIO,
        layout: int = 2,
    ):
        """
        Initialize pin controller.

        Args:
            gpio: Backend performing the hardware operations
            scheme: How pin arguments are interpreted
            layout: Header layout (1 for the earliest Model B, else 2);
                    selects the wiringPi and physical maps
        """
        self.logger = logging.getLogger(__name__)
        self.gpio = gpio
        self.scheme = scheme
        self.layout = layout
        self._nodes: list[ExtensionNode] = []

    # =========================================================================
    # PIN TRANSLATION
    # =========================================================================

    def register_node(self, node: ExtensionNode) -> None:
        """
        Make an extension node's pins addressable.

        Raises:
            ExtensionError: If its range overlaps an already loaded node
        """
        for other in self._nodes:
            if node.pin_base <= other.pin_max and other.pin_base <= node.pin_max:
                raise ExtensionError(
                    f"{node.name}: pins {node.pin_base}-{node.pin_max} overlap "
                    f"{other.name} ({other.pin_base}-{other.pin_max})"
                )
        self._nodes.append(node)
        self.logger.debug(f"Registered {node!r}")

    @property
    def nodes(self) -> list[ExtensionNode]:
        return list(self._nodes)

    def find_node(self, pin: int) -> Optional[ExtensionNode]:
        """Extension node owning pin, or None"""
        for node in self._nodes:
            if node.owns(pin):
                return node
        return None

    def _node_for(self, pin: int) -> Optional[ExtensionNode]:
        if pin < EXTENSION_PIN_BASE:
            return None
        node = self.find_node(pin)
        if node is None:
            raise GPIOError(f"No extension loaded for pin {pin}")
        return node

    def to_bcm(self, pin: int, scheme: Optional[NumberingScheme] = None) -> int:
        """
        Translate a native pin number into a BCM GPIO.

        Args:
            pin: Pin number as typed by the user
            scheme: Override the controller's scheme (byte I/O always uses
                    wiringPi numbering)

        Raises:
            GPIOError: If the pin has no GPIO in the chosen scheme
        """
        scheme = scheme or self.scheme

        if scheme == NumberingScheme.PHYS:
            bcm = PHYS_TO_BCM[self.layout].get(pin)
            if bcm is None:
                raise GPIOError(f"Physical pin {pin} is not a GPIO")
            return bcm

        if scheme == NumberingScheme.WPI:
            table = WPI_TO_BCM[self.layout]
            if not 0 <= pin < len(table):
                raise GPIOError(f"wiringPi pin {pin} does not exist")
            return table[pin]

        # GPIO and uninitialised: the number is the GPIO
        if pin < 0:
            raise GPIOError(f"Invalid GPIO pin {pin}")
        return pin

    # =========================================================================
    # PIN MODE
    # =========================================================================

    def set_mode(self, pin: int, mode: PinMode) -> None:
        """
        Select a pin's function from a user-level mode.

        PWM and clock modes pick the alternate function that routes the
        peripheral to this GPIO; pins without one are rejected.
        """
        node = self._node_for(pin)
        if node is not None:
            node.pin_mode(pin - node.pin_base, mode)
            return

        bcm = self.to_bcm(pin)
        if mode == PinMode.INPUT:
            self.gpio.set_function(bcm, AltFunction.INPUT)
        elif mode == PinMode.OUTPUT:
            self.gpio.set_function(bcm, AltFunction.OUTPUT)
        elif mode in (PinMode.PWM_OUTPUT, PinMode.PWM_TONE_OUTPUT):
            function = PWM_PIN_FUNCTIONS.get(bcm)
            if function is None:
                raise GPIOError(f"GPIO {bcm} has no PWM function")
            self.gpio.set_function(bcm, function)
            if mode == PinMode.PWM_TONE_OUTPUT:
                self.gpio.set_pwm_mode(PwmMode.MARK_SPACE)
        elif mode == PinMode.GPIO_CLOCK:
            function = CLOCK_PIN_FUNCTIONS.get(bcm)
            if function is None:
                raise GPIOError(f"GPIO {bcm} has no clock function")
            self.gpio.set_function(bcm, function)

        self.logger.debug(f"Pin {pin} (GPIO {bcm}) mode -> {mode.value}")

    def set_alt(self, pin: int, function: AltFunction) -> None:
        """Select a raw function-select code (native pins only)"""
        if pin >= EXTENSION_PIN_BASE:
            raise GPIOError(f"Pin {pin} has no alternate functions")
        self.gpio.set_function(self.to_bcm(pin), function)

    def get_function(self, pin: int) -> AltFunction:
        """Current function of a native pin"""
        if pin >= EXTENSION_PIN_BASE:
            raise GPIOError(f"Pin {pin} has no function select")
        return self.gpio.get_function(self.to_bcm(pin))

    def qmode(self, pin: int) -> str:
        """Function name as printed by `gpio qmode`: IN, OUT, ALT0..ALT5"""
        return self.get_function(pin).label

    def set_pull(self, pin: int, pull_mode: PullMode) -> None:
        node = self._node_for(pin)
        if node is not None:
            node.set_pull(pin - node.pin_base, pull_mode)
            return
        self.gpio.set_pull(self.to_bcm(pin), pull_mode)

    # =========================================================================
    # DIGITAL I/O
    # =========================================================================

    def read(self, pin: int) -> PinState:
        node = self._node_for(pin)
        if node is not None:
            return node.digital_read(pin - node.pin_base)
        return self.gpio.read(self.to_bcm(pin))

    def write(self, pin: int, state: PinState) -> None:
        node = self._node_for(pin)
        if node is not None:
            node.digital_write(pin - node.pin_base, state)
            return
        self.gpio.write(self.to_bcm(pin), state)

    def toggle(self, pin: int) -> PinState:
        """Invert a pin once; returns the level written"""
        new_state = PinState.LOW if self.read(pin) == PinState.HIGH else PinState.HIGH
        self.write(pin, new_state)
        return new_state

    def blink(
        self,
        pin: int,
        interval: float = BLINK_INTERVAL,
        max_cycles: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Force a pin to output and invert it every interval.

        Runs until the process is killed unless max_cycles is given.
        """
        self.set_mode(pin, PinMode.OUTPUT)
        cycles = 0
        while max_cycles is None or cycles < max_cycles:
            self.toggle(pin)
            sleep(interval)
            cycles += 1

    # =========================================================================
    # ANALOG I/O
    # =========================================================================

    def analog_read(self, pin: int) -> int:
        """Native GPIOs have no ADC and read 0"""
        node = self._node_for(pin)
        if node is not None:
            return node.analog_read(pin - node.pin_base)
        self.to_bcm(pin)
        return 0

    def analog_write(self, pin: int, value: int) -> None:
        """Native GPIOs have no DAC; the write is ignored"""
        node = self._node_for(pin)
        if node is not None:
            node.analog_write(pin - node.pin_base, value)
            return
        self.logger.debug(f"Analog write to native pin {pin} ignored")

    # =========================================================================
    # PWM / CLOCK / PADS
    # =========================================================================

    def _native(self, pin: int, what: str) -> int:
        if pin >= EXTENSION_PIN_BASE:
            raise GPIOError(f"{what} is not available on extension pin {pin}")
        return self.to_bcm(pin)

    def pwm_write(self, pin: int, value: int) -> None:
        self.gpio.pwm_write(self._native(pin, "PWM"), value)

    def pwm_tone(self, pin: int, frequency: int) -> None:
        self.gpio.pwm_tone(self._native(pin, "PWM tone"), frequency)

    def set_clock(self, pin: int, frequency: int) -> None:
        self.gpio.set_clock(self._native(pin, "Clock output"), frequency)

    def set_pwm_mode(self, mode: PwmMode) -> None:
        self.gpio.set_pwm_mode(mode)

    def set_pwm_range(self, pwm_range: int) -> None:
        self.gpio.set_pwm_range(pwm_range)

    def set_pwm_clock(self, divisor: int) -> None:
        self.gpio.set_pwm_clock(divisor)

    def set_pad_drive(self, group: int, value: int) -> None:
        self.gpio.set_pad_drive(group, value)

    def read_bank(self, bank: int) -> int:
        return self.gpio.read_bank(bank)

    # =========================================================================
    # BYTE I/O (wiringPi pins 0-7, bit 0 = pin 0)
    # =========================================================================

    def write_byte(self, value: int) -> None:
        for bit in range(BYTE_PIN_COUNT):
            bcm = self.to_bcm(bit, NumberingScheme.WPI)
            state = PinState.HIGH if value & (1 << bit) else PinState.LOW
            self.gpio.write(bcm, state)

    def read_byte(self) -> int:
        value = 0
        for bit in range(BYTE_PIN_COUNT):
            bcm = self.to_bcm(bit, NumberingScheme.WPI)
            if self.gpio.read(bcm) == PinState.HIGH:
                value |= 1 << bit
        return value
