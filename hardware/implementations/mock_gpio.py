"""
Mock GPIO Implementation

Simulated GPIO used by `gpio -z`, by GPIO_BACKEND=mock and by the tests.
It keeps a model of every pin it is told about and fires edge callbacks
when a test simulates a level change.

This is a "Fake": it has working logic but no hardware behind it, and its
state lives only as long as the process.
"""

import logging
import threading
from typing import Callable, Optional

from hardware.constants import (
    DEFAULT_PWM_CLOCK_DIVISOR,
    DEFAULT_PWM_RANGE,
)
from hardware.interfaces.gpio_interface import (
    AltFunction,
    EdgeDetection,
    GPIOError,
    GPIOInterface,
    PinState,
    PullMode,
    PwmMode,
)


class MockGPIO(GPIOInterface):
    """
    Simulated GPIO that mimics a BCM283x pin bank.

    Every pin starts as an input reading LOW with no pull.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

        # Key: pin number, Value: dict with pin info
        self._pins: dict[int, dict] = {}

        # Key: pin number, Value: callback info
        self._callbacks: dict[int, dict] = {}

        self.pwm_mode = PwmMode.BALANCED
        self.pwm_range = DEFAULT_PWM_RANGE
        self.pwm_clock_divisor = DEFAULT_PWM_CLOCK_DIVISOR
        self.pad_drive: dict[int, int] = {}

        self.logger.info("Mock GPIO initialized (simulation mode)")

    def _pin(self, pin: int) -> dict:
        if pin < 0:
            raise GPIOError(f"Invalid GPIO pin {pin}")
        return self._pins.setdefault(
            pin,
            {
                'function': AltFunction.INPUT,
                'state': PinState.LOW,
                'pull': PullMode.NONE,
                'pwm': 0,
                'tone': 0,
                'clock': 0,
            },
        )

    def set_function(self, pin: int, function: AltFunction) -> None:
        """Select pin function"""
        self._pin(pin)['function'] = function
        self.logger.debug(f"[MOCK] Pin {pin} function -> {function.label}")

    def get_function(self, pin: int) -> AltFunction:
        """Read pin function"""
        return self._pin(pin)['function']

    def set_pull(self, pin: int, pull_mode: PullMode) -> None:
        """Configure pull resistor; a floating input follows its pull"""
        info = self._pin(pin)
        info['pull'] = pull_mode
        if info['function'] == AltFunction.INPUT:
            if pull_mode == PullMode.UP:
                info['state'] = PinState.HIGH
            elif pull_mode == PullMode.DOWN:
                info['state'] = PinState.LOW
        self.logger.debug(f"[MOCK] Pin {pin} pull -> {pull_mode.value}")

    def write(self, pin: int, state: PinState) -> None:
        """Set pin level"""
        info = self._pin(pin)
        old_state = info['state']
        info['state'] = state

        if old_state != state:
            self.logger.debug(f"[MOCK] Pin {pin}: {old_state.name} -> {state.name}")

    def read(self, pin: int) -> PinState:
        """Read pin state"""
        return self._pin(pin)['state']

    def read_bank(self, bank: int) -> int:
        """Assemble a 32-bit level mask from the simulated pins"""
        first = bank * 32
        value = 0
        for offset in range(32):
            info = self._pins.get(first + offset)
            if info is not None and info['state'] == PinState.HIGH:
                value |= 1 << offset
        return value

    def pwm_write(self, pin: int, value: int) -> None:
        self._pin(pin)['pwm'] = value

    def pwm_tone(self, pin: int, frequency: int) -> None:
        self._pin(pin)['tone'] = frequency

    def set_pwm_mode(self, mode: PwmMode) -> None:
        self.pwm_mode = mode

    def set_pwm_range(self, pwm_range: int) -> None:
        self.pwm_range = pwm_range

    def set_pwm_clock(self, divisor: int) -> None:
        self.pwm_clock_divisor = divisor

    def set_clock(self, pin: int, frequency: int) -> None:
        self._pin(pin)['clock'] = frequency

    def set_pad_drive(self, group: int, value: int) -> None:
        self.pad_drive[group] = value

    def add_event_callback(
        self,
        pin: int,
        edge: EdgeDetection,
        callback: Callable[[int], None],
    ) -> None:
        """Register callback for pin state changes"""
        self._pin(pin)
        self._callbacks[pin] = {
            'edge': edge,
            'callback': callback,
        }

        self.logger.debug(f"[MOCK] Event callback added to pin {pin} (edge: {edge.value})")

    def remove_event_callback(self, pin: int) -> None:
        """Remove event callback"""
        if pin in self._callbacks:
            del self._callbacks[pin]
            self.logger.debug(f"[MOCK] Event callback removed from pin {pin}")

    def cleanup(self, pins: Optional[list[int]] = None) -> None:
        """Drop callbacks; pin state survives like it does on hardware"""
        if pins is None:
            pins = list(self._callbacks.keys())

        for pin in pins:
            self._callbacks.pop(pin, None)

        self.logger.info(f"[MOCK] Released callbacks on pins: {pins}")

    def is_available(self) -> bool:
        """Mock GPIO is simulated, not real hardware"""
        return False

    # =========================================================================
    # TESTING HELPER METHODS (not part of GPIOInterface)
    # =========================================================================

    def simulate_edge(self, pin: int, new_state: PinState) -> None:
        """
        Drive an input to ``new_state`` from the outside world.

        Fires the registered callback on its own thread when the transition
        matches the requested edge, the way RPi.GPIO and pigpio deliver
        callbacks.
        """
        info = self._pin(pin)
        old_state = info['state']
        info['state'] = new_state

        callback_info = self._callbacks.get(pin)
        if callback_info is None:
            return

        edge = callback_info['edge']

        should_trigger = False

        if edge == EdgeDetection.RISING and old_state == PinState.LOW and new_state == PinState.HIGH:
            should_trigger = True
        elif edge == EdgeDetection.FALLING and old_state == PinState.HIGH and new_state == PinState.LOW:
            should_trigger = True
        elif edge == EdgeDetection.BOTH and old_state != new_state:
            should_trigger = True

        if not should_trigger:
            return

        thread = threading.Thread(
            target=callback_info['callback'],
            args=(pin,),
            daemon=True
        )
        thread.start()

        self.logger.debug(f"[MOCK] Pin {pin} edge triggered: {old_state.name} -> {new_state.name}")

    def get_pin_info(self, pin: int) -> dict:
        """
        Get detailed pin information for debugging.

        Returns:
            Dictionary with pin configuration and state
        """
        info = self._pin(pin).copy()
        if pin in self._callbacks:
            info['has_callback'] = True
            info['callback_edge'] = self._callbacks[pin]['edge'].value
        else:
            info['has_callback'] = False

        return info
