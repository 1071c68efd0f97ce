"""
Raspberry Pi GPIO Implementation (pigpio)

Concrete implementation of GPIOInterface talking to the pigpio daemon
(pigpiod) over its socket interface. The daemon owns the hardware, so
settings made by one `gpio` invocation (PWM, clocks, pin functions) stay
in effect after the process exits.

pigpio has no global PWM range or clock divisor. The backend keeps both for
the life of the connection and turns them into a hardware_PWM frequency and
duty on the header's PWM pins (12, 13, 18, 19), the way the single PWM
peripheral behaves on the SoC. Other pins fall back to pigpio's DMA timed
PWM with the same range. pwmr and pwmc also take over hardware PWM that an
earlier run left going.
"""

import io
import logging
from contextlib import redirect_stdout
from typing import Callable, Optional

import pigpio

from config.settings import PIGPIO_ADDR, PIGPIO_PORT
from hardware.constants import (
    DEFAULT_PWM_CLOCK_DIVISOR,
    DEFAULT_PWM_RANGE,
    HEADER_PWM_PINS,
    PWM_BASE_CLOCK,
    PWM_PIN_FUNCTIONS,
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

# Full scale of pigpio's hardware_PWM duty
HARDWARE_DUTY_MAX = 1_000_000

# 50% duty in hardware_PWM units
TONE_DUTY = HARDWARE_DUTY_MAX // 2


class PigpioGPIO(GPIOInterface):
    """
    GPIO backend using a pigpio.pi connection.

    Usage:
        gpio = PigpioGPIO()
        gpio.write(17, PinState.HIGH)
        gpio.cleanup()
    """

    def __init__(self, host: str = PIGPIO_ADDR, port: int = PIGPIO_PORT):
        self.logger = logging.getLogger(__name__)

        # pigpio callback handles by pin
        self._callbacks: dict[int, object] = {}

        self._pwm_range = DEFAULT_PWM_RANGE
        self._pwm_divisor = DEFAULT_PWM_CLOCK_DIVISOR
        # Header PWM pins driven by pwm_write, with their last value
        self._pwm_values: dict[int, int] = {}

        # pigpio prints its connection banner to stdout when pigpiod is down
        banner = io.StringIO()
        with redirect_stdout(banner):
            self._pi = pigpio.pi(host, port)
        if banner.getvalue().strip():
            self.logger.debug(f"pigpio: {banner.getvalue().strip()}")
        if not self._pi.connected:
            raise GPIOError(
                f"Can't connect to pigpio daemon at {host}:{port}. Start it with: sudo pigpiod",
            )
        self.logger.info(f"pigpio GPIO initialized ({host}:{port})")

    def _call(self, what: str, func, *args):
        """Run a pigpio call, turning its errors into GPIOError"""
        try:
            return func(*args)
        except pigpio.error as e:
            raise GPIOError(f"{what}: {e}") from e
        except (OSError, ConnectionError) as e:
            raise GPIOError(f"{what}: lost connection to pigpio daemon: {e}") from e

    def set_function(self, pin: int, function: AltFunction) -> None:
        # pigpio mode numbers are the FSEL codes
        self._call(f"Failed to set function of pin {pin}", self._pi.set_mode, pin, int(function))
        self.logger.debug(f"Pin {pin} function -> {function.label}")

    def get_function(self, pin: int) -> AltFunction:
        mode = self._call(f"Failed to query pin {pin}", self._pi.get_mode, pin)
        return AltFunction(mode)

    def set_pull(self, pin: int, pull_mode: PullMode) -> None:
        pull_mapping = {
            PullMode.UP: pigpio.PUD_UP,
            PullMode.DOWN: pigpio.PUD_DOWN,
            PullMode.NONE: pigpio.PUD_OFF,
        }
        self._call(
            f"Failed to set pull on pin {pin}",
            self._pi.set_pull_up_down,
            pin,
            pull_mapping[pull_mode],
        )

    def write(self, pin: int, state: PinState) -> None:
        self._call(f"Failed to write to pin {pin}", self._pi.write, pin, state.value)

    def read(self, pin: int) -> PinState:
        value = self._call(f"Failed to read pin {pin}", self._pi.read, pin)
        return PinState.HIGH if value else PinState.LOW

    def read_bank(self, bank: int) -> int:
        if bank == 0:
            return self._call("Failed to read bank 0", self._pi.read_bank_1)
        return self._call("Failed to read bank 1", self._pi.read_bank_2)

    def _hardware_frequency(self) -> int:
        return max(1, PWM_BASE_CLOCK // (self._pwm_divisor * self._pwm_range))

    def _apply_hardware_pwm(self, pin: int) -> None:
        value = self._pwm_values[pin]
        frequency = self._hardware_frequency()
        duty = value * HARDWARE_DUTY_MAX // self._pwm_range
        self._call(
            f"Failed to set PWM on pin {pin}",
            self._pi.hardware_PWM,
            pin,
            frequency,
            duty,
        )
        self.logger.debug(f"Pin {pin} hardware PWM -> {frequency} Hz, duty {duty}")

    def pwm_write(self, pin: int, value: int) -> None:
        """Write ``value`` out of the current PWM range"""
        value = max(0, min(value, self._pwm_range))

        if pin in HEADER_PWM_PINS:
            self._pwm_values[pin] = value
            self._apply_hardware_pwm(pin)
            return

        self._call(f"Failed to set PWM range on pin {pin}", self._pi.set_PWM_range, pin, self._pwm_range)
        self._call(f"Failed to set PWM on pin {pin}", self._pi.set_PWM_dutycycle, pin, value)


    def pwm_tone(self, pin: int, frequency: int) -> None:
        self._pwm_values.pop(pin, None)
        duty = TONE_DUTY if frequency > 0 else 0
        self._call(f"Failed to set tone on pin {pin}", self._pi.hardware_PWM, pin, frequency, duty)

    def set_pwm_mode(self, mode: PwmMode) -> None:
        """pigpio always generates mark-space PWM"""
        if mode == PwmMode.BALANCED:
            raise GPIOError("Balanced PWM mode is not supported by pigpio")
        self.logger.debug("PWM mode: mark-space")

    def _adopt_running_pwm(self) -> None:
        """Pick up hardware PWM left running on the header by an earlier connection"""
        for pin in HEADER_PWM_PINS:
            if pin in self._pwm_values:
                continue
            try:
                if self._pi.get_mode(pin) != int(PWM_PIN_FUNCTIONS[pin]):
                    continue
                duty = self._pi.get_PWM_dutycycle(pin)
            except pigpio.error:
                continue
            self._pwm_values[pin] = duty * self._pwm_range // HARDWARE_DUTY_MAX

    def set_pwm_range(self, pwm_range: int) -> None:
        self._adopt_running_pwm()
        self._pwm_range = pwm_range
        for pin in self._pwm_values:
            self._pwm_values[pin] = min(self._pwm_values[pin], pwm_range)
            self._apply_hardware_pwm(pin)
        self.logger.debug(f"PWM range -> {pwm_range}")

    def set_pwm_clock(self, divisor: int) -> None:
        """Frequency is the 19.2 MHz base clock over divisor times range"""
        self._adopt_running_pwm()
        self._pwm_divisor = divisor
        for pin in self._pwm_values:
            self._apply_hardware_pwm(pin)
        self.logger.debug(f"PWM clock divisor -> {divisor} ({self._hardware_frequency()} Hz)")

    def set_clock(self, pin: int, frequency: int) -> None:
        self._call(f"Failed to set clock on pin {pin}", self._pi.hardware_clock, pin, frequency)

    def set_pad_drive(self, group: int, value: int) -> None:
        milliamps = 2 * (value + 1)
        self._call(f"Failed to set drive of pad group {group}", self._pi.set_pad_strength, group, milliamps)

    def add_event_callback(
        self,
        pin: int,
        edge: EdgeDetection,
        callback: Callable[[int], None],
    ) -> None:
        """pigpio callbacks run on the pi connection's notification thread"""
        edge_mapping = {
            EdgeDetection.RISING: pigpio.RISING_EDGE,
            EdgeDetection.FALLING: pigpio.FALLING_EDGE,
            EdgeDetection.BOTH: pigpio.EITHER_EDGE,
        }

        def _on_edge(gpio: int, level: int, tick: int) -> None:
            # level 2 is a watchdog timeout, not an edge
            if level != pigpio.TIMEOUT:
                callback(gpio)

        self._callbacks[pin] = self._call(
            f"Failed to add event callback to pin {pin}",
            self._pi.callback,
            pin,
            edge_mapping[edge],
            _on_edge,
        )
        self.logger.debug(f"Event callback added to pin {pin} (edge: {edge.value})")

    def remove_event_callback(self, pin: int) -> None:
        handle = self._callbacks.pop(pin, None)
        if handle is not None:
            handle.cancel()
            self.logger.debug(f"Event callback removed from pin {pin}")

    def cleanup(self, pins: Optional[list[int]] = None) -> None:
        """Cancel callbacks and, when releasing everything, close the connection"""
        targets = list(self._callbacks) if pins is None else pins
        for pin in targets:
            self.remove_event_callback(pin)
        if pins is None and self._pi.connected:
            self._pi.stop()

    def is_available(self) -> bool:
        return bool(self._pi.connected)
