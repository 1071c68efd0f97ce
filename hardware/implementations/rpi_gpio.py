"""
Raspberry Pi GPIO Implementation (RPi.GPIO)

Concrete implementation of GPIOInterface on top of the RPi.GPIO library.
RPi.GPIO drives the pins through /dev/gpiomem, so it works without the
pigpio daemon, but it only covers digital I/O, pulls, function queries and
edge interrupts. PWM configuration, clocks, bank reads and pad drive need
the pigpio backend and raise GPIOError here.

Setting an input up clears its pull, so reading an input pin through this
backend leaves it floating; `gpio mode <pin> up` must come after the read.

GPIO.cleanup() is never called: it would return every pin the process
touched to input, undoing commands such as `gpio mode 17 out`.
"""

import logging
from typing import Callable, Optional

try:
    from RPi import GPIO

    GPIO_AVAILABLE = True
except (ImportError, RuntimeError):
    # RPi.GPIO raises RuntimeError when imported off a Raspberry Pi
    GPIO_AVAILABLE = False

from hardware.constants import PWM_PIN_FUNCTIONS
from hardware.interfaces.gpio_interface import (
    AltFunction,
    EdgeDetection,
    GPIOError,
    GPIOInterface,
    PinState,
    PullMode,
    PwmMode,
)


class RaspberryPiGPIO(GPIOInterface):
    """
    Raspberry Pi GPIO implementation using RPi.GPIO library.

    This class translates our interface into RPi.GPIO's specific API.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

        # Pins with an event detect registered (for cleanup)
        self._event_pins: set[int] = set()

        # Levels written while a pin was an input, applied when it becomes an output
        self._pending_levels: dict[int, int] = {}

        if not GPIO_AVAILABLE:
            raise GPIOError(
                "RPi.GPIO library not available. Install with: pip install RPi.GPIO",
            )

        try:
            GPIO.setmode(GPIO.BCM)
            GPIO.setwarnings(False)  # Pins are routinely already in use
            self.logger.info("Raspberry Pi GPIO initialized (BCM mode)")
        except Exception as e:
            raise GPIOError(f"Failed to initialize GPIO: {e}") from e

    def _unsupported(self, what: str) -> GPIOError:
        return GPIOError(f"{what} is not supported by RPi.GPIO; start pigpiod and use GPIO_BACKEND=pigpio")

    def _claim(self, pin: int, action: str) -> None:
        """
        Register a pin with RPi.GPIO in the direction it already has.

        RPi.GPIO refuses input()/output() on channels it has not set up in
        this process; setting an output up again without an initial value
        keeps its latch. Pins in an alternate function (I2C, UART, SPI,
        hardware PWM) are never set up, that would take them away from
        their peripheral.

        Raises:
            GPIOError: If the pin is in an alternate function
        """
        function = self.get_function(pin)
        if function == AltFunction.OUTPUT:
            GPIO.setup(pin, GPIO.OUT)
        elif function == AltFunction.INPUT:
            GPIO.setup(pin, GPIO.IN)
        else:
            raise GPIOError(
                f"Cannot {action} pin {pin} in {function.label}: "
                "RPi.GPIO only accesses pins set to IN or OUT",
            )

    def set_function(self, pin: int, function: AltFunction) -> None:
        """Configure pin as input or output"""
        try:
            if function == AltFunction.INPUT:
                GPIO.setup(pin, GPIO.IN)
            elif function == AltFunction.OUTPUT:
                initial = self._pending_levels.pop(pin, None)
                if initial is None:
                    GPIO.setup(pin, GPIO.OUT)
                else:
                    GPIO.setup(pin, GPIO.OUT, initial=initial)
            else:
                raise self._unsupported(f"Selecting {function.label}")
            self.logger.debug(f"Pin {pin} configured as {function.label}")
        except GPIOError:
            raise
        except Exception as e:
            raise GPIOError(f"Failed to set function of pin {pin}: {e}") from e

    def get_function(self, pin: int) -> AltFunction:
        """Map RPi.GPIO's function names onto function-select codes"""
        try:
            function = GPIO.gpio_function(pin)
        except Exception as e:
            raise GPIOError(f"Failed to query pin {pin}: {e}") from e

        if function == GPIO.IN:
            return AltFunction.INPUT
        if function == GPIO.OUT:
            return AltFunction.OUTPUT
        if function == GPIO.HARD_PWM:
            return PWM_PIN_FUNCTIONS.get(pin, AltFunction.ALT0)
        # SPI, I2C, SERIAL and UNKNOWN are all ALT0 on the header pins
        return AltFunction.ALT0

    def set_pull(self, pin: int, pull_mode: PullMode) -> None:
        """RPi.GPIO sets pulls as part of configuring an input"""
        try:
            pull_mapping = {
                PullMode.UP: GPIO.PUD_UP,
                PullMode.DOWN: GPIO.PUD_DOWN,
                PullMode.NONE: GPIO.PUD_OFF,
            }

            GPIO.setup(pin, GPIO.IN, pull_up_down=pull_mapping[pull_mode])
            self.logger.debug(f"Pin {pin} pull set to {pull_mode.value}")
        except Exception as e:
            raise GPIOError(f"Failed to set pull on pin {pin}: {e}") from e

    def write(self, pin: int, state: PinState) -> None:
        """Set output pin HIGH or LOW; an input keeps the level for when it becomes an output"""
        try:
            gpio_state = GPIO.HIGH if state == PinState.HIGH else GPIO.LOW
            if self.get_function(pin) == AltFunction.INPUT:
                self._pending_levels[pin] = gpio_state
                self.logger.debug(f"Pin {pin} is an input, level {state.name} held")
                return
            self._claim(pin, "write")
            GPIO.output(pin, gpio_state)
        except GPIOError:
            raise
        except Exception as e:
            raise GPIOError(f"Failed to write to pin {pin}: {e}") from e

    def read(self, pin: int) -> PinState:
        """Read pin level"""
        try:
            self._claim(pin, "read")
            value = GPIO.input(pin)
            return PinState.HIGH if value else PinState.LOW
        except GPIOError:
            raise
        except Exception as e:
            raise GPIOError(f"Failed to read pin {pin}: {e}") from e

    def read_bank(self, bank: int) -> int:
        raise self._unsupported("Reading a pin bank")

    def pwm_write(self, pin: int, value: int) -> None:
        raise self._unsupported("PWM output")

    def pwm_tone(self, pin: int, frequency: int) -> None:
        raise self._unsupported("PWM tone output")

    def set_pwm_mode(self, mode: PwmMode) -> None:
        raise self._unsupported("Setting the PWM mode")

    def set_pwm_range(self, pwm_range: int) -> None:
        raise self._unsupported("Setting the PWM range")

    def set_pwm_clock(self, divisor: int) -> None:
        raise self._unsupported("Setting the PWM clock")

    def set_clock(self, pin: int, frequency: int) -> None:
        raise self._unsupported("Clock output")

    def set_pad_drive(self, group: int, value: int) -> None:
        raise self._unsupported("Setting pad drive strength")

    def add_event_callback(
        self,
        pin: int,
        edge: EdgeDetection,
        callback: Callable[[int], None],
    ) -> None:
        """
        Register interrupt callback for pin state changes.

        The callback runs in a separate thread owned by RPi.GPIO.
        """
        try:
            edge_mapping = {
                EdgeDetection.RISING: GPIO.RISING,
                EdgeDetection.FALLING: GPIO.FALLING,
                EdgeDetection.BOTH: GPIO.BOTH,
            }

            GPIO.setup(pin, GPIO.IN)
            GPIO.add_event_detect(pin, edge_mapping[edge], callback=callback)
            self._event_pins.add(pin)

            self.logger.debug(f"Event callback added to pin {pin} (edge: {edge.value})")
        except Exception as e:
            raise GPIOError(f"Failed to add event callback to pin {pin}: {e}") from e

    def remove_event_callback(self, pin: int) -> None:
        """Remove event callback from pin"""
        try:
            GPIO.remove_event_detect(pin)
            self._event_pins.discard(pin)
            self.logger.debug(f"Event callback removed from pin {pin}")
        except Exception as e:
            # Don't raise - cleanup should be forgiving
            self.logger.warning(f"Failed to remove event callback from pin {pin}: {e}")

    def cleanup(self, pins: Optional[list[int]] = None) -> None:
        """Remove event detection; pin functions and levels are kept"""
        targets = list(self._event_pins) if pins is None else pins
        for pin in targets:
            if pin in self._event_pins:
                self.remove_event_callback(pin)

    def is_available(self) -> bool:
        """Check if running on real Raspberry Pi hardware"""
        return GPIO_AVAILABLE
