"""
GPIO Interface - Abstract Hardware Layer

This defines the contract that every GPIO backend must follow. The command
handlers never talk to pigpio or RPi.GPIO directly; they go through a
PinController, which translates pin numbers and then calls one of these
backends.

All pin arguments here are BCM (Broadcom SoC) GPIO numbers. Numbering
schemes (physical header position, wiringPi numbers) are resolved before a
call reaches the backend.
"""

from abc import ABC, abstractmethod
from enum import Enum, IntEnum
from typing import Callable, Optional


class PinMode(Enum):
    """Pin functions a user can ask for with `gpio mode`"""

    INPUT = "input"
    OUTPUT = "output"
    PWM_OUTPUT = "pwm"
    PWM_TONE_OUTPUT = "pwmTone"
    GPIO_CLOCK = "clock"


class AltFunction(IntEnum):
    """
    Function-select codes of a BCM283x GPIO pin.

    The values are the 3-bit FSEL register encoding, which is also what
    pigpio's get_mode()/set_mode() use.
    """

    INPUT = 0
    OUTPUT = 1
    ALT5 = 2
    ALT4 = 3
    ALT0 = 4
    ALT1 = 5
    ALT2 = 6
    ALT3 = 7

    @property
    def label(self) -> str:
        """Short name as printed by qmode and readall"""
        if self is AltFunction.INPUT:
            return "IN"
        if self is AltFunction.OUTPUT:
            return "OUT"
        return self.name


class PullMode(Enum):
    """Pull resistor configuration for input pins"""

    UP = "up"
    DOWN = "down"
    NONE = "none"


class EdgeDetection(Enum):
    """When to trigger interrupt callbacks"""

    RISING = "rising"
    FALLING = "falling"
    BOTH = "both"


class PinState(Enum):
    """Digital pin states"""

    LOW = 0
    HIGH = 1


class PwmMode(Enum):
    """Output mode of the PWM peripheral"""

    BALANCED = "balanced"
    MARK_SPACE = "mark-space"


class GPIOInterface(ABC):
    """
    Abstract base class for GPIO operations.

    Backends that cannot perform an operation raise GPIOError with a
    message naming the missing capability.
    """

    @abstractmethod
    def set_function(self, pin: int, function: AltFunction) -> None:
        """
        Select the function of a pin (input, output or an ALT function).

        Args:
            pin: BCM GPIO number
            function: Function-select code

        Raises:
            GPIOError: If the backend rejects the request
        """

    @abstractmethod
    def get_function(self, pin: int) -> AltFunction:
        """
        Read back the current function of a pin.

        Args:
            pin: BCM GPIO number

        Returns:
            Current function-select code
        """

    @abstractmethod
    def set_pull(self, pin: int, pull_mode: PullMode) -> None:
        """
        Configure the internal pull resistor of a pin.

        Args:
            pin: BCM GPIO number
            pull_mode: Pull up, pull down or none
        """

    @abstractmethod
    def write(self, pin: int, state: PinState) -> None:
        """
        Set an output pin HIGH or LOW.

        Args:
            pin: BCM GPIO number
            state: Desired level

        Raises:
            GPIOError: If the level cannot be driven
        """

    @abstractmethod
    def read(self, pin: int) -> PinState:
        """
        Read the current level of a pin without changing its function.

        Args:
            pin: BCM GPIO number

        Returns:
            Current pin state (HIGH/LOW)
        """

    @abstractmethod
    def read_bank(self, bank: int) -> int:
        """
        Read 32 pin levels at once.

        Args:
            bank: 0 for GPIO 0-31, 1 for GPIO 32-53

        Returns:
            Unsigned 32-bit level mask
        """

    @abstractmethod
    def pwm_write(self, pin: int, value: int) -> None:
        """Set the PWM duty cycle of a pin, in units of the current range"""

    @abstractmethod
    def pwm_tone(self, pin: int, frequency: int) -> None:
        """Drive a 50% duty square wave at ``frequency`` Hz (0 stops it)"""

    @abstractmethod
    def set_pwm_mode(self, mode: PwmMode) -> None:
        """Select balanced or mark-space PWM output"""

    @abstractmethod
    def set_pwm_range(self, pwm_range: int) -> None:
        """Set the PWM range (number of steps per period)"""

    @abstractmethod
    def set_pwm_clock(self, divisor: int) -> None:
        """Set the PWM clock divisor (1-4095)"""

    @abstractmethod
    def set_clock(self, pin: int, frequency: int) -> None:
        """Output a general purpose clock of ``frequency`` Hz on a pin"""

    @abstractmethod
    def set_pad_drive(self, group: int, value: int) -> None:
        """
        Set the drive strength of a pad group.

        Args:
            group: Pad group 0 (GPIO 0-27), 1 (28-45) or 2 (46-53)
            value: Drive setting 0-7 (2 mA to 16 mA in 2 mA steps)
        """

    @abstractmethod
    def add_event_callback(
        self,
        pin: int,
        edge: EdgeDetection,
        callback: Callable[[int], None],
    ) -> None:
        """
        Register a callback to run when the pin sees an edge.

        The callback runs on a thread owned by the backend and receives
        the BCM pin number.

        Args:
            pin: BCM GPIO number
            edge: When to trigger (RISING/FALLING/BOTH)
            callback: Function to call, receives pin number as argument
        """

    @abstractmethod
    def remove_event_callback(self, pin: int) -> None:
        """Remove the event callback from a pin"""

    @abstractmethod
    def cleanup(self, pins: Optional[list[int]] = None) -> None:
        """
        Release backend resources.

        Pin levels and functions are left as they are: the whole point of
        a command-line tool is that its effect outlives the process.

        Args:
            pins: Pins whose callbacks should be released, or None for all
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if GPIO hardware is actually available.

        Returns:
            True if driving real hardware, False if simulated
        """


class GPIOError(Exception):
    """A GPIO backend failed or does not support the request."""
