"""
Pin Controller Tests

Pin translation per numbering scheme, mode selection, digital and byte
I/O, and routing of extension pins.
"""

import pytest

from extensions.interfaces.extension_interface import ExtensionError
from hardware.constants import WPI_TO_BCM, NumberingScheme
from hardware.controllers.pin_controller import PinController
from hardware.interfaces.gpio_interface import (
    AltFunction,
    GPIOError,
    PinMode,
    PinState,
    PullMode,
    PwmMode,
)

pytestmark = pytest.mark.unit


class TestPinTranslation:
    """User pin numbers -> BCM GPIO"""

    def test_gpio_numbers_are_unchanged(self, bcm_pins):
        assert bcm_pins.to_bcm(17) == 17

    def test_physical_pin_maps_to_gpio(self, phys_pins):
        assert phys_pins.to_bcm(11) == 17
        assert phys_pins.to_bcm(40) == 21

    def test_physical_power_pin_is_rejected(self, phys_pins):
        with pytest.raises(GPIOError):
            phys_pins.to_bcm(1)

    def test_wiringpi_pin_maps_to_gpio(self, wpi_pins):
        assert wpi_pins.to_bcm(0) == 17
        assert wpi_pins.to_bcm(2) == 27
        assert wpi_pins.to_bcm(8) == 2

    def test_layout_one_wiringpi_map(self, mock_gpio):
        pins = PinController(mock_gpio, NumberingScheme.WPI, layout=1)
        assert pins.to_bcm(2) == 21
        assert pins.to_bcm(8) == 0

    def test_unknown_wiringpi_pin_is_rejected(self, wpi_pins):
        with pytest.raises(GPIOError):
            wpi_pins.to_bcm(40)

    def test_uninitialised_uses_gpio_numbers(self, mock_gpio):
        pins = PinController(mock_gpio, NumberingScheme.UNINITIALISED)
        assert pins.to_bcm(22) == 22

    def test_physical_write_reaches_gpio(self, phys_pins, mock_gpio):
        phys_pins.write(11, PinState.HIGH)
        assert mock_gpio.read(17) == PinState.HIGH


class TestPinModes:
    """mode/pull/qmode"""

    def test_output_mode(self, bcm_pins, mock_gpio):
        bcm_pins.set_mode(17, PinMode.OUTPUT)
        assert mock_gpio.get_function(17) == AltFunction.OUTPUT
        assert bcm_pins.qmode(17) == "OUT"

    def test_pwm_mode_selects_pwm_function(self, bcm_pins, mock_gpio):
        bcm_pins.set_mode(18, PinMode.PWM_OUTPUT)
        assert mock_gpio.get_function(18) == AltFunction.ALT5
        assert bcm_pins.qmode(18) == "ALT5"

    def test_pwm_tone_switches_to_mark_space(self, bcm_pins, mock_gpio):
        bcm_pins.set_mode(12, PinMode.PWM_TONE_OUTPUT)
        assert mock_gpio.get_function(12) == AltFunction.ALT0
        assert mock_gpio.pwm_mode == PwmMode.MARK_SPACE

    def test_pwm_mode_on_pin_without_pwm(self, bcm_pins):
        with pytest.raises(GPIOError):
            bcm_pins.set_mode(17, PinMode.PWM_OUTPUT)

    def test_clock_mode(self, bcm_pins, mock_gpio):
        bcm_pins.set_mode(4, PinMode.GPIO_CLOCK)
        assert mock_gpio.get_function(4) == AltFunction.ALT0

    def test_alt_function(self, bcm_pins):
        bcm_pins.set_alt(14, AltFunction.ALT0)
        assert bcm_pins.qmode(14) == "ALT0"

    def test_pull_up_raises_input(self, bcm_pins):
        bcm_pins.set_pull(23, PullMode.UP)
        assert bcm_pins.read(23) == PinState.HIGH


class TestDigitalIO:
    """read/write/toggle/blink"""

    def test_toggle_inverts(self, bcm_pins):
        assert bcm_pins.toggle(17) == PinState.HIGH
        assert bcm_pins.toggle(17) == PinState.LOW

    def test_blink_forces_output_and_toggles(self, bcm_pins, mock_gpio):
        sleeps = []
        bcm_pins.blink(17, interval=0.5, max_cycles=3, sleep=sleeps.append)

        assert mock_gpio.get_function(17) == AltFunction.OUTPUT
        assert mock_gpio.read(17) == PinState.HIGH
        assert sleeps == [0.5, 0.5, 0.5]

    def test_native_analog_read_is_zero(self, bcm_pins):
        assert bcm_pins.analog_read(17) == 0

    def test_native_analog_write_is_ignored(self, bcm_pins, mock_gpio):
        bcm_pins.analog_write(17, 200)
        assert mock_gpio.read(17) == PinState.LOW


class TestByteIO:
    """wb/rbx/rbd over wiringPi pins 0-7"""

    def test_write_byte_sets_wiringpi_pins(self, bcm_pins, mock_gpio):
        bcm_pins.write_byte(0x3C)

        levels = [mock_gpio.read(WPI_TO_BCM[2][bit]) for bit in range(8)]
        assert levels == [
            PinState.LOW, PinState.LOW, PinState.HIGH, PinState.HIGH,
            PinState.HIGH, PinState.HIGH, PinState.LOW, PinState.LOW,
        ]

    def test_read_byte_round_trip(self, phys_pins):
        # Byte I/O uses wiringPi numbering whatever the scheme
        phys_pins.write_byte(0xA5)
        assert phys_pins.read_byte() == 0xA5


class TestExtensionRouting:
    """Pins >= 64 go to the owning node"""

    def test_pins_route_to_node(self, bcm_pins, mock_gpio, recording_node_class):
        node = recording_node_class(100)
        bcm_pins.register_node(node)

        bcm_pins.write(102, PinState.HIGH)
        bcm_pins.set_mode(103, PinMode.INPUT)

        assert node.levels[2] == PinState.HIGH
        assert node.modes[3] == PinMode.INPUT
        assert bcm_pins.read(102) == PinState.HIGH
        assert bcm_pins.analog_read(105) == 105

    def test_unowned_extension_pin(self, bcm_pins):
        with pytest.raises(GPIOError):
            bcm_pins.read(70)

    def test_overlapping_nodes_rejected(self, bcm_pins, recording_node_class):
        bcm_pins.register_node(recording_node_class(100))
        with pytest.raises(ExtensionError):
            bcm_pins.register_node(recording_node_class(104))

    def test_pwm_on_extension_pin_rejected(self, bcm_pins, recording_node_class):
        bcm_pins.register_node(recording_node_class(100))
        with pytest.raises(GPIOError):
            bcm_pins.pwm_write(100, 512)
