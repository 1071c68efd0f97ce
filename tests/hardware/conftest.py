"""
Hardware Test Fixtures

Pin controllers bound to a MockGPIO in each numbering scheme.
"""

import pytest

from hardware.constants import NumberingScheme
from hardware.controllers.pin_controller import PinController


@pytest.fixture
def bcm_pins(mock_gpio):
    """PinController using BCM GPIO numbers"""
    return PinController(mock_gpio, NumberingScheme.GPIO, layout=2)


@pytest.fixture
def phys_pins(mock_gpio):
    """PinController using physical header positions"""
    return PinController(mock_gpio, NumberingScheme.PHYS, layout=2)


@pytest.fixture
def wpi_pins(mock_gpio):
    """PinController using wiringPi numbers"""
    return PinController(mock_gpio, NumberingScheme.WPI, layout=2)


@pytest.fixture
def cpuinfo(tmp_path):
    """
    Write a fake /proc/cpuinfo and return its path.

    Usage:
        def test_board(cpuinfo):
            path = cpuinfo("a02082")
    """
    def _write(revision: str):
        path = tmp_path / "cpuinfo"
        path.write_text(
            "processor\t: 0\n"
            "model name\t: ARMv7 Processor rev 4 (v7l)\n"
            "\n"
            "Hardware\t: BCM2835\n"
            f"Revision\t: {revision}\n"
            "Serial\t\t: 00000000deadbeef\n"
        )
        return path

    return _write
