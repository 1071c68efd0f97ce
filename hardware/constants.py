"""
Hardware Constants

Pin-numbering tables, alternate-function tables and PWM defaults for the
Raspberry Pi GPIO header. All GPIO numbers in the tables are BCM numbers.

Layout 1 is the original Model B (revisions 0002/0003); every later board
uses layout 2.
"""

from enum import Enum

from hardware.interfaces.gpio_interface import AltFunction

# =============================================================================
# NUMBERING SCHEMES
# =============================================================================


class NumberingScheme(Enum):
    """How a pin number typed on the command line is interpreted"""

    GPIO = "gpio"  # BCM GPIO number (-b, default)
    PHYS = "phys"  # Physical header position (-p)
    WPI = "wpi"  # wiringPi pin number (-w)
    UNINITIALISED = "uninitialised"  # No hardware setup (-z)


# Extension nodes own pin numbers from here upwards
EXTENSION_PIN_BASE = 64

# wiringPi pin -> BCM GPIO
WPI_TO_BCM = {
    1: (17, 18, 21, 22, 23, 24, 25, 4, 0, 1, 8, 7, 10, 9, 11, 14, 15),
    2: (
        17, 18, 27, 22, 23, 24, 25, 4,  # 0-7
        2, 3,  # 8-9   I2C
        8, 7,  # 10-11 SPI CE
        10, 9, 11,  # 12-14 SPI
        14, 15,  # 15-16 UART
        28, 29, 30, 31,  # 17-20 P5 header
        5, 6, 13, 19, 26,  # 21-25
        12, 16, 20, 21,  # 26-29
        0, 1,  # 30-31 ID EEPROM
    ),
}

# Physical header position -> BCM GPIO (power/ground pins are absent)
PHYS_TO_BCM = {
    1: {
        3: 0, 5: 1, 7: 4, 8: 14, 10: 15, 11: 17, 12: 18, 13: 21,
        15: 22, 16: 23, 18: 24, 19: 10, 21: 9, 22: 25, 23: 11, 24: 8,
        26: 7,
    },
    2: {
        3: 2, 5: 3, 7: 4, 8: 14, 10: 15, 11: 17, 12: 18, 13: 27,
        15: 22, 16: 23, 18: 24, 19: 10, 21: 9, 22: 25, 23: 11, 24: 8,
        26: 7, 27: 0, 28: 1, 29: 5, 31: 6, 32: 12, 33: 13, 35: 19,
        36: 16, 37: 26, 38: 20, 40: 21,
    },
}

# Silkscreen-style names used by readall, indexed by physical pin (layout 2)
HEADER_PIN_NAMES = {
    1: "3.3v", 2: "5v", 3: "SDA.1", 4: "5v", 5: "SCL.1", 6: "0v",
    7: "GPIO. 7", 8: "TxD", 9: "0v", 10: "RxD", 11: "GPIO. 0", 12: "GPIO. 1",
    13: "GPIO. 2", 14: "0v", 15: "GPIO. 3", 16: "GPIO. 4", 17: "3.3v",
    18: "GPIO. 5", 19: "MOSI", 20: "0v", 21: "MISO", 22: "GPIO. 6",
    23: "SCLK", 24: "CE0", 25: "0v", 26: "CE1", 27: "SDA.0", 28: "SCL.0",
    29: "GPIO.21", 30: "0v", 31: "GPIO.22", 32: "GPIO.26", 33: "GPIO.23",
    34: "0v", 35: "GPIO.24", 36: "GPIO.27", 37: "GPIO.25", 38: "GPIO.28",
    39: "0v", 40: "GPIO.29",
}

# Layout 1 boards wire pins 3 and 5 to I2C bus 0
LAYOUT_1_PIN_NAMES = {**HEADER_PIN_NAMES, 3: "SDA.0", 5: "SCL.0"}

HEADER_PIN_NAMES_BY_LAYOUT = {1: LAYOUT_1_PIN_NAMES, 2: HEADER_PIN_NAMES}

HEADER_PIN_COUNT = {1: 26, 2: 40}

# Number of user GPIOs listed by allreadall
ALL_READALL_PINS = 28

# =============================================================================
# ALTERNATE FUNCTIONS
# =============================================================================

# BCM GPIO -> function that routes the PWM peripheral to it
PWM_PIN_FUNCTIONS = {
    12: AltFunction.ALT0,
    13: AltFunction.ALT0,
    18: AltFunction.ALT5,
    19: AltFunction.ALT5,
    40: AltFunction.ALT0,
    41: AltFunction.ALT0,
    45: AltFunction.ALT0,
    52: AltFunction.ALT1,
    53: AltFunction.ALT1,
}

# BCM GPIO -> function that routes a general purpose clock to it
CLOCK_PIN_FUNCTIONS = {
    4: AltFunction.ALT0,
    5: AltFunction.ALT0,
    6: AltFunction.ALT0,
    20: AltFunction.ALT5,
    21: AltFunction.ALT5,
    32: AltFunction.ALT0,
    34: AltFunction.ALT0,
    42: AltFunction.ALT0,
    43: AltFunction.ALT0,
    44: AltFunction.ALT0,
}

# `gpio mode <pin> altN` -> function-select code
ALT_MODE_NAMES = {
    "alt0": AltFunction.ALT0,
    "alt1": AltFunction.ALT1,
    "alt2": AltFunction.ALT2,
    "alt3": AltFunction.ALT3,
    "alt4": AltFunction.ALT4,
    "alt5": AltFunction.ALT5,
}

# =============================================================================
# PWM / CLOCK / PADS
# =============================================================================

# Oscillator feeding the PWM clock divider (Hz)
PWM_BASE_CLOCK = 19_200_000

DEFAULT_PWM_RANGE = 1024
DEFAULT_PWM_CLOCK_DIVISOR = 32

PWM_CLOCK_DIVISOR_MIN = 1
PWM_CLOCK_DIVISOR_MAX = 4095

# Hardware-PWM capable pins on the 40-pin header
HEADER_PWM_PINS = (12, 13, 18, 19)

# Pad drive groups and settings (setting n drives 2 * (n + 1) mA)
PAD_GROUPS = (0, 1, 2)
PAD_DRIVE_MAX = 7

# Valid 32-bit banks for `gpio bank`
GPIO_BANKS = (0, 1)

# wiringPi pins 0-7 make up the byte for wb/rbx/rbd
BYTE_PIN_COUNT = 8

# GPIO controlling the USB current limiter on the B+ and Pi 2
USB_POWER_CONTROL_PIN = 38
