"""
Pin State Reports

Text tables printed by `gpio readall` and `gpio allreadall`.

readall draws the expansion header the way it looks from above, two
columns of physical pins with the BCM number, wiringPi number, name,
function and level of each. allreadall lists every user GPIO by BCM
number.
"""

from hardware.constants import (
    ALL_READALL_PINS,
    HEADER_PIN_COUNT,
    HEADER_PIN_NAMES_BY_LAYOUT,
    PHYS_TO_BCM,
    WPI_TO_BCM,
)
from hardware.interfaces.gpio_interface import GPIOError, GPIOInterface, PinState

READALL_RULE = " +-----+-----+---------+------+---+----++----+---+------+---------+-----+-----+"
READALL_HEADING = " | BCM | wPi |   Name  | Mode | V | Physical | V | Mode | Name    | wPi | BCM |"

ALLREADALL_RULE = "+-----+------+-------+      +-----+------+-------+"
ALLREADALL_HEADING = "| Pin | Mode | Value |      | Pin | Mode | Value |"


def _level(gpio: GPIOInterface, bcm: int) -> str:
    """Level digit, blank when the backend cannot read the pin in its current function"""
    try:
        state = gpio.read(bcm)
    except GPIOError:
        return ""
    return "1" if state == PinState.HIGH else "0"


def _header_cells(gpio: GPIOInterface, phys: int, layout: int) -> tuple[str, str, str, str, str]:
    """(bcm, wpi, name, mode, value) for one physical pin; blanks for power pins"""
    name = HEADER_PIN_NAMES_BY_LAYOUT[layout][phys]
    bcm = PHYS_TO_BCM[layout].get(phys)
    if bcm is None:
        return "", "", name, "", ""

    wpi_table = WPI_TO_BCM[layout]
    wpi = str(wpi_table.index(bcm)) if bcm in wpi_table else ""
    mode = gpio.get_function(bcm).label
    return str(bcm), wpi, name, mode, _level(gpio, bcm)


def readall(gpio: GPIOInterface, layout: int = 2, model_name: str = "Pi") -> list[str]:
    """
    Render the header table.

    Args:
        gpio: Backend to query (BCM numbering)
        layout: Header layout; layout 1 boards have 26 pins
        model_name: Shown in the top rule
    """
    title = f"---{model_name}---"
    top = READALL_RULE[:37] + title.center(12, "-") + READALL_RULE[49:]
    lines = [top, READALL_HEADING, READALL_RULE]

    for phys in range(1, HEADER_PIN_COUNT[layout] + 1, 2):
        l_bcm, l_wpi, l_name, l_mode, l_val = _header_cells(gpio, phys, layout)
        r_bcm, r_wpi, r_name, r_mode, r_val = _header_cells(gpio, phys + 1, layout)
        lines.append(
            f" | {l_bcm:>3} | {l_wpi:>3} | {l_name:>7} | {l_mode:>4} | {l_val:>1} "
            f"| {phys:>2} || {phys + 1:<2} "
            f"| {r_val:<1} | {r_mode:<4} | {r_name:<7} | {r_wpi:<3} | {r_bcm:<3} |"
        )

    lines.extend([READALL_RULE, READALL_HEADING, top])
    return lines


def allreadall(gpio: GPIOInterface) -> list[str]:
    """Render function and level of GPIO 0 to 27 in two columns"""
    half = ALL_READALL_PINS // 2
    lines = [ALLREADALL_RULE, ALLREADALL_HEADING, ALLREADALL_RULE]

    def cell(bcm: int) -> str:
        value = {"1": "High", "0": "Low"}.get(_level(gpio, bcm), "-")
        return f"| {bcm:>3} | {gpio.get_function(bcm).label:<4} | {value:<5} |"

    for bcm in range(half):
        lines.append(f"{cell(bcm)}      {cell(bcm + half)}")

    lines.append(ALLREADALL_RULE)
    return lines
