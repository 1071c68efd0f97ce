"""
Sysfs Commands

exports, export, edge, unexport and unexportall. These run before any
hardware backend is created and only touch /sys/class/gpio.
"""

from config import settings
from cli.usage import expect_args, parse_number
from system.sysfs_gpio import ExportEntry, SysfsGPIO


def _sysfs() -> SysfsGPIO:
    return SysfsGPIO(settings.SYSFS_GPIO_ROOT)


def format_export(entry: ExportEntry) -> str:
    """One `gpio exports` line: pin, direction, value and edge"""
    line = f"{entry.pin:4d}: {entry.direction:<3}"
    if entry.value is None:
        return line + "No Value file (huh?)"
    line += f"  {entry.value}"
    if entry.edge is not None:
        line += f"  {entry.edge:<8}"
    return line


def do_exports(args: list[str]) -> None:
    entries = _sysfs().list_exports()
    if entries:
        print("GPIO Pins exported:")
    for entry in entries:
        print(format_export(entry))


def do_export(args: list[str]) -> None:
    """gpio export <pin> <in|out|high|low>"""
    usage = "export pin mode"
    expect_args(args, 2, usage)
    _sysfs().export(parse_number(args[0], usage), args[1])


def do_edge(args: list[str]) -> None:
    """gpio edge <pin> <none|rising|falling|both>"""
    usage = "edge pin mode"
    expect_args(args, 2, usage)
    _sysfs().edge(parse_number(args[0], usage), args[1])


def do_unexport(args: list[str]) -> None:
    usage = "unexport pin"
    expect_args(args, 1, usage)
    _sysfs().unexport(parse_number(args[0], usage))


def do_unexportall(args: list[str]) -> None:
    _sysfs().unexport_all()
