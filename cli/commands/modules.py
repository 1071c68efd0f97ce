"""
Kernel Module Commands

load, unload and i2cdetect.
"""

from config import settings
from cli.context import CommandContext
from cli.usage import parse_number, usage_error
from core.errors import DomainError
from system.kernel_modules import MODULE_PAIRS, KernelModules

LOAD_USAGE = "load <spi/i2c>[I2C baudrate in Kb/sec]"
UNLOAD_USAGE = "unload <spi/i2c>"


def _modules() -> KernelModules:
    return KernelModules(settings.PROC_MODULES, settings.DEVICE_TREE_PATH)


def do_load(args: list[str]) -> None:
    """gpio load spi | gpio load i2c [kHz]"""
    modules = _modules()
    modules.check_device_tree()

    if not 1 <= len(args) <= 2 or args[0].lower() not in MODULE_PAIRS:
        raise usage_error(LOAD_USAGE)

    bus = args[0].lower()
    baudrate_khz = None
    if len(args) == 2:
        if bus == "spi":
            raise DomainError("Unable to set the buffer size now. Load aborted. Please see the man page.")
        baudrate_khz = parse_number(args[1], LOAD_USAGE)

    modules.load(bus, baudrate_khz)


def do_unload(args: list[str]) -> None:
    modules = _modules()
    modules.check_device_tree()

    if len(args) != 1 or args[0].lower() not in MODULE_PAIRS:
        raise usage_error(UNLOAD_USAGE)

    modules.unload(args[0].lower())


def do_i2cdetect(ctx: CommandContext, args: list[str]) -> None:
    """Scan the header I2C bus (bus 0 on the first Model B boards)"""
    _modules().i2cdetect(ctx.layout)
