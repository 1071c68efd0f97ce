"""
gpio - Command Line Entry Point

    gpio [-b|-p|-w|-z] [-x ext:pinBase:params ...] <command> [args...]

Dispatch order:
1. WIRINGPI_DEBUG turns on debug logging
2. help, -v and -warranty are answered without any checks
3. everything else needs root
4. sysfs commands run without a GPIO backend
5. load, unload and usbp; allreadall always uses BCM numbering
6. global options, extensions, then the command table

Exit status is 0 on success and 1 on any failure; failures print one
message on standard error.
"""

import argparse
import logging
import os
import sys
from typing import Optional

from config import settings
from cli.commands import COMMAND_TABLE, SYSFS_COMMANDS, SYSTEM_COMMANDS
from cli.commands.info import do_version, do_warranty
from cli.commands.reports import do_allreadall
from cli.context import CommandContext
from cli.usage import HINT, USAGE
from core.errors import GpioToolError, HostError, UsageError
from extensions.interfaces.extension_interface import ExtensionError, ExtensionNode
from extensions.loader import load_extension
from hardware.board import detect_board
from hardware.constants import NumberingScheme
from hardware.controllers.pin_controller import PinController
from hardware.factory import HardwareFactory
from hardware.interfaces.gpio_interface import GPIOError
from hardware.utils.gpio_utils import check_gpio_available, safe_gpio_cleanup

logger = logging.getLogger(__name__)

HELP_TOKENS = ("h", "-h", "-help", "--help", "help")

# Handler installed by setup_logging (replaced on every call)
_console_handler: Optional[logging.Handler] = None


def setup_logging(debug: bool = False) -> None:
    """
    Send log records to stderr so command output on stdout stays clean.

    Args:
        debug: Log everything instead of warnings and errors only
    """
    global _console_handler

    root = logging.getLogger()
    if _console_handler is not None:
        root.removeHandler(_console_handler)

    level = logging.DEBUG if debug else logging.WARNING
    _console_handler = logging.StreamHandler(sys.stderr)
    _console_handler.setLevel(level)
    _console_handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
    root.addHandler(_console_handler)
    root.setLevel(level)


class GpioArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose errors are UsageErrors instead of SystemExit"""

    def error(self, message: str):
        if message.startswith("argument -x"):
            raise UsageError(f"{settings.PROGRAM_NAME}: -x missing extension command.")
        raise UsageError(f"{settings.PROGRAM_NAME}: {message}")


def build_parser() -> GpioArgumentParser:
    parser = GpioArgumentParser(
        prog=settings.PROGRAM_NAME,
        add_help=False,
        allow_abbrev=False,
    )
    numbering = parser.add_mutually_exclusive_group()
    numbering.add_argument(
        "-b", dest="scheme", action="store_const", const=NumberingScheme.GPIO,
        help="BCM GPIO numbering (default)",
    )
    numbering.add_argument(
        "-p", dest="scheme", action="store_const", const=NumberingScheme.PHYS,
        help="Physical header pin numbering",
    )
    numbering.add_argument(
        "-w", dest="scheme", action="store_const", const=NumberingScheme.WPI,
        help="wiringPi pin numbering",
    )
    numbering.add_argument(
        "-z", dest="scheme", action="store_const", const=NumberingScheme.UNINITIALISED,
        help="Don't initialise the hardware (simulated backend)",
    )
    parser.add_argument(
        "-x",
        dest="extensions",
        action="append",
        default=[],
        metavar="extension:pinBase[:params]",
        help="Load an extension (may be repeated)",
    )
    parser.add_argument("command", nargs="?")
    parser.add_argument("args", nargs=argparse.REMAINDER)
    parser.set_defaults(scheme=NumberingScheme.GPIO)
    return parser


def load_extensions(specs: list[str]) -> list[ExtensionNode]:
    """
    Load every -x extension in order.

    Raises:
        ExtensionError: On the first one that fails
    """
    nodes = []
    for spec in specs:
        try:
            nodes.append(load_extension(spec))
        except ExtensionError as e:
            raise ExtensionError(f"Extension load failed: {e}") from e
    return nodes


def build_context(scheme: NumberingScheme, nodes: Optional[list[ExtensionNode]] = None) -> CommandContext:
    """
    Create the backend for a numbering scheme and wrap it in a context.

    -z never touches the hardware and gets the simulated backend.
    """
    if scheme == NumberingScheme.UNINITIALISED:
        gpio = HardwareFactory.create_gpio(mode="mock")
    else:
        gpio = HardwareFactory.create_gpio()
    check_gpio_available(gpio, logger)

    board = detect_board()
    layout = board.layout if board is not None else 2
    pins = PinController(gpio, scheme, layout)
    for node in nodes or []:
        pins.register_node(node)

    return CommandContext(scheme=scheme, pins=pins, board=board)


def _run_with_hardware(scheme: NumberingScheme, handler, args: list[str], nodes=None) -> None:
    ctx = build_context(scheme, nodes)
    try:
        handler(ctx, args)
    finally:
        safe_gpio_cleanup(ctx.pins.gpio, logger=logger)


def dispatch(argv: list[str]) -> int:
    """
    Run one command line (without the program name).

    Returns:
        Exit status

    Raises:
        GpioToolError, GPIOError, ExtensionError: On any failure
    """
    if not argv:
        print(HINT, file=sys.stderr)
        return 1

    first = argv[0].lower()

    if first in HELP_TOKENS:
        print(USAGE)
        return 0

    if argv[0] == "-v":
        do_version()
        return 0

    if first == "-warranty":
        do_warranty()
        return 0

    if os.geteuid() != 0:
        raise HostError("Must be root to run. Program should be suid root. This is an error.")

    if first in SYSFS_COMMANDS:
        SYSFS_COMMANDS[first](argv[1:])
        return 0

    if first in SYSTEM_COMMANDS:
        SYSTEM_COMMANDS[first](argv[1:])
        return 0

    if first == "allreadall":
        _run_with_hardware(NumberingScheme.GPIO, do_allreadall, argv[1:])
        return 0

    options = build_parser().parse_args(argv)
    nodes = load_extensions(options.extensions)

    if options.command is None:
        raise UsageError(f"[FATAL] {settings.PROGRAM_NAME}: no command given")

    handler = COMMAND_TABLE.get(options.command.lower())
    if handler is None:
        raise UsageError(f"[FATAL] {settings.PROGRAM_NAME}: Unknown command: {options.command}.")

    logger.debug(f"Running {options.command} ({options.scheme.value} numbering)")
    _run_with_hardware(options.scheme, handler, options.args, nodes)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """
    Console entry point.

    Args:
        argv: Arguments without the program name; sys.argv[1:] if None
    """
    argv = sys.argv[1:] if argv is None else list(argv)

    debug = bool(os.getenv(settings.DEBUG_ENV_VAR))
    if debug:
        print(f"{settings.PROGRAM_NAME}: debug mode enabled")
    setup_logging(debug)

    try:
        return dispatch(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        return e.exit_code
    except GpioToolError as e:
        print(f"{settings.PROGRAM_NAME}: {e}", file=sys.stderr)
        return e.exit_code
    except (GPIOError, ExtensionError) as e:
        print(f"{settings.PROGRAM_NAME}: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 1


if __name__ == "__main__":
    sys.exit(main())
