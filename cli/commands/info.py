"""
Information and Board Commands

-v (version and board details), -warranty, reset and usbp.
"""

import logging

from config import settings
from cli.context import CommandContext
from cli.usage import WARRANTY, expect_args, usage_error
from core.errors import DomainError, GpioToolError
from hardware.board import BoardInfo, identify_board
from hardware.constants import USB_POWER_CONTROL_PIN
from hardware.factory import HardwareFactory
from hardware.interfaces.gpio_interface import AltFunction, PinState
from hardware.utils.gpio_utils import safe_gpio_cleanup

logger = logging.getLogger(__name__)

RESET_REFUSAL = (
    "GPIO Reset is dangerous and has been removed from the gpio command.\n"
    " - Please write a shell-script to reset the GPIO pins into the state\n"
    "   that you need them in for your applications."
)

USBP_USAGE = "usbp high|low"


def board_details(board: BoardInfo) -> list[str]:
    """The 'Raspberry Pi Details' block of `gpio -v`"""
    return [
        "Raspberry Pi Details",
        f"  Revision string: 0x{board.revision_code:08X}",
        f"  Type     : {board.model_name}",
        f"  Processor: {board.processor}",
        f"  Revision : {board.revision}",
        f"  Memory   : {board.memory}",
        f"  Maker    : {board.maker}",
        "  [Out of Warranty]\n" if board.warranty_void else "",
    ]


def version_lines() -> list[str]:
    """Everything `gpio -v` prints"""
    lines = [
        "",
        f"{settings.PROGRAM_NAME} version: {settings.VERSION}",
        settings.COPYRIGHT,
        "This is free software with ABSOLUTELY NO WARRANTY.",
        f'For details type: "{settings.PROGRAM_NAME} -warranty"',
        "",
    ]

    try:
        lines.extend(board_details(identify_board()))
    except GpioToolError as e:
        logger.debug(f"No board details: {e}")
        lines.append(f"Raspberry Pi Details not available: {e}")

    if settings.DEVICE_TREE_PATH.exists():
        lines.append("  * Device tree is enabled.")

    model_file = settings.DEVICE_TREE_PATH / "model"
    try:
        model = model_file.read_text(encoding="utf-8", errors="replace")
    except OSError:
        model = None
    if model is not None:
        lines.append(f'  * Model string: "{model.rstrip(chr(0)).strip()}"')

    if settings.GPIOMEM_PATH.exists():
        lines.append("  * This Raspberry Pi supports user-level GPIO access.")
    else:
        lines.append("  * Root or sudo required for GPIO access.")

    lines.append("")
    return lines


def do_version() -> None:
    for line in version_lines():
        print(line)


def do_warranty() -> None:
    print(WARRANTY)


def do_reset(ctx: CommandContext, args: list[str]) -> None:
    """Refuses: pins have to be reset by the application that knows their use"""
    print(RESET_REFUSAL)


def do_usbp(args: list[str]) -> None:
    """
    gpio usbp high|low

    Switches the USB current limiter of a B+ or Pi 2 through GPIO 38.
    Always uses BCM numbering.
    """
    expect_args(args, 1, USBP_USAGE)

    board = identify_board()
    if not board.supports_usb_power_control:
        raise DomainError("USB power control is applicable to B+ and v2 boards only.")

    word = args[0].lower()
    if word in ("high", "hi"):
        state, message = PinState.HIGH, "Switched to HIGH current USB (1.2A)"
    elif word in ("low", "lo"):
        state, message = PinState.LOW, "Switched to LOW current USB (600mA)"
    else:
        raise usage_error(USBP_USAGE)

    gpio = HardwareFactory.create_gpio()
    try:
        gpio.write(USB_POWER_CONTROL_PIN, state)
        gpio.set_function(USB_POWER_CONTROL_PIN, AltFunction.OUTPUT)
    finally:
        safe_gpio_cleanup(gpio, logger=logger)
    print(message)
