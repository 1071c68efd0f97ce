"""
Interrupt Commands

wfi waits for one edge on a pin; mwfi waits for as many edges as there
are pins in its comma separated list. Both block with no timeout.
"""

from cli.context import CommandContext
from cli.usage import expect_args, parse_number, usage_error
from core.errors import UsageError
from hardware.controllers.interrupt_waiter import InterruptWaiter, parse_edge
from hardware.interfaces.gpio_interface import EdgeDetection
from hardware.utils.gpio_utils import parse_pin_list


def _edge(text: str) -> EdgeDetection:
    edge = parse_edge(text)
    if edge is None:
        raise UsageError(f"wfi: Invalid mode: {text}. Should be rising, falling or both")
    return edge


def _wait(ctx: CommandContext, pins: list[int], edge: EdgeDetection, banner: str) -> None:
    waiter = InterruptWaiter(ctx.pins.gpio)
    waiter.arm([ctx.pins.to_bcm(pin) for pin in pins], edge)
    try:
        print(banner, flush=True)
        waiter.wait(len(pins))
    finally:
        waiter.disarm()


def do_wfi(ctx: CommandContext, args: list[str]) -> None:
    """gpio wfi <pin> <rising|falling|both>"""
    usage = "wfi pin mode"
    expect_args(args, 2, usage)
    pin = parse_number(args[0], usage)
    edge = _edge(args[1])
    _wait(ctx, [pin], edge, "wfi: Wait for one interrupt...")


def do_mwfi(ctx: CommandContext, args: list[str]) -> None:
    """gpio mwfi <pin>[,<pin>...] <rising|falling|both>"""
    usage = "mwfi pin[,pin...] mode"
    expect_args(args, 2, usage)
    try:
        pins = parse_pin_list(args[0])
    except ValueError:
        raise usage_error(usage) from None
    if not pins:
        raise usage_error(usage)
    edge = _edge(args[1])
    _wait(ctx, pins, edge, f"mwfi: Wait for {len(pins)} interrupts...")
