"""
Pin Commands

mode, read, write, aread, awrite, toggle, blink, qmode, bank and the
byte commands wb, rbx and rbd.
"""

from cli.context import CommandContext
from cli.usage import expect_args, parse_number, usage_error
from core.errors import DomainError
from hardware.constants import ALT_MODE_NAMES, GPIO_BANKS
from hardware.interfaces.gpio_interface import PinMode, PinState, PullMode
from hardware.utils.gpio_utils import parse_pin_state

# `gpio mode` words (lower case) -> pin mode
MODE_WORDS = {
    "in": PinMode.INPUT,
    "input": PinMode.INPUT,
    "out": PinMode.OUTPUT,
    "output": PinMode.OUTPUT,
    "pwm": PinMode.PWM_OUTPUT,
    "pwmtone": PinMode.PWM_TONE_OUTPUT,
    "clock": PinMode.GPIO_CLOCK,
}

# `gpio mode` words that set the pull instead
PULL_WORDS = {
    "up": PullMode.UP,
    "down": PullMode.DOWN,
    "tri": PullMode.NONE,
    "off": PullMode.NONE,
}


def do_mode(ctx: CommandContext, args: list[str]) -> None:
    """gpio mode <pin> <mode>"""
    usage = "mode pin mode"
    expect_args(args, 2, usage)
    pin = parse_number(args[0], usage)
    word = args[1].lower()

    if word in MODE_WORDS:
        ctx.pins.set_mode(pin, MODE_WORDS[word])
    elif word in PULL_WORDS:
        ctx.pins.set_pull(pin, PULL_WORDS[word])
    elif word in ALT_MODE_NAMES:
        ctx.pins.set_alt(pin, ALT_MODE_NAMES[word])
    else:
        raise DomainError(f"Invalid mode: {args[1]}. Should be in/out/pwm/clock/up/down/tri")


def do_read(ctx: CommandContext, args: list[str]) -> None:
    usage = "read pin"
    expect_args(args, 1, usage)
    state = ctx.pins.read(parse_number(args[0], usage))
    print("1" if state == PinState.HIGH else "0")


def do_write(ctx: CommandContext, args: list[str]) -> None:
    """gpio write <pin> <up|on|down|off|number>"""
    usage = "write pin value"
    expect_args(args, 2, usage)
    pin = parse_number(args[0], usage)
    try:
        state = parse_pin_state(args[1])
    except ValueError:
        raise usage_error(usage) from None
    ctx.pins.write(pin, state)


def do_aread(ctx: CommandContext, args: list[str]) -> None:
    usage = "aread pin"
    expect_args(args, 1, usage)
    print(ctx.pins.analog_read(parse_number(args[0], usage)))


def do_awrite(ctx: CommandContext, args: list[str]) -> None:
    usage = "awrite pin value"
    expect_args(args, 2, usage)
    ctx.pins.analog_write(parse_number(args[0], usage), parse_number(args[1], usage))


def do_toggle(ctx: CommandContext, args: list[str]) -> None:
    usage = "toggle pin"
    expect_args(args, 1, usage)
    ctx.pins.toggle(parse_number(args[0], usage))


def do_blink(ctx: CommandContext, args: list[str]) -> None:
    """Blink until interrupted"""
    usage = "blink pin"
    expect_args(args, 1, usage)
    ctx.pins.blink(parse_number(args[0], usage))


def do_qmode(ctx: CommandContext, args: list[str]) -> None:
    usage = "qmode pin"
    expect_args(args, 1, usage)
    print(ctx.pins.qmode(parse_number(args[0], usage)))


def do_bank(ctx: CommandContext, args: list[str]) -> None:
    usage = "bank <bank#>"
    expect_args(args, 1, usage)
    bank = parse_number(args[0], usage)
    if bank not in GPIO_BANKS:
        raise DomainError("Bad bank number. Must be 0 or 1.")
    print(f"0x{ctx.pins.read_bank(bank):08X}")


def do_write_byte(ctx: CommandContext, args: list[str]) -> None:
    """gpio wb <value>; accepts 0x.. and 0b.. forms"""
    usage = "wb value"
    expect_args(args, 1, usage)
    ctx.pins.write_byte(parse_number(args[0], usage, base=0))


def do_read_byte_hex(ctx: CommandContext, args: list[str]) -> None:
    expect_args(args, 0, "rbx|rbd")
    print(f"{ctx.pins.read_byte():02X}")


def do_read_byte_dec(ctx: CommandContext, args: list[str]) -> None:
    expect_args(args, 0, "rbx|rbd")
    print(ctx.pins.read_byte())
