"""
PWM, Clock and Pad Commands

pwm, pwmTone, clock, pwm-bal, pwm-ms, pwmr, pwmc and drive.
"""

from cli.context import CommandContext
from cli.usage import expect_args, parse_number
from core.errors import DomainError
from hardware.constants import (
    PAD_DRIVE_MAX,
    PAD_GROUPS,
    PWM_CLOCK_DIVISOR_MAX,
    PWM_CLOCK_DIVISOR_MIN,
)
from hardware.interfaces.gpio_interface import PwmMode


def do_pwm(ctx: CommandContext, args: list[str]) -> None:
    usage = "pwm <pin> <value>"
    expect_args(args, 2, usage)
    ctx.pins.pwm_write(parse_number(args[0], usage), parse_number(args[1], usage))


def do_pwm_tone(ctx: CommandContext, args: list[str]) -> None:
    usage = "pwmTone <pin> <freq>"
    expect_args(args, 2, usage)
    ctx.pins.pwm_tone(parse_number(args[0], usage), parse_number(args[1], usage))


def do_clock(ctx: CommandContext, args: list[str]) -> None:
    usage = "clock <pin> <freq>"
    expect_args(args, 2, usage)
    ctx.pins.set_clock(parse_number(args[0], usage), parse_number(args[1], usage))


def do_pwm_balanced(ctx: CommandContext, args: list[str]) -> None:
    ctx.pins.set_pwm_mode(PwmMode.BALANCED)


def do_pwm_mark_space(ctx: CommandContext, args: list[str]) -> None:
    ctx.pins.set_pwm_mode(PwmMode.MARK_SPACE)


def do_pwm_range(ctx: CommandContext, args: list[str]) -> None:
    usage = "pwmr <range>"
    expect_args(args, 1, usage)
    pwm_range = parse_number(args[0], usage)
    if pwm_range <= 0:
        raise DomainError("range must be > 0")
    ctx.pins.set_pwm_range(pwm_range)


def do_pwm_clock(ctx: CommandContext, args: list[str]) -> None:
    usage = "pwmc <clock>"
    expect_args(args, 1, usage)
    divisor = parse_number(args[0], usage)
    if not PWM_CLOCK_DIVISOR_MIN <= divisor <= PWM_CLOCK_DIVISOR_MAX:
        raise DomainError(
            f"clock must be between {PWM_CLOCK_DIVISOR_MIN} and {PWM_CLOCK_DIVISOR_MAX}"
        )
    ctx.pins.set_pwm_clock(divisor)


def do_drive(ctx: CommandContext, args: list[str]) -> None:
    """gpio drive <group> <value>: pad group 0-2, strength 0-7"""
    usage = "drive group value"
    expect_args(args, 2, usage)
    group = parse_number(args[0], usage)
    value = parse_number(args[1], usage)

    if group not in PAD_GROUPS:
        raise DomainError(f"drive group not 0, 1 or 2: {group}")
    if not 0 <= value <= PAD_DRIVE_MAX:
        raise DomainError(f"drive value not 0-{PAD_DRIVE_MAX}: {value}")

    ctx.pins.set_pad_drive(group, value)
