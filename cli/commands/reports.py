"""
Report Commands

readall (and its aliases nreadall, pins) and allreadall.
"""

from cli.context import CommandContext
from hardware import reports


def do_readall(ctx: CommandContext, args: list[str]) -> None:
    model_name = ctx.board.model_name if ctx.board is not None else "Pi"
    for line in reports.readall(ctx.pins.gpio, ctx.layout, model_name):
        print(line)


def do_allreadall(ctx: CommandContext, args: list[str]) -> None:
    for line in reports.allreadall(ctx.pins.gpio):
        print(line)
