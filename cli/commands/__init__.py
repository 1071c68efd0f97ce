"""
Command Handlers

Three tables, dispatched in this order by cli.main:

    SYSFS_COMMANDS   - handler(args); no hardware backend is created
    SYSTEM_COMMANDS  - handler(args); create their own backend if needed
    COMMAND_TABLE    - handler(ctx, args) after global option parsing

Keys are lower case; lookups are case-insensitive.
"""

from cli.commands import info, interrupts, modules, pins, pwm, reports, sysfs

SYSFS_COMMANDS = {
    "exports": sysfs.do_exports,
    "export": sysfs.do_export,
    "edge": sysfs.do_edge,
    "unexport": sysfs.do_unexport,
    "unexportall": sysfs.do_unexportall,
}

SYSTEM_COMMANDS = {
    "load": modules.do_load,
    "unload": modules.do_unload,
    "usbp": info.do_usbp,
}

COMMAND_TABLE = {
    "mode": pins.do_mode,
    "read": pins.do_read,
    "bank": pins.do_bank,
    "write": pins.do_write,
    "pwm": pwm.do_pwm,
    "awrite": pins.do_awrite,
    "aread": pins.do_aread,
    "toggle": pins.do_toggle,
    "blink": pins.do_blink,
    "pwm-bal": pwm.do_pwm_balanced,
    "pwm-ms": pwm.do_pwm_mark_space,
    "pwmr": pwm.do_pwm_range,
    "pwmc": pwm.do_pwm_clock,
    "pwmtone": pwm.do_pwm_tone,
    "drive": pwm.do_drive,
    "readall": reports.do_readall,
    "nreadall": reports.do_readall,
    "pins": reports.do_readall,
    "qmode": pins.do_qmode,
    "i2cdetect": modules.do_i2cdetect,
    "i2cd": modules.do_i2cdetect,
    "reset": info.do_reset,
    "wb": pins.do_write_byte,
    "rbx": pins.do_read_byte_hex,
    "rbd": pins.do_read_byte_dec,
    "clock": pwm.do_clock,
    "wfi": interrupts.do_wfi,
    "mwfi": interrupts.do_mwfi,
}

__all__ = [
    "COMMAND_TABLE",
    "SYSFS_COMMANDS",
    "SYSTEM_COMMANDS",
]
