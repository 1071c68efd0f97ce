"""
System Module

Everything the gpio tool does through the operating system rather than a
GPIO backend: sysfs exports, kernel module loading and external tools.

Public API:
    - SysfsGPIO: /sys/class/gpio export state machine
    - KernelModules: load/unload of the SPI and I2C modules, i2cdetect
    - find_executable: Locate a system tool in the fixed search path
"""

from system.executables import find_executable
from system.kernel_modules import KernelModules
from system.sysfs_gpio import ExportEntry, SysfsGPIO

__all__ = [
    "ExportEntry",
    "KernelModules",
    "SysfsGPIO",
    "find_executable",
]
