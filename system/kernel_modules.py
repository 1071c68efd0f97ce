"""
Kernel Modules

Loading and unloading of the SPI and I2C kernel modules on boards that
boot without a device tree, and running i2cdetect on the right bus.

On device-tree kernels these modules are selected with raspi-config and
a reboot, so load and unload refuse to run there.
"""

import logging
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config.settings import (
    DEVICE_TREE_PATH,
    I2CDETECT,
    MODPROBE,
    MODULE_SETTLE_TIME,
    PROC_MODULES,
    RMMOD,
)
from core.errors import DomainError, HostError
from system.executables import find_executable
from system.sysfs_gpio import change_owner

DEVICE_TREE_REFUSAL = (
    "Unable to load/unload modules as this Pi has the device tree enabled.\n"
    "  You need to run the raspi-config program (as root) and select the\n"
    "  modules (SPI or I2C) that you wish to load/unload there and reboot."
)


@dataclass(frozen=True)
class ModulePair:
    """The two modules behind a bus and the device nodes they create"""

    driver: str
    controller: str
    devices: tuple[str, str]


MODULE_PAIRS = {
    "spi": ModulePair("spidev", "spi_bcm2708", ("/dev/spidev0.0", "/dev/spidev0.1")),
    "i2c": ModulePair("i2c_dev", "i2c_bcm2708", ("/dev/i2c-0", "/dev/i2c-1")),
}


class KernelModules:
    """
    Usage:
        modules = KernelModules()
        modules.load("i2c", baudrate_khz=400)
        modules.i2cdetect(layout=2)
    """

    def __init__(
        self,
        proc_modules: Optional[Path] = None,
        device_tree: Optional[Path] = None,
        search_path: Optional[tuple[str, ...]] = None,
    ):
        """
        Args:
            proc_modules: Module list, defaults to /proc/modules
            device_tree: Device-tree probe path, defaults to /proc/device-tree
            search_path: Directories for modprobe/rmmod/i2cdetect
        """
        self.logger = logging.getLogger(__name__)
        self.proc_modules = proc_modules or PROC_MODULES
        self.device_tree = device_tree or DEVICE_TREE_PATH
        self.search_path = search_path

    def _pair(self, bus: str) -> ModulePair:
        pair = MODULE_PAIRS.get(bus.lower())
        if pair is None:
            raise DomainError(f"Unknown module set {bus} (expected spi or i2c)")
        return pair

    def check_device_tree(self) -> None:
        """
        Raises:
            HostError: When the kernel was booted with a device tree
        """
        if self.device_tree.exists():
            raise HostError(DEVICE_TREE_REFUSAL)

    def is_loaded(self, module: str) -> bool:
        """
        True if any /proc/modules line starts with the module name.

        Raises:
            HostError: If /proc/modules can't be read
        """
        try:
            with open(self.proc_modules) as f:
                return any(line.startswith(module) for line in f)
        except OSError as e:
            raise HostError.from_os_error(f"Unable to check {self.proc_modules}", e) from e

    def _run(self, program: str, *args: str) -> None:
        command = [str(find_executable(program, self.search_path)), *args]
        self.logger.debug(f"Running {' '.join(command)}")
        try:
            subprocess.run(command, check=False)
        except OSError as e:
            raise HostError.from_os_error(f"Unable to run {program}", e) from e

    def load(self, bus: str, baudrate_khz: Optional[int] = None) -> None:
        """
        Load a bus's modules and give its device nodes to the calling user.

        Args:
            bus: "spi" or "i2c"
            baudrate_khz: I2C bus speed; passed to the controller module

        Raises:
            HostError: Device tree active, tool missing or module didn't load
        """
        self.check_device_tree()
        pair = self._pair(bus)
        modprobe = find_executable(MODPROBE, self.search_path)
        self.logger.debug(f"Using {modprobe}")

        controller_args = []
        if baudrate_khz is not None:
            controller_args.append(f"baudrate={baudrate_khz * 1000}")

        if not self.is_loaded(pair.driver):
            self._run(MODPROBE, pair.driver)
        if not self.is_loaded(pair.controller):
            self._run(MODPROBE, pair.controller, *controller_args)

        if not self.is_loaded(pair.controller):
            raise HostError(f"Unable to load {pair.controller}")

        # udev needs a moment to create the device nodes
        time.sleep(MODULE_SETTLE_TIME)

        for device in pair.devices:
            change_owner(Path(device))
        self.logger.info(f"Loaded {pair.driver} and {pair.controller}")

    def unload(self, bus: str) -> None:
        """Remove whichever of a bus's modules are loaded"""
        self.check_device_tree()
        pair = self._pair(bus)
        for module in (pair.driver, pair.controller):
            if self.is_loaded(module):
                self._run(RMMOD, module)
                self.logger.info(f"Unloaded {module}")

    def i2cdetect(self, layout: int) -> None:
        """
        Run `i2cdetect -y <bus>`: bus 0 on layout-1 boards, else 1.

        Raises:
            HostError: i2cdetect missing or the i2c_dev module not loaded
        """
        find_executable(I2CDETECT, self.search_path)
        if not self.is_loaded(MODULE_PAIRS["i2c"].driver):
            raise HostError("The I2C kernel module(s) are not loaded.")

        port = 0 if layout == 1 else 1
        self._run(I2CDETECT, "-y", str(port))
