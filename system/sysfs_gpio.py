"""
Sysfs GPIO Exports

Drives the kernel's /sys/class/gpio interface. Nothing here needs a GPIO
backend or a memory map, so these operations work even where the
hardware library can't start.

Per-pin state machine:

    unexported --export(pin, mode)--> exported(direction=mode, edge=none)
    any        --edge(pin, mode)----> exported(direction=in, edge=mode)
    exported   --unexport(pin)------> unexported

After export and edge, the pin's value and edge files are handed to the
real (non-effective) user so an unprivileged program can use them.
"""

import errno
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config.settings import SYSFS_GPIO_ROOT
from core.errors import HostError, UsageError

logger = logging.getLogger(__name__)

# `gpio export` mode words -> direction file contents
DIRECTION_ALIASES = {
    "in": "in",
    "input": "in",
    "out": "out",
    "output": "out",
    "high": "high",
    "up": "high",
    "low": "low",
    "down": "low",
}

EDGE_MODES = ("none", "rising", "falling", "both")

# Pins probed by list_exports / released by unexport_all
EXPORT_PIN_LIMIT = 64
UNEXPORT_ALL_LIMIT = 63


@dataclass
class ExportEntry:
    """One exported pin as seen by `gpio exports`"""

    pin: int
    direction: str
    value: Optional[str]
    edge: Optional[str]


def change_owner(path: Path) -> None:
    """
    Give a file to the real user and group of this process.

    A missing file is skipped silently; other failures are logged.
    """
    try:
        os.chown(path, os.getuid(), os.getgid())
    except OSError as e:
        if e.errno != errno.ENOENT:
            logger.warning(f"Unable to change ownership of {path}: {os.strerror(e.errno)}")


def _attribute_text(raw: str) -> str:
    """Drop one trailing newline; an empty read shows as '?'"""
    if raw.endswith("\n"):
        raw = raw[:-1]
    return raw or "?"


class SysfsGPIO:
    """
    Export, configure and release pins through sysfs.

    Usage:
        sysfs = SysfsGPIO()
        sysfs.export(17, "out")
        sysfs.edge(4, "falling")
        for entry in sysfs.list_exports():
            print(entry.pin, entry.direction)
    """

    def __init__(self, root: Optional[Path] = None):
        """
        Args:
            root: The gpio class directory, defaults to SYSFS_GPIO_ROOT
        """
        self.logger = logging.getLogger(__name__)
        self.root = Path(root) if root is not None else SYSFS_GPIO_ROOT

    def pin_dir(self, pin: int) -> Path:
        return self.root / f"gpio{pin}"

    # =========================================================================
    # LOW LEVEL
    # =========================================================================

    def _write(self, path: Path, text: str, what: str) -> None:
        try:
            with open(path, "w") as f:
                f.write(text)
        except OSError as e:
            raise HostError.from_os_error(f"Unable to write GPIO {what} interface ({path})", e) from e
        self.logger.debug(f"{path} <- {text.strip()}")

    def _write_export(self, pin: int) -> None:
        self._write(self.root / "export", f"{pin}\n", "export")

    def _hand_over(self, pin: int) -> None:
        change_owner(self.pin_dir(pin) / "value")
        change_owner(self.pin_dir(pin) / "edge")

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def export(self, pin: int, mode: str) -> None:
        """
        Export a pin and set its direction.

        Args:
            pin: GPIO number; the kernel decides whether it exists
            mode: in/input, out/output, high/up or low/down (any case)

        Raises:
            UsageError: Unknown mode (nothing is written)
            HostError: The kernel refused the export or direction
        """
        direction = DIRECTION_ALIASES.get(mode.lower())
        if direction is None:
            raise UsageError(f"Invalid mode: {mode}. Should be in, out, high or low")

        self._write_export(pin)
        self._write(self.pin_dir(pin) / "direction", f"{direction}\n", f"direction (pin {pin})")
        self._hand_over(pin)
        self.logger.info(f"Exported GPIO {pin} as {direction}")

    def edge(self, pin: int, mode: str) -> None:
        """
        Export a pin as an input and set its interrupt edge.

        Args:
            pin: GPIO number
            mode: Exactly one of none, rising, falling, both

        Raises:
            UsageError: Unknown edge (nothing is written)
            HostError: The kernel refused the direction or edge
        """
        if mode not in EDGE_MODES:
            raise UsageError(f"Invalid mode: {mode}. Should be none, rising, falling or both")

        try:
            self._write_export(pin)
        except HostError as e:
            # Already exported is fine, the pin dir tells
            if not self.pin_dir(pin).is_dir():
                raise
            self.logger.debug(f"GPIO {pin} already exported: {e}")

        self._write(self.pin_dir(pin) / "direction", "in\n", f"direction (pin {pin})")
        self._write(self.pin_dir(pin) / "edge", f"{mode}\n", f"edge (pin {pin})")
        self._hand_over(pin)
        self.logger.info(f"GPIO {pin} edge -> {mode}")

    def unexport(self, pin: int) -> None:
        """
        Raises:
            HostError: The kernel refused (e.g. the pin isn't exported)
        """
        self._write(self.root / "unexport", f"{pin}\n", "unexport")

    def unexport_all(self) -> None:
        """
        Release pins 0 to 62.

        The kernel rejects pins that aren't exported; those rejections are
        ignored. Not being able to open the control file at all is fatal.
        """
        control = self.root / "unexport"
        for pin in range(UNEXPORT_ALL_LIMIT):
            try:
                f = open(control, "w")
            except OSError as e:
                raise HostError.from_os_error("Unable to open GPIO export interface", e) from e
            try:
                with f:
                    f.write(f"{pin}\n")
            except OSError:
                continue
            self.logger.debug(f"Unexported GPIO {pin}")

    def list_exports(self) -> list[ExportEntry]:
        """Every pin in 0-63 whose direction file can be read"""
        entries = []
        for pin in range(EXPORT_PIN_LIMIT):
            direction = self._read_attribute(pin, "direction")
            if direction is None:
                continue
            entries.append(
                ExportEntry(
                    pin=pin,
                    direction=direction,
                    value=self._read_attribute(pin, "value"),
                    edge=self._read_attribute(pin, "edge"),
                )
            )
        return entries

    def _read_attribute(self, pin: int, name: str) -> Optional[str]:
        try:
            with open(self.pin_dir(pin) / name) as f:
                return _attribute_text(f.read())
        except OSError:
            return None
