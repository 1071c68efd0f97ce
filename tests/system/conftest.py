"""
System Test Fixtures

Fake /sys/class/gpio and /proc trees under tmp_path.
"""

import pytest

from system.kernel_modules import KernelModules
from system.sysfs_gpio import SysfsGPIO


class FakeSysfs:
    """A /sys/class/gpio lookalike; the kernel's part is done by the test"""

    def __init__(self, root):
        self.root = root
        root.mkdir()
        (root / "export").write_text("")
        (root / "unexport").write_text("")

    def add_pin(self, pin, direction="in\n", value="0\n", edge="none\n"):
        """Create gpioN as the kernel would after an export"""
        pin_dir = self.root / f"gpio{pin}"
        pin_dir.mkdir()
        for name, content in (("direction", direction), ("value", value), ("edge", edge)):
            if content is not None:
                (pin_dir / name).write_text(content)
        return pin_dir

    def read(self, *parts):
        return self.root.joinpath(*parts).read_text()


@pytest.fixture
def fake_sysfs(tmp_path):
    return FakeSysfs(tmp_path / "gpio")


@pytest.fixture
def sysfs(fake_sysfs):
    return SysfsGPIO(fake_sysfs.root)


@pytest.fixture
def tool_dir(tmp_path):
    """Directory holding fake modprobe, rmmod and i2cdetect"""
    bin_dir = tmp_path / "sbin"
    bin_dir.mkdir()
    for tool in ("modprobe", "rmmod", "i2cdetect"):
        (bin_dir / tool).write_text("#!/bin/sh\n")
    return bin_dir


@pytest.fixture
def proc_modules(tmp_path):
    path = tmp_path / "modules"
    path.write_text("snd_bcm2835 24576 1 - Live 0x00000000\n")
    return path


@pytest.fixture
def kernel_modules(tmp_path, proc_modules, tool_dir):
    return KernelModules(
        proc_modules=proc_modules,
        device_tree=tmp_path / "device-tree",
        search_path=(str(tmp_path / "bin"), str(tool_dir)),
    )
