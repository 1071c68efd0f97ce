"""
Kernel Module Tests

modprobe, rmmod and i2cdetect are never run: subprocess.run is replaced
by a recorder that updates the fake /proc/modules the way the kernel
would.
"""

from pathlib import Path

import pytest

from core.errors import HostError
from system import executables
from system import kernel_modules as modules_module

pytestmark = pytest.mark.unit


@pytest.fixture
def commands(monkeypatch, proc_modules):
    """Record commands; modprobe appends the module to /proc/modules"""
    ran = []

    def fake_run(command, check=False):
        ran.append([Path(command[0]).name, *command[1:]])
        if Path(command[0]).name == "modprobe":
            with open(proc_modules, "a") as f:
                f.write(f"{command[1]} 16384 0 - Live 0x00000000\n")

    monkeypatch.setattr(modules_module.subprocess, "run", fake_run)
    return ran


@pytest.fixture
def sleeps(monkeypatch):
    delays = []
    monkeypatch.setattr(modules_module.time, "sleep", delays.append)
    return delays


@pytest.fixture
def chowned(monkeypatch):
    paths = []
    monkeypatch.setattr(modules_module, "change_owner", paths.append)
    return paths


class TestFindExecutable:

    def test_first_directory_wins(self, tmp_path, tool_dir):
        other = tmp_path / "usr-sbin"
        other.mkdir()
        (other / "modprobe").write_text("")

        found = executables.find_executable("modprobe", [str(tool_dir), str(other)])

        assert found == tool_dir / "modprobe"

    def test_missing_program(self, tool_dir):
        with pytest.raises(HostError, match="Unable to find insmod"):
            executables.find_executable("insmod", [str(tool_dir)])


class TestLoad:

    def test_load_i2c_with_baudrate(self, kernel_modules, commands, sleeps, chowned):
        kernel_modules.load("i2c", baudrate_khz=400)

        assert commands == [
            ["modprobe", "i2c_dev"],
            ["modprobe", "i2c_bcm2708", "baudrate=400000"],
        ]
        assert sleeps == [1.0]
        assert chowned == [Path("/dev/i2c-0"), Path("/dev/i2c-1")]

    def test_load_spi(self, kernel_modules, commands, sleeps, chowned):
        kernel_modules.load("spi")

        assert commands == [["modprobe", "spidev"], ["modprobe", "spi_bcm2708"]]
        assert chowned == [Path("/dev/spidev0.0"), Path("/dev/spidev0.1")]

    def test_loaded_modules_are_not_reloaded(self, kernel_modules, proc_modules, commands, sleeps, chowned):
        proc_modules.write_text("i2c_dev 16384 0 - Live\ni2c_bcm2708 16384 0 - Live\n")

        kernel_modules.load("i2c")

        assert commands == []
        assert sleeps == [1.0]

    def test_module_that_never_appears(self, kernel_modules, monkeypatch, sleeps, chowned):
        monkeypatch.setattr(modules_module.subprocess, "run", lambda command, check=False: None)

        with pytest.raises(HostError, match="Unable to load spi_bcm2708"):
            kernel_modules.load("spi")
        assert sleeps == []

    def test_refused_with_device_tree(self, kernel_modules, tmp_path, commands):
        (tmp_path / "device-tree").mkdir()

        with pytest.raises(HostError, match="device tree enabled"):
            kernel_modules.load("i2c")
        assert commands == []

    def test_missing_proc_modules(self, kernel_modules, proc_modules, commands):
        proc_modules.unlink()

        with pytest.raises(HostError, match="Unable to check"):
            kernel_modules.load("i2c")

    def test_missing_modprobe(self, tmp_path, proc_modules, commands):
        modules = modules_module.KernelModules(
            proc_modules=proc_modules,
            device_tree=tmp_path / "device-tree",
            search_path=(str(tmp_path / "empty"),),
        )
        with pytest.raises(HostError, match="Unable to find modprobe"):
            modules.load("spi")


class TestUnload:

    def test_only_loaded_modules_are_removed(self, kernel_modules, proc_modules, commands):
        proc_modules.write_text("spidev 16384 0 - Live\n")

        kernel_modules.unload("spi")

        assert commands == [["rmmod", "spidev"]]


class TestI2cdetect:

    @pytest.mark.parametrize("layout,bus", [(1, "0"), (2, "1")])
    def test_bus_follows_layout(self, kernel_modules, proc_modules, commands, layout, bus):
        proc_modules.write_text("i2c_dev 16384 0 - Live\n")

        kernel_modules.i2cdetect(layout)

        assert commands == [["i2cdetect", "-y", bus]]

    def test_requires_i2c_dev(self, kernel_modules, commands):
        with pytest.raises(HostError, match="not loaded"):
            kernel_modules.i2cdetect(2)
        assert commands == []
