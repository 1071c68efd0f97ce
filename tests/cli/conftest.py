"""
CLI Test Fixtures

Runs cli.main.main() as root against a fake host: sysfs, /proc and the
board revision live under tmp_path and every backend the dispatcher asks
for is the shared mock_gpio, so state carries over between commands of
one test.
"""

import logging
import os

import pytest

from cli import main as main_module
from config import settings
from hardware.factory import HardwareFactory


@pytest.fixture
def host(tmp_path, monkeypatch):
    """
    Fake host paths; returns tmp_path with gpio/, cpuinfo and modules in it.

    The board is a Pi 3 unless a test rewrites host / "cpuinfo".
    """
    sysfs_root = tmp_path / "gpio"
    sysfs_root.mkdir()
    (sysfs_root / "export").write_text("")
    (sysfs_root / "unexport").write_text("")

    cpuinfo = tmp_path / "cpuinfo"
    cpuinfo.write_text("Hardware\t: BCM2835\nRevision\t: a02082\n")

    proc_modules = tmp_path / "modules"
    proc_modules.write_text("")

    monkeypatch.setattr(os, "geteuid", lambda: 0)
    monkeypatch.setattr(settings, "SYSFS_GPIO_ROOT", sysfs_root)
    monkeypatch.setattr(settings, "CPUINFO_PATH", cpuinfo)
    monkeypatch.setattr(settings, "PROC_MODULES", proc_modules)
    monkeypatch.setattr(settings, "DEVICE_TREE_PATH", tmp_path / "device-tree")
    monkeypatch.setattr(settings, "GPIOMEM_PATH", tmp_path / "gpiomem")
    monkeypatch.delenv(settings.DEBUG_ENV_VAR, raising=False)
    return tmp_path


@pytest.fixture
def backend_modes(mock_gpio, monkeypatch):
    """Modes the dispatcher passed to HardwareFactory.create_gpio"""
    modes = []

    def fake_create_gpio(cls, mode=None):
        modes.append(mode)
        return mock_gpio

    monkeypatch.setattr(HardwareFactory, "create_gpio", classmethod(fake_create_gpio))
    return modes


@pytest.fixture
def gpio_cli(host, backend_modes, capsys):
    """
    Run one gpio command line.

    Usage:
        def test_read(gpio_cli):
            code, out, err = gpio_cli("read", "17")
    """
    root = logging.getLogger()
    root_level = root.level

    def run(*argv):
        code = main_module.main(list(argv))
        captured = capsys.readouterr()
        return code, captured.out, captured.err

    yield run

    if main_module._console_handler is not None:
        root.removeHandler(main_module._console_handler)
        main_module._console_handler = None
    root.setLevel(root_level)
