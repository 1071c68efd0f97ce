"""
Sysfs Export Tests

The kernel side is simulated: tests create gpioN directories where the
kernel would.
"""

import errno
import logging

import pytest

from core.errors import HostError, UsageError
from system import sysfs_gpio

pytestmark = pytest.mark.unit


@pytest.fixture
def chowned(monkeypatch):
    """Record os.chown calls made for the real uid 1000 / gid 1001"""
    calls = []
    monkeypatch.setattr(sysfs_gpio.os, "getuid", lambda: 1000)
    monkeypatch.setattr(sysfs_gpio.os, "getgid", lambda: 1001)
    monkeypatch.setattr(sysfs_gpio.os, "chown", lambda path, uid, gid: calls.append((path, uid, gid)))
    return calls


class TestExport:

    def test_export_writes_pin_and_direction(self, sysfs, fake_sysfs):
        fake_sysfs.add_pin(17)

        sysfs.export(17, "out")

        assert fake_sysfs.read("export") == "17\n"
        assert fake_sysfs.read("gpio17", "direction") == "out\n"

    @pytest.mark.parametrize("alias,direction", [
        ("in", "in"), ("INPUT", "in"),
        ("out", "out"), ("Output", "out"),
        ("high", "high"), ("up", "high"),
        ("low", "low"), ("DOWN", "low"),
    ])
    def test_direction_aliases(self, sysfs, fake_sysfs, alias, direction):
        fake_sysfs.add_pin(22)

        sysfs.export(22, alias)

        assert fake_sysfs.read("gpio22", "direction") == f"{direction}\n"

    def test_invalid_mode_writes_nothing(self, sysfs, fake_sysfs):
        with pytest.raises(UsageError, match="Invalid mode: sideways"):
            sysfs.export(17, "sideways")

        assert fake_sysfs.read("export") == ""

    def test_refused_export_is_fatal(self, sysfs, fake_sysfs):
        (fake_sysfs.root / "export").unlink()
        (fake_sysfs.root / "export").mkdir()

        with pytest.raises(HostError):
            sysfs.export(17, "in")

    def test_export_hands_value_and_edge_to_user(self, sysfs, fake_sysfs, chowned):
        fake_sysfs.add_pin(17)

        sysfs.export(17, "out")

        pin_dir = fake_sysfs.root / "gpio17"
        assert chowned == [(pin_dir / "value", 1000, 1001), (pin_dir / "edge", 1000, 1001)]


class TestEdge:

    def test_edge_forces_input(self, sysfs, fake_sysfs):
        fake_sysfs.add_pin(4, direction="out\n")

        sysfs.edge(4, "rising")

        assert fake_sysfs.read("gpio4", "direction") == "in\n"
        assert fake_sysfs.read("gpio4", "edge") == "rising\n"

    @pytest.mark.parametrize("mode", ["RISING", "Both", "up", ""])
    def test_invalid_edge_writes_nothing(self, sysfs, fake_sysfs, mode):
        fake_sysfs.add_pin(4, direction="out\n")

        with pytest.raises(UsageError):
            sysfs.edge(4, mode)

        assert fake_sysfs.read("export") == ""
        assert fake_sysfs.read("gpio4", "direction") == "out\n"

    def test_already_exported_pin_is_fine(self, sysfs, fake_sysfs):
        fake_sysfs.add_pin(4)
        (fake_sysfs.root / "export").unlink()
        (fake_sysfs.root / "export").mkdir()

        sysfs.edge(4, "both")

        assert fake_sysfs.read("gpio4", "edge") == "both\n"

    def test_edge_hands_value_and_edge_to_user(self, sysfs, fake_sysfs, chowned):
        fake_sysfs.add_pin(4)

        sysfs.edge(4, "falling")

        pin_dir = fake_sysfs.root / "gpio4"
        assert chowned == [(pin_dir / "value", 1000, 1001), (pin_dir / "edge", 1000, 1001)]


class TestUnexport:

    def test_unexport(self, sysfs, fake_sysfs):
        sysfs.unexport(17)
        assert fake_sysfs.read("unexport") == "17\n"

    def test_unexport_all_walks_pins(self, sysfs, fake_sysfs):
        sysfs.unexport_all()
        # Each write reopens the control file; the last pin is 62
        assert fake_sysfs.read("unexport") == "62\n"

    def test_unexport_all_without_control_file(self, tmp_path):
        with pytest.raises(HostError, match="Unable to open GPIO export interface"):
            sysfs_gpio.SysfsGPIO(tmp_path / "nowhere").unexport_all()


class TestListExports:

    def test_lists_exported_pins(self, sysfs, fake_sysfs):
        fake_sysfs.add_pin(4, direction="in\n", value="1\n", edge="both\n")
        fake_sysfs.add_pin(17, direction="out\n", value="", edge=None)
        fake_sysfs.add_pin(30, direction="in\n", value=None, edge=None)

        entries = sysfs.list_exports()

        assert [entry.pin for entry in entries] == [4, 17, 30]
        assert (entries[0].direction, entries[0].value, entries[0].edge) == ("in", "1", "both")
        assert (entries[1].value, entries[1].edge) == ("?", None)
        assert entries[2].value is None

    def test_nothing_exported(self, sysfs):
        assert sysfs.list_exports() == []


class TestChangeOwner:

    def test_missing_file_is_silent(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            sysfs_gpio.change_owner(tmp_path / "missing")
        assert caplog.records == []

    def test_other_failures_are_logged(self, tmp_path, monkeypatch, caplog):
        def refuse(path, uid, gid):
            raise PermissionError(errno.EPERM, "Operation not permitted")

        monkeypatch.setattr(sysfs_gpio.os, "chown", refuse)

        with caplog.at_level(logging.WARNING):
            sysfs_gpio.change_owner(tmp_path / "value")

        assert "Unable to change ownership" in caplog.text
