from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from backlight_ctl.system.sysfs import Backlight, BacklightError, discover


def test_backlight_reads_and_writes_sysfs(make_device: Callable[..., Path]) -> None:
    d = make_device("intel_backlight", 120, 937)

    bl = Backlight(d)
    assert bl.name == "intel_backlight"
    assert bl.brightness() == 120
    assert bl.max_brightness() == 937

    bl.set_brightness(123)
    assert (d / "brightness").read_text(encoding="utf-8") == "123"
    assert bl.brightness() == 123


def test_read_tolerates_surrounding_whitespace(make_device: Callable[..., Path]) -> None:
    d = make_device("acpi_video0", "  15 \n\n", "\t100\n")
    bl = Backlight(d)
    assert bl.brightness() == 15
    assert bl.max_brightness() == 100


@pytest.mark.parametrize("content", ["", "abc", "-1", "+5", "1.5", "0x10", "1_000", "12 13"])
def test_read_rejects_non_numeric(make_device: Callable[..., Path], content: str) -> None:
    d = make_device("bad", content, 100)
    with pytest.raises(BacklightError, match="could not parse value") as exc:
        Backlight(d).brightness()
    assert str(d / "brightness") in str(exc.value)


def test_missing_file_names_path(tmp_path: Path) -> None:
    bl = Backlight(tmp_path / "gone")
    with pytest.raises(BacklightError, match="could not read") as exc:
        bl.max_brightness()
    assert str(tmp_path / "gone" / "max_brightness") in str(exc.value)


def test_write_failure_names_path(tmp_path: Path) -> None:
    bl = Backlight(tmp_path / "gone")
    with pytest.raises(BacklightError, match="could not write") as exc:
        bl.set_brightness(5)
    assert str(tmp_path / "gone" / "brightness") in str(exc.value)


def test_discover_sorted_and_skips_files(sysfs: Path, make_device: Callable[..., Path]) -> None:
    make_device("radeon_bl0", 1, 255)
    make_device("acpi_video0", 1, 100)
    (sysfs / "stray-file").write_text("x", encoding="utf-8")

    found = discover(sysfs)
    assert [bl.name for bl in found] == ["acpi_video0", "radeon_bl0"]
    assert all(type(bl) is Backlight for bl in found)


def test_discover_follows_symlinks(sysfs: Path, make_device: Callable[..., Path]) -> None:
    real = make_device("real", 3, 10)
    (sysfs / "link").symlink_to(real, target_is_directory=True)
    assert [bl.name for bl in discover(sysfs)] == ["link", "real"]


def test_discover_filters_by_name(sysfs: Path, make_device: Callable[..., Path]) -> None:
    make_device("a", 1, 10)
    make_device("b", 1, 10)
    make_device("c", 1, 10)
    assert [bl.name for bl in discover(sysfs, names=["c", "a"])] == ["a", "c"]


def test_discover_unknown_name(sysfs: Path, make_device: Callable[..., Path]) -> None:
    make_device("a", 1, 10)
    with pytest.raises(BacklightError, match="no such backlight device.*nope"):
        discover(sysfs, names=["a", "nope"])


def test_discover_missing_root(tmp_path: Path) -> None:
    with pytest.raises(BacklightError, match="could not list"):
        discover(tmp_path / "missing")


def test_discover_empty_root(sysfs: Path) -> None:
    assert discover(sysfs) == []


def test_discover_uses_factory(sysfs: Path, make_device: Callable[..., Path]) -> None:
    class Recording(Backlight):
        pass

    make_device("a", 1, 10)
    assert all(isinstance(bl, Recording) for bl in discover(sysfs, factory=Recording))
