from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def sysfs(tmp_path: Path) -> Path:
    root = tmp_path / "backlight"
    root.mkdir()
    return root


@pytest.fixture
def make_device(sysfs: Path) -> Callable[..., Path]:
    def _make(name: str, brightness: int | str, max_brightness: int | str) -> Path:
        d = sysfs / name
        d.mkdir()
        (d / "brightness").write_text(f"{brightness}\n", encoding="utf-8")
        (d / "max_brightness").write_text(f"{max_brightness}\n", encoding="utf-8")
        return d

    return _make
