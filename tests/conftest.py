"""Shared fixtures: a small directory of fortune files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

SAMPLE_FILES: dict[str, str] = {
    "zen": "Be water.\n%\nThe obstacle is the path.\n%\nSit.",
    "computers/unix": "rm -rf is forever.\r\n%\r\nEverything is a file.",
    "computers/empty": "",
    "misc/wisdom": "Ünïcödé is hard.\n%\n日本語のおみくじ\n%\n🥠\n",
}


def _write(root: Path, files: dict[str, str]) -> None:
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))


@pytest.fixture()
def write_fortunes() -> Callable[[Path, dict[str, str]], None]:
    """Write {relative path: content} fortune files under a root directory."""
    return _write


@pytest.fixture()
def fortunes_dir(tmp_path: Path) -> Path:
    """A fortunes directory populated with SAMPLE_FILES."""
    root = tmp_path / "fortunes"
    root.mkdir()
    _write(root, SAMPLE_FILES)
    return root
