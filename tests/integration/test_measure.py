"""Tests for the host adapter: reload, update cycles and fallback strings."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import pytest

from misfortune.config import FortunesSettings, Settings
from misfortune.measure import LOAD_FAILED, NO_MATCH, NOT_LOADED, READ_FAILED, Measure

if TYPE_CHECKING:
    from pathlib import Path


def _settings(directory: Path, **fortunes: str) -> Settings:
    return Settings(fortunes=FortunesSettings(directory=str(directory), **fortunes))


class TestReload:
    def test_initial_string(self) -> None:
        measure = Measure()
        assert measure.get_string() == NOT_LOADED
        assert measure.update() == NOT_LOADED

    def test_missing_directory_shows_error_string(self, tmp_path: Path) -> None:
        measure = Measure()
        measure.reload(_settings(tmp_path / "missing"))
        assert measure.index is None
        assert measure.get_string() == LOAD_FAILED
        assert measure.update() == LOAD_FAILED

    def test_invalid_regex_shows_error_string(self, fortunes_dir: Path) -> None:
        measure = Measure()
        measure.reload(_settings(fortunes_dir, regex="(unclosed"))
        assert measure.get_string() == LOAD_FAILED

    def test_reload_same_directory_refreshes_existing_index(self, fortunes_dir: Path) -> None:
        measure = Measure()
        measure.reload(_settings(fortunes_dir))
        index = measure.index

        measure.reload(_settings(fortunes_dir, prefixes="zen"))
        assert measure.index is index
        assert measure.matcher("zen")
        assert not measure.matcher("computers/unix")

    def test_reload_other_directory_builds_new_index(
        self, fortunes_dir: Path, tmp_path: Path
    ) -> None:
        other = tmp_path / "other"
        other.mkdir()
        (other / "one").write_text("only", encoding="utf-8")

        measure = Measure()
        measure.reload(_settings(fortunes_dir))
        first = measure.index
        measure.reload(_settings(other))
        assert measure.index is not first
        assert measure.update() == "only"


class TestUpdate:
    def test_each_update_draws_a_matching_fortune(self, fortunes_dir: Path) -> None:
        measure = Measure(rng=random.Random(3))
        measure.reload(_settings(fortunes_dir, prefixes="zen"))
        allowed = {"Be water.", "The obstacle is the path.", "Sit."}
        seen = {measure.update() for _ in range(40)}
        assert seen == allowed
        assert measure.get_string() in allowed

    def test_no_match_shows_placeholder(self, fortunes_dir: Path) -> None:
        measure = Measure()
        measure.reload(_settings(fortunes_dir, prefixes="computers/empty"))
        assert measure.update() == NO_MATCH

    def test_read_failure_shows_placeholder(self, fortunes_dir: Path) -> None:
        measure = Measure()
        measure.reload(_settings(fortunes_dir, prefixes="zen"))
        (fortunes_dir / "zen").unlink()
        assert measure.update() == READ_FAILED

    def test_new_files_visible_after_reload(self, tmp_path: Path) -> None:
        measure = Measure()
        measure.reload(_settings(tmp_path, prefixes="late"))
        assert measure.update() == NO_MATCH

        (tmp_path / "late").write_text("finally", encoding="utf-8")
        measure.reload(_settings(tmp_path, prefixes="late"))
        assert measure.update() == "finally"


@pytest.mark.parametrize("prune", [True, False])
def test_prune_setting_is_passed_to_index(fortunes_dir: Path, prune: bool) -> None:
    settings = Settings(
        fortunes=FortunesSettings(directory=str(fortunes_dir)),
        index={"prune_deleted": prune},
    )
    measure = Measure()
    measure.reload(settings)
    index = measure.index
    (fortunes_dir / "zen").unlink()
    measure.reload(settings)
    assert measure.index is index
    assert measure.index is not None
    assert ("zen" in measure.index.files) is not prune
