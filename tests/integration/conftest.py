"""Integration test fixtures."""

from __future__ import annotations

import os

import pytest


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Environment for CLI subprocesses, without any MISFORTUNE__ overrides."""
    env = {key: value for key, value in os.environ.items() if not key.startswith("MISFORTUNE__")}
    env["MISFORTUNE__LOGGING__LEVEL"] = "WARNING"
    return env
