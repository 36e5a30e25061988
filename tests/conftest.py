"""Shared pytest fixtures and test helpers for rollctl tests."""

from __future__ import annotations

import logging
import random
from collections.abc import Generator, Iterable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from rollctl.config.settings import RollSettings
from rollctl.services.telemetry import _current_span, disable_telemetry


class StubSource:
    """Random source that replays fixed values and records requested ranges."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values: Iterator[int] = iter(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return next(self._values)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate every test from ROLLCTL_* variables and stray rollctl.toml files."""
    for name in (
        "ROLLCTL_CONFIG",
        "ROLLCTL_JSON_OUTPUT",
        "ROLLCTL_VERBOSE",
        "ROLLCTL_LOG_JSON",
        "ROLLCTL_ROLL__SEED",
        "ROLLCTL_ROLL__MAX_DICE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(tmp_path: Path) -> RollSettings:
    """Default settings with no config file in play."""
    return RollSettings.load(start=tmp_path)


@pytest.fixture
def rng() -> random.Random:
    """Seeded generator for reproducible rolls."""
    return random.Random(1234)


@pytest.fixture
def stub_source() -> type[StubSource]:
    """Factory for replaying random sources: ``stub_source([3, 5])``."""
    return StubSource


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo logging and telemetry changes made by AppContext during a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("rollctl")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    disable_telemetry()
    _current_span.set(None)
