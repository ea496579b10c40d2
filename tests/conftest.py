"""Shared pytest fixtures and test helpers for agecalc tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from datetime import UTC, datetime

import pytest
from click.testing import CliRunner

from agecalc.domain.instant import Clock, fixed_clock
from agecalc.services.age import AgeService
from agecalc.services.telemetry import disable_telemetry

# Pinned "now" for every test that reads the clock.
NOW = datetime(2025, 6, 1, 9, 30, 15)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock() -> Clock:
    return fixed_clock(NOW)


@pytest.fixture
def service(clock: Clock) -> AgeService:
    """AgeService pinned to NOW with UTC totals."""
    return AgeService(clock, tz=UTC)


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory with no AGECALC_* overrides.

    Keeps a developer's own agecalc.toml or environment out of the tests.
    """
    for name in list(os.environ):
        if name.startswith("AGECALC_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture
def _frozen_now(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make the CLI's system clock return NOW.

    Use via ``@pytest.mark.usefixtures("_frozen_now")``.
    """
    monkeypatch.setattr("agecalc.services.age.system_clock", lambda tz=None: fixed_clock(NOW))


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Verbose CLI runs enable telemetry in the current context; undo it."""
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """CLI runs point the root handler at CliRunner's stderr; put it back."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("agecalc")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)
