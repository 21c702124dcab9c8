"""Fixtures compartidas: settings aislados en `tmp_path`, estado y logger."""

from __future__ import annotations

from pathlib import Path

import pytest

from adapters.state_store import StateStore
from core.config import AppSettings
from tests.fakes import RecordingLogger


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(data_dir=tmp_path / ".devcert", _env_file=None)


@pytest.fixture
def state(settings: AppSettings) -> StateStore:
    store = StateStore(settings.state_file)
    store.init()
    return store


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()
