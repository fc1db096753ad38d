# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskflow.core.state import AppState, build_app_state

from .fakes import EventRecorder, FakeClock, ManualTicker, MemoryGateway


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="taskflow-test",
        profile_name="Tester",
        data_dir=tmp_path,
        storage_backend="json",
        snapshot_path=tmp_path / "taskflow_data.json",
        snapshot_db_path=tmp_path / "taskflow.sqlite3",
        export_dir=tmp_path / "exports",
        autosave=False,
        work_minutes=25,
        break_minutes=5,
        focus_bonus_xp=25,
        tick_seconds=1.0,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture()
def gateway() -> MemoryGateway:
    return MemoryGateway()


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock, ticker: ManualTicker, gateway: MemoryGateway) -> AppState:
    """AppState wired with deterministic fakes (clock, ticker, storage)."""
    return build_app_state(settings, clock=clock, ticker=ticker, gateway=gateway)


@pytest.fixture()
def recorder(state: AppState) -> EventRecorder:
    rec = EventRecorder()
    state.events.subscribe(rec)
    return rec
