"""Shared pytest fixtures for holdtimer tests."""

import platform

import pytest

from holdtimer.config import ListItem
from holdtimer.scheduler import AppState
from holdtimer.timer import Phase, TimerState


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch):
    """Point the config directory at a throwaway location."""
    monkeypatch.setattr(platform, "system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv("HOLDTIMER_KEYDEBUG", raising=False)
    return tmp_path


@pytest.fixture
def timer():
    return TimerState()


@pytest.fixture
def counting_down():
    """A timer a few ticks into a countdown, key still considered held."""
    return TimerState(phase=Phase.COUNTING_DOWN, elapsed_ticks=1200, silence_run=0)


@pytest.fixture
def app_state():
    items = [ListItem("alpha", 1), ListItem("beta", 0), ListItem("gamma", 2)]
    return AppState(items, [])
