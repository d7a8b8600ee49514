# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from vibe_todo.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("VIBE_TASKS_PATH", "VIBE_CHECK_INTERVAL_SECONDS", "VIBE_REMINDER_MINUTES", "VIBE_MATRIX_ENABLED"):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()
    assert s.tasks_path == Path.home() / ".vibe_tasks.json"
    assert s.check_interval_seconds == 60.0
    assert s.reminder_minutes == 10
    assert s.matrix_enabled is False


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("VIBE_TASKS_PATH", str(tmp_path / "t.json"))
    monkeypatch.setenv("VIBE_CHECK_INTERVAL_SECONDS", "15")
    monkeypatch.setenv("VIBE_REMINDER_MINUTES", "not-a-number")
    monkeypatch.setenv("VIBE_MATRIX_ENABLED", "yes")

    s = Settings.from_env()
    assert s.tasks_path == tmp_path / "t.json"
    assert s.check_interval_seconds == 15.0
    assert s.reminder_minutes == 10
    assert s.matrix_enabled is True


def test_settings_are_only_reachable_through_the_settings_object() -> None:
    from vibe_todo import config

    assert config.get_settings() is config.SETTINGS
    for name in ("APP_NAME", "TASKS_PATH", "DATA_DIR", "MATRIX_ROOM_ID"):
        assert not hasattr(config, name)
