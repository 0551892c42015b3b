from __future__ import annotations

import pytest
from pydantic import ValidationError

from workspace_access.settings import DEFAULT_DATABASE_URL, Settings, get_settings, reload_settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.role_id_prefix == "role"
    assert settings.role_id_entropy_bytes == 4
    assert settings.logging_level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORKSPACE_ACCESS_LOGGING_LEVEL", "debug")
    monkeypatch.setenv("WORKSPACE_ACCESS_ROLE_ID_PREFIX", "rl")

    settings = Settings(_env_file=None)

    assert settings.logging_level == "DEBUG"
    assert settings.role_id_prefix == "rl"


def test_rejects_invalid_prefix() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, role_id_prefix="bad-prefix")


def test_reload_settings_clears_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORKSPACE_ACCESS_APP_NAME", "First")
    first = reload_settings()
    monkeypatch.setenv("WORKSPACE_ACCESS_APP_NAME", "Second")

    assert get_settings() is first
    assert reload_settings().app_name == "Second"

    monkeypatch.delenv("WORKSPACE_ACCESS_APP_NAME")
    reload_settings()
