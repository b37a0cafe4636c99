from __future__ import annotations

import pytest

from taskboard.config import DEFAULT_DATABASE_URL, load_settings

ENV_VARS = ("DATABASE_URL", "HOST", "PORT", "CORS_ORIGINS", "STATIC_DIR", "LOG_LEVEL", "LOG_FILE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.port == 3000
    assert settings.static_dir is None


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://user:secret@db/tasks")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("STATIC_DIR", "client/dist")

    settings = load_settings()

    assert settings.database_url == "postgresql://user:secret@db/tasks"
    assert settings.port == 8080
    assert settings.cors_origins == ("http://a.test", "http://b.test")
    assert settings.static_dir == "client/dist"


def test_invalid_port(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(RuntimeError, match="PORT"):
        load_settings()
