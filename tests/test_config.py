from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bugtracker.core import config as core_config  # noqa: E402


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///x.db")
    monkeypatch.setenv("BUG_STORE", "JSON")
    monkeypatch.setenv("PORT", "not-a-number")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("AUTO_CREATE_TABLES", "no")
    core_config.get_settings.cache_clear()
    try:
        settings = core_config.get_settings()
    finally:
        core_config.get_settings.cache_clear()

    assert settings.database_url == "sqlite:///x.db"
    assert settings.bug_store == "json"
    assert settings.port == 5000
    assert settings.cors_origins == ("http://a.test", "http://b.test")
    assert settings.auto_create_tables is False
