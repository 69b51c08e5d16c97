from __future__ import annotations

from offboarding.core.config import Settings


def test_defaults(monkeypatch):
    for name in ("PORT", "DB_USER", "DB_HOST", "DB_NAME", "DB_PORT", "DB_POOL_SIZE", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.PORT == 3100
    assert settings.DB_USER == "postgres"
    assert settings.DB_HOST == "postgres"
    assert settings.DB_NAME == "offboarding_db"
    assert settings.DB_PORT == 5432
    assert settings.DB_POOL_SIZE == 20
    assert settings.DB_CONNECT_ATTEMPTS == 5
    assert settings.DB_CONNECT_RETRY_DELAY == 5.0
    assert "http://localhost:8200" in settings.CORS_ORIGINS


def test_database_url_built_from_parts():
    settings = Settings(DB_USER="hr", DB_PASSWORD="secret", DB_HOST="db", DB_PORT=5433, DB_NAME="exits")

    assert settings.database_url == "postgresql+asyncpg://hr:secret@db:5433/exits"


def test_database_url_escapes_password():
    settings = Settings(DB_PASSWORD="p@ss:word", DB_HOST="db")

    assert settings.database_url == "postgresql+asyncpg://postgres:p%40ss%3Aword@db:5432/offboarding_db"


def test_database_url_override_wins():
    settings = Settings(DATABASE_URL="sqlite+aiosqlite:///./offboarding.db", DB_HOST="ignored")

    assert settings.database_url == "sqlite+aiosqlite:///./offboarding.db"


def test_environment_variables_are_read(monkeypatch):
    monkeypatch.setenv("DB_HOST", "10.0.0.5")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ORIGINS", '["https://hr.example.com"]')

    settings = Settings()

    assert settings.DB_HOST == "10.0.0.5"
    assert settings.PORT == 8080
    assert settings.CORS_ORIGINS == ["https://hr.example.com"]
