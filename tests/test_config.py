# ruff: noqa: INP001
"""Settings validation tests for id-codec and database configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from taskboard.core.config import DEFAULT_HASHIDS_SALT, Settings
from taskboard.db.session import normalize_database_url


def test_hashids_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HASHIDS_SALT", raising=False)
    monkeypatch.delenv("HASHIDS_MIN_LENGTH", raising=False)

    settings = Settings(_env_file=None)

    assert settings.hashids_salt == DEFAULT_HASHIDS_SALT
    assert settings.hashids_min_length == 8
    assert settings.uses_default_hashids_salt is True


def test_hashids_salt_is_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HASHIDS_SALT", "from-env")
    monkeypatch.setenv("HASHIDS_MIN_LENGTH", "12")

    settings = Settings(_env_file=None)

    assert settings.hashids_salt == "from-env"
    assert settings.hashids_min_length == 12
    assert settings.uses_default_hashids_salt is False


def test_blank_hashids_salt_is_rejected() -> None:
    with pytest.raises(ValidationError, match="HASHIDS_SALT must be non-empty"):
        Settings(_env_file=None, hashids_salt="   ")


def test_negative_min_length_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, hashids_min_length=-1)


def test_dev_environment_defaults_to_auto_migrate(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DB_AUTO_MIGRATE", raising=False)

    assert Settings(_env_file=None, environment="dev").db_auto_migrate is True
    assert Settings(_env_file=None, environment="prod").db_auto_migrate is False
    assert Settings(_env_file=None, environment="dev", db_auto_migrate=False).db_auto_migrate is False


def test_normalize_database_url_pins_psycopg_driver() -> None:
    assert (
        normalize_database_url("postgresql://u:p@db:5432/taskboard")
        == "postgresql+psycopg://u:p@db:5432/taskboard"
    )
    assert normalize_database_url("sqlite+aiosqlite:///:memory:") == "sqlite+aiosqlite:///:memory:"
