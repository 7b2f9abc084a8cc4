from __future__ import annotations

import importlib

import pytest

from attendance_reconciliation.config import db_config_from_env, env_flag, get_settings_module
from attendance_reconciliation.database.connection import DBConfig


@pytest.mark.parametrize(
    "app_env,module",
    [
        (None, "development"),
        ("prod", "production"),
        ("Production", "production"),
        ("test", "testing"),
        ("staging", "development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, app_env, module):
    if app_env is None:
        monkeypatch.delenv("APP_ENV", raising=False)
    else:
        monkeypatch.setenv("APP_ENV", app_env)

    assert get_settings_module() == f"attendance_reconciliation.config.{module}"


def test_testing_settings_run_serially():
    settings = importlib.import_module("attendance_reconciliation.config.testing")

    assert settings.TESTING is True
    assert settings.RECONCILE_MAX_WORKERS == 1
    assert settings.AUTO_INIT_DB is False


def test_db_config_reads_environment(monkeypatch):
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_PORT", "3307")
    monkeypatch.setenv("DB_POOL_SIZE", "3")
    monkeypatch.delenv("DB_NAME", raising=False)

    cfg = DBConfig.from_dict(db_config_from_env(default_database="attendance_db"))

    assert (cfg.host, cfg.port, cfg.database, cfg.pool_size) == ("db.internal", 3307, "attendance_db", 3)
    assert cfg.connect_kwargs(with_database=False).get("database") is None
    assert cfg.connect_kwargs()["time_zone"] == "+00:00"


@pytest.mark.parametrize("raw,expected", [("1", True), ("true", True), ("0", False), ("no", False)])
def test_env_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("AUTO_INIT_DB", raw)

    assert env_flag("AUTO_INIT_DB", not expected) is expected
