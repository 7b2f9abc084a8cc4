"""Settings modules, one per ``APP_ENV``.

Each module is plain constants read by ``create_app`` and the scripts; the
helpers below keep the environment parsing in one place.
"""

from __future__ import annotations

import os

_ENV_MODULES = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").strip().lower()
    return f"{__name__}.{_ENV_MODULES.get(env, 'development')}"


def env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, "1" if default else "0").strip().lower() in {"1", "true", "yes", "on"}


def db_config_from_env(*, default_database: str, default_pool_size: int = 5) -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": env_int("DB_PORT", 3306),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", ""),
        "database": os.getenv("DB_NAME", default_database),
        "pool_size": env_int("DB_POOL_SIZE", default_pool_size),
    }
