import os

from . import db_config_from_env, env_flag, env_int

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
DB_CONFIG = db_config_from_env(default_database="attendance_db")

# Zone used to resolve shift times and bucket punches into calendar days.
ENGINE_TIMEZONE = os.getenv("ENGINE_TIMEZONE", "UTC")
RECONCILE_MAX_WORKERS = env_int("RECONCILE_MAX_WORKERS", 4)

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# Apply database/schema.sql on startup (CREATE TABLE IF NOT EXISTS only).
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", True)
