import os

from . import db_config_from_env, env_flag, env_int

SECRET_KEY = os.environ["SECRET_KEY"]
DB_CONFIG = db_config_from_env(default_database="attendance_db", default_pool_size=10)

ENGINE_TIMEZONE = os.getenv("ENGINE_TIMEZONE", "UTC")
RECONCILE_MAX_WORKERS = env_int("RECONCILE_MAX_WORKERS", 8)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", False)
