from . import db_config_from_env

SECRET_KEY = "test-secret"
DB_CONFIG = db_config_from_env(default_database="attendance_test", default_pool_size=1)

ENGINE_TIMEZONE = "UTC"
# Serial runs keep failures easy to read.
RECONCILE_MAX_WORKERS = 1

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
