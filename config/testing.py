import os

from config.config import db_config_from_env

SECRET_KEY = "test-secret"

# in-memory local store unless a path is given
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local")
LOCAL_STORE_PATH = os.getenv("LOCAL_STORE_PATH") or None

DB_CONFIG = db_config_from_env()

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = False
AUTO_SEED_DB = False
