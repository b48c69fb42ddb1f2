import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "user_admin_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

MAX_UPLOAD_BYTES = 1024 * 1024
SESSION_DAYS = 1
FORM_STORE_MAX_SESSIONS = 50

AUTO_INIT_DB = False
AUTO_SEED_DB = False
