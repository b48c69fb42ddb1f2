import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "passw0rd"),
    "database": os.getenv("DB_NAME", "user_admin"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(2 * 1024 * 1024)))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
# Idle browser sessions whose server-side forms are kept before the oldest are dropped
FORM_STORE_MAX_SESSIONS = int(os.getenv("FORM_STORE_MAX_SESSIONS", "500"))

# If enabled, the app applies schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo roles and staff on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
