import os

from werkzeug.security import generate_password_hash

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# memory | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "asistup_db"),
}

# Master password for the administrative panel (hash preferred over plain text)
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH") or generate_password_hash(
    os.getenv("ADMIN_PASSWORD", "admin123")
)

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

KIOSK_SUCCESS_SECONDS = float(os.getenv("KIOSK_SUCCESS_SECONDS", "5"))
KIOSK_ERROR_SECONDS = float(os.getenv("KIOSK_ERROR_SECONDS", "1.5"))
KIOSK_SESSION_IDLE_SECONDS = float(os.getenv("KIOSK_SESSION_IDLE_SECONDS", "900"))
KIOSK_MAX_SESSIONS = int(os.getenv("KIOSK_MAX_SESSIONS", "64"))
LATE_THRESHOLD_MINUTES = int(os.getenv("LATE_THRESHOLD_MINUTES", "15"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: store the default global settings document when missing
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
