import os

from werkzeug.security import generate_password_hash

SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "asistup_test"),
}

ADMIN_PASSWORD = "test-admin"
ADMIN_PASSWORD_HASH = generate_password_hash(ADMIN_PASSWORD)

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

KIOSK_SUCCESS_SECONDS = 5.0
KIOSK_ERROR_SECONDS = 1.5
KIOSK_SESSION_IDLE_SECONDS = 900.0
KIOSK_MAX_SESSIONS = 64
LATE_THRESHOLD_MINUTES = 15

AUTO_INIT_DB = False
AUTO_SEED_DB = True
