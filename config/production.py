import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "asistup_db"),
}

# Must be a werkzeug hash; without it only admin PINs authenticate
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

KIOSK_SUCCESS_SECONDS = float(os.getenv("KIOSK_SUCCESS_SECONDS", "5"))
KIOSK_ERROR_SECONDS = float(os.getenv("KIOSK_ERROR_SECONDS", "1.5"))
KIOSK_SESSION_IDLE_SECONDS = float(os.getenv("KIOSK_SESSION_IDLE_SECONDS", "900"))
KIOSK_MAX_SESSIONS = int(os.getenv("KIOSK_MAX_SESSIONS", "64"))
LATE_THRESHOLD_MINUTES = int(os.getenv("LATE_THRESHOLD_MINUTES", "15"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
