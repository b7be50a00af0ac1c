import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "checkin_db"),
}

# mysql | memory
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")

# Roster and the two daily time marks, re-read whenever the file changes
ROSTER_CONFIG_PATH = os.getenv("ROSTER_CONFIG_PATH", "config.json")
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")

# 16-char md5 of the API token
TOKEN_MD5 = os.getenv("TOKEN_MD5", "")

SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_FROM = os.getenv("SMTP_FROM", "")
SMTP_USE_TLS = bool(int(os.getenv("SMTP_USE_TLS", "1")))
SMTP_USE_SSL = bool(int(os.getenv("SMTP_USE_SSL", "0")))
SMTP_TIMEOUT = float(os.getenv("SMTP_TIMEOUT", "15"))

SCHEDULER_ENABLED = bool(int(os.getenv("SCHEDULER_ENABLED", "1")))
SCHEDULER_TICK_SECONDS = int(os.getenv("SCHEDULER_TICK_SECONDS", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled with STORE_BACKEND=mysql, app creates the checkin_records table on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
