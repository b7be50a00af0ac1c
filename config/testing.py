import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "checkin_db_test"),
}

STORE_BACKEND = "memory"

ROSTER_CONFIG_PATH = os.getenv("ROSTER_CONFIG_PATH", "config.json")
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads-test")

TOKEN_MD5 = os.getenv("TOKEN_MD5", "")

# No SMTP host: emails are logged and skipped
SMTP_HOST = ""
SMTP_PORT = 587
SMTP_USER = ""
SMTP_PASSWORD = ""
SMTP_FROM = ""

SCHEDULER_ENABLED = False
SCHEDULER_TICK_SECONDS = 30

LOG_LEVEL = "DEBUG"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
