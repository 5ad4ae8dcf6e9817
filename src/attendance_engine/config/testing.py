import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_test"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_FILE = None

BATCH_WORKERS = 2
RESOLVER_CACHE_SIZE = 256

COUNT_OFF_DAY_PUNCHES = False

REPORT_DIR = os.getenv("REPORT_DIR", "reports")
