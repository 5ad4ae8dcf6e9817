import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "attendance-engine.log")

BATCH_WORKERS = int(os.getenv("BATCH_WORKERS", "4"))
RESOLVER_CACHE_SIZE = int(os.getenv("RESOLVER_CACHE_SIZE", "4096"))

# Punches on an off day count toward working days / rate only when enabled
COUNT_OFF_DAY_PUNCHES = bool(int(os.getenv("COUNT_OFF_DAY_PUNCHES", "0")))

REPORT_DIR = os.getenv("REPORT_DIR", "reports")
