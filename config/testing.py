import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worktime_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
ENABLE_SCHEDULER = False
REMINDER_TIMEZONE = "Asia/Shanghai"

HOLIDAY_API_URL = "http://holiday.invalid/today"
HTTP_TIMEOUT_SECONDS = 1.0
