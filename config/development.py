import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worktime_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Reminder cron jobs (09:55 check-in, 20:30/21:30 check-out)
ENABLE_SCHEDULER = bool(int(os.getenv("ENABLE_SCHEDULER", "1")))
REMINDER_TIMEZONE = os.getenv("REMINDER_TIMEZONE", "Asia/Shanghai")

HOLIDAY_API_URL = os.getenv("HOLIDAY_API_URL", "http://api.haoshenqi.top/holiday/today")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))
