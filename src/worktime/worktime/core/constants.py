"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

MINUTES_PER_HOUR = 60
STANDARD_WORK_MINUTES = 8 * MINUTES_PER_HOUR
OVERTIME_THRESHOLD_MINUTES = 10 * MINUTES_PER_HOUR
MAX_WORK_MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

DEFAULT_CONFIG_ID = "default"

DATE_FORMAT = "%Y-%m-%d"
YEAR_MONTH_FORMAT = "%Y-%m"

REMINDER_TIMEZONE = "Asia/Shanghai"
CHECK_IN_REMINDER_AT = time(9, 55)
CHECK_OUT_REMINDER_TIMES = (time(20, 30), time(21, 30))

HTTP_TIMEOUT_SECONDS = 10
HOLIDAY_API_URL = "http://api.haoshenqi.top/holiday/today"

CHECK_IN_REMINDER_MESSAGE = "⏰ Time to check in! Don't forget to clock in for work."
CHECK_OUT_REMINDER_MESSAGE = "✅ Time to check out! Remember to clock out from work."
DEFAULT_NOTIFICATION_MESSAGE = "Work time notification"
