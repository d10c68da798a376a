"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_TREND_DAYS = 30
REPORT_DETAIL_LIMIT = 100

HALF_DAY_THRESHOLD_MINUTES = 240
WORKING_DAYS_PER_MONTH = 22
WORKING_HOURS_PER_DAY = 8

VACATION_NOTICE_DAYS = 10
DEFAULT_NOTICE_DAYS = 1

INITIAL_PAID_LEAVES = 1
MONTHLY_PAID_LEAVE_GRANT = 1
