import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# never send real email from tests
SMTP_HOST = ""
SMTP_USER = ""
FRONTEND_URL = "http://localhost:3000"

HALF_DAY_THRESHOLD_MINUTES = 240
WORKING_DAYS_PER_MONTH = 22
WORKING_HOURS_PER_DAY = 8
VACATION_NOTICE_DAYS = 10
DEFAULT_NOTICE_DAYS = 1
