import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = int(os.getenv("SMTP_PORT", "465"))
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_SENDER = os.getenv("SMTP_SENDER", "")
SMTP_USE_SSL = bool(int(os.getenv("SMTP_USE_SSL", "1")))
NOTIFIER_WORKERS = int(os.getenv("NOTIFIER_WORKERS", "2"))
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

HALF_DAY_THRESHOLD_MINUTES = int(os.getenv("HALF_DAY_THRESHOLD_MINUTES", "240"))
WORKING_DAYS_PER_MONTH = int(os.getenv("WORKING_DAYS_PER_MONTH", "22"))
WORKING_HOURS_PER_DAY = int(os.getenv("WORKING_HOURS_PER_DAY", "8"))
VACATION_NOTICE_DAYS = int(os.getenv("VACATION_NOTICE_DAYS", "10"))
DEFAULT_NOTICE_DAYS = int(os.getenv("DEFAULT_NOTICE_DAYS", "1"))
