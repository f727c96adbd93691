import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "institute_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Fee schedule; None keeps the built-in course list.
COURSE_FEES = None
DEFAULT_COURSE_FEE = os.getenv("DEFAULT_COURSE_FEE", "2000")

DEFAULTER_THRESHOLD = int(os.getenv("DEFAULTER_THRESHOLD", "3"))
DEFAULTER_SCAN_WORKERS = int(os.getenv("DEFAULTER_SCAN_WORKERS", "8"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
