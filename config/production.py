import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "institute_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

COURSE_FEES = None
DEFAULT_COURSE_FEE = os.getenv("DEFAULT_COURSE_FEE", "2000")

DEFAULTER_THRESHOLD = int(os.getenv("DEFAULTER_THRESHOLD", "3"))
DEFAULTER_SCAN_WORKERS = int(os.getenv("DEFAULTER_SCAN_WORKERS", "16"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
