import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "institute_test_db"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

COURSE_FEES = {"MS-CIT": "3000", "DTP - CIT": "2000"}
DEFAULT_COURSE_FEE = "2000"

DEFAULTER_THRESHOLD = 3
DEFAULTER_SCAN_WORKERS = 2

AUTO_INIT_DB = False
