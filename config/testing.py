import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance_test"),
}

MAHROOM_THRESHOLD = 75.0
TASDIQ_THRESHOLD = 85.0
WARNING_MARGIN = 5.0

ATTENDANCE_SHAPE = "current"

DEBUG = False
TESTING = True
