import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

MAHROOM_THRESHOLD = float(os.getenv("MAHROOM_THRESHOLD", "75"))
TASDIQ_THRESHOLD = float(os.getenv("TASDIQ_THRESHOLD", "85"))
WARNING_MARGIN = float(os.getenv("WARNING_MARGIN", "5"))

ATTENDANCE_SHAPE = os.getenv("ATTENDANCE_SHAPE", "current")

DEBUG = False
