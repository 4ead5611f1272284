import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

# Standing policy, percentages of marked periods attended
MAHROOM_THRESHOLD = float(os.getenv("MAHROOM_THRESHOLD", "75"))
TASDIQ_THRESHOLD = float(os.getenv("TASDIQ_THRESHOLD", "85"))
WARNING_MARGIN = float(os.getenv("WARNING_MARGIN", "5"))

# "current" reads attendance_records_new (period columns), "legacy" reads attendance_records
ATTENDANCE_SHAPE = os.getenv("ATTENDANCE_SHAPE", "current")

DEBUG = True
