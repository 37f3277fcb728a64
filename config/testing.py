import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "congregation_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

AUTH_JWT_KEY = "test-jwt-key"
AUTH_JWT_ALGORITHMS = ("HS256",)
AUTH_JWT_AUDIENCE = None
AUTH_JWT_ISSUER = None

ROLL_CALL_SCAN_LIMIT = 2000

SCRIPT_SUBJECT = "script"
