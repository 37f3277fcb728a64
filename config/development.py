import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "congregation_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Applies database/schema.sql on startup (CREATE TABLE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Bearer tokens are issued by the external identity provider
AUTH_JWT_KEY = os.getenv("AUTH_JWT_KEY", "dev-jwt-key")
AUTH_JWT_ALGORITHMS = tuple(a.strip() for a in os.getenv("AUTH_JWT_ALGORITHMS", "HS256").split(",") if a.strip())
AUTH_JWT_AUDIENCE = os.getenv("AUTH_JWT_AUDIENCE") or None
AUTH_JWT_ISSUER = os.getenv("AUTH_JWT_ISSUER") or None

ROLL_CALL_SCAN_LIMIT = int(os.getenv("ROLL_CALL_SCAN_LIMIT", "2000"))

# Subject recorded as created_by for rows inserted by scripts/import_csv.py
SCRIPT_SUBJECT = os.getenv("SCRIPT_SUBJECT", "script")
