import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "congregation_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

# Production keys are usually RS256 public keys (PEM)
AUTH_JWT_KEY = os.getenv("AUTH_JWT_KEY", "")
AUTH_JWT_ALGORITHMS = tuple(a.strip() for a in os.getenv("AUTH_JWT_ALGORITHMS", "RS256").split(",") if a.strip())
AUTH_JWT_AUDIENCE = os.getenv("AUTH_JWT_AUDIENCE") or None
AUTH_JWT_ISSUER = os.getenv("AUTH_JWT_ISSUER") or None

ROLL_CALL_SCAN_LIMIT = int(os.getenv("ROLL_CALL_SCAN_LIMIT", "2000"))

SCRIPT_SUBJECT = os.getenv("SCRIPT_SUBJECT", "script")
