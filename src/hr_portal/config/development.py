import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Database behind the serverless functions (invoices, activity logs, site attendance)
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Mock data loaded into the in-memory store on startup
SEED_DATA = bool(int(os.getenv("SEED_DATA", "1")))
SEED_DIR = os.getenv("SEED_DIR") or None
DEMO_PASSWORD = os.getenv("DEMO_PASSWORD", "password")

SETTINGS_FILE = os.getenv("SETTINGS_FILE", "instance/app_settings.json")
TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

STORAGE_DIR = os.getenv("STORAGE_DIR", "instance/storage")
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "instance/uploads")
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000")

USE_MOCK_EMAIL = bool(int(os.getenv("USE_MOCK_EMAIL", "1")))
SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
WELCOME_EMAIL_SENDER = os.getenv("WELCOME_EMAIL_SENDER", "welcome@example.com")

VERIFICATION_SUCCESS_RATE = float(os.getenv("VERIFICATION_SUCCESS_RATE", "0.9"))
VERIFICATION_UAN_SUCCESS_RATE = float(os.getenv("VERIFICATION_UAN_SUCCESS_RATE", "0.8"))

# If enabled, the functions schema is applied on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
