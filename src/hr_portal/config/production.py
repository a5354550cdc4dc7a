import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SEED_DATA = bool(int(os.getenv("SEED_DATA", "0")))
SEED_DIR = os.getenv("SEED_DIR") or None
DEMO_PASSWORD = os.getenv("DEMO_PASSWORD", "please-set-DEMO_PASSWORD")

SETTINGS_FILE = os.getenv("SETTINGS_FILE", "instance/app_settings.json")
TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

STORAGE_DIR = os.getenv("STORAGE_DIR", "instance/storage")
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "instance/uploads")
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000")

USE_MOCK_EMAIL = bool(int(os.getenv("USE_MOCK_EMAIL", "0")))
SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
WELCOME_EMAIL_SENDER = os.getenv("WELCOME_EMAIL_SENDER", "welcome@example.com")

VERIFICATION_SUCCESS_RATE = float(os.getenv("VERIFICATION_SUCCESS_RATE", "0.9"))
VERIFICATION_UAN_SUCCESS_RATE = float(os.getenv("VERIFICATION_UAN_SUCCESS_RATE", "0.8"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
