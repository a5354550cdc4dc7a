import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SEED_DATA = True
SEED_DIR = None
DEMO_PASSWORD = "password"

SETTINGS_FILE = None
TIMEZONE = "Asia/Kolkata"
SESSION_DAYS = 1

STORAGE_DIR = os.getenv("STORAGE_DIR", "instance/test-storage")
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "instance/test-uploads")
PUBLIC_BASE_URL = "http://localhost"

USE_MOCK_EMAIL = True
SENDGRID_API_KEY = None
WELCOME_EMAIL_SENDER = "welcome@example.com"

VERIFICATION_SUCCESS_RATE = 1.0
VERIFICATION_UAN_SUCCESS_RATE = 1.0

AUTO_INIT_DB = False
