import os

SECRET_KEY = "test-secret"

JWT_SECRET_KEY = "test-jwt-secret"
JWT_ALGORITHM = "HS256"
TOKEN_EXPIRE_DAYS = 10

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_db_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

API_PREFIX = "/api"
UPLOAD_FOLDER = None

DISTINCT_LOGIN_ERRORS = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
