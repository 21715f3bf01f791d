import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

# Tests never touch a real database
USE_REMOTE_DB = False
DB_URL = "mysql://root@localhost:3306/school_test"
DB_SECRET = ""

# Empty path keeps the local store in memory
LOCAL_STORE_PATH = ""
LOCAL_STORE_QUOTA_BYTES = 5 * 1024 * 1024
SEED_FIXTURE_PATH = os.getenv("SEED_FIXTURE_PATH", "database/seed.json")

AUTO_INIT_DB = False
