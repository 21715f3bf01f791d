import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# 0 = local key-value store (JSON file), 1 = remote MySQL database
USE_REMOTE_DB = bool(int(os.getenv("USE_REMOTE_DB", "0")))
DB_URL = os.getenv("DB_URL", "mysql://root@localhost:3306/school_db")
DB_SECRET = os.getenv("DB_SECRET", "")

LOCAL_STORE_PATH = os.getenv("LOCAL_STORE_PATH", "instance/local_store.json")
LOCAL_STORE_QUOTA_BYTES = int(os.getenv("LOCAL_STORE_QUOTA_BYTES", str(5 * 1024 * 1024)))
SEED_FIXTURE_PATH = os.getenv("SEED_FIXTURE_PATH", "database/seed.json")

# If enabled with the remote backend, app applies schema.sql on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
