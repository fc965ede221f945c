from .config import Config

SECRET_KEY = "test-secret"
DB_CONFIG = Config.db_config()
STORE_BACKEND = "memory"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False

DEFAULT_PAYMENT_RATE = 100
ROLE_MAP = None
ROLE_MAP_FILE = None
EMAILJS = {"enabled": False}
SEED_USERS = []
LOG_LEVEL = "WARNING"
