import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = Config.db_config()
STORE_BACKEND = "mysql"

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB

DEFAULT_PAYMENT_RATE = Config.DEFAULT_PAYMENT_RATE
ROLE_MAP = Config.ROLE_MAP
ROLE_MAP_FILE = Config.ROLE_MAP_FILE
EMAILJS = Config.EMAILJS
SEED_USERS = Config.SEED_USERS
LOG_LEVEL = Config.LOG_LEVEL
