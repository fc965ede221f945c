import os


def _flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "change-me"

    # DB
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "cleaning_tracker")

    # 'mysql' or 'memory'
    STORE_BACKEND = os.environ.get("STORE_BACKEND", "mysql")

    AUTO_INIT_DB = _flag("AUTO_INIT_DB")

    DEFAULT_PAYMENT_RATE = float(os.environ.get("DEFAULT_PAYMENT_RATE", "100"))

    # email -> role JSON object, inline or in a file
    ROLE_MAP = os.environ.get("ROLE_MAP") or None
    ROLE_MAP_FILE = os.environ.get("ROLE_MAP_FILE") or None

    EMAILJS = {
        "service_id": os.environ.get("EMAILJS_SERVICE_ID", ""),
        "template_id": os.environ.get("EMAILJS_TEMPLATE_ID", ""),
        "public_key": os.environ.get("EMAILJS_PUBLIC_KEY", ""),
        "private_key": os.environ.get("EMAILJS_PRIVATE_KEY") or None,
        "recipient": os.environ.get("NOTIFY_EMAIL", "contact@fluffycandy.se"),
        "enabled": _flag("EMAILJS_ENABLED", "1"),
    }

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Initial privileged accounts created by scripts/seed_db.py
    SEED_USERS = [
        {
            "email": os.environ.get("SUPERADMIN_EMAIL", "superadmin@fluffycandy.se"),
            "password": os.environ.get("SUPERADMIN_PASSWORD", ""),
            "name": "Superior Administrator",
            "role": "superior_admin",
        },
        {
            "email": os.environ.get("ADMIN_EMAIL", "admin@fluffycandy.se"),
            "password": os.environ.get("ADMIN_PASSWORD", ""),
            "name": "Regular Administrator",
            "role": "admin",
        },
    ]

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
