from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

import structlog
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .archive.controller import register as register_archive
from .cleanings.controller import register as register_cleanings
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables
from .identity.controller import register as register_identity
from .identity.gate import load_role_map
from .logging_setup import setup_logging
from .machines.controller import register as register_machines
from .rates.controller import register as register_rates
from .users.controller import register as register_users

log = structlog.get_logger(__name__)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", None))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    db_config = getattr(settings, "DB_CONFIG", {})
    store_backend = getattr(settings, "STORE_BACKEND", "mysql")

    if container is None:
        if store_backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            log.info("schema_ready", tables=len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            store_backend=store_backend,
            role_map=load_role_map(getattr(settings, "ROLE_MAP", None), path=getattr(settings, "ROLE_MAP_FILE", None)),
            emailjs=getattr(settings, "EMAILJS", None),
            default_payment_rate=getattr(settings, "DEFAULT_PAYMENT_RATE", 100),
        )

    log.info(
        "app_configured",
        settings=settings_module,
        store=store_backend,
        db=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
    )

    app.extensions["container"] = container

    register_identity(app, container)
    register_dashboard(app, container)
    register_cleanings(app, container)
    register_machines(app, container)
    register_users(app, container)
    register_rates(app, container)
    register_archive(app, container)

    return app
