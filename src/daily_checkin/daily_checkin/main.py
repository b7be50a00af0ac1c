from __future__ import annotations

import atexit
import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .checkin.controller import register as register_checkin
from .container import build_container
from .database.bootstrap import apply_schema

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    store_backend = str(getattr(settings, "STORE_BACKEND", "mysql")).lower()
    if store_backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(getattr(settings, "DB_CONFIG"))

    container = build_container(settings)
    app.extensions["daily_checkin"] = container

    register_checkin(app, container)

    if bool(getattr(settings, "SCHEDULER_ENABLED", True)):
        container.scheduler.start()
        atexit.register(container.scheduler.stop, wait=False)

    logger.info("settings=%s store=%s uploads=%s", settings_module, store_backend, getattr(settings, "UPLOAD_DIR", "uploads"))
    return app
