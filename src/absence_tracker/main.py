from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .tracker.controller import register as register_tracker

logger = logging.getLogger("absence_tracker")


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    backend = str(getattr(settings, "STORAGE_BACKEND", "memory"))
    db_config = dict(getattr(settings, "DB_CONFIG", {}))

    if container is None:
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            backend=backend,
            db_config=db_config,
            weekly_overview_limit=int(getattr(settings, "WEEKLY_OVERVIEW_LIMIT", 16)),
        )

    logger.info("settings=%s storage=%s", settings_module, backend)

    register_tracker(app, container)
    return app
