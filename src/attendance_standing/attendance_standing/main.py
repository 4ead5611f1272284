from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .reports.controller import register as register_reports
from .standing.model import StandingThresholds

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(level=logging.DEBUG if app.config["DEBUG"] else logging.INFO)

    # Fails fast on an inconsistent policy before any request is served.
    thresholds = StandingThresholds(
        mahroom_threshold=float(getattr(settings, "MAHROOM_THRESHOLD")),
        tasdiq_threshold=float(getattr(settings, "TASDIQ_THRESHOLD")),
        warning_margin=float(getattr(settings, "WARNING_MARGIN")),
    )
    shape = getattr(settings, "ATTENDANCE_SHAPE", "current")

    logger.info(
        "settings=%s db=%s@%s:%s/%s shape=%s thresholds=%s/%s (+%s)",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        shape,
        thresholds.mahroom_threshold,
        thresholds.tasdiq_threshold,
        thresholds.warning_margin,
    )

    container = build_container(db_config=db_config, thresholds=thresholds, shape=shape)
    register_reports(app, container)

    return app
