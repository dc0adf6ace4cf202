from __future__ import annotations

import logging
import sys
from typing import Any, Mapping, Optional

from flask import Flask
from jinja2 import StrictUndefined
from werkzeug.serving import make_server

from .logging_config import setup_logging
from .routes import bp

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "EVENTS_PATH": "events.yaml",
    "TEMPLATE": "index.html",
    "HOST": "0.0.0.0",
    "PORT": 80,
    "LOG_LEVEL": "INFO",
    # Template edits apply without a restart
    "TEMPLATES_AUTO_RELOAD": True,
}


def create_app(test_config: Optional[Mapping[str, Any]] = None) -> Flask:
    overrides = dict(test_config or {})
    app = Flask(
        __name__,
        template_folder=overrides.pop("TEMPLATE_FOLDER", "templates"),
    )
    app.config.from_mapping(DEFAULTS)
    app.config.from_prefixed_env("COUNTDOWN")
    app.config.from_mapping(overrides)

    app.jinja_env.undefined = StrictUndefined
    app.register_blueprint(bp)
    return app


def main() -> None:
    app = create_app()
    setup_logging(app.config["LOG_LEVEL"])

    host, port = app.config["HOST"], int(app.config["PORT"])
    logger.info("Starting server on %s:%d", host, port)
    try:
        server = make_server(host, port, app, threaded=True)
    except (OSError, SystemExit) as e:
        # werkzeug reports bind errors itself and exits with status 1
        logger.critical("Server failed to start on %s:%d: %s", host, port, e)
        sys.exit(1)
    server.serve_forever()


if __name__ == "__main__":
    main()
