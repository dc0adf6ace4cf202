from __future__ import annotations

import logging

from flask import Blueprint, current_app, render_template
from jinja2 import TemplateNotFound, TemplateSyntaxError

from .errors import CountdownError, RenderFailure, TemplateUnavailable
from .events import build_page, load_events, now_utc, select_upcoming

logger = logging.getLogger(__name__)

bp = Blueprint("countdown", __name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@bp.route("/", methods=ALL_METHODS)
def index():
    events = load_events(current_app.config["EVENTS_PATH"])
    upcoming = select_upcoming(events, now_utc())
    logger.debug("Loaded %d events, %d upcoming", len(events), len(upcoming))
    page = build_page(upcoming)

    template_name = current_app.config["TEMPLATE"]
    try:
        template = current_app.jinja_env.get_template(template_name)
    except (TemplateNotFound, TemplateSyntaxError) as e:
        raise TemplateUnavailable(f"could not load template {template_name}: {e}") from e

    try:
        return render_template(template, page=page)
    except Exception as e:
        raise RenderFailure(f"could not render template {template_name}: {e}") from e


@bp.app_errorhandler(CountdownError)
def handle_pipeline_error(e: CountdownError):
    logger.exception("Error serving page: %s", e)
    return e.public_message, 500, {"Content-Type": "text/plain; charset=utf-8"}
