"""Flask relay that forwards chat requests to the completion API with a server-side key."""

import logging
from typing import Any, Mapping, Optional

import requests
from flask import Blueprint, Flask, Response, current_app, jsonify, request

from config.settings import get_settings

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("model", "max_tokens", "system", "messages")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

bp = Blueprint("relay", __name__)


@bp.after_app_request
def add_cors_headers(response: Response) -> Response:
    for header, value in CORS_HEADERS.items():
        response.headers[header] = value
    return response


@bp.route("/api/chat", methods=["OPTIONS"])
def chat_preflight():
    """CORS preflight."""
    return "", 200


@bp.post("/api/chat")
def chat():
    """
    Forward a completion request upstream.

    The body must carry model, max_tokens, system and messages. Upstream
    status and body are passed back unchanged; transport failures become 500.
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or not all(body.get(field) for field in REQUIRED_FIELDS):
        return jsonify(error="Missing required fields: " + ", ".join(REQUIRED_FIELDS)), 400

    api_key = current_app.config.get("ANTHROPIC_API_KEY")
    if not api_key:
        logger.error("ANTHROPIC_API_KEY is not configured")
        return jsonify(error="Server configuration error: ANTHROPIC_API_KEY not set"), 500

    payload = {field: body[field] for field in REQUIRED_FIELDS}
    headers = {
        "Content-Type": "application/json",
        "x-api-key": api_key,
        "anthropic-version": current_app.config["ANTHROPIC_VERSION"],
    }

    logger.info("Relaying chat request for model %s", payload["model"])
    try:
        upstream = requests.post(
            current_app.config["ANTHROPIC_API_URL"],
            json=payload,
            headers=headers,
            timeout=current_app.config.get("CHAT_RELAY_TIMEOUT"),
        )
    except Exception as e:
        logger.exception("Upstream request failed")
        return jsonify(error="Internal server error", message=str(e)), 500

    if not upstream.ok:
        logger.warning("Upstream returned %s", upstream.status_code)

    return Response(
        upstream.content,
        status=upstream.status_code,
        content_type=upstream.headers.get("Content-Type", "application/json"),
    )


def create_app(test_config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Create the relay application; ``test_config`` overrides values read from settings."""
    app = Flask(__name__)

    settings = get_settings()
    app.config.update(
        ANTHROPIC_API_KEY=settings.ANTHROPIC_API_KEY,
        ANTHROPIC_API_URL=settings.ANTHROPIC_API_URL,
        ANTHROPIC_VERSION=settings.ANTHROPIC_VERSION,
        CHAT_RELAY_TIMEOUT=settings.CHAT_RELAY_TIMEOUT,
    )
    if test_config is not None:
        app.config.update(test_config)

    app.register_blueprint(bp)
    return app
