"""
Flask HTTP surface for the FAQ bot.

Endpoints:
- GET  /            liveness text
- GET  /api/ask     ?q=...
- POST /api/ask     {"q": ...} or {"question": ...}
- POST /api/refresh force a knowledge bank reload (admin key required)
- GET  /api/status  cached bank summary
"""
import hmac
import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .app import FaqBotApp
from .config_loader import load_config_from_env
from .exceptions import (
    FaqBotError,
    InvalidInputError,
    NotInitializedError,
    ResolutionTimeoutError,
    UpstreamFetchError,
)

logger = logging.getLogger(__name__)


def create_app(bot: Optional[FaqBotApp] = None) -> Flask:
    """
    Build the Flask application.

    :param bot: Initialized FaqBotApp; built from environment variables if None
    :return: Flask app
    """
    if bot is None:
        bot = _initialize_bot_from_env()

    app = Flask(__name__)
    limiter = Limiter(
        key_func=get_remote_address,
        app=app,
        default_limits=["300 per hour", "30 per minute"],
        storage_uri="memory://",
    )

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, X-Admin-Key"
        return response

    @app.errorhandler(InvalidInputError)
    def handle_invalid_input(e):
        logger.warning(f"Rejected query: {e}")
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(UpstreamFetchError)
    def handle_fetch_failure(e):
        logger.error(f"Knowledge bank unavailable: {e}", exc_info=True)
        return jsonify({"error": "Failed to fetch FAQ entries"}), 502

    @app.errorhandler(ResolutionTimeoutError)
    def handle_timeout(e):
        logger.warning(str(e))
        return jsonify({"error": "Timed out resolving the question"}), 504

    @app.errorhandler(NotInitializedError)
    def handle_not_initialized(e):
        return jsonify({"error": "FAQ bot not initialized. Please check configuration."}), 503

    @app.errorhandler(FaqBotError)
    def handle_service_error(e):
        logger.error(f"FAQ bot error: {e}", exc_info=True)
        return jsonify({"error": "Internal error"}), 500

    @app.route("/")
    def index():
        return "FAQ bot running!"

    @app.route("/api/ask", methods=["GET", "POST"])
    @limiter.limit("20 per minute")
    def ask():
        if bot is None:
            raise NotInitializedError("FAQ bot is not initialized.")

        query = _read_query()
        if not query or not query.strip():
            raise InvalidInputError("Missing q")

        result = bot.ask(query)
        logger.info(f"Answered query via {result.source.value} stage")
        return jsonify(result.to_dict())

    @app.route("/api/refresh", methods=["POST"])
    @limiter.limit("5 per minute")
    def refresh():
        if bot is None:
            raise NotInitializedError("FAQ bot is not initialized.")

        expected = bot.config.admin_refresh_key
        provided = request.headers.get("X-Admin-Key") or request.args.get("key") or ""
        if not expected or not hmac.compare_digest(provided.encode(), expected.encode()):
            return jsonify({"error": "Forbidden"}), 403

        entries = bot.refresh()
        logger.info(f"Knowledge bank refreshed on request: {entries} entries")
        return jsonify({"refreshed": True, "entries": entries})

    @app.route("/api/status")
    def status():
        if bot is None:
            raise NotInitializedError("FAQ bot is not initialized.")
        return jsonify(bot.status())

    return app


def _read_query() -> Optional[str]:
    """Read the query from ?q=..., falling back to a JSON body on POST."""
    query = request.args.get("q")
    if query:
        return query

    if request.method == "POST":
        data = request.get_json(silent=True)
        if isinstance(data, dict):
            value = data.get("q") or data.get("question")
            if value is not None and not isinstance(value, str):
                raise InvalidInputError("Query must be a string")
            return value

    return None


def _initialize_bot_from_env() -> Optional[FaqBotApp]:
    """Build and initialize the bot from environment variables."""
    try:
        bot = FaqBotApp(load_config_from_env())
        bot.initialize()
        logger.info("FAQ bot initialized from environment variables")
        return bot
    except Exception as e:
        logger.error(f"Failed to initialize FAQ bot: {str(e)}", exc_info=True)
        return None
