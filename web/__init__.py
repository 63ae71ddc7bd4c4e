"""Flask application factory for the sorted listing API."""

import logging

from dotenv import load_dotenv
load_dotenv()  # Load .env file if present

from flask import Flask, jsonify, request

from paging.query import InvalidPageRequest
from paging.sort_pagination import UnknownSortColumn

logger = logging.getLogger(__name__)

__version__ = "0.1.0"


def create_app(config=None):
    """Create and configure the Flask application."""
    from config.settings import (
        DATA_DIR,
        DEFAULT_PAGE_SIZE,
        LOG_FORMAT,
        LOG_LEVEL,
        MAX_PAGE_SIZE,
    )

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    app = Flask(__name__)
    app.config["DATA_DIR"] = str(DATA_DIR)
    app.config["DEFAULT_PAGE_SIZE"] = DEFAULT_PAGE_SIZE
    app.config["MAX_PAGE_SIZE"] = MAX_PAGE_SIZE
    if config:
        app.config.update(config)

    from web.routes.api import bp as api_bp

    app.register_blueprint(api_bp, url_prefix="/api/v1")

    @app.errorhandler(UnknownSortColumn)
    def unknown_sort_column(e):
        logger.warning("Rejected sort on unknown column %r (%s)", e.column, request.path)
        return jsonify({
            "error": str(e),
            "column": e.column,
            "available_columns": e.available_columns,
        }), 400

    @app.errorhandler(InvalidPageRequest)
    def invalid_page_request(e):
        logger.warning("Rejected page request: %s (%s)", e, request.path)
        return jsonify({"error": str(e), "parameter": e.parameter}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "Internal server error"}), 500

    @app.route("/health")
    def health_check():
        return jsonify({"status": "healthy", "version": __version__}), 200

    return app
