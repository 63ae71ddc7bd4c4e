"""REST API v1: sorted, paginated JSON listings of stored collections."""

import logging

from flask import Blueprint, jsonify

from web.listing import page_from_request, page_response, sort_url
from web.services import get_collection_store

logger = logging.getLogger(__name__)

bp = Blueprint("api", __name__)


def _error(message, status=400):
    return jsonify({"error": message}), status


@bp.route("/collections")
def list_collections():
    store = get_collection_store()
    return jsonify({"collections": store.names()})


@bp.route("/collections/<name>")
def get_collection_page(name):
    store = get_collection_store()
    try:
        records = store.load(name)
    except KeyError:
        return _error("Collection not found", 404)
    except ValueError:
        logger.exception("Malformed collection %s", name)
        return _error("Internal server error", 500)

    try:
        page = page_from_request(records, store.column_map(name, records))
    except TypeError:
        logger.warning("Incomparable sort keys in collection %s", name)
        return _error("Values in the requested sort columns cannot be compared")
    return page_response(page)


@bp.route("/collections/<name>/columns")
def get_collection_columns(name):
    store = get_collection_store()
    try:
        columns = store.column_map(name)
    except KeyError:
        return _error("Collection not found", 404)
    except ValueError:
        logger.exception("Malformed collection %s", name)
        return _error("Internal server error", 500)
    return jsonify({
        "collection": name,
        "columns": [
            {"name": column, "sort_url": sort_url(column)}
            for column in sorted(columns)
        ],
    })
