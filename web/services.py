"""Backend service initialization for the listing API."""

from flask import current_app


def get_collection_store():
    from web.store import CollectionStore
    return CollectionStore(current_app.config["DATA_DIR"])
