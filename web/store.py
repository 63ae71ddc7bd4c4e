"""Read-only JSON collections served by the listing API."""

import json
import logging
import re
from pathlib import Path

from paging.columns import infer_column_map

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"[A-Za-z0-9_-]+")


def _reject_constant(name):
    raise ValueError(f"Unsupported JSON constant: {name}")


class CollectionStore:
    """Loads ``<data_dir>/<name>.json`` files, each a JSON list of objects."""

    def __init__(self, data_dir):
        self._dir = Path(data_dir)

    def names(self) -> list[str]:
        """Names of all available collections, sorted."""
        if not self._dir.is_dir():
            return []
        return sorted(p.stem for p in self._dir.glob("*.json") if p.is_file())

    def load(self, name: str) -> list[dict]:
        """Return the records of collection *name*.

        Raises KeyError if the collection does not exist.
        """
        return self.read(self._path(name))

    @staticmethod
    def read(path) -> list[dict]:
        """Read a JSON file holding a list of objects.

        NaN and Infinity are rejected; they are not valid JSON and NaN has no
        sort order.
        """
        with open(path, encoding="utf-8") as f:
            data = json.load(f, parse_constant=_reject_constant)
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise ValueError(f"{path} must contain a JSON list of objects")
        logger.debug("Loaded %d record(s) from %s", len(data), path)
        return data

    def column_map(self, name: str, records=None) -> dict:
        """Sortable columns of a collection: one per top-level key."""
        if records is None:
            records = self.load(name)
        return infer_column_map(records)

    def _path(self, name: str) -> Path:
        if not _NAME_RE.fullmatch(name or ""):
            raise KeyError(name)
        path = self._dir / f"{name}.json"
        if not path.is_file():
            raise KeyError(name)
        return path
