"""Helpers for building column maps (column name -> key function).

List views tend to repeat the same key functions: read a (nested) field,
compare text case-insensitively, and push missing values to one end. These
helpers build them so a column map can be declared in one line:

    columns = column_map(
        "name", "age",
        city="address.city",
        country=casefold(field("address.country")),
    )
"""

from collections.abc import Mapping
from functools import total_ordering
from typing import Any, Iterable

from paging.sort_pagination import KeyExtractor


def _split(path: str) -> list[str]:
    parts = path.split(".")
    if not all(parts):
        raise ValueError(f"Invalid field path: {path!r}")
    return parts


def attribute(path: str) -> KeyExtractor:
    """Key function reading a dotted attribute path, e.g. ``address.city``."""
    parts = _split(path)

    def extract(record):
        value = record
        for part in parts:
            if value is None:
                return None
            value = getattr(value, part)
        return value

    extract.__name__ = f"attribute({path})"
    return extract


def item(path: str) -> KeyExtractor:
    """Key function reading a dotted key path in nested mappings.

    Missing keys produce ``None``.
    """
    parts = _split(path)

    def extract(record):
        value = record
        for part in parts:
            if value is None:
                return None
            value = value.get(part)
        return value

    extract.__name__ = f"item({path})"
    return extract


def field(path: str) -> KeyExtractor:
    """Key function that reads mapping keys or attributes, whichever exists."""
    parts = _split(path)

    def extract(record):
        value = record
        for part in parts:
            if value is None:
                return None
            if isinstance(value, Mapping):
                value = value.get(part)
            else:
                value = getattr(value, part, None)
        return value

    extract.__name__ = f"field({path})"
    return extract


def casefold(extractor: KeyExtractor) -> KeyExtractor:
    """Compare text case-insensitively; ``None`` becomes an empty string."""

    def extract(record):
        value = extractor(record)
        if value is None:
            return ""
        if isinstance(value, str):
            return value.casefold()
        return value

    return extract


@total_ordering
class _NullKey:
    """Sort key that places ``None`` (and NaN) before or after every real value."""

    __slots__ = ("value", "last")

    def __init__(self, value: Any, last: bool):
        self.value = value
        self.last = last

    def _is_null(self) -> bool:
        # NaN is unordered against every number
        return self.value is None or self.value != self.value

    def _rank(self) -> int:
        if not self._is_null():
            return 0
        return 1 if self.last else -1

    def __eq__(self, other):
        if not isinstance(other, _NullKey):
            return NotImplemented
        if self._is_null() or other._is_null():
            return self._rank() == other._rank()
        return self.value == other.value

    def __lt__(self, other):
        if not isinstance(other, _NullKey):
            return NotImplemented
        if self._is_null() or other._is_null():
            return self._rank() < other._rank()
        return self.value < other.value

    def __repr__(self):
        return f"_NullKey({self.value!r})"


def nulls_last(extractor: KeyExtractor) -> KeyExtractor:
    """Sort ``None`` and NaN keys after every other value (when ascending)."""
    return lambda record: _NullKey(extractor(record), last=True)


def nulls_first(extractor: KeyExtractor) -> KeyExtractor:
    """Sort ``None`` and NaN keys before every other value (when ascending)."""
    return lambda record: _NullKey(extractor(record), last=False)


def column_map(*names: str, **extractors: Any) -> dict[str, KeyExtractor]:
    """Build a column map.

    Positional *names* become ``field(name)`` columns. Keyword entries map a
    column name to either a field path string or a key function.
    """
    columns: dict[str, KeyExtractor] = {name: field(name) for name in names}
    for name, spec in extractors.items():
        if isinstance(spec, str):
            columns[name] = field(spec)
        elif callable(spec):
            columns[name] = spec
        else:
            raise TypeError(
                f"Column {name!r} must be a field path or a callable, "
                f"got {type(spec).__name__}"
            )
    return columns


def infer_column_map(records: Iterable[Mapping]) -> dict[str, KeyExtractor]:
    """One column per top-level key found in *records*, missing values last."""
    names: dict[str, None] = {}
    for record in records:
        for key in record:
            names.setdefault(key, None)
    return {name: nulls_last(item(name)) for name in names}
