"""Server-side sort and pagination helpers for list endpoints."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional
from urllib.parse import urlencode

from flask import current_app, jsonify, request

from paging.page import Direction, Page
from paging.query import page_request_from_args, parse_sort
from paging.sort_pagination import ColumnMap, sort_and_page


def page_from_request(
    items: Iterable,
    column_map: ColumnMap,
    args: Optional[Mapping] = None,
) -> Page:
    """Sort and page *items* according to the current request's arguments.

    Parameters
    ----------
    items:
        The full list of records behind the listing.
    column_map:
        Maps public column names to key functions, e.g.::

            {"name": lambda p: (p.name or "").lower(),
             "cost": lambda p: p.annual_cost or 0}

    args:
        Query arguments; defaults to ``request.args``.

    Raises ``UnknownSortColumn`` or ``InvalidPageRequest``; the app maps
    both to a 400 response.
    """
    if args is None:
        args = request.args
    pageable = page_request_from_args(
        args,
        default_size=current_app.config["DEFAULT_PAGE_SIZE"],
        max_size=current_app.config["MAX_PAGE_SIZE"],
    )
    return sort_and_page(items, pageable, column_map)


def page_response(page: Page, serializer: Optional[Callable[[Any], Any]] = None):
    """JSON response for a page."""
    return jsonify(page.to_dict(serializer))


def sort_url(field: str, args: Optional[Mapping] = None) -> str:
    """Query string for a table header link that sorts by *field*.

    Clicking the column that is already the primary ascending sort flips it
    to descending; any other click sorts ascending by that column alone.
    Paging restarts at the first page.
    """
    if args is None:
        args = request.args
    if hasattr(args, "to_dict"):
        params = args.to_dict(flat=True)
        sort_values = args.getlist("sort")
    else:
        params = dict(args)
        raw = params.get("sort")
        sort_values = raw if isinstance(raw, list) else [raw] if raw else []

    order = str(params.get("order", "")).lower()
    default_direction = Direction.DESC if order == "desc" else Direction.ASC
    current = list(parse_sort(sort_values, default_direction))
    direction = "asc"
    if current and current[0].property == field and current[0].is_ascending:
        direction = "desc"

    params.pop("order", None)
    params.pop("offset", None)
    params.pop("page", None)
    params["sort"] = f"{field},{direction}"
    return "?" + urlencode(params)
