"""Build page requests from query-string arguments.

Supported parameters::

    ?sort=age,asc&sort=city&page=0&size=20
    ?sort=-age&offset=40&limit=20
    ?sort=name&order=desc            (single column, legacy form)

``sort`` may repeat. A value is ``column``, ``column,dir`` or a comma list
``a,b,dir`` where the trailing direction applies to every listed column.
A leading ``-`` on a column without an explicit direction means descending.
"""

from collections.abc import Mapping
from typing import Iterable, Optional

from paging.page import Direction, Order, PageRequest, Sort


class InvalidPageRequest(ValueError):
    """Raised when a paging or sorting parameter cannot be parsed."""

    def __init__(self, parameter: str, message: str):
        self.parameter = parameter
        super().__init__(message)


def _parse_sort_value(value: str, default_direction: Direction) -> list[Order]:
    tokens = [t.strip() for t in value.split(",") if t.strip()]
    if not tokens:
        return []

    direction = None
    if len(tokens) > 1 and tokens[-1].lower() in ("asc", "desc"):
        direction = Direction.from_string(tokens.pop())

    orders = []
    for token in tokens:
        if direction is None and token.startswith("-") and len(token) > 1:
            orders.append(Order(token[1:], Direction.DESC))
        else:
            orders.append(Order(token, direction or default_direction))
    return orders


def parse_sort(
    values: Iterable[str],
    default_direction: Direction = Direction.ASC,
) -> Sort:
    """Parse repeated ``sort`` values into a Sort, keeping their order."""
    orders: list[Order] = []
    for value in values:
        if value is None:
            continue
        orders.extend(_parse_sort_value(value, default_direction))
    return Sort(tuple(orders))


def _getlist(args: Mapping, key: str) -> list[str]:
    if hasattr(args, "getlist"):
        return args.getlist(key)
    value = args.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _int_arg(args: Mapping, key: str, minimum: int = 0) -> Optional[int]:
    raw = args.get(key)
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise InvalidPageRequest(key, f"Invalid {key}: {raw!r} is not an integer") from None
    if value < minimum:
        raise InvalidPageRequest(key, f"Invalid {key}: must be >= {minimum}, got {value}")
    return value


def page_request_from_args(
    args: Mapping,
    default_size: int = 20,
    max_size: int = 1000,
) -> PageRequest:
    """Build a PageRequest from request arguments.

    Args:
        args: Query arguments; a werkzeug MultiDict or a plain dict whose
            ``sort`` value may be a string or a list of strings.
        default_size: Page size used when neither ``size`` nor ``limit`` is given.
        max_size: Upper bound for the page size; larger values are clamped.

    Raises:
        InvalidPageRequest: a parameter is not a non-negative integer or
            ``order`` is not a sort direction.
    """
    sort_values = _getlist(args, "sort")
    order = args.get("order")
    try:
        if order:
            default_direction = Direction.from_string(order)
        else:
            default_direction = Direction.ASC
    except ValueError as exc:
        raise InvalidPageRequest("order", str(exc)) from None

    sort = parse_sort(sort_values, default_direction)

    offset = _int_arg(args, "offset")
    limit = _int_arg(args, "limit")
    page = _int_arg(args, "page")
    size = _int_arg(args, "size")

    if limit is None:
        limit = size if size is not None else default_size
    limit = min(limit, max_size)

    if offset is None:
        offset = (page or 0) * limit

    return PageRequest(offset, limit, sort)
