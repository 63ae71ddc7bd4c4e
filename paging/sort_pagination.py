"""
Dynamic multi-column sorting and pagination of in-memory collections.

A listing endpoint receives an ordered list of sort directives (column name
plus direction) and a page request. The columns are resolved against a
caller-supplied column map, which maps each public column name to a key
function for the record type, and the dataset is sorted and sliced:

    column_map = {
        "name": lambda p: p.name,
        "age": lambda p: p.age,
        "city": lambda p: p.address.city,
    }
    pageable = PageRequest.of(0, 3, Sort.by(Order.asc("age"), Order.asc("city")))

    sort_orders = create_sort_pagination(extract_sort_params(pageable), column_map)
    page = sort_and_page_data(people, sort_orders, pageable)

The first directive is the primary key and each later one only breaks ties
left by the earlier ones. Sorting is stable, so records tied on every key
keep their original relative order.
"""

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar, Union

from paging.page import Order, Page, PageRequest, Sort

logger = logging.getLogger(__name__)

T = TypeVar("T")
KeyExtractor = Callable[[T], Any]
ColumnMap = Mapping[str, KeyExtractor]
Comparator = Callable[[T, T], int]


class UnknownSortColumn(ValueError):
    """Raised when a sort directive names a column missing from the column map."""

    def __init__(self, column: str, available_columns: Iterable[str]):
        self.column = column
        self.available_columns = sorted(available_columns)
        super().__init__(
            f"Invalid sorting column name: {column}. "
            f"Available columns: {self.available_columns}"
        )


@dataclass(frozen=True)
class SortParam:
    """A requested sort column and its direction."""

    field: str
    ascending: bool = True


class SortPagination(Generic[T]):
    """One resolved sort step: a key function and a direction."""

    def __init__(self, key_extractor: KeyExtractor, ascending: bool = True):
        self.key_extractor = key_extractor
        self.ascending = ascending

    def compare(self, a: T, b: T) -> int:
        """Three-way compare two records on this step's key."""
        key_a = self.key_extractor(a)
        key_b = self.key_extractor(b)
        if key_a < key_b:
            result = -1
        elif key_b < key_a:
            result = 1
        else:
            result = 0
        return result if self.ascending else -result

    @property
    def comparator(self) -> Comparator:
        return self.compare

    def __repr__(self):
        direction = "asc" if self.ascending else "desc"
        return f"SortPagination({self.key_extractor!r}, {direction})"


def extract_sort_params(
    source: Union[PageRequest, Sort, Iterable[Union[Order, tuple[str, bool]]]],
) -> list[SortParam]:
    """Turn external sort directives into SortParams, keeping their order.

    *source* may be a PageRequest, a Sort, or any iterable of Order objects
    or ``(field, ascending)`` pairs. Column names are not validated here.
    """
    if isinstance(source, PageRequest):
        source = source.sort

    params = []
    for directive in source:
        if isinstance(directive, Order):
            params.append(SortParam(directive.property, directive.is_ascending))
        else:
            name, ascending = directive
            params.append(SortParam(name, bool(ascending)))
    return params


def create_sort_pagination(
    sort_params: Iterable[SortParam],
    column_map: ColumnMap,
) -> list[SortPagination]:
    """Resolve each SortParam to a sort step via *column_map*.

    Raises UnknownSortColumn for the first column the map does not know.
    Nothing is returned unless every column resolves.
    """
    sort_orders = []
    for param in sort_params:
        key_extractor = column_map.get(param.field)
        if key_extractor is None:
            raise UnknownSortColumn(param.field, column_map.keys())
        sort_orders.append(SortPagination(key_extractor, param.ascending))
    return sort_orders


def composite_comparator(sort_orders: Iterable[SortPagination]) -> Comparator:
    """Chain sort steps into one comparator, earlier steps first.

    With no steps every pair compares equal.
    """
    comparators = [order.comparator for order in sort_orders]

    def compare(a, b) -> int:
        for comparator in comparators:
            result = comparator(a, b)
            if result != 0:
                return result
        return 0

    return compare


def sort_and_page_data(
    data: Iterable[T],
    sort_orders: Iterable[SortPagination],
    pageable: PageRequest,
) -> Page[T]:
    """Sort a copy of *data* and cut out the page *pageable* asks for.

    ``total_elements`` on the result is always the size of the full dataset.
    """
    items = list(data)
    comparator = composite_comparator(sort_orders)
    ordered = sorted(items, key=cmp_to_key(comparator))

    start = pageable.offset
    content = ordered[start:start + pageable.limit]
    return Page(content, pageable, len(items))


def sort_and_page(
    data: Iterable[T],
    pageable: PageRequest,
    column_map: ColumnMap,
) -> Page[T]:
    """Resolve *pageable*'s sort against *column_map*, then sort and page."""
    sort_params = extract_sort_params(pageable)
    sort_orders = create_sort_pagination(sort_params, column_map)
    logger.debug(
        "Sorting by %s, offset %d, limit %d",
        [f"{p.field},{'asc' if p.ascending else 'desc'}" for p in sort_params],
        pageable.offset,
        pageable.limit,
    )
    return sort_and_page_data(data, sort_orders, pageable)
