"""Page request and page result types for sorted listings."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar, Union

T = TypeVar("T")


class Direction(str, Enum):
    """Sort direction for a single column."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_string(cls, value: str) -> "Direction":
        """Parse ``asc``/``desc`` in any case."""
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            raise ValueError(
                f"Invalid sort direction: {value!r}. Use 'asc' or 'desc'."
            ) from None


@dataclass(frozen=True)
class Order:
    """One sort directive: a column name plus a direction."""

    property: str
    direction: Direction = Direction.ASC

    @staticmethod
    def asc(prop: str) -> "Order":
        return Order(prop, Direction.ASC)

    @staticmethod
    def desc(prop: str) -> "Order":
        return Order(prop, Direction.DESC)

    @property
    def is_ascending(self) -> bool:
        return self.direction == Direction.ASC

    def __str__(self):
        return f"{self.property},{self.direction.value}"


@dataclass(frozen=True)
class Sort:
    """Ordered collection of sort directives. Earlier orders take precedence."""

    orders: tuple[Order, ...] = ()

    @staticmethod
    def by(*orders: Union[Order, str]) -> "Sort":
        """Build a sort from orders or plain column names (ascending)."""
        return Sort(tuple(o if isinstance(o, Order) else Order.asc(o) for o in orders))

    @staticmethod
    def unsorted() -> "Sort":
        return Sort()

    def and_then(self, other: "Sort") -> "Sort":
        return Sort(self.orders + tuple(other))

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(self.orders)

    def __len__(self):
        return len(self.orders)

    def to_list(self) -> list[str]:
        return [str(o) for o in self.orders]


@dataclass(frozen=True)
class PageRequest:
    """Which slice of a sorted dataset to return, and how to sort it.

    ``offset`` is the number of leading elements to skip and ``limit`` the
    maximum number of elements to return. A limit of zero is allowed and
    always yields an empty page.
    """

    offset: int = 0
    limit: int = 20
    sort: Sort = field(default_factory=Sort)

    def __post_init__(self):
        if self.offset < 0:
            raise ValueError(f"Page offset must not be negative, got {self.offset}")
        if self.limit < 0:
            raise ValueError(f"Page size must not be negative, got {self.limit}")

    @staticmethod
    def of(page: int, size: int, sort: Optional[Sort] = None) -> "PageRequest":
        """Build a request from a 0-based page number and a page size."""
        if page < 0:
            raise ValueError(f"Page index must not be negative, got {page}")
        if size < 0:
            raise ValueError(f"Page size must not be negative, got {size}")
        return PageRequest(page * size, size, sort or Sort())

    @staticmethod
    def of_size(size: int) -> "PageRequest":
        return PageRequest.of(0, size)

    @property
    def page_number(self) -> int:
        if self.limit == 0:
            return 0
        return self.offset // self.limit

    def with_page(self, page: int) -> "PageRequest":
        return PageRequest.of(page, self.limit, self.sort)

    def with_sort(self, sort: Sort) -> "PageRequest":
        return PageRequest(self.offset, self.limit, sort)

    def next(self) -> "PageRequest":
        return PageRequest(self.offset + self.limit, self.limit, self.sort)

    def previous_or_first(self) -> "PageRequest":
        return PageRequest(max(0, self.offset - self.limit), self.limit, self.sort)

    def first(self) -> "PageRequest":
        return PageRequest(0, self.limit, self.sort)


@dataclass
class Page(Generic[T]):
    """One page of a sorted dataset plus the size of the whole dataset.

    ``number`` and ``is_first`` follow the page number, offset // limit.
    ``has_previous`` and ``has_next`` follow the actual slice, so an offset
    that is not a multiple of the limit (offset 1, limit 2) is page 0 and
    first, yet still has a previous element.
    """

    content: list[T]
    pageable: PageRequest
    total_elements: int

    @property
    def number(self) -> int:
        return self.pageable.page_number

    @property
    def size(self) -> int:
        return self.pageable.limit

    @property
    def offset(self) -> int:
        return self.pageable.offset

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def total_pages(self) -> int:
        if self.size == 0:
            return 1
        return math.ceil(self.total_elements / self.size)

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    @property
    def has_previous(self) -> bool:
        return self.offset > 0

    @property
    def has_next(self) -> bool:
        return self.size > 0 and self.offset + self.size < self.total_elements

    @property
    def is_first(self) -> bool:
        return self.number == 0

    @property
    def is_last(self) -> bool:
        return not self.has_next

    def __iter__(self) -> Iterator[T]:
        return iter(self.content)

    def __len__(self):
        return len(self.content)

    def map(self, func: Callable[[T], Any]) -> "Page":
        """Return a page with *func* applied to every element."""
        return Page([func(item) for item in self.content], self.pageable, self.total_elements)

    def to_dict(self, serializer: Optional[Callable[[T], Any]] = None) -> dict:
        """Serialize for a JSON response."""
        items: Iterable = self.content
        if serializer is not None:
            items = (serializer(item) for item in items)
        return {
            "content": list(items),
            "page": self.number,
            "size": self.size,
            "offset": self.offset,
            "number_of_elements": self.number_of_elements,
            "total_elements": self.total_elements,
            "total_pages": self.total_pages,
            "is_first": self.is_first,
            "is_last": self.is_last,
            "sort": self.pageable.sort.to_list(),
        }
