"""
Sorted Pagination Module.

Sorts an in-memory collection by one or more named columns and returns a
single page of it along with the total element count.

Features:
- Column names resolved through a caller-supplied column map
- Multi-column ordering with per-column direction and stable tie-breaks
- Offset/limit and page/size requests, parsed from query arguments
- Helpers for nested fields, case-insensitive text and missing values
"""

from paging.page import Direction, Order, Page, PageRequest, Sort
from paging.sort_pagination import (
    SortParam,
    SortPagination,
    UnknownSortColumn,
    composite_comparator,
    create_sort_pagination,
    extract_sort_params,
    sort_and_page,
    sort_and_page_data,
)
from paging.query import InvalidPageRequest, page_request_from_args, parse_sort

__all__ = [
    "Direction",
    "InvalidPageRequest",
    "Order",
    "Page",
    "PageRequest",
    "Sort",
    "SortParam",
    "SortPagination",
    "UnknownSortColumn",
    "composite_comparator",
    "create_sort_pagination",
    "extract_sort_params",
    "page_request_from_args",
    "parse_sort",
    "sort_and_page",
    "sort_and_page_data",
]
