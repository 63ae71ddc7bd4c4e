#!/usr/bin/env python3
"""
Sorted Pagination Tool - Main Entry Point.

Usage:
    python main.py page <file.json> [--sort age,asc --sort city] [--page 0 --size 20]
    python main.py page <file.json> [--sort=-age] [--offset 40 --limit 20] [--output page.json]
    python main.py columns <file.json>

<file.json> holds a JSON list of objects; every top-level key is a sortable column.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from config.settings import DEFAULT_PAGE_SIZE, LOG_FORMAT, LOG_LEVEL, MAX_PAGE_SIZE
from paging.columns import infer_column_map
from paging.query import InvalidPageRequest, page_request_from_args
from paging.sort_pagination import UnknownSortColumn, sort_and_page
from web.store import CollectionStore

logger = logging.getLogger(__name__)


# ============================================================
# Commands
# ============================================================

def cmd_page(args):
    """Print one sorted page of a JSON collection."""
    records = CollectionStore.read(args.file)
    query = {
        "sort": args.sort or [],
        "order": args.order,
        "page": args.page,
        "size": args.size,
        "offset": args.offset,
        "limit": args.limit,
    }
    pageable = page_request_from_args(
        {k: v for k, v in query.items() if v is not None},
        default_size=DEFAULT_PAGE_SIZE,
        max_size=MAX_PAGE_SIZE,
    )
    page = sort_and_page(records, pageable, infer_column_map(records))
    output = json.dumps(page.to_dict(), indent=2, default=str)

    if args.output:
        Path(args.output).write_text(output)
        print(f"Page {page.number + 1}/{page.total_pages} saved to: {args.output}")
    else:
        print(output)


def cmd_columns(args):
    """List the sortable columns of a JSON collection."""
    records = CollectionStore.read(args.file)
    columns = sorted(infer_column_map(records))
    if not columns:
        print("No columns found.")
        return
    for name in columns:
        print(f"  {name}")
    print(f"\n{len(columns)} column(s), {len(records)} record(s)")


# ============================================================
# Parser
# ============================================================

def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Sort and paginate JSON collections by named columns"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    pg = subparsers.add_parser("page", help="Print one sorted page")
    pg.add_argument("file", help="JSON file with a list of objects")
    pg.add_argument(
        "--sort", action="append",
        help="Sort directive: column, column,asc|desc, or --sort=-column for descending (repeatable)",
    )
    pg.add_argument("--order", choices=["asc", "desc"], help="Default direction")
    pg.add_argument("--page", help="0-based page number")
    pg.add_argument("--size", help="Page size")
    pg.add_argument("--offset", help="Elements to skip (overrides --page)")
    pg.add_argument("--limit", help="Maximum elements (overrides --size)")
    pg.add_argument("--output", help="Write the page JSON to a file")
    pg.set_defaults(func=cmd_page)

    cl = subparsers.add_parser("columns", help="List sortable columns")
    cl.add_argument("file", help="JSON file with a list of objects")
    cl.set_defaults(func=cmd_columns)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    if not args.command:
        parser.print_help()
        return 1

    try:
        args.func(args)
    except (UnknownSortColumn, InvalidPageRequest) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except TypeError:
        print("Error: values in the requested sort columns cannot be compared", file=sys.stderr)
        return 2
    except (OSError, ValueError) as exc:
        logger.error("Cannot read %s: %s", args.file, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
