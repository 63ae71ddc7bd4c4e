"""Tests for the list endpoint sort/page helpers."""

import unittest
from urllib.parse import parse_qs

from web import create_app
from web.listing import page_from_request, sort_url
from paging.sort_pagination import UnknownSortColumn

ROWS = [{"n": "b", "v": 2}, {"n": "a", "v": 3}, {"n": "c", "v": 1}]
COLUMNS = {"n": lambda r: r["n"], "v": lambda r: r["v"]}


class TestPageFromRequest(unittest.TestCase):

    def setUp(self):
        self.app = create_app({"TESTING": True, "DEFAULT_PAGE_SIZE": 2})

    def test_reads_request_args(self):
        with self.app.test_request_context("/?sort=v,desc&page=0"):
            page = page_from_request(ROWS, COLUMNS)
        self.assertEqual([r["n"] for r in page.content], ["a", "b"])
        self.assertEqual(page.total_elements, 3)

    def test_explicit_args(self):
        with self.app.test_request_context("/"):
            page = page_from_request(ROWS, COLUMNS, {"sort": "n", "page": "1"})
        self.assertEqual([r["n"] for r in page.content], ["c"])

    def test_unknown_column(self):
        with self.app.test_request_context("/?sort=zzz"):
            with self.assertRaises(UnknownSortColumn):
                page_from_request(ROWS, COLUMNS)


class TestSortUrl(unittest.TestCase):

    def setUp(self):
        self.app = create_app({"TESTING": True})

    def _query(self, url):
        self.assertTrue(url.startswith("?"))
        return parse_qs(url[1:])

    def test_first_click_sorts_ascending(self):
        with self.app.test_request_context("/?q=x&page=3"):
            query = self._query(sort_url("name"))
        self.assertEqual(query, {"q": ["x"], "sort": ["name,asc"]})

    def test_second_click_flips_to_descending(self):
        with self.app.test_request_context("/?sort=name,asc&sort=age"):
            query = self._query(sort_url("name"))
        self.assertEqual(query["sort"], ["name,desc"])

    def test_descending_flips_back(self):
        query = self._query(sort_url("name", {"sort": "name", "order": "desc"}))
        self.assertEqual(query, {"sort": ["name,asc"]})

    def test_other_column_resets(self):
        query = self._query(sort_url("age", {"sort": "name,asc", "offset": "40"}))
        self.assertEqual(query, {"sort": ["age,asc"]})


if __name__ == "__main__":
    unittest.main()
