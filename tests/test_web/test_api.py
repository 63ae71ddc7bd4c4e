"""Tests for the REST API v1 collection endpoints."""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from web import create_app

PEOPLE = [
    {"name": "Charlie", "age": 30, "city": "New York", "country": "USA"},
    {"name": "Alice", "age": 25, "city": "Paris", "country": "France"},
    {"name": "Bob", "age": 20, "city": "Los Angeles", "country": "USA"},
    {"name": "David", "age": 35, "city": "Los Angeles", "country": "USA"},
    {"name": "Eva", "age": 28, "city": "Paris", "country": "France"},
]


class APITestCase(unittest.TestCase):

    def setUp(self):
        self.data_dir = tempfile.mkdtemp(prefix="sorted_pagination_")
        Path(self.data_dir, "people.json").write_text(json.dumps(PEOPLE))
        Path(self.data_dir, "mixed.json").write_text(json.dumps([{"v": 1}, {"v": "one"}]))
        Path(self.data_dir, "broken.json").write_text(json.dumps({"not": "a list"}))
        self.app = create_app({"TESTING": True, "DATA_DIR": self.data_dir})
        self.client = self.app.test_client()

    def tearDown(self):
        shutil.rmtree(self.data_dir, ignore_errors=True)

    def names(self, response):
        return [r["name"] for r in response.get_json()["content"]]


class TestAPICollections(APITestCase):

    def test_list_collections(self):
        response = self.client.get("/api/v1/collections")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["collections"], ["broken", "mixed", "people"])

    def test_collection_not_found(self):
        response = self.client.get("/api/v1/collections/nonexistent")
        self.assertEqual(response.status_code, 404)
        self.assertIn("error", response.get_json())

    def test_columns(self):
        response = self.client.get("/api/v1/collections/people/columns")
        self.assertEqual(response.status_code, 200)
        columns = response.get_json()["columns"]
        self.assertEqual([c["name"] for c in columns], ["age", "city", "country", "name"])
        self.assertEqual(columns[0]["sort_url"], "?sort=age%2Casc")

    def test_columns_not_found(self):
        response = self.client.get("/api/v1/collections/nonexistent/columns")
        self.assertEqual(response.status_code, 404)


class TestAPISortedPages(APITestCase):

    def test_sorted_first_page(self):
        response = self.client.get(
            "/api/v1/collections/people?sort=age,asc&sort=city,asc&page=0&size=3"
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content_type, "application/json")
        data = response.get_json()
        self.assertEqual(self.names(response), ["Bob", "Alice", "Eva"])
        self.assertEqual(data["total_elements"], 5)
        self.assertEqual(data["total_pages"], 2)
        self.assertEqual(data["sort"], ["age,asc", "city,asc"])

    def test_descending_and_offset(self):
        response = self.client.get("/api/v1/collections/people?sort=-age&offset=1&limit=2")
        self.assertEqual(self.names(response), ["Charlie", "Eva"])

    def test_unsorted_keeps_file_order(self):
        response = self.client.get("/api/v1/collections/people")
        self.assertEqual(self.names(response), [p["name"] for p in PEOPLE])
        self.assertEqual(response.get_json()["size"], 20)

    def test_offset_past_end(self):
        response = self.client.get("/api/v1/collections/people?offset=10&limit=3")
        data = response.get_json()
        self.assertEqual(data["content"], [])
        self.assertEqual(data["total_elements"], 5)

    def test_unknown_sort_column(self):
        response = self.client.get("/api/v1/collections/people?sort=salary")
        self.assertEqual(response.status_code, 400)
        data = response.get_json()
        self.assertEqual(data["column"], "salary")
        self.assertEqual(data["available_columns"], ["age", "city", "country", "name"])
        self.assertIn("salary", data["error"])

    def test_invalid_page_parameter(self):
        response = self.client.get("/api/v1/collections/people?page=-1")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["parameter"], "page")

    def test_size_clamped_to_max(self):
        self.app.config["MAX_PAGE_SIZE"] = 2
        response = self.client.get("/api/v1/collections/people?size=50")
        self.assertEqual(len(response.get_json()["content"]), 2)

    def test_incomparable_values(self):
        response = self.client.get("/api/v1/collections/mixed?sort=v")
        self.assertEqual(response.status_code, 400)

    def test_nan_collection_rejected(self):
        Path(self.data_dir, "nan.json").write_text('[{"v": 3}, {"v": NaN}, {"v": 1}]')
        response = self.client.get("/api/v1/collections/nan?sort=v")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json()["error"], "Internal server error")

    def test_malformed_collection(self):
        response = self.client.get("/api/v1/collections/broken")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json()["error"], "Internal server error")


if __name__ == "__main__":
    unittest.main()
