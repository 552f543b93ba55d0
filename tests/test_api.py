import asyncio
import time
import unittest
from contextlib import nullcontext
from datetime import datetime, timezone
from unittest.mock import patch

from fastapi.testclient import TestClient

from salesdash.core.errors import AggregationTimeoutError
from salesdash.dependencies import get_store, get_store_factory
from salesdash.main import app, seed_if_empty
from salesdash.services.record_store import InMemoryRecordStore, RecordStore
from salesdash.services.transaction_service import combined_data
from support import make_record


def _march(day):
    return datetime(2022, 3, day, 9, 0, tzinfo=timezone.utc)


def _records():
    return [
        make_record(1, price=50, quantity=2, date_of_sale=_march(1), category="books", title="Notebook"),
        make_record(2, price=150, quantity=1, date_of_sale=_march(2), category="toys", title="Robot"),
        make_record(3, price=950, quantity=3, date_of_sale=_march(3), category="books", title="Atlas"),
        make_record(
            4,
            price=420,
            quantity=1,
            date_of_sale=datetime(2021, 8, 12, 9, 0, tzinfo=timezone.utc),
            category="garden",
            title="Lawn Mower",
        ),
        make_record(
            5,
            price=80,
            quantity=0,
            date_of_sale=datetime(2021, 8, 20, 9, 0, tzinfo=timezone.utc),
            category="toys",
            title="Robot Kit",
            description="Build your own robot",
        ),
    ]


class BrokenStore(RecordStore):
    def find(self, query):
        raise RuntimeError("store unreachable")

    def count(self, query):
        raise RuntimeError("store unreachable")

    def replace_all(self, records):
        raise RuntimeError("store unreachable")


class SlowStore(InMemoryRecordStore):
    def find(self, query):
        time.sleep(0.5)
        return super().find(query)


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryRecordStore(_records())
        self.use_store(self.store)
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def use_store(self, store):
        app.dependency_overrides[get_store] = lambda: store
        app.dependency_overrides[get_store_factory] = lambda: (lambda: nullcontext(store))


class TransactionsEndpointTest(ApiTestCase):
    def test_defaults(self):
        response = self.client.get("/transactions")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["total"], 5)
        self.assertEqual(body["page"], 1)
        self.assertEqual(body["per_page"], 10)
        self.assertEqual(len(body["transactions"]), 5)
        first = body["transactions"][0]
        self.assertEqual(
            set(first),
            {
                "transaction_id",
                "product_id",
                "title",
                "description",
                "quantity",
                "price",
                "dateOfSale",
                "category",
            },
        )
        self.assertTrue(first["dateOfSale"].startswith("2022-03-01T09:00:00"))

    def test_second_page(self):
        response = self.client.get("/transactions", params={"page": 2, "per_page": 2})
        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertEqual([t["transaction_id"] for t in body["transactions"]], ["3", "4"])
        self.assertEqual(body["total"], 5)
        self.assertEqual(body["page"], 2)
        self.assertEqual(body["per_page"], 2)

    def test_search_and_month(self):
        response = self.client.get("/transactions", params={"search": "robot", "month": "august"})
        body = response.json()
        self.assertEqual([t["transaction_id"] for t in body["transactions"]], ["5"])
        self.assertEqual(body["total"], 1)

    def test_search_by_price(self):
        body = self.client.get("/transactions", params={"search": "950"}).json()
        self.assertEqual([t["transaction_id"] for t in body["transactions"]], ["3"])

    def test_invalid_page(self):
        for params in ({"page": 0}, {"per_page": 0}, {"page": "two"}):
            with self.subTest(params=params):
                response = self.client.get("/transactions", params=params)
                self.assertEqual(response.status_code, 400)
                self.assertIn("error", response.json())

    def test_page_beyond_row_offset_limit(self):
        response = self.client.get("/transactions", params={"page": 10**20})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "page is too large."})

    def test_per_page_capped(self):
        body = self.client.get("/transactions", params={"per_page": 5000}).json()
        self.assertEqual(body["per_page"], 100)


class AnalyticsEndpointTest(ApiTestCase):
    def test_statistics_for_month(self):
        response = self.client.get("/statistics", params={"month": "March"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"totalSalesAmount": 3100, "totalSoldItems": 6, "totalNotSoldItems": -3},
        )

    def test_missing_month_uses_all_records(self):
        body = self.client.get("/statistics").json()
        self.assertEqual(body["totalSoldItems"], 7)
        self.assertEqual(body["totalSoldItems"] + body["totalNotSoldItems"], 5)

    def test_bar_chart(self):
        body = self.client.get("/bar_chart", params={"month": "3"}).json()
        self.assertEqual(len(body), 10)
        self.assertEqual(body["0-100"], 1)
        self.assertEqual(body["101-200"], 1)
        self.assertEqual(body["901-above"], 1)
        self.assertEqual(sum(body.values()), 3)

    def test_pie_chart(self):
        body = self.client.get("/pie_chart", params={"month": "aug"}).json()
        self.assertEqual(body, {"garden": 1, "toys": 1})

    def test_combined_matches_individual_endpoints(self):
        for month in ("March", "august", "", "12"):
            with self.subTest(month=month):
                params = {"month": month}
                combined = self.client.get("/combined_data", params=params)
                self.assertEqual(combined.status_code, 200)
                body = combined.json()
                self.assertEqual(body["statistics"], self.client.get("/statistics", params=params).json())
                self.assertEqual(body["barChart"], self.client.get("/bar_chart", params=params).json())
                self.assertEqual(body["pieChart"], self.client.get("/pie_chart", params=params).json())

    def test_combined_fails_when_one_view_fails(self):
        def failing_category_chart(store, month=None):
            raise RuntimeError("pie chart failed")

        with patch(
            "salesdash.services.transaction_service.category_chart",
            failing_category_chart,
        ):
            response = self.client.get("/combined_data", params={"month": "march"})
            statistics = self.client.get("/statistics", params={"month": "march"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "pie chart failed"})
        self.assertEqual(statistics.status_code, 200)

    def test_invalid_month_is_client_error(self):
        for path in ("/statistics", "/bar_chart", "/pie_chart", "/combined_data", "/transactions"):
            with self.subTest(path=path):
                response = self.client.get(path, params={"month": "Smarch"})
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json(), {"error": "Invalid month: Smarch"})


class StoreFailureTest(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.use_store(BrokenStore())

    def test_store_errors_become_500(self):
        for path in ("/transactions", "/statistics", "/bar_chart", "/pie_chart", "/combined_data"):
            with self.subTest(path=path):
                response = self.client.get(path, params={"month": "march"})
                self.assertEqual(response.status_code, 500)
                self.assertEqual(response.json(), {"error": "store unreachable"})

    def test_init_db_failure(self):
        with patch(
            "salesdash.routers.seed.reseed",
            side_effect=RuntimeError("feed down"),
        ):
            response = self.client.get("/init_db")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "feed down"})


class InitDbEndpointTest(ApiTestCase):
    def test_reseeds_store(self):
        payload = [
            {
                "id": 7,
                "title": "Desk",
                "price": 250,
                "description": "Oak desk",
                "category": "furniture",
                "sold": True,
                "dateOfSale": "2022-06-10T10:00:00Z",
            }
        ]
        with patch(
            "salesdash.services.seed_service.fetch_feed",
            return_value=payload,
        ):
            response = self.client.get("/init_db")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"message": "Database initialized successfully!", "inserted": 1},
        )
        self.assertEqual(self.client.get("/pie_chart").json(), {"furniture": 1})


class HealthEndpointTest(ApiTestCase):
    def test_health_reports_store(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["transactions"], 5)

    def test_unreachable_store(self):
        self.use_store(BrokenStore())
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 503)
        body = response.json()
        self.assertEqual(body["status"], "unavailable")
        self.assertEqual(body["error"], "store unreachable")

    def test_request_id_echoed(self):
        response = self.client.get("/health", headers={"X-Request-ID": "req-42"})
        self.assertEqual(response.headers["X-Request-ID"], "req-42")
        generated = self.client.get("/health").headers["X-Request-ID"]
        self.assertEqual(len(generated), 32)


class CombinedTimeoutTest(unittest.TestCase):
    def test_slow_view_fails_whole_result(self):
        store = SlowStore(_records())
        with self.assertRaises(AggregationTimeoutError):
            asyncio.run(combined_data(lambda: nullcontext(store), "march", timeout=0.05))


class StartupSeedTest(unittest.TestCase):
    def test_seeds_empty_store(self):
        store = InMemoryRecordStore()
        with patch("salesdash.main.open_sql_store", return_value=nullcontext(store)), patch(
            "salesdash.main.reseed", return_value=3
        ) as reseed:
            self.assertEqual(seed_if_empty(), 3)
        reseed.assert_called_once_with(store)

    def test_skips_loaded_store(self):
        store = InMemoryRecordStore(_records())
        with patch("salesdash.main.open_sql_store", return_value=nullcontext(store)), patch(
            "salesdash.main.reseed"
        ) as reseed:
            self.assertEqual(seed_if_empty(), 0)
        reseed.assert_not_called()


if __name__ == "__main__":
    unittest.main()
