import unittest
from datetime import datetime, timezone

from salesdash.services.filters import (
    filter_by_month,
    filter_by_search,
    page_offset,
    paginate,
)
from support import make_record


def _sold_on(year, month):
    return datetime(year, month, 10, 8, 0, tzinfo=timezone.utc)


class MonthFilterTest(unittest.TestCase):
    def setUp(self):
        self.records = [
            make_record(1, date_of_sale=_sold_on(2021, 3)),
            make_record(2, date_of_sale=_sold_on(2022, 3)),
            make_record(3, date_of_sale=_sold_on(2022, 4)),
            make_record(4, date_of_sale=_sold_on(2021, 12)),
        ]

    def test_matches_month_across_years(self):
        march = filter_by_month(self.records, 3)
        self.assertEqual([r.transaction_id for r in march], ["1", "2"])

    def test_no_month_keeps_everything(self):
        self.assertEqual(filter_by_month(self.records, None), self.records)

    def test_idempotent(self):
        once = filter_by_month(self.records, 12)
        self.assertEqual(filter_by_month(once, 12), once)


class SearchFilterTest(unittest.TestCase):
    def setUp(self):
        self.records = [
            make_record(1, title="Mens Cotton Jacket", description="great outerwear", price=55.99),
            make_record(2, title="Solid Gold Ring", description="Petite Micropave", price=168.0),
            make_record(3, title="Backpack", description="Fits 15 inch laptops", price=109.95),
        ]

    def _ids(self, term):
        return [r.transaction_id for r in filter_by_search(self.records, term)]

    def test_title_case_insensitive(self):
        self.assertEqual(self._ids("JACKET"), ["1"])

    def test_description(self):
        self.assertEqual(self._ids("micropave"), ["2"])

    def test_price_text(self):
        self.assertEqual(self._ids("109.9"), ["3"])
        self.assertEqual(self._ids("168"), ["2"])

    def test_empty_term_matches_all(self):
        self.assertEqual(self._ids(""), ["1", "2", "3"])
        self.assertEqual(self._ids("  "), ["1", "2", "3"])
        self.assertEqual(self._ids(None), ["1", "2", "3"])

    def test_no_match(self):
        self.assertEqual(self._ids("keyboard"), [])


class PaginationTest(unittest.TestCase):
    def test_second_page(self):
        records = list(range(5))
        self.assertEqual(paginate(records, page_offset(2, 2), 2), [2, 3])
        self.assertEqual(paginate(records, page_offset(3, 2), 2), [4])
        self.assertEqual(paginate(records, page_offset(4, 2), 2), [])

    def test_without_limit(self):
        self.assertEqual(paginate([1, 2, 3], 1), [2, 3])


if __name__ == "__main__":
    unittest.main()
