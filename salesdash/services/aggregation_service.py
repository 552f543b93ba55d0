import math
from collections import Counter

from salesdash.core.constants import PRICE_BUCKETS


def compute_statistics(records):
    """Sales totals for an already month-filtered record set.

    ``totalNotSoldItems`` is the record count minus the summed quantity, kept
    exactly as the dashboard has always reported it. It goes negative once
    quantities exceed one per record.
    """
    records = list(records)
    total_sales_amount = math.fsum(record.price * record.quantity for record in records)
    total_sold_items = sum(record.quantity for record in records)
    return {
        "totalSalesAmount": total_sales_amount,
        "totalSoldItems": total_sold_items,
        "totalNotSoldItems": len(records) - total_sold_items,
    }


def price_bucket(price):
    for label, upper in PRICE_BUCKETS:
        if upper is not None and price <= upper:
            return label
    return PRICE_BUCKETS[-1][0]


def compute_price_histogram(records):
    histogram = {label: 0 for label, _upper in PRICE_BUCKETS}
    for record in records:
        histogram[price_bucket(record.price)] += 1
    return histogram


def compute_category_counts(records):
    counts = Counter(record.category for record in records)
    return {category: counts[category] for category in sorted(counts)}


__all__ = [
    "compute_category_counts",
    "compute_price_histogram",
    "compute_statistics",
    "price_bucket",
]
