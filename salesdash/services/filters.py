"""Record predicates shared by the in-memory store and the query services."""

from salesdash.core.dates import month_of


def price_text(price):
    if price is None:
        return ""
    return str(float(price))


def normalize_search_term(term):
    if term is None:
        return ""
    return str(term).strip().lower()


def matches_month(record, month):
    if month is None:
        return True
    return month_of(record.date_of_sale) == month


def matches_search(record, term):
    term = normalize_search_term(term)
    if not term:
        return True
    return (
        term in (record.title or "").lower()
        or term in (record.description or "").lower()
        or term in price_text(record.price)
    )


def filter_by_month(records, month):
    return [record for record in records if matches_month(record, month)]


def filter_by_search(records, term):
    return [record for record in records if matches_search(record, term)]


def paginate(records, offset=0, limit=None):
    if limit is None:
        return list(records[offset:])
    return list(records[offset:offset + limit])


def page_offset(page, per_page):
    return (page - 1) * per_page


__all__ = [
    "filter_by_month",
    "filter_by_search",
    "matches_month",
    "matches_search",
    "normalize_search_term",
    "page_offset",
    "paginate",
    "price_text",
]
