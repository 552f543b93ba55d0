from datetime import date, datetime, timezone

from salesdash.core.constants import MONTH_NAMES
from salesdash.core.errors import InvalidQueryError

_MIN_MONTH_PREFIX = 3


def normalize_month(value):
    """Resolve a month selector to a calendar month number.

    Accepts a month name or a prefix of at least three letters (``"March"``,
    ``"mar"``) in any case, or a number from 1 to 12 (``"3"``, ``"03"``).
    Returns ``None`` for a missing or blank selector, which callers treat as
    "every month".
    """
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        month_number = value
    else:
        value_text = str(value).strip().lower()
        if not value_text:
            return None
        if value_text.isdecimal():
            month_number = int(value_text)
        else:
            if len(value_text) < _MIN_MONTH_PREFIX:
                raise InvalidQueryError("Invalid month: {}".format(value))
            for index, name in enumerate(MONTH_NAMES, start=1):
                if name.startswith(value_text):
                    return index
            raise InvalidQueryError("Invalid month: {}".format(value))

    if month_number < 1 or month_number > 12:
        raise InvalidQueryError("Invalid month: {}".format(value))
    return month_number


def normalize_datetime(value):
    """Coerce a sale date into a timezone-aware UTC datetime.

    Naive values are taken to be UTC already.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        if value_text.endswith(("Z", "z")):
            value_text = value_text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(value_text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def month_of(value):
    normalized = normalize_datetime(value)
    if normalized is None:
        return None
    return normalized.month


__all__ = ["month_of", "normalize_datetime", "normalize_month"]
