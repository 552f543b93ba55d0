MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

# (label, inclusive upper bound); the last bucket is open-ended.
PRICE_BUCKETS = (
    ("0-100", 100),
    ("101-200", 200),
    ("201-300", 300),
    ("301-400", 400),
    ("401-500", 500),
    ("501-600", 600),
    ("601-700", 700),
    ("701-800", 800),
    ("801-900", 900),
    ("901-above", None),
)

DEFAULT_PAGE = 1

# Largest row offset the SQL backends accept (signed 64-bit).
MAX_ROW_OFFSET = 2**63 - 1
