import json
import logging
from pathlib import Path
from urllib import error, request
from urllib.parse import urlparse

from pydantic import ValidationError

from salesdash.config import get_settings
from salesdash.core.errors import FeedError
from salesdash.schemas.transaction import TransactionRecord

logger = logging.getLogger(__name__)

_ALLOWED_HTTP_SCHEMES = {"http", "https"}


def validate_feed_url(feed_url):
    parsed = urlparse(feed_url or "")
    scheme = parsed.scheme.lower()
    if scheme not in _ALLOWED_HTTP_SCHEMES or not parsed.netloc:
        raise FeedError("FEED_URL must be an absolute HTTP(S) URL")
    return feed_url


def fetch_feed(feed_url=None, timeout=None):
    settings = get_settings()
    feed_url = validate_feed_url((feed_url or settings.FEED_URL).strip())
    if timeout is None:
        timeout = settings.FEED_TIMEOUT_SECONDS

    req = request.Request(feed_url, method="GET", headers={"Accept": "application/json"})
    try:
        with request.urlopen(req, timeout=timeout) as response:  # nosec B310
            status_code = response.getcode()
            if status_code < 200 or status_code >= 300:
                raise FeedError("Transaction feed error: HTTP {}".format(status_code))
            body = response.read()
    except error.HTTPError as exc:
        raise FeedError("Transaction feed error: HTTP {}".format(exc.code)) from exc
    except error.URLError as exc:
        raise FeedError("Transaction feed error: {}".format(exc.reason)) from exc

    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise FeedError("Transaction feed returned invalid JSON") from exc


def load_feed_file(path):
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise FeedError("Unable to read transaction file {}: {}".format(path, exc)) from exc


def parse_records(payload):
    if not isinstance(payload, list):
        raise FeedError("Transaction feed must be a JSON array")
    records = []
    for index, item in enumerate(payload):
        try:
            records.append(TransactionRecord.model_validate(item))
        except ValidationError as exc:
            raise FeedError(
                "Invalid transaction at position {}: {}".format(index, exc.errors()[0]["msg"])
            ) from exc
    return records


def reseed(store, payload=None, feed_url=None):
    """Replace every stored transaction with the feed contents."""
    source = "supplied payload"
    if payload is None:
        source = feed_url or get_settings().FEED_URL
        payload = fetch_feed(feed_url)
    records = parse_records(payload)
    inserted = store.replace_all(records)
    logger.info("Transaction store reseeded with %s records from %s.", inserted, source)
    return inserted


__all__ = ["fetch_feed", "load_feed_file", "parse_records", "reseed", "validate_feed_url"]
