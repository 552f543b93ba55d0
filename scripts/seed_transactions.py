import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sqlalchemy.exc import SQLAlchemyError

from salesdash.core.errors import FeedError
from salesdash.core.logging import setup_logging
from salesdash.database import init_schema
from salesdash.services.record_store import open_sql_store
from salesdash.services.seed_service import load_feed_file, reseed


def parse_args():
    parser = argparse.ArgumentParser(
        description="Replace all stored transactions with the contents of the feed."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", default=None, help="Feed URL. Default: FEED_URL setting.")
    source.add_argument("--file", default=None, help="Load from a local JSON file instead.")
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    init_schema()
    try:
        payload = load_feed_file(args.file) if args.file else None
        with open_sql_store() as store:
            inserted = reseed(store, payload=payload, feed_url=args.url)
    except (FeedError, SQLAlchemyError) as exc:
        raise SystemExit(f"Seed failed: {exc}") from exc

    print(f"Seed complete: {inserted} transactions loaded.")


if __name__ == "__main__":
    main()
