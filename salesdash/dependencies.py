from fastapi import Depends
from sqlalchemy.orm import Session

from salesdash.database.session import get_db
from salesdash.services.record_store import RecordStore, SqlRecordStore, open_sql_store


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return SqlRecordStore(db)


def get_store_factory():
    return open_sql_store


__all__ = ["get_db", "get_store", "get_store_factory"]
