import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy import delete, extract, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salesdash.database.session import SessionLocal
from salesdash.models.transaction import Transaction
from salesdash.schemas.transaction import TransactionRecord
from salesdash.services.filters import (
    filter_by_month,
    filter_by_search,
    normalize_search_term,
    paginate,
    price_text,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordQuery:
    month: Optional[int] = None
    search: str = ""
    offset: int = 0
    limit: Optional[int] = None


class RecordStore(ABC):
    @abstractmethod
    def find(self, query: RecordQuery) -> list[TransactionRecord]:
        """Matching records in insertion order, sliced by offset/limit."""

    @abstractmethod
    def count(self, query: RecordQuery) -> int:
        """Number of matching records, ignoring offset/limit."""

    @abstractmethod
    def replace_all(self, records: Iterable[TransactionRecord]) -> int:
        """Swap the whole record set for ``records``; returns the new size."""


class InMemoryRecordStore(RecordStore):
    def __init__(self, records: Iterable[TransactionRecord] = ()):
        self._records = list(records)
        self._lock = threading.Lock()

    def _matching(self, query):
        with self._lock:
            records = list(self._records)
        records = filter_by_month(records, query.month)
        return filter_by_search(records, query.search)

    def find(self, query: RecordQuery) -> list[TransactionRecord]:
        return paginate(self._matching(query), query.offset, query.limit)

    def count(self, query: RecordQuery) -> int:
        return len(self._matching(query))

    def replace_all(self, records: Iterable[TransactionRecord]) -> int:
        new_records = list(records)
        with self._lock:
            self._records = new_records
        return len(new_records)


class SqlRecordStore(RecordStore):
    def __init__(self, db: Session):
        self.db = db

    def _sale_month(self):
        sold_at = Transaction.date_of_sale
        if self.db.get_bind().dialect.name == "postgresql":
            # timestamptz is extracted in the session time zone otherwise.
            sold_at = func.timezone("UTC", sold_at)
        return extract("month", sold_at)

    def _where(self, query: RecordQuery):
        clauses = []
        if query.month is not None:
            clauses.append(self._sale_month() == query.month)
        term = normalize_search_term(query.search)
        if term:
            clauses.append(
                or_(
                    func.lower(Transaction.title).contains(term, autoescape=True),
                    func.lower(Transaction.description).contains(term, autoescape=True),
                    Transaction.price_text.contains(term, autoescape=True),
                )
            )
        return clauses

    def find(self, query: RecordQuery) -> list[TransactionRecord]:
        stmt = (
            select(Transaction)
            .where(*self._where(query))
            .order_by(Transaction.id)
            .offset(query.offset)
        )
        if query.limit is not None:
            stmt = stmt.limit(query.limit)
        rows = self.db.execute(stmt).scalars().all()
        return [TransactionRecord.model_validate(row) for row in rows]

    def count(self, query: RecordQuery) -> int:
        stmt = select(func.count()).select_from(Transaction).where(*self._where(query))
        return int(self.db.execute(stmt).scalar_one())

    def replace_all(self, records: Iterable[TransactionRecord]) -> int:
        rows = [
            Transaction(
                transaction_id=record.transaction_id,
                product_id=record.product_id,
                title=record.title,
                description=record.description,
                category=record.category,
                quantity=record.quantity,
                price=record.price,
                price_text=price_text(record.price),
                date_of_sale=record.date_of_sale,
            )
            for record in records
        ]
        try:
            self.db.execute(delete(Transaction))
            self.db.add_all(rows)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Replacing transactions failed; previous records kept.")
            raise
        return len(rows)


@contextmanager
def open_sql_store(session_factory=SessionLocal):
    db = session_factory()
    try:
        yield SqlRecordStore(db)
    finally:
        db.close()


__all__ = [
    "InMemoryRecordStore",
    "RecordQuery",
    "RecordStore",
    "SqlRecordStore",
    "open_sql_store",
]
