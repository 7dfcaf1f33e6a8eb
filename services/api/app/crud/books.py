from __future__ import annotations

import logging

from app.domain.books import BookRecord
from app.domain.errors import StoreUnavailable
from app.models.book import Book
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

_MUTABLE_COLUMNS = (
    "title",
    "author",
    "isbn",
    "published_year",
    "genre",
    "description",
    "cover_url",
    "is_available",
)

# books.id is a plain INTEGER column: 32-bit on Postgres and MySQL.
_MIN_ID = -(2**31)
_MAX_ID = 2**31 - 1


def _to_record(row: Book) -> BookRecord:
    return BookRecord.model_validate(row)


def _storable_id(book_id: int) -> bool:
    return _MIN_ID <= book_id <= _MAX_ID


class SqlBookStore:
    """BookStore backed by a SQLAlchemy session. One commit per mutation."""

    def __init__(self, db: Session):
        self._db = db

    def list(self) -> list[BookRecord]:
        try:
            rows = self._db.execute(select(Book).order_by(Book.id.asc())).scalars().all()
        except SQLAlchemyError as exc:
            logger.exception("listing books failed")
            raise StoreUnavailable("Could not read books") from exc
        return [_to_record(r) for r in rows]

    def get(self, book_id: int) -> BookRecord | None:
        if not _storable_id(book_id):
            return None
        try:
            row = self._db.get(Book, book_id)
        except SQLAlchemyError as exc:
            logger.exception("reading book failed", extra={"book_id": book_id})
            raise StoreUnavailable("Could not read book") from exc
        return _to_record(row) if row is not None else None

    def insert(self, record: BookRecord) -> BookRecord:
        row = Book(
            **{col: getattr(record, col) for col in _MUTABLE_COLUMNS},
            source=record.source.value,
            created_at=record.created_at,
        )
        try:
            self._db.add(row)
            self._db.commit()
            self._db.refresh(row)
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("inserting book failed")
            raise StoreUnavailable("Could not save book") from exc
        return _to_record(row)

    def replace(self, book_id: int, record: BookRecord) -> BookRecord | None:
        if not _storable_id(book_id):
            return None
        try:
            row = self._db.get(Book, book_id)
            if row is None:
                return None
            for col in _MUTABLE_COLUMNS:
                setattr(row, col, getattr(record, col))
            self._db.commit()
            self._db.refresh(row)
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("updating book failed", extra={"book_id": book_id})
            raise StoreUnavailable("Could not update book") from exc
        return _to_record(row)

    def remove(self, book_id: int) -> bool:
        if not _storable_id(book_id):
            return False
        try:
            row = self._db.get(Book, book_id)
            if row is None:
                return False
            self._db.delete(row)
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("deleting book failed", extra={"book_id": book_id})
            raise StoreUnavailable("Could not delete book") from exc
        return True
