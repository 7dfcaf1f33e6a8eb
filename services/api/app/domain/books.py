from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from app.domain.errors import InvalidRecord
from pydantic import BaseModel, ConfigDict

UNKNOWN_AUTHOR = "Unknown"

MIN_PUBLISHED_YEAR = 1000
MAX_PUBLISHED_YEAR = 2100


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookSource(str, Enum):
    local = "local"
    external = "external"


class BookDraft(BaseModel):
    """Caller-editable fields of a book.

    Keys such as ``id``, ``created_at`` or ``source`` are dropped on purpose:
    only the catalog service decides those.
    """

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    title: str = ""
    author: str = ""
    isbn: str | None = None
    published_year: int | None = None
    genre: str | None = None
    description: str | None = None
    cover_url: str | None = None
    is_available: bool = True


class BookRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None

    title: str
    author: str
    isbn: str | None = None
    published_year: int | None = None
    genre: str | None = None
    description: str | None = None
    cover_url: str | None = None

    is_available: bool = True
    created_at: datetime
    source: BookSource = BookSource.local


class CandidateRecord(BaseModel):
    """An unpersisted record found in the external catalog."""

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    title: str = ""
    author: str | None = None
    isbn: str | None = None
    published_year: int | None = None
    genre: str | None = None
    description: str | None = None
    cover_url: str | None = None


def year_in_range(year: int | None) -> bool:
    return year is None or MIN_PUBLISHED_YEAR <= year <= MAX_PUBLISHED_YEAR


def record_errors(record: BookRecord | BookDraft) -> list[str]:
    errors: list[str] = []
    if not (record.title or "").strip():
        errors.append("title is required")
    if not (record.author or "").strip():
        errors.append("author is required")
    if not year_in_range(record.published_year):
        errors.append(
            f"published_year must be between {MIN_PUBLISHED_YEAR} and {MAX_PUBLISHED_YEAR}"
        )
    return errors


def is_valid(record: BookRecord | BookDraft) -> bool:
    return not record_errors(record)


def validate_record(record: BookRecord | BookDraft) -> None:
    errors = record_errors(record)
    if errors:
        raise InvalidRecord(errors)
