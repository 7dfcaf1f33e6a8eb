from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from app.crud.store import BookStore
from app.domain.books import (
    UNKNOWN_AUTHOR,
    BookDraft,
    BookRecord,
    BookSource,
    CandidateRecord,
    utcnow,
    validate_record,
)
from app.domain.errors import InvalidRecord, ProviderUnavailable
from app.services.catalog.provider import CatalogProvider

logger = logging.getLogger(__name__)

DISCOVER_LIMIT_MIN = 1
DISCOVER_LIMIT_MAX = 20


def clamp_limit(limit: int) -> int:
    return max(DISCOVER_LIMIT_MIN, min(DISCOVER_LIMIT_MAX, limit))


def _by_title(records: list[BookRecord]) -> list[BookRecord]:
    # sorted() is stable: equal titles keep the store's order.
    return sorted(records, key=lambda r: r.title)


def _matches(record: BookRecord, query: str) -> bool:
    q = query.casefold()
    for text in (record.title, record.author, record.genre):
        if text and q in text.casefold():
            return True
    # ISBNs carry no case, compare verbatim
    return bool(record.isbn) and query in record.isbn


class CatalogService:
    """Business rules for the personal catalog.

    Holds no state between calls: every operation goes to the store (or to the
    external provider for discovery).
    """

    def __init__(
        self,
        store: BookStore,
        provider: CatalogProvider,
        *,
        now: Callable[[], datetime] = utcnow,
    ):
        self._store = store
        self._provider = provider
        self._now = now

    # -- local catalog ---------------------------------------------------

    def get_all(self) -> list[BookRecord]:
        return _by_title(self._store.list())

    def get_by_id(self, book_id: int) -> BookRecord | None:
        return self._store.get(book_id)

    def search(self, query: str | None) -> list[BookRecord]:
        """Match title/author/genre case-insensitively, isbn verbatim.

        A blank query returns the whole catalog.
        """
        q = (query or "").strip()
        if not q:
            return self.get_all()
        return [r for r in self.get_all() if _matches(r, q)]

    def create(self, draft: BookDraft) -> BookRecord:
        record = BookRecord(
            **draft.model_dump(),
            created_at=self._now(),
            source=BookSource.local,
        )
        validate_record(record)
        created = self._store.insert(record)
        logger.info("created book %s (%r)", created.id, created.title)
        return created

    def update(self, book_id: int, draft: BookDraft) -> BookRecord | None:
        existing = self._store.get(book_id)
        if existing is None:
            return None

        merged = existing.model_copy(update=draft.model_dump())
        validate_record(merged)
        return self._store.replace(book_id, merged)

    def delete(self, book_id: int) -> bool:
        removed = self._store.remove(book_id)
        if removed:
            logger.info("deleted book %s", book_id)
        return removed

    def toggle_availability(self, book_id: int) -> BookRecord | None:
        existing = self._store.get(book_id)
        if existing is None:
            return None
        flipped = existing.model_copy(update={"is_available": not existing.is_available})
        return self._store.replace(book_id, flipped)

    # -- external catalog ------------------------------------------------

    def import_candidate(self, candidate: CandidateRecord) -> BookRecord:
        title = candidate.title or ""
        if not title.strip():
            raise InvalidRecord(["title is required"])

        author = candidate.author if (candidate.author or "").strip() else UNKNOWN_AUTHOR

        record = BookRecord(
            title=title,
            author=author,
            isbn=candidate.isbn,
            published_year=candidate.published_year,
            genre=candidate.genre,
            description=candidate.description,
            cover_url=candidate.cover_url,
            is_available=True,
            created_at=self._now(),
            source=BookSource.external,
        )
        validate_record(record)
        created = self._store.insert(record)
        logger.info("imported book %s (%r) from %s", created.id, created.title, self._provider.name)
        return created

    async def discover_external(self, query: str, limit: int = 10) -> list[CandidateRecord]:
        """Search the external catalog; provider failures yield an empty list."""
        limit = clamp_limit(limit)
        try:
            return await self._provider.search(query, limit)
        except ProviderUnavailable:
            logger.warning(
                "external search failed, returning no results",
                extra={"provider": self._provider.name, "query": query},
                exc_info=True,
            )
            return []

    async def lookup_isbn(self, isbn: str) -> CandidateRecord | None:
        # Direct provider call: ProviderUnavailable propagates to the caller.
        return await self._provider.lookup_isbn(isbn)
