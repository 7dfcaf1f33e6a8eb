from __future__ import annotations

from typing import Protocol

from app.domain.books import BookRecord


class BookStore(Protocol):
    """Persistence boundary consumed by the catalog service.

    Each call is atomic on its own; there is no transaction spanning calls.
    """

    def list(self) -> list[BookRecord]: ...

    def get(self, book_id: int) -> BookRecord | None: ...

    def insert(self, record: BookRecord) -> BookRecord: ...

    def replace(self, book_id: int, record: BookRecord) -> BookRecord | None: ...

    def remove(self, book_id: int) -> bool: ...
