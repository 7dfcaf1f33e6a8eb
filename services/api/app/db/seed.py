"""
Sample books for a fresh database.

``seed_books`` is called once at startup by ``init_db`` when
``SEED_DEMO_DATA`` is on; it does nothing if the store already holds books.
"""

from __future__ import annotations

from datetime import datetime, timezone

from app.crud.store import BookStore
from app.domain.books import BookRecord, BookSource

SEED_CREATED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)

SAMPLE_BOOKS = [
    {
        "title": "Le Petit Prince",
        "author": "Antoine de Saint-Exupéry",
        "isbn": "978-2-07-040850-4",
        "published_year": 1943,
        "genre": "Conte philosophique",
        "description": "A pilot stranded in the desert meets a mysterious little boy.",
        "is_available": True,
    },
    {
        "title": "1984",
        "author": "George Orwell",
        "isbn": "978-2-07-036822-8",
        "published_year": 1949,
        "genre": "Dystopian",
        "description": "A novel about totalitarian surveillance.",
        "is_available": True,
    },
    {
        "title": "Harry Potter and the Philosopher's Stone",
        "author": "J.K. Rowling",
        "isbn": "978-2-07-054090-1",
        "published_year": 1997,
        "genre": "Fantasy",
        "description": "A young boy discovers he is a wizard.",
        "is_available": False,
    },
]


def seed_books(store: BookStore) -> int:
    if store.list():
        return 0

    for data in SAMPLE_BOOKS:
        store.insert(
            BookRecord(**data, created_at=SEED_CREATED_AT, source=BookSource.local)
        )
    return len(SAMPLE_BOOKS)
