from app.crud.books import SqlBookStore
from app.db.seed import SAMPLE_BOOKS, seed_books
from app.domain.books import BookSource


def test_seed_populates_empty_store_once(db_session):
    store = SqlBookStore(db_session)

    assert seed_books(store) == len(SAMPLE_BOOKS)
    assert seed_books(store) == 0

    books = store.list()
    assert len(books) == len(SAMPLE_BOOKS)
    assert all(b.source == BookSource.local for b in books)
    assert any(not b.is_available for b in books)


def test_seed_skips_non_empty_store(memory_store):
    from datetime import datetime, timezone

    from app.domain.books import BookRecord

    memory_store.insert(
        BookRecord(title="Mine", author="Me", created_at=datetime.now(timezone.utc))
    )
    assert seed_books(memory_store) == 0
    assert [b.title for b in memory_store.list()] == ["Mine"]
