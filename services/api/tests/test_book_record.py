from datetime import datetime, timezone

import pytest
from app.domain.books import (
    BookDraft,
    BookRecord,
    BookSource,
    is_valid,
    record_errors,
    validate_record,
)
from app.domain.errors import InvalidRecord


def _record(**overrides):
    data = {
        "title": "Dune",
        "author": "Frank Herbert",
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return BookRecord(**data)


def test_defaults():
    r = _record()
    assert r.is_available is True
    assert r.source == BookSource.local
    assert r.id is None
    assert is_valid(r)


@pytest.mark.parametrize("title,author", [("", "A"), ("   ", "A"), ("T", ""), ("T", "\t")])
def test_blank_required_fields_are_invalid(title, author):
    assert not is_valid(_record(title=title, author=author))


@pytest.mark.parametrize("year,ok", [(999, False), (1000, True), (2100, True), (2101, False), (None, True)])
def test_published_year_bounds(year, ok):
    assert is_valid(_record(published_year=year)) is ok


def test_validate_record_lists_every_violation():
    draft = BookDraft(title="", author="", published_year=3000)
    with pytest.raises(InvalidRecord) as exc:
        validate_record(draft)
    assert len(exc.value.errors) == 3
    assert record_errors(draft) == exc.value.errors


def test_draft_ignores_service_owned_fields():
    draft = BookDraft.model_validate(
        {"title": "T", "author": "A", "id": 42, "source": "external", "created_at": "2000-01-01T00:00:00Z"}
    )
    dumped = draft.model_dump()
    assert "id" not in dumped
    assert "source" not in dumped
    assert "created_at" not in dumped
