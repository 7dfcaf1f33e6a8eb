from __future__ import annotations

import logging
from typing import Any, Iterable

from app.domain.books import UNKNOWN_AUTHOR, CandidateRecord, year_in_range
from app.services.catalog.types import OpenLibraryDoc
from pydantic import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_COVERS_URL = "https://covers.openlibrary.org"


def _first(values: list[str] | None) -> str | None:
    # Multi-valued fields keep only their first non-blank entry.
    for v in values or []:
        if v and v.strip():
            return v.strip()
    return None


def cover_url_for(cover_id: int | None, covers_base_url: str = DEFAULT_COVERS_URL) -> str | None:
    if cover_id is None:
        return None
    return f"{covers_base_url.rstrip('/')}/b/id/{cover_id}-M.jpg"


def doc_to_candidate(
    doc: OpenLibraryDoc, *, covers_base_url: str = DEFAULT_COVERS_URL
) -> CandidateRecord | None:
    title = (doc.title or "").strip()
    if not title:
        return None

    year = doc.first_publish_year
    if not year_in_range(year):
        year = None

    return CandidateRecord(
        title=title,
        author=_first(doc.author_name) or UNKNOWN_AUTHOR,
        isbn=_first(doc.isbn),
        published_year=year,
        genre=_first(doc.subject),
        cover_url=cover_url_for(doc.cover_i, covers_base_url),
    )


def docs_to_candidates(
    raw_docs: Iterable[Any], *, covers_base_url: str = DEFAULT_COVERS_URL
) -> list[CandidateRecord]:
    out: list[CandidateRecord] = []
    for raw in raw_docs:
        try:
            doc = OpenLibraryDoc.model_validate(raw)
        except ValidationError as exc:
            logger.debug("skipping malformed catalog document: %s", exc)
            continue
        candidate = doc_to_candidate(doc, covers_base_url=covers_base_url)
        if candidate is not None:
            out.append(candidate)
    return out
