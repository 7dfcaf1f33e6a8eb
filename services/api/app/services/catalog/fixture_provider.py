from __future__ import annotations

import json
import re
from pathlib import Path

from app.domain.books import CandidateRecord
from app.services.catalog.mapping import docs_to_candidates


def _norm(s: str) -> str:
    s = s.lower().strip()
    s = re.sub(r"\s+", " ", s)
    return s


def _norm_isbn(s: str | None) -> str | None:
    if not s:
        return None
    digits = re.sub(r"[^0-9xX]", "", s)
    return digits.upper() if digits else None


class FixtureProvider:
    """Offline provider reading Open Library shaped documents from a JSON file.

    Used for demos and tests; matching is a plain substring check.
    """

    name = "fixture"

    def __init__(self, fixture_path: str):
        self.fixture_path = fixture_path
        self._data = self._load()

    def _load(self) -> dict:
        p = Path(self.fixture_path)
        if not p.exists():
            raise FileNotFoundError(f"Fixture file not found: {p}")
        raw = p.read_text(encoding="utf-8")
        return json.loads(raw)

    def _docs(self) -> list[dict]:
        return [d for d in self._data.get("docs", []) if isinstance(d, dict)]

    async def search(self, query: str, limit: int = 10) -> list[CandidateRecord]:
        q = _norm(query or "")
        q_isbn = _norm_isbn(query)

        matched: list[dict] = []
        for doc in self._docs():
            isbns = {_norm_isbn(i) for i in doc.get("isbn") or []}
            if q_isbn and q_isbn in isbns:
                matched.append(doc)
                continue

            haystack = " ".join(
                [doc.get("title") or ""]
                + list(doc.get("author_name") or [])
                + list(doc.get("subject") or [])
            )
            if q and q in _norm(haystack):
                matched.append(doc)

        return docs_to_candidates(matched)[:limit]

    async def lookup_isbn(self, isbn: str) -> CandidateRecord | None:
        wanted = _norm_isbn(isbn)
        if not wanted:
            return None
        for doc in self._docs():
            if wanted in {_norm_isbn(i) for i in doc.get("isbn") or []}:
                candidates = docs_to_candidates([doc])
                return candidates[0] if candidates else None
        return None
