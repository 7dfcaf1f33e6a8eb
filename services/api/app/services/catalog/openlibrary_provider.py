from __future__ import annotations

import logging
from typing import Any

import httpx
from app.domain.books import CandidateRecord
from app.domain.errors import ProviderUnavailable
from app.services.catalog.mapping import DEFAULT_COVERS_URL, docs_to_candidates
from app.services.catalog.types import OpenLibrarySearchResponse
from pydantic import ValidationError

logger = logging.getLogger(__name__)

SEARCH_FIELDS = "key,title,author_name,isbn,first_publish_year,subject,cover_i"


class OpenLibraryProvider:
    """Client for the Open Library search API (anonymous, read-only)."""

    name = "openlibrary"

    def __init__(
        self,
        *,
        base_url: str = "https://openlibrary.org",
        covers_base_url: str = DEFAULT_COVERS_URL,
        timeout_secs: float = 10.0,
        user_agent: str = "PersonalLibrary/0.1",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.covers_base_url = covers_base_url
        self.timeout_secs = timeout_secs
        self.user_agent = user_agent
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout_secs, connect=min(5.0, self.timeout_secs)),
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    async def _search_docs(self, params: dict[str, Any]) -> OpenLibrarySearchResponse:
        try:
            async with self._client() as client:
                res = await client.get("/search.json", params=params)
                res.raise_for_status()
                payload = res.json()
        except httpx.HTTPError as exc:
            logger.warning("Open Library request failed: %s", exc)
            raise ProviderUnavailable(f"Open Library request failed: {exc}") from exc
        except ValueError as exc:
            logger.warning("Open Library returned undecodable JSON: %s", exc)
            raise ProviderUnavailable("Open Library returned invalid JSON") from exc

        try:
            return OpenLibrarySearchResponse.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Open Library payload did not match the search schema")
            raise ProviderUnavailable("Open Library returned a malformed payload") from exc

    async def search(self, query: str, limit: int = 10) -> list[CandidateRecord]:
        page = await self._search_docs({"q": query, "limit": limit, "fields": SEARCH_FIELDS})
        candidates = docs_to_candidates(page.docs, covers_base_url=self.covers_base_url)
        logger.info(
            "Open Library search returned %d candidates (num_found=%d)",
            len(candidates),
            page.num_found,
        )
        return candidates[:limit]

    async def lookup_isbn(self, isbn: str) -> CandidateRecord | None:
        page = await self._search_docs({"isbn": isbn, "limit": 1, "fields": SEARCH_FIELDS})
        candidates = docs_to_candidates(page.docs, covers_base_url=self.covers_base_url)
        return candidates[0] if candidates else None
