from __future__ import annotations

from typing import Protocol

from app.domain.books import CandidateRecord


class CatalogProvider(Protocol):
    """External bibliographic catalog.

    Implementations raise ``ProviderUnavailable`` for network, timeout and
    decode failures and must bound their own latency.
    """

    name: str

    async def search(self, query: str, limit: int = 10) -> list[CandidateRecord]: ...

    async def lookup_isbn(self, isbn: str) -> CandidateRecord | None: ...
