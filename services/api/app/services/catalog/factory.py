from __future__ import annotations

from functools import lru_cache

from app.core.config import settings
from app.services.catalog.fixture_provider import FixtureProvider
from app.services.catalog.openlibrary_provider import OpenLibraryProvider
from app.services.catalog.provider import CatalogProvider


@lru_cache
def get_provider() -> CatalogProvider:
    if settings.catalog_provider == "fixture":
        return FixtureProvider(fixture_path=settings.fixture_catalog_path)
    if settings.catalog_provider == "openlibrary":
        return OpenLibraryProvider(
            base_url=settings.openlibrary_base_url,
            covers_base_url=settings.openlibrary_covers_url,
            timeout_secs=settings.provider_timeout_secs,
            user_agent=settings.user_agent,
        )
    raise ValueError(f"Unknown catalog provider: {settings.catalog_provider}")
