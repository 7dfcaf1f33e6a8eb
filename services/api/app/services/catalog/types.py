from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OpenLibraryDoc(BaseModel):
    """One document of an Open Library ``search.json`` page.

    Every field is optional; the provider routinely leaves them out.
    """

    model_config = ConfigDict(extra="ignore")

    key: str | None = None
    title: str | None = None
    author_name: list[str] | None = None
    isbn: list[str] | None = None
    first_publish_year: int | None = None
    subject: list[str] | None = None
    cover_i: int | None = None


class OpenLibrarySearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    num_found: int = Field(default=0, alias="numFound")

    # validated one by one so a single bad document does not sink the page
    docs: list[Any] = Field(default_factory=list)
