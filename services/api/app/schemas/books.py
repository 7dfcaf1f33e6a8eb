from __future__ import annotations

from datetime import datetime

from app.domain.books import BookSource
from pydantic import BaseModel, ConfigDict, Field


class BookIn(BaseModel):
    # id/created_at/source in a request body are ignored
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., max_length=500)
    author: str = Field(..., max_length=255)
    isbn: str | None = Field(default=None, max_length=20)
    published_year: int | None = None
    genre: str | None = Field(default=None, max_length=200)
    description: str | None = None
    cover_url: str | None = Field(default=None, max_length=500)
    is_available: bool = True


class BookOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
    isbn: str | None
    published_year: int | None
    genre: str | None
    description: str | None
    cover_url: str | None
    is_available: bool
    created_at: datetime
    source: BookSource


class CandidateIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(default="", max_length=500)
    author: str | None = Field(default=None, max_length=255)
    isbn: str | None = Field(default=None, max_length=20)
    published_year: int | None = None
    genre: str | None = Field(default=None, max_length=200)
    description: str | None = None
    cover_url: str | None = Field(default=None, max_length=500)


class CandidateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    author: str | None
    isbn: str | None
    published_year: int | None
    genre: str | None
    description: str | None
    cover_url: str | None
