from __future__ import annotations

import logging

from app.api.deps import get_catalog_service
from app.domain.books import BookDraft
from app.schemas.books import BookIn, BookOut
from app.services.catalog_service import CatalogService
from fastapi import APIRouter, Depends, HTTPException, Response, status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/books", tags=["books"])


def _not_found(book_id: int) -> HTTPException:
    logger.info("book %s not found", book_id)
    return HTTPException(status_code=404, detail=f"Book {book_id} not found")


@router.get("", response_model=list[BookOut])
def list_books(service: CatalogService = Depends(get_catalog_service)):
    return service.get_all()


# Registered before "/{book_id}" so "search" is not parsed as an id.
@router.get("/search", response_model=list[BookOut])
def search_books(q: str = "", service: CatalogService = Depends(get_catalog_service)):
    return service.search(q)


@router.get("/{book_id}", response_model=BookOut)
def get_book(book_id: int, service: CatalogService = Depends(get_catalog_service)):
    book = service.get_by_id(book_id)
    if book is None:
        raise _not_found(book_id)
    return book


@router.post("", response_model=BookOut, status_code=status.HTTP_201_CREATED)
def create_book(payload: BookIn, service: CatalogService = Depends(get_catalog_service)):
    return service.create(BookDraft.model_validate(payload.model_dump()))


@router.put("/{book_id}", response_model=BookOut)
def update_book(
    book_id: int,
    payload: BookIn,
    service: CatalogService = Depends(get_catalog_service),
):
    book = service.update(book_id, BookDraft.model_validate(payload.model_dump()))
    if book is None:
        raise _not_found(book_id)
    return book


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, service: CatalogService = Depends(get_catalog_service)):
    if not service.delete(book_id):
        raise _not_found(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{book_id}/toggle", response_model=BookOut)
def toggle_availability(book_id: int, service: CatalogService = Depends(get_catalog_service)):
    book = service.toggle_availability(book_id)
    if book is None:
        raise _not_found(book_id)
    return book
