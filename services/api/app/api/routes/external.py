from __future__ import annotations

from app.api.deps import get_catalog_service
from app.api.rate_limit import rate_limiter
from app.core.config import settings
from app.domain.books import CandidateRecord
from app.schemas.books import BookOut, CandidateIn, CandidateOut
from app.services.catalog_service import CatalogService
from fastapi import APIRouter, Depends, HTTPException, status

router = APIRouter(
    prefix="/v1/external",
    tags=["external"],
    dependencies=[
        Depends(
            rate_limiter(
                "external",
                limit=settings.rate_limit_external_per_window,
                window_seconds=settings.rate_limit_window_seconds,
            )
        )
    ],
)


@router.get("/search", response_model=list[CandidateOut])
async def search_external(
    q: str = "",
    limit: int = 10,
    service: CatalogService = Depends(get_catalog_service),
):
    if not q.strip():
        raise HTTPException(status_code=400, detail="Query parameter 'q' is required")
    return await service.discover_external(q.strip(), limit)


@router.get("/isbn/{isbn}", response_model=CandidateOut)
async def lookup_isbn(isbn: str, service: CatalogService = Depends(get_catalog_service)):
    candidate = await service.lookup_isbn(isbn)
    if candidate is None:
        raise HTTPException(status_code=404, detail=f"No external record for ISBN {isbn}")
    return candidate


@router.post("/import", response_model=BookOut, status_code=status.HTTP_201_CREATED)
def import_book(payload: CandidateIn, service: CatalogService = Depends(get_catalog_service)):
    return service.import_candidate(CandidateRecord.model_validate(payload.model_dump()))
