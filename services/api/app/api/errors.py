from __future__ import annotations

import logging

from app.domain.errors import InvalidRecord, ProviderUnavailable, StoreUnavailable
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


async def _invalid_record(request: Request, exc: InvalidRecord) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": exc.errors})


async def _store_unavailable(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error("store unavailable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "Book store unavailable, retry later"},
        headers={"Retry-After": "5"},
    )


async def _provider_unavailable(request: Request, exc: ProviderUnavailable) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": "External catalog unavailable"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidRecord, _invalid_record)  # type: ignore[arg-type]
    app.add_exception_handler(StoreUnavailable, _store_unavailable)  # type: ignore[arg-type]
    app.add_exception_handler(ProviderUnavailable, _provider_unavailable)  # type: ignore[arg-type]
