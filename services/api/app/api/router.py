from __future__ import annotations

from app.api.routes import books, external, health
from fastapi import APIRouter

api_router = APIRouter()

# Keep this list in the order you want routes registered.
for _router in (
    health.router,
    books.router,
    external.router,
):
    api_router.include_router(_router)
