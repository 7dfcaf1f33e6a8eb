from __future__ import annotations

from app.crud.books import SqlBookStore
from app.db.session import get_db
from app.services.catalog.factory import get_provider
from app.services.catalog.provider import CatalogProvider
from app.services.catalog_service import CatalogService
from fastapi import Depends
from sqlalchemy.orm import Session


def get_catalog_provider() -> CatalogProvider:
    return get_provider()


def get_catalog_service(
    db: Session = Depends(get_db),
    provider: CatalogProvider = Depends(get_catalog_provider),
) -> CatalogService:
    # One service per request, bound to the request's session.
    return CatalogService(SqlBookStore(db), provider)
