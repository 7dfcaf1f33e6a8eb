from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from app.api.errors import register_exception_handlers
from app.api.router import api_router
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.core.otel import init_otel
from app.db.session import init_db
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "starting %s (env=%s, provider=%s)",
        settings.api_name,
        settings.env,
        settings.catalog_provider,
    )
    init_db()
    yield


app = FastAPI(title=settings.api_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router)

init_otel(app)
