"""Artisan Connect — FastAPI Application Entry Point.

Local-services marketplace backend: favorites, contact and auth-modal
tracking, image uploads, and the admin analytics surface.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from artisan_connect.config import settings
from artisan_connect.database import _mask_url, backend_name, db_url, init_db, test_connection
from artisan_connect.api.favorite_routes import router as favorite_router
from artisan_connect.api.tracking_routes import router as tracking_router
from artisan_connect.api.admin_routes import router as admin_router
from artisan_connect.api.export_routes import router as export_router
from artisan_connect.api.upload_routes import router as upload_router
from artisan_connect.api.catalog_routes import router as catalog_router
from artisan_connect.core.logging import get_logger

logger = get_logger("main")

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 {settings.app_name} starting up...")
    if test_connection():
        try:
            init_db()
        except Exception as e:
            logger.error(f"❌ Table creation failed: {e}")
    else:
        logger.error("❌ No database connection, data endpoints will fail")
    if not settings.storage_enabled:
        logger.warning("Object storage not configured, uploads disabled")
    yield
    logger.info(f"{settings.app_name} shut down")


app = FastAPI(
    title=settings.app_name,
    description="Local-services marketplace: favorites, contact tracking, review moderation and admin analytics.",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        f"{request.method} {request.url.path} → {response.status_code}",
        extra={
            "endpoint": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 1),
        },
    )
    return response


for router in (
    favorite_router,
    tracking_router,
    admin_router,
    export_router,
    upload_router,
    catalog_router,
):
    app.include_router(router)


@app.get("/health", tags=["System"])
async def health_check():
    return {"status": "healthy", "service": "artisan-connect", "version": VERSION}


@app.get("/debug/db", tags=["System"])
async def debug_db():
    """Database connectivity, backend and masked URL."""
    return {
        "connected": test_connection(),
        "backend": backend_name(db_url),
        "url": _mask_url(db_url),
    }
