"""
FastAPI Application — DocSign.

Architecture:
  - PostgreSQL (prod) / SQLite (dev) for document records + audit trail
  - MinIO / local filesystem for original and signed PDFs
  - pypdf + reportlab for burning annotations into signed copies
  - JWT share links for guest signing
"""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from docsign.api.dependencies import Container, get_container
from docsign.api.routes.documents import router as documents_router
from docsign.api.routes.public import router as public_router
from docsign.config.settings import get_settings
from docsign.core.errors import (
    ConcurrentModification,
    DocSignError,
    InvalidStateTransition,
    InvalidToken,
    NotFound,
    SourceFetchFailed,
    StorageFailure,
    Unauthorized,
)
from docsign.infrastructure.storage.local_storage import FILES_ROUTE, LocalBlobStore

settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="DocSign",
    description="Upload PDFs, place signatures and text, share links for guest signing, with a full audit trail.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Most specific first; StorageFailure covers BlobNotFound
_STATUS_BY_ERROR: list[tuple[type[DocSignError], int]] = [
    (NotFound, 404),
    (Unauthorized, 403),
    (InvalidToken, 401),
    (InvalidStateTransition, 409),
    (ConcurrentModification, 409),
    (SourceFetchFailed, 502),
    (StorageFailure, 502),
]


def status_for(error: DocSignError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


@app.exception_handler(DocSignError)
async def docsign_error_handler(request: Request, exc: DocSignError):
    status = status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status}: {exc}")
    return JSONResponse(status_code=status, content={"detail": str(exc)})


# ── Startup ──
@app.on_event("startup")
async def startup():
    """Build adapters and create tables."""
    container = app.dependency_overrides.get(get_container, get_container)()
    logger.info(f"DocSign started (db={container.database.backend_name}, storage={settings.storage_backend})")


# Register routes (public first: no auth dependency)
app.include_router(public_router, prefix="/api/docs", tags=["Public"])
app.include_router(documents_router, prefix="/api/docs", tags=["Documents"])


# ── Health ──
@app.get("/health")
async def health(container: Container = Depends(get_container)):
    return {
        "status": "ok",
        "version": "1.0.0",
        "database": container.database.backend_name,
        "storage": settings.storage_backend,
    }


# ── Local blobs ──
if settings.storage_backend == "local":
    _files_dir = LocalBlobStore(settings.local_storage_dir, public_base_url=settings.public_base_url).base_dir
    app.mount(FILES_ROUTE, StaticFiles(directory=str(_files_dir)), name="files")
