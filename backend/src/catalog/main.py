from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from catalog.db.session import shutdown
from catalog.dependencies import DB
from catalog.exceptions import (
    ConflictError,
    DomainError,
    InvalidCredentialsError,
    InvalidUploadError,
    NotFoundError,
    PageOutOfRangeError,
)
from catalog.logging import get_logger
from catalog.middleware import RequestIDMiddleware
from catalog.routers import category, movie, product, security, thematic
from catalog.schemas.common import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close pooled database connections on shutdown."""
    yield
    await shutdown()


app = FastAPI(title="Catalog Admin", lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)

app.include_router(category.router)
app.include_router(product.router)
app.include_router(thematic.router)
app.include_router(movie.router)
app.include_router(security.router)


def _error_json(code: str, message: str) -> dict[str, object]:
    """Build the standard error envelope as a dict for JSONResponse."""
    return ErrorResponse(error=ErrorDetail(code=code, message=message)).model_dump()


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_error_json("not_found", exc.message))


@app.exception_handler(PageOutOfRangeError)
async def page_out_of_range_handler(request: Request, exc: PageOutOfRangeError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_error_json("page_not_found", exc.message))


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=409, content=_error_json("conflict", exc.message))


@app.exception_handler(InvalidCredentialsError)
async def invalid_credentials_handler(
    request: Request, exc: InvalidCredentialsError
) -> JSONResponse:
    return JSONResponse(status_code=401, content=_error_json("invalid_credentials", exc.message))


@app.exception_handler(InvalidUploadError)
async def invalid_upload_handler(request: Request, exc: InvalidUploadError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_json("invalid_upload", exc.message))


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Return 400 for generic domain-level violations."""
    logger.warning("domain_error", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=400, content=_error_json("domain_error", exc.message))


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Constraint violations from the database, e.g. deleting a parent that still has children.

    The driver message is logged, not returned.
    """
    logger.warning("storage_conflict", error=str(exc.orig), path=request.url.path)
    return JSONResponse(
        status_code=409,
        content=_error_json(
            "storage_conflict", "The operation conflicts with related records in the database"
        ),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions with traceback and return a generic 500."""
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=_error_json("internal_error", "Internal server error"),
    )


@app.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Health check; runs a trivial query against the database."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}
