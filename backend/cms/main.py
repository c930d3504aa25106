from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from cms.config import settings
from cms.exceptions import CMSError, ConflictError, NotFoundError, ValidationFailedError
from cms.logger import api_logger, cache_logger, db_logger, lifecycle_logger
from cms.routers import categories, discovery, editorial, tags

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="API for managing and discovering video content (podcasts, documentaries, etc.)",
    debug=settings.debug,
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production else None,
    openapi_url=f"{settings.api_prefix}/openapi.json",
)

# Configure CORS for the single-page front-end
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
    max_age=600,  # Cache preflight requests for 10 minutes
)

# Add trusted host middleware in production for additional security
if settings.is_production:
    trusted_hosts = [
        origin.replace("https://", "").replace("http://", "")
        for origin in settings.cors_origins
    ]
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=trusted_hosts)

# Include routers
app.include_router(editorial.router, prefix=settings.api_prefix, tags=["CMS"])
app.include_router(discovery.router, prefix=settings.api_prefix, tags=["Discovery"])
app.include_router(
    categories.router, prefix=f"{settings.api_prefix}/discovery", tags=["Categories"]
)
app.include_router(tags.router, prefix=f"{settings.api_prefix}/discovery", tags=["Tags"])


ERROR_STATUS = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationFailedError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
}


def _error_response(status_code: int, code: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail, "error": code})


@app.exception_handler(CMSError)
async def cms_error_handler(request: Request, exc: CMSError):
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return _error_response(status_code, exc.code, exc.message)


@app.exception_handler(StaleDataError)
async def stale_data_handler(request: Request, exc: StaleDataError):
    api_logger.warning(f"Concurrent update rejected on {request.url.path}: {exc}")
    return _error_response(
        status.HTTP_409_CONFLICT,
        ConflictError.code,
        "The program was modified by another request",
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    api_logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
    return _error_response(
        status.HTTP_409_CONFLICT,
        "constraint_violation",
        "The request conflicts with existing data or references missing records",
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    db_logger.error(f"Database error on {request.url.path}: {exc}")
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "store_unavailable",
        "The database could not complete the request",
    )


@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    lifecycle_logger.info(f"Starting {settings.app_name}")
    lifecycle_logger.info(f"Environment: {settings.environment}")
    lifecycle_logger.info(f"Debug mode: {settings.debug}")

    try:
        from cms.database import Base, SessionLocal, engine
        import cms.models  # noqa: F401

        if settings.auto_create_schema:
            Base.metadata.create_all(bind=engine)
            db_logger.info("Database schema ensured")

        if settings.seed_reference_data:
            from cms.services.seed import seed_reference_data

            db = SessionLocal()
            try:
                seed_reference_data(db)
            finally:
                db.close()
    except SQLAlchemyError as e:
        db_logger.error(f"Database initialization failed: {e}")

    from cms.cache import get_cache

    if get_cache().backend.ping():
        cache_logger.info(f"Cache backend ready ({settings.cache_backend})")
    else:
        cache_logger.warning("Cache backend not available (caching disabled)")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    lifecycle_logger.info("Shutting down application")

    from cms.cache import get_cache

    get_cache().backend.close()
    cache_logger.info("Cache backend closed")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.environment,
    }


@app.get("/health")
async def health_check():
    """Detailed health check endpoint."""
    db_status = "connected"
    try:
        from cms.database import engine

        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        db_status = f"error: {str(e)}"

    from cms.cache import get_cache

    cache_status = "connected" if get_cache().backend.ping() else "disconnected"

    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": "1.0.0",
        "environment": settings.environment,
        "database": db_status,
        "cache": cache_status,
    }
