"""
FastAPI application initialization
"""

from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from api.dependencies import get_current_username
from api.middleware import RequestContextMiddleware
from api.routes import (
    auth,
    country,
    feed,
    health,
    journalist,
    journalist_search,
    journalist_select,
    publication,
    publication_media_type,
    publication_tier,
    region,
    tag,
    taxonomy,
)
from core.config import settings
from core.database import Store, Stores
from core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    InvalidRequestError,
    MediamineException,
)
from core.logging import setup_logging
from schemas.api import ErrorResponse
from services.zerobounce import ZeroBounceClient
import logging

setup_logging()
logger = logging.getLogger(__name__)

NOT_FOUND = "404 Error! Page Not Found!"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open both stores and the ZeroBounce client; refuse to start without required settings"""
    logger.info("Starting Mediamine API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    missing = settings.missing_required()
    if missing:
        logger.error(f"Missing required settings: {', '.join(missing)}")
        raise ConfigurationError(
            "Missing required settings",
            context={"missing": missing}
        )

    stores = Stores(
        core=Store("core", settings.CORE_DATABASE_URL, pool_size=settings.DB_POOL_SIZE),
        mediamine=Store("mediamine", settings.MEDIAMINE_DATABASE_URL, pool_size=settings.DB_POOL_SIZE),
    )
    stores.open()
    app.state.stores = stores
    app.state.email_validator = ZeroBounceClient()

    yield

    logger.info("Shutting down Mediamine API")
    await app.state.email_validator.aclose()
    await stores.close()


# Create FastAPI app
app = FastAPI(
    title="Mediamine API",
    description="Publications, feeds and journalists across the core and mediamine stores",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)


# ============================================================================
# ERROR HANDLERS
# ============================================================================

def _failure(request: Request, exc: Exception, status_code: int = 500) -> PlainTextResponse:
    message = f"{request.method} {request.url.path} failed with {exc}"
    logger.error(ErrorResponse(error=type(exc).__name__, detail=message).model_dump())
    return PlainTextResponse(message, status_code=status_code)


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return PlainTextResponse(str(exc), status_code=401)


@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    logger.warning(f"{request.method} {request.url.path} invalid: {exc}")
    return PlainTextResponse(str(exc), status_code=400)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return PlainTextResponse(errors, status_code=400)


@app.exception_handler(MediamineException)
async def mediamine_error_handler(request: Request, exc: MediamineException):
    return _failure(request, exc)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    return _failure(request, exc)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    return _failure(request, exc)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return PlainTextResponse(NOT_FOUND, status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


# ============================================================================
# ROUTERS
# ============================================================================

# Public
app.include_router(auth.router)
app.include_router(health.router)
app.include_router(journalist.public_router, prefix="/v2")

authenticated = [Depends(get_current_username)]

for router in (
    country.router,
    region.router,
    tag.router,
    publication.router,
    publication_media_type.router,
    publication_tier.router,
    feed.router,
):
    app.include_router(router, prefix="/v1", dependencies=authenticated)

for router in (
    journalist.router,
    taxonomy.format_type_router,
    taxonomy.news_type_router,
    taxonomy.role_type_router,
    journalist_search.router,
    journalist_select.router,
):
    app.include_router(router, prefix="/v2", dependencies=authenticated)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
