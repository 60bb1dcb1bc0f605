"""Folio publishing service - FastAPI entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .config import DATABASE_PATH
from .errors import FolioError, StorageError
from .infrastructure.database import Database
from .infrastructure.repositories import Repositories
from .logger import logger, setup_logging
from .middleware import AuthMiddleware, RequestLoggingMiddleware
from .schemas import collect_errors

# Import routers
from .routes import auth_router, posts_router, users_router


async def handle_folio_error(request: Request, exc: FolioError) -> JSONResponse:
    """Translate typed application errors into status and body."""
    if isinstance(exc, StorageError):
        logger.opt(exception=exc).error(
            "Storage failure on {} {}: {}", request.method, request.url.path, exc.message
        )
    return JSONResponse(status_code=exc.status, content=exc.to_dict())


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every failing payload field at once."""
    return JSONResponse(status_code=422, content={"errors": collect_errors(exc.errors())})


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(
    database: Database | None = None,
    repositories: Repositories | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """Build the application.

    Args:
        database: Persistence gateway, opened at startup and closed at shutdown.
            Defaults to the file at FOLIO_DATABASE_PATH.
        repositories: Ready-made repositories (e.g. in-memory fakes). When given,
            no database is opened.
        configure_logging: Rebuild loguru sinks from config

    Returns:
        Configured FastAPI app
    """
    if configure_logging:
        setup_logging()

    if repositories is None:
        database = database or Database(DATABASE_PATH)
        repositories = Repositories.from_gateway(database)
    else:
        database = None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        if database is not None:
            await database.connect()
            await database.init_schema()
        yield
        if database is not None:
            await database.close()

    app = FastAPI(title="Folio", version=__version__, lifespan=lifespan)
    app.state.database = database
    app.state.repositories = repositories

    # Add middleware (order matters - first added = last executed)
    app.add_middleware(AuthMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(FolioError, handle_folio_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)

    @app.get("/health", tags=["misc"])
    async def health():
        return {"status": "ok"}

    # Include routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(posts_router)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn (``folio`` console script)."""
    import uvicorn

    uvicorn.run("folio.main:app", host="127.0.0.1", port=3000)
