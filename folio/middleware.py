"""Application middleware."""
import secrets
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .application.services import AuthService
from .config import AUTH_HEADER, PUBLIC_ROUTES, REQUEST_ID_HEADER
from .errors import AuthenticationError, StorageError
from .logger import clear_request_id, logger, set_request_id


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolve the bearer token on every protected route.

    Unauthenticated requests are answered with 401 here and never reach a
    handler or a repository beyond the session lookup.
    """

    async def dispatch(self, request: Request, call_next):
        if (request.method, request.url.path) in PUBLIC_ROUTES:
            return await call_next(request)

        repositories = request.app.state.repositories
        service = AuthService(repositories.users, repositories.sessions)
        try:
            session = await service.resolve(request.headers.get(AUTH_HEADER))
        except AuthenticationError as e:
            return JSONResponse(status_code=e.status, content=e.to_dict())
        except StorageError as e:
            logger.opt(exception=e).error("Session lookup failed on {} {}", request.method, request.url.path)
            return JSONResponse(status_code=e.status, content=e.to_dict())

        # Valid session - attach to request state for handlers
        request.state.session = session
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log method, path, status and duration."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(6)
        set_request_id(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            logger.info(
                "{} {} -> {} in {:.1f} ms",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_id()
