"""Shared FastAPI dependencies."""
from fastapi import Request

from .application.services import AuthService
from .domain.entities import Session
from .errors import AuthenticationError
from .infrastructure.repositories import Repositories


def get_repositories(request: Request) -> Repositories:
    """Repositories built once at startup and kept on app state."""
    return request.app.state.repositories


def get_auth_service(request: Request) -> AuthService:
    repositories = get_repositories(request)
    return AuthService(repositories.users, repositories.sessions)


def require_session(request: Request) -> Session:
    """Session resolved by AuthMiddleware; raise 401 if absent."""
    session = getattr(request.state, "session", None)
    if session is None:
        raise AuthenticationError()
    return session
