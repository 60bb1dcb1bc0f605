# Repository Pattern Implementation
"""
Repositories abstract database operations.
Each entity has its own repository; all share one persistence gateway.
"""
from dataclasses import dataclass

from ...domain.repositories import PostRepository, SessionRepository, UserRepository
from .base import AsyncRepository, GatewayProtocol
from .post_repository import AsyncPostRepository
from .session_repository import AsyncSessionRepository
from .user_repository import AsyncUserRepository


@dataclass
class Repositories:
    """The set of repositories handed to the application."""

    users: UserRepository
    sessions: SessionRepository
    posts: PostRepository

    @classmethod
    def from_gateway(cls, gateway: GatewayProtocol) -> "Repositories":
        return cls(
            users=AsyncUserRepository(gateway),
            sessions=AsyncSessionRepository(gateway),
            posts=AsyncPostRepository(gateway),
        )


__all__ = [
    "AsyncRepository",
    "GatewayProtocol",
    "AsyncUserRepository",
    "AsyncSessionRepository",
    "AsyncPostRepository",
    "Repositories",
]
