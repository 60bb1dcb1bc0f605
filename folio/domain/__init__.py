"""Domain layer: entities and repository interfaces."""
from .entities import (
    UNSET,
    FavoriteBook,
    Post,
    PostPatch,
    Session,
    User,
    UserPatch,
    utcnow,
)
from .repositories import PostRepository, SessionRepository, UserRepository

__all__ = [
    "UNSET",
    "FavoriteBook",
    "Post",
    "PostPatch",
    "Session",
    "User",
    "UserPatch",
    "utcnow",
    "PostRepository",
    "SessionRepository",
    "UserRepository",
]
