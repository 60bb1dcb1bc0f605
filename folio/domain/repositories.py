"""Repository interfaces.

Handlers and services depend on these Protocols only, so tests can swap in
in-memory fakes without touching the database.
"""
from typing import Protocol

from .entities import Post, PostPatch, Session, User, UserPatch


class UserRepository(Protocol):
    async def register(self, username: str, password: str) -> User: ...
    async def find(self, user_id: str) -> User: ...
    async def find_by_username(self, username: str) -> User | None: ...
    async def find_by_credentials(self, username: str, password: str) -> User | None: ...
    async def update(self, user_id: str, patch: UserPatch) -> User: ...
    async def delete(self, user_id: str) -> None: ...
    async def list_all(self) -> list[User]: ...


class SessionRepository(Protocol):
    async def create(self, user: User) -> Session: ...
    async def find_by_token(self, token: str) -> Session | None: ...
    async def delete_for_user(self, user_id: str) -> int: ...


class PostRepository(Protocol):
    async def create(self, title: str, content: str, author_id: str) -> Post: ...
    async def find(self, post_id: str) -> Post: ...
    async def all(self) -> list[Post]: ...
    async def update(self, post_id: str, patch: PostPatch) -> Post: ...
    async def delete(self, post_id: str) -> None: ...
