"""In-memory repositories implementing the repository Protocols.

Every call is recorded in ``calls`` so tests can assert which repository
methods ran.
"""
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from folio.domain.entities import UNSET, Post, PostPatch, Session, User, UserPatch
from folio.errors import NotFoundError, StorageError
from folio.infrastructure.repositories import Repositories

FIXED_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class _Recorder:
    def __init__(self):
        self.calls: list[tuple] = []

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))


class FakeUserRepository(_Recorder):
    def __init__(self, users: list[User] | None = None):
        super().__init__()
        self.users = {u.id: u for u in users or []}
        self.passwords: dict[str, str] = {}

    async def register(self, username, password):
        self._record("register", username, password)
        user = User(id=str(len(self.users) + 1), username=username, password=f"hashed:{password}")
        self.users[user.id] = user
        return user

    async def find(self, user_id):
        self._record("find", user_id)
        if user_id not in self.users:
            raise NotFoundError("User", user_id)
        return self.users[user_id]

    async def find_by_username(self, username):
        self._record("find_by_username", username)
        return next((u for u in self.users.values() if u.username == username), None)

    async def find_by_credentials(self, username, password):
        self._record("find_by_credentials", username, password)
        user = next((u for u in self.users.values() if u.username == username), None)
        if user is None or user.password != f"hashed:{password}":
            return None
        return user

    async def update(self, user_id, patch: UserPatch):
        self._record("update", user_id, patch)
        current = await self.find(user_id)
        updated = replace(
            current,
            username=patch.username or current.username,
            password=f"hashed:{patch.password}" if patch.password else current.password,
            favorite_book=current.favorite_book if patch.favorite_book is UNSET else patch.favorite_book,
        )
        self.users[user_id] = updated
        return updated

    async def delete(self, user_id):
        self._record("delete", user_id)
        self.users.pop(user_id, None)

    async def list_all(self):
        self._record("list_all")
        return list(self.users.values())


class FakeSessionRepository(_Recorder):
    def __init__(self, sessions: list[Session] | None = None):
        super().__init__()
        self.sessions = {s.token: s for s in sessions or []}

    async def create(self, user):
        self._record("create", user)
        session = Session(
            id=str(len(self.sessions) + 1),
            user_id=user.id,
            token=f"token-{user.id}-{len(self.sessions) + 1}",
            created_at=FIXED_TIME,
        )
        self.sessions[session.token] = session
        return session

    async def find_by_token(self, token):
        self._record("find_by_token", token)
        return self.sessions.get(token)

    async def delete_for_user(self, user_id):
        self._record("delete_for_user", user_id)
        doomed = [t for t, s in self.sessions.items() if s.user_id == user_id]
        for token in doomed:
            del self.sessions[token]
        return len(doomed)


class FakePostRepository(_Recorder):
    def __init__(self, posts: list[Post] | None = None):
        super().__init__()
        self.posts = {p.id: p for p in posts or []}
        self._next_id = len(self.posts) + 1

    async def create(self, title, content, author_id):
        self._record("create", title, content, author_id)
        post = Post(
            id=str(self._next_id),
            author_id=author_id,
            title=title,
            content=content,
            created_at=FIXED_TIME,
            updated_at=FIXED_TIME,
        )
        self._next_id += 1
        self.posts[post.id] = post
        return post

    async def find(self, post_id):
        self._record("find", post_id)
        if post_id not in self.posts:
            raise NotFoundError("Post", post_id)
        return self.posts[post_id]

    async def all(self):
        self._record("all")
        return sorted(self.posts.values(), key=lambda p: (p.created_at, int(p.id)), reverse=True)

    async def update(self, post_id, patch: PostPatch):
        self._record("update", post_id, patch)
        current = await self.find(post_id)
        updated = replace(
            current,
            title=patch.title or current.title,
            content=patch.content or current.content,
            updated_at=current.updated_at + timedelta(seconds=1),
        )
        self.posts[post_id] = updated
        return updated

    async def delete(self, post_id):
        self._record("delete", post_id)
        self.posts.pop(post_id, None)


class BrokenPostRepository(FakePostRepository):
    """Every call fails like a dead database."""

    async def all(self):
        self._record("all")
        raise StorageError("disk I/O error")

    async def create(self, title, content, author_id):
        self._record("create", title, content, author_id)
        raise RuntimeError("unexpected driver failure")


def make_repositories(users=None, sessions=None, posts=None) -> Repositories:
    return Repositories(
        users=users or FakeUserRepository(),
        sessions=sessions or FakeSessionRepository(),
        posts=posts or FakePostRepository(),
    )
