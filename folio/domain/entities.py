"""Domain entities and patch types.

Identifiers are integers in storage and strings everywhere else.
"""
import json
from dataclasses import dataclass
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Unset:
    """Marker for patch fields the caller did not supply."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


@dataclass(frozen=True)
class FavoriteBook:
    """Catalog record picked as a user's favorite book."""

    key: str
    title: str
    author_name: list[str] | None = None
    first_publish_year: int | float | None = None

    def to_dict(self) -> dict:
        data = {
            "key": self.key,
            "title": self.title,
        }
        if self.author_name is not None:
            data["author_name"] = list(self.author_name)
        if self.first_publish_year is not None:
            data["first_publish_year"] = self.first_publish_year
        return data

    def encode(self) -> str:
        """Serialize for the ``favorite_book`` text column."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: dict) -> "FavoriteBook":
        return cls(
            key=data["key"],
            title=data["title"],
            author_name=data.get("author_name"),
            first_publish_year=data.get("first_publish_year"),
        )

    @classmethod
    def decode(cls, raw: str | None) -> "FavoriteBook | None":
        if not raw:
            return None
        return cls.from_dict(json.loads(raw))


@dataclass(frozen=True)
class User:
    id: str
    username: str
    password: str  # bcrypt hash, never plaintext
    favorite_book: FavoriteBook | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "password": self.password,
            "favoriteBook": self.favorite_book.to_dict() if self.favorite_book else None,
        }


@dataclass(frozen=True)
class Session:
    id: str
    user_id: str
    token: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "token": self.token,
            "createdAt": self.created_at.isoformat(timespec="microseconds"),
        }


@dataclass(frozen=True)
class Post:
    id: str
    author_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "authorId": self.author_id,
            "title": self.title,
            "content": self.content,
            "createdAt": self.created_at.isoformat(timespec="microseconds"),
            "updatedAt": self.updated_at.isoformat(timespec="microseconds"),
        }


@dataclass(frozen=True)
class UserPatch:
    """Partial profile update.

    ``password`` is plaintext and gets hashed by the repository.
    ``favorite_book=None`` clears the field; ``UNSET`` leaves it alone.
    """

    username: str | None = None
    password: str | None = None
    favorite_book: "FavoriteBook | None | _Unset" = UNSET


@dataclass(frozen=True)
class PostPatch:
    title: str | None = None
    content: str | None = None
