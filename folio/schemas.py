"""Request payload validators.

Pydantic models checking payload shape independent of storage state. Pydantic
reports every failing field at once; ``collect_errors`` folds that report into
the ``{"errors": {field: [messages]}}`` body the API returns with 422.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH
from .domain.entities import UNSET, FavoriteBook, PostPatch, UserPatch

# Location prefixes FastAPI adds that mean nothing to API clients
_LOC_PREFIXES = {"body", "query", "path"}


def _not_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


class RegistrationInput(BaseModel):
    username: str = Field(min_length=MIN_USERNAME_LENGTH)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class LoginInput(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class FavoriteBookInput(BaseModel):
    """Catalog record. Optional fields left out stay out when read back."""

    key: str = Field(min_length=1)
    title: str = Field(min_length=1)
    author_name: list[str] | None = None
    first_publish_year: int | float | None = None

    @field_validator("key", "title")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("first_publish_year", mode="before")
    @classmethod
    def check_numeric(cls, value: Any) -> Any:
        if value is None:
            return value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("must be a number")
        return value

    def to_entity(self) -> FavoriteBook:
        return FavoriteBook(
            key=self.key,
            title=self.title,
            author_name=list(self.author_name) if self.author_name is not None else None,
            first_publish_year=self.first_publish_year,
        )


class ProfileUpdateInput(BaseModel):
    """Profile update. Omitted fields stay as stored; ``favoriteBook: null`` clears it."""

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = Field(default=None, min_length=MIN_USERNAME_LENGTH)
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)
    favorite_book: FavoriteBookInput | None = Field(default=None, alias="favoriteBook")

    def to_patch(self) -> UserPatch:
        if "favorite_book" not in self.model_fields_set:
            favorite_book = UNSET
        elif self.favorite_book is None:
            favorite_book = None
        else:
            favorite_book = self.favorite_book.to_entity()
        return UserPatch(
            username=self.username,
            password=self.password,
            favorite_book=favorite_book,
        )


class PostInput(BaseModel):
    """Post create and update payload: both fields required and non-empty."""

    title: str = Field(min_length=1)
    content: str = Field(min_length=1)

    @field_validator("title", "content")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    def to_patch(self) -> PostPatch:
        return PostPatch(title=self.title, content=self.content)


def collect_errors(errors: list[dict[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error entries by field name.

    Args:
        errors: Output of ``ValidationError.errors()`` or
            ``RequestValidationError.errors()``

    Returns:
        Mapping of dotted field path to its messages, in report order
    """
    grouped: dict[str, list[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in _LOC_PREFIXES:
            loc = loc[1:]
        field = ".".join(loc) or "body"
        grouped.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return grouped
