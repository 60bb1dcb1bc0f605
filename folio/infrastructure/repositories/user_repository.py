"""User repository - handles all user-related database operations."""
import asyncio

import bcrypt

from ...config import BCRYPT_ROUNDS
from ...domain.entities import UNSET, FavoriteBook, User, UserPatch, utcnow
from ...errors import NotFoundError
from .base import AsyncRepository


class AsyncUserRepository(AsyncRepository):
    """Repository for user entity operations.

    Passwords are hashed with bcrypt off the event loop, since a cost-10 hash
    takes tens of milliseconds.

    Examples:
        >>> repo = AsyncUserRepository(db)
        >>> user = await repo.register("alice", "password123")
        >>> same = await repo.find_by_credentials("alice", "password123")
    """

    def __init__(self, gateway, rounds: int = BCRYPT_ROUNDS):
        super().__init__(gateway)
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    async def register(self, username: str, password: str) -> User:
        """Create new user.

        Args:
            username: Unique username
            password: Plain text password (will be hashed)

        Returns:
            The persisted user

        Raises:
            ConflictError: username already exists
        """
        password_hash = await self._hash_password(password)
        result = await self._execute(
            """INSERT INTO users (username, password, favorite_book, created_at)
               VALUES (?, ?, NULL, ?)""",
            (username, password_hash, self._to_timestamp(utcnow()))
        )
        return await self.find(str(result.last_insert_id))

    async def find(self, user_id: str) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: no user with that id
        """
        row = await self._fetchone("SELECT * FROM users WHERE id = ?", (user_id,))
        if row is None:
            raise NotFoundError("User", user_id)
        return self._row_to_user(row)

    async def find_by_username(self, username: str) -> User | None:
        row = await self._fetchone("SELECT * FROM users WHERE username = ?", (username,))
        return self._row_to_user(row) if row else None

    async def find_by_credentials(self, username: str, password: str) -> User | None:
        """Authenticate user with username and password.

        A hash comparison runs even when the username is unknown, so both
        failure cases take the same time.

        Returns:
            User if the password matches, None otherwise
        """
        user = await self.find_by_username(username)
        if user is None:
            await self._verify_password(password, await self._get_dummy_hash())
            return None
        if await self._verify_password(password, user.password):
            return user
        return None

    async def update(self, user_id: str, patch: UserPatch) -> User:
        """Merge supplied fields over the stored user and write all columns.

        Args:
            user_id: User ID
            patch: Fields to change; password is plaintext

        Returns:
            The user as stored after the write

        Raises:
            NotFoundError: no user with that id
        """
        current = await self.find(user_id)

        username = patch.username if patch.username is not None else current.username
        if patch.password is not None:
            password_hash = await self._hash_password(patch.password)
        else:
            password_hash = current.password
        if patch.favorite_book is UNSET:
            favorite_book = current.favorite_book
        else:
            favorite_book = patch.favorite_book

        await self._execute(
            "UPDATE users SET username = ?, password = ?, favorite_book = ? WHERE id = ?",
            (
                username,
                password_hash,
                favorite_book.encode() if favorite_book else None,
                current.id,
            )
        )
        return await self.find(current.id)

    async def delete(self, user_id: str) -> None:
        """Delete user; their sessions and posts go with them."""
        await self._execute("DELETE FROM users WHERE id = ?", (user_id,))

    async def list_all(self) -> list[User]:
        rows = await self._fetchall("SELECT * FROM users ORDER BY id")
        return [self._row_to_user(row) for row in rows]

    # Private helper methods

    def _row_to_user(self, row: dict) -> User:
        return User(
            id=str(row["id"]),
            username=row["username"],
            password=row["password"],
            favorite_book=FavoriteBook.decode(row["favorite_book"]),
        )

    async def _hash_password(self, password: str) -> str:
        hashed = await asyncio.to_thread(
            bcrypt.hashpw, password.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds)
        )
        return hashed.decode("utf-8")

    async def _verify_password(self, password: str, hashed: str | bytes) -> bool:
        if isinstance(hashed, str):
            hashed = hashed.encode("utf-8")
        try:
            return await asyncio.to_thread(bcrypt.checkpw, password.encode("utf-8"), hashed)
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    async def _get_dummy_hash(self) -> bytes:
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(
                bcrypt.hashpw, b"folio-timing-guard", bcrypt.gensalt(rounds=self._rounds)
            )
        return self._dummy_hash
