"""Session repository - handles all session-related database operations.

Sessions are opaque bearer tokens. They have no expiry; a session stays valid
until its row is removed.
"""
import secrets

from ...domain.entities import Session, User, utcnow
from .base import AsyncRepository


class AsyncSessionRepository(AsyncRepository):
    """Repository for session management.

    Examples:
        >>> repo = AsyncSessionRepository(db)
        >>> session = await repo.create(user)
        >>> await repo.find_by_token(session.token)
    """

    async def create(self, user: User) -> Session:
        """Create new session for user.

        Args:
            user: Authenticated user

        Returns:
            The persisted session with a fresh random token
        """
        token = secrets.token_urlsafe(32)
        result = await self._execute(
            "INSERT INTO sessions (user_id, token, created_at) VALUES (?, ?, ?)",
            (user.id, token, self._to_timestamp(utcnow()))
        )
        row = await self._fetchone(
            "SELECT * FROM sessions WHERE id = ?",
            (result.last_insert_id,)
        )
        return self._row_to_session(row)

    async def find_by_token(self, token: str) -> Session | None:
        """Exact-match token lookup.

        Returns:
            Session, or None when no row matches
        """
        row = await self._fetchone("SELECT * FROM sessions WHERE token = ?", (token,))
        return self._row_to_session(row) if row else None

    async def delete_for_user(self, user_id: str) -> int:
        """Delete all sessions for user (force logout everywhere).

        Returns:
            Number of sessions deleted
        """
        result = await self._execute("DELETE FROM sessions WHERE user_id = ?", (user_id,))
        return result.rows_affected

    def _row_to_session(self, row: dict) -> Session:
        return Session(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            token=row["token"],
            created_at=self._from_timestamp(row["created_at"]),
        )
