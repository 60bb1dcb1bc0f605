"""Base repository and utilities.

Repositories own the translation between storage rows and domain entities.
They talk to the database only through the persistence gateway.
"""
from datetime import datetime
from typing import Protocol

from ..database import MutationResult


class GatewayProtocol(Protocol):
    """Protocol for the persistence gateway."""

    async def execute(self, sql: str, parameters: tuple = ...) -> MutationResult: ...
    async def query(self, sql: str, parameters: tuple = ...) -> list[dict]: ...


class AsyncRepository:
    """Async base repository class.

    Example:
        class AsyncUserRepository(AsyncRepository):
            async def find(self, user_id: str) -> User:
                row = await self._fetchone("SELECT * FROM users WHERE id = ?", (user_id,))
                ...
    """

    def __init__(self, gateway: GatewayProtocol):
        """Initialize repository with the persistence gateway.

        Args:
            gateway: Shared Database (or any object with execute/query)
        """
        self._db = gateway

    async def _execute(self, sql: str, parameters: tuple = ()) -> MutationResult:
        return await self._db.execute(sql, parameters)

    async def _fetchone(self, sql: str, parameters: tuple = ()) -> dict | None:
        """Fetch first row of a query.

        Args:
            sql: SQL query
            parameters: Query parameters

        Returns:
            Dictionary or None
        """
        rows = await self._db.query(sql, parameters)
        return rows[0] if rows else None

    async def _fetchall(self, sql: str, parameters: tuple = ()) -> list[dict]:
        return await self._db.query(sql, parameters)

    @staticmethod
    def _to_timestamp(value: datetime) -> str:
        return value.isoformat(timespec="microseconds")

    @staticmethod
    def _from_timestamp(value: str) -> datetime:
        return datetime.fromisoformat(value)
