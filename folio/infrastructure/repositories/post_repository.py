"""Post repository - handles all post-related database operations.

Authorization-agnostic: callers decide who may write.
"""
from ...domain.entities import Post, PostPatch, utcnow
from ...errors import NotFoundError
from .base import AsyncRepository


class AsyncPostRepository(AsyncRepository):
    """Repository for post CRUD."""

    async def create(self, title: str, content: str, author_id: str) -> Post:
        """Create a new post.

        Args:
            title: Post title
            content: Post body
            author_id: Author user ID, taken from the session

        Returns:
            The persisted post, with created_at equal to updated_at
        """
        now = self._to_timestamp(utcnow())
        result = await self._execute(
            """INSERT INTO posts (author_id, title, content, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?)""",
            (author_id, title, content, now, now)
        )
        return await self.find(str(result.last_insert_id))

    async def find(self, post_id: str) -> Post:
        """Get post by ID.

        Raises:
            NotFoundError: no post with that id
        """
        row = await self._fetchone("SELECT * FROM posts WHERE id = ?", (post_id,))
        if row is None:
            raise NotFoundError("Post", post_id)
        return self._row_to_post(row)

    async def all(self) -> list[Post]:
        """All posts, newest first. Equal timestamps keep insertion order, newest first."""
        rows = await self._fetchall(
            "SELECT * FROM posts ORDER BY created_at DESC, id DESC"
        )
        return [self._row_to_post(row) for row in rows]

    async def update(self, post_id: str, patch: PostPatch) -> Post:
        """Update title and/or content and bump updated_at.

        The statement is the same whichever fields are supplied; missing ones
        keep their stored value.

        Raises:
            NotFoundError: no post with that id
        """
        await self._execute(
            """UPDATE posts
               SET title = COALESCE(?, title),
                   content = COALESCE(?, content),
                   updated_at = ?
               WHERE id = ?""",
            (patch.title, patch.content, self._to_timestamp(utcnow()), post_id)
        )
        return await self.find(post_id)

    async def delete(self, post_id: str) -> None:
        """Delete post. Deleting a missing post is not an error."""
        await self._execute("DELETE FROM posts WHERE id = ?", (post_id,))

    def _row_to_post(self, row: dict) -> Post:
        return Post(
            id=str(row["id"]),
            author_id=str(row["author_id"]),
            title=row["title"],
            content=row["content"],
            created_at=self._from_timestamp(row["created_at"]),
            updated_at=self._from_timestamp(row["updated_at"]),
        )
