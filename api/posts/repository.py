"""
Post persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Gateway


def _affected_rows(status: str) -> int:
    """
    Parse the row count out of an asyncpg command status ("DELETE 3" -> 3).
    """
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (AttributeError, ValueError):
        return 0


class PostRepository:
    """
    Posts are always owned by exactly one fellow.

    `gateway` may be the process `Database` or a transaction-bound `Gateway`.
    """

    def __init__(self, gateway: Gateway) -> None:
        self.gateway = gateway

    async def create(self, content: str, fellow_id: int) -> dict[str, Any] | None:
        """
        Insert a post for an existing fellow.
        Returns None (and inserts nothing) when the fellow does not exist.
        """
        return await self.gateway.fetch_one(
            """
            INSERT INTO posts (post_content, fellow_id)
            SELECT $1, f.id
            FROM fellows f
            WHERE f.id = $2
            RETURNING id, post_content, fellow_id
            """,
            content,
            fellow_id,
        )

    async def list(self) -> list[dict[str, Any]]:
        return await self.gateway.fetch_all(
            """
            SELECT id, post_content, fellow_id
            FROM posts
            ORDER BY id
            """
        )

    async def find_by_id(self, post_id: int) -> dict[str, Any] | None:
        return await self.gateway.fetch_one(
            """
            SELECT id, post_content, fellow_id
            FROM posts
            WHERE id = $1
            """,
            post_id,
        )

    async def find_posts_by_fellow_id(self, fellow_id: int) -> list[dict[str, Any]]:
        """
        Return the `id`/`post_content` projection of one fellow's posts (possibly empty).
        """
        return await self.gateway.fetch_all(
            """
            SELECT p.id, p.post_content
            FROM posts p
            JOIN fellows f ON p.fellow_id = f.id
            WHERE f.id = $1
            ORDER BY p.id
            """,
            fellow_id,
        )

    async def delete(self, post_id: int) -> dict[str, Any] | None:
        return await self.gateway.fetch_one(
            """
            DELETE FROM posts
            WHERE id = $1
            RETURNING id, post_content, fellow_id
            """,
            post_id,
        )

    async def delete_all_posts_for_fellow(self, fellow_id: int) -> int:
        """
        Bulk-delete a fellow's posts. Returns how many rows were removed.
        """
        status = await self.gateway.execute(
            """
            DELETE FROM posts
            WHERE fellow_id = $1
            """,
            fellow_id,
        )
        return _affected_rows(status)
