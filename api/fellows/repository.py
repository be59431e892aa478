"""
Fellow persistence (raw SQL).
"""

from __future__ import annotations

import logging
from typing import Any

from core.db import Database
from posts.repository import PostRepository

logger = logging.getLogger(__name__)


class FellowRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def create(self, name: str) -> dict[str, Any]:
        row = await self.db.fetch_one(
            """
            INSERT INTO fellows (name)
            VALUES ($1)
            RETURNING id, name
            """,
            name,
        )
        if row is None:
            raise RuntimeError("Failed to create fellow.")
        return row

    async def list(self) -> list[dict[str, Any]]:
        return await self.db.fetch_all(
            """
            SELECT id, name
            FROM fellows
            ORDER BY id
            """
        )

    async def find_by_id(self, fellow_id: int) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            """
            SELECT id, name
            FROM fellows
            WHERE id = $1
            """,
            fellow_id,
        )

    async def find_by_name(self, name: str) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            """
            SELECT id, name
            FROM fellows
            WHERE name = $1
            ORDER BY id
            LIMIT 1
            """,
            name,
        )

    async def edit_name(self, fellow_id: int, new_name: str) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            """
            UPDATE fellows
            SET name = $1
            WHERE id = $2
            RETURNING id, name
            """,
            new_name,
            fellow_id,
        )

    async def delete(self, fellow_id: int) -> list[dict[str, Any]]:
        """
        Delete a fellow together with all of their posts, in one transaction.

        Posts go first so that no post is ever left pointing at a missing fellow.
        Returns the deleted fellow rows (empty when the id does not exist).
        """
        async with self.db.transaction() as tx:
            posts_deleted = await PostRepository(tx).delete_all_posts_for_fellow(fellow_id)
            rows = await tx.fetch_all(
                """
                DELETE FROM fellows
                WHERE id = $1
                RETURNING id, name
                """,
                fellow_id,
            )

        if rows:
            logger.info("fellow_deleted fellow_id=%s posts_deleted=%s", fellow_id, posts_deleted)
        return rows
