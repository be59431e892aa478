"""
Reset the database to the demo data set.

Usage (from `api/`):
    DATABASE_URL=postgresql://... python -m core.seed
"""

from __future__ import annotations

import asyncio
import logging

from .db import Database, Gateway
from .log import configure_logging
from .schema import create_schema

logger = logging.getLogger(__name__)

SEED_FELLOWS = ("Maya", "Reuben", "Gonzalo", "Ben")


async def seed(gateway: Gateway) -> None:
    """
    Delete everything, restart ids at 1 and insert one post per fellow.
    """
    await gateway.execute("DELETE FROM posts")
    await gateway.execute("DELETE FROM fellows")
    await gateway.execute("ALTER SEQUENCE posts_id_seq RESTART WITH 1")
    await gateway.execute("ALTER SEQUENCE fellows_id_seq RESTART WITH 1")

    for name in SEED_FELLOWS:
        row = await gateway.fetch_one(
            """
            INSERT INTO fellows (name)
            VALUES ($1)
            RETURNING id
            """,
            name,
        )
        if row is None:
            raise RuntimeError(f"Failed to seed fellow {name}.")
        await gateway.execute(
            """
            INSERT INTO posts (post_content, fellow_id)
            VALUES ($1, $2)
            """,
            f"hello world i am {name.lower()}",
            int(row["id"]),
        )

    logger.info("seed_complete fellows=%s posts=%s", len(SEED_FELLOWS), len(SEED_FELLOWS))


async def main() -> None:
    db = Database.from_env()
    await db.connect()
    try:
        async with db.transaction() as tx:
            await create_schema(tx)
            await seed(tx)
    finally:
        await db.close()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main())
