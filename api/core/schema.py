"""
Table definitions for fellows and posts.

`posts.fellow_id` references `fellows.id` without ON DELETE CASCADE:
the fellow repository removes posts itself before deleting a fellow.
"""

from __future__ import annotations

from .db import Gateway

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS fellows (
        id serial PRIMARY KEY,
        name text
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS posts (
        id serial PRIMARY KEY,
        post_content text,
        fellow_id integer NOT NULL REFERENCES fellows (id)
    )
    """,
)


async def create_schema(gateway: Gateway) -> None:
    for statement in SCHEMA_STATEMENTS:
        await gateway.execute(statement)
