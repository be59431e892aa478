from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fellows.dependencies import get_fellow_repository
from main import app
from posts.dependencies import get_post_repository


class InMemoryStore:
    """Two tables and their id sequences."""

    def __init__(self) -> None:
        self.fellows: dict[int, dict[str, Any]] = {}
        self.posts: dict[int, dict[str, Any]] = {}
        self._next_fellow_id = 1
        self._next_post_id = 1

    def next_fellow_id(self) -> int:
        value = self._next_fellow_id
        self._next_fellow_id += 1
        return value

    def next_post_id(self) -> int:
        value = self._next_post_id
        self._next_post_id += 1
        return value


class InMemoryPostRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def create(self, content: str, fellow_id: int) -> dict | None:
        if fellow_id not in self.store.fellows:
            return None
        post = {"id": self.store.next_post_id(), "post_content": content, "fellow_id": fellow_id}
        self.store.posts[post["id"]] = post
        return dict(post)

    async def list(self) -> list[dict]:
        return [dict(p) for p in self.store.posts.values()]

    async def find_by_id(self, post_id: int) -> dict | None:
        post = self.store.posts.get(post_id)
        return dict(post) if post else None

    async def find_posts_by_fellow_id(self, fellow_id: int) -> list[dict]:
        return [
            {"id": p["id"], "post_content": p["post_content"]}
            for p in self.store.posts.values()
            if p["fellow_id"] == fellow_id
        ]

    async def delete(self, post_id: int) -> dict | None:
        return self.store.posts.pop(post_id, None)

    async def delete_all_posts_for_fellow(self, fellow_id: int) -> int:
        doomed = [pid for pid, p in self.store.posts.items() if p["fellow_id"] == fellow_id]
        for pid in doomed:
            del self.store.posts[pid]
        return len(doomed)


class InMemoryFellowRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def create(self, name: str) -> dict:
        fellow = {"id": self.store.next_fellow_id(), "name": name}
        self.store.fellows[fellow["id"]] = fellow
        return dict(fellow)

    async def list(self) -> list[dict]:
        return [dict(f) for f in self.store.fellows.values()]

    async def find_by_id(self, fellow_id: int) -> dict | None:
        fellow = self.store.fellows.get(fellow_id)
        return dict(fellow) if fellow else None

    async def find_by_name(self, name: str) -> dict | None:
        for fellow in self.store.fellows.values():
            if fellow["name"] == name:
                return dict(fellow)
        return None

    async def edit_name(self, fellow_id: int, new_name: str) -> dict | None:
        fellow = self.store.fellows.get(fellow_id)
        if fellow is None:
            return None
        fellow["name"] = new_name
        return dict(fellow)

    async def delete(self, fellow_id: int) -> list[dict]:
        await InMemoryPostRepository(self.store).delete_all_posts_for_fellow(fellow_id)
        fellow = self.store.fellows.pop(fellow_id, None)
        return [fellow] if fellow else []


class FakeGateway:
    """
    Records every statement and answers from queued results.

    Queue results with `queue(...)` in the order statements will run.
    """

    def __init__(self, log: list | None = None, results: list | None = None) -> None:
        self.log: list = log if log is not None else []
        self.results: list = results if results is not None else []

    def queue(self, *results: Any) -> None:
        self.results.extend(results)

    def _next(self, default: Any) -> Any:
        result = self.results.pop(0) if self.results else default
        if isinstance(result, Exception):
            raise result
        return result

    async def fetch_one(self, sql: str, *args: Any) -> dict | None:
        self.log.append(("fetch_one", " ".join(sql.split()), args))
        return self._next(None)

    async def fetch_all(self, sql: str, *args: Any) -> list[dict]:
        self.log.append(("fetch_all", " ".join(sql.split()), args))
        return self._next([])

    async def execute(self, sql: str, *args: Any) -> str:
        self.log.append(("execute", " ".join(sql.split()), args))
        return self._next("OK")


class FakeDatabase(FakeGateway):
    """FakeGateway plus a transaction() that records begin/commit/rollback."""

    @asynccontextmanager
    async def transaction(self):
        self.log.append(("begin",))
        try:
            yield FakeGateway(self.log, self.results)
        except BaseException:
            self.log.append(("rollback",))
            raise
        self.log.append(("commit",))


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest_asyncio.fixture
async def client(store: InMemoryStore):
    app.dependency_overrides[get_fellow_repository] = lambda: InMemoryFellowRepository(store)
    app.dependency_overrides[get_post_repository] = lambda: InMemoryPostRepository(store)
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
