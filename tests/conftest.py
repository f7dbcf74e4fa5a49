"""Pytest fixtures for ballot box tests."""

from __future__ import annotations

import itertools
import os
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import pytest
from fastapi.testclient import TestClient
from postgrest import APIError


def _set_default_env() -> None:
    os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
    os.environ.setdefault("SUPABASE_SERVICE_KEY", "service-key")


_set_default_env()


@dataclass
class FakeResponse:
    data: Any


class FakeQuery:
    """Subset of the PostgREST request builder backed by in-memory rows."""

    def __init__(self, db: FakeSupabaseClient, table: str) -> None:
        self.db = db
        self.table = table
        self.op = "select"
        self.payload: dict[str, Any] | None = None
        self.on_conflict = ""
        self.filters: list[tuple[str, str, Any]] = []
        self.order_by: tuple[str, bool] | None = None
        self.row_limit: int | None = None

    def select(self, *columns: str, **_: Any) -> FakeQuery:
        self.op = "select"
        return self

    def update(self, payload: dict[str, Any], **_: Any) -> FakeQuery:
        self.op = "update"
        self.payload = dict(payload)
        return self

    def upsert(self, payload: dict[str, Any], on_conflict: str = "", **_: Any) -> FakeQuery:
        self.op = "upsert"
        self.payload = dict(payload)
        self.on_conflict = on_conflict
        return self

    def eq(self, column: str, value: Any) -> FakeQuery:
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column: str, values: list[Any]) -> FakeQuery:
        self.filters.append(("in", column, list(values)))
        return self

    def order(self, column: str, desc: bool = False, **_: Any) -> FakeQuery:
        self.order_by = (column, desc)
        return self

    def limit(self, size: int) -> FakeQuery:
        self.row_limit = size
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        for kind, column, value in self.filters:
            if kind == "eq" and row.get(column) != value:
                return False
            if kind == "in" and row.get(column) not in value:
                return False
        return True

    def execute(self) -> FakeResponse:
        if (self.op, self.table) in self.db.failures:
            raise APIError({"message": f"{self.op} on {self.table} failed", "code": "XX000"})

        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "select":
            result = [dict(row) for row in rows if self._matches(row)]
            if self.order_by:
                column, desc = self.order_by
                result.sort(key=lambda row: row[column], reverse=desc)
            if self.row_limit is not None:
                result = result[: self.row_limit]
            return FakeResponse(result)

        self.db.writes.append((self.op, self.table, dict(self.payload or {})))
        if self.op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload or {})
                    updated.append(dict(row))
            return FakeResponse(updated)

        conflict = [column for column in self.on_conflict.split(",") if column] or ["id"]
        payload = self.payload or {}
        for row in rows:
            if all(row.get(column) == payload.get(column) for column in conflict):
                row.update(payload)
                return FakeResponse([dict(row)])
        return FakeResponse([self.db.add(self.table, payload)])


class FakeSupabaseClient:
    """In-memory stand-in for ``supabase.Client`` in tests."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.writes: list[tuple[str, str, dict[str, Any]]] = []
        self.failures: set[tuple[str, str]] = set()
        self._ids = itertools.count(1)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def add(self, table: str, payload: dict[str, Any]) -> dict[str, Any]:
        row = dict(payload)
        row.setdefault("id", next(self._ids))
        self.tables.setdefault(table, []).append(row)
        return dict(row)

    def fail(self, op: str, table: str) -> None:
        """Make every ``op`` against ``table`` raise an APIError."""
        self.failures.add((op, table))


@pytest.fixture()
def db() -> FakeSupabaseClient:
    """Seeded store: voters v1/v2, active 'pres' and closed 'treas' elections."""
    fake = FakeSupabaseClient()
    fake.tables["voters"] = [{"voter_id": "v1"}, {"voter_id": "v2"}]
    fake.tables["candidates"] = [
        {"key": "c2", "name": "Sam Rivera", "message": "More events, lower fees."},
        {"key": "c1", "name": "Alex Morgan", "message": "Steady hands."},
        {"key": "c3", "name": "Jo Chen", "message": ""},
    ]
    fake.tables["elections"] = [
        {
            "key": "treas",
            "position": "Treasurer",
            "candidate_keys": ["c3"],
            "active": False,
            "sort_order": 2,
        },
        {
            "key": "pres",
            "position": "President",
            "candidate_keys": ["c2", "c1"],
            "active": True,
            "sort_order": 1,
        },
        {
            "key": "empty",
            "position": "Secretary",
            "candidate_keys": [],
            "active": True,
            "sort_order": 3,
        },
    ]
    fake.tables["votes"] = []
    return fake


@pytest.fixture()
def client(db: FakeSupabaseClient) -> Iterator[TestClient]:
    """Create a FastAPI test client wired to the in-memory store."""
    from ballotbox.dependencies import get_db_client
    from ballotbox.main import app

    app.dependency_overrides[get_db_client] = lambda: db
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()
