"""Supabase-backed record store helpers."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Any

import httpx
from postgrest import APIError

from ballotbox.config import settings
from ballotbox.utils.errors import StorageFailureError
from supabase import Client

logger = logging.getLogger(__name__)


class RecordStore:
    """Thin query wrapper around a Supabase client.

    Every method raises :class:`StorageFailureError` when the datastore
    rejects the request or cannot be reached.
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    def execute(self, query, default: Any = None) -> Any:
        """Execute a Supabase query and normalize datastore errors."""
        started = time.perf_counter()
        try:
            response = query.execute()
        except APIError as exc:
            message = str(getattr(exc, "message", None) or exc)
            logger.error("Datastore request rejected: %s", message)
            raise StorageFailureError("Database request failed", detail=message) from exc
        except httpx.HTTPError as exc:
            logger.error("Datastore unreachable: %s", exc)
            raise StorageFailureError("Unable to reach the datastore", detail=str(exc)) from exc

        elapsed_ms = (time.perf_counter() - started) * 1000
        threshold_ms = settings.slow_query_log_threshold_ms
        if threshold_ms > 0 and elapsed_ms >= threshold_ms:
            logger.warning("Slow Supabase query %.1fms", elapsed_ms)
        data = response.data
        return default if data is None and default is not None else data

    def find_one(
        self,
        table: str,
        filters: dict[str, Any],
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """Return the first row matching all equality filters, if any."""
        query = self.client.table(table).select(columns)
        for key, value in filters.items():
            query = query.eq(key, value)
        rows = self.execute(query.limit(1), default=[])
        return rows[0] if rows else None

    def select_many(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        columns: str = "*",
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Select many rows with optional equality filters and ordering."""
        query = self.client.table(table).select(columns)
        if filters:
            for key, value in filters.items():
                query = query.eq(key, value)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit:
            query = query.limit(limit)
        return self.execute(query, default=[])

    def select_by_keys(
        self,
        table: str,
        column: str,
        keys: Iterable[str],
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        """Fetch the rows whose ``column`` is one of ``keys``."""
        values = list(dict.fromkeys(str(key) for key in keys))
        if not values:
            return []
        return self.execute(
            self.client.table(table).select(columns).in_(column, values),
            default=[],
        )

    def update(
        self,
        table: str,
        filters: dict[str, Any],
        payload: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Update rows by equality filters and return the updated rows."""
        query = self.client.table(table).update(payload)
        for key, value in filters.items():
            query = query.eq(key, value)
        return self.execute(query, default=[])

    def upsert_one(
        self,
        table: str,
        payload: dict[str, Any],
        on_conflict: str = "",
    ) -> dict[str, Any]:
        """Insert a row, or overwrite the row that conflicts on ``on_conflict``."""
        rows = self.execute(
            self.client.table(table).upsert(payload, on_conflict=on_conflict),
            default=[],
        )
        if not rows:
            raise StorageFailureError(f"Failed to write to {table}")
        return rows[0]
