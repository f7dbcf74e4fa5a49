"""FastAPI dependency injection helpers."""

from __future__ import annotations

import logging
import threading
from typing import Any

from fastapi import Request

from ballotbox.utils.errors import StorageFailureError
from ballotbox.utils.supabase_client import build_http_client, create_db_client
from supabase import Client

logger = logging.getLogger(__name__)
_connect_lock = threading.Lock()


def connect_record_store(state: Any) -> Client | None:
    """Build the record store client onto ``state``.

    Construction failures are logged and leave ``state.db_client`` unset so
    the process keeps serving; requests needing the store then fail with a
    500 instead.
    """
    if getattr(state, "http_client", None) is None:
        state.http_client = build_http_client()
    try:
        state.db_client = create_db_client(state.http_client)
    except Exception as exc:
        logger.error("Failed to create datastore client: %s", exc)
        state.db_client = None
        state.db_client_error = str(exc)
    return state.db_client


def close_record_store(state: Any) -> None:
    """Release the HTTP pool behind the record store client."""
    http_client = getattr(state, "http_client", None)
    if http_client is not None:
        http_client.close()
        state.http_client = None
    state.db_client = None


def get_db_client(request: Request) -> Client:
    """Return the record store client owned by the application."""
    state = request.app.state
    client = getattr(state, "db_client", None)
    if client is None:
        with _connect_lock:
            client = getattr(state, "db_client", None)
            if client is None:
                client = connect_record_store(state)
    if client is None:
        raise StorageFailureError(
            "Unable to reach the datastore",
            detail=getattr(state, "db_client_error", ""),
        )
    return client
