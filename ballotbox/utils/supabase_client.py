"""Supabase client construction for the record store."""

from __future__ import annotations

import httpx
from supabase.lib.client_options import SyncClientOptions

from ballotbox.config import Settings, settings
from supabase import Client, create_client


def build_http_client(config: Settings = settings) -> httpx.Client:
    """Return a pooled HTTP client sized from settings."""
    max_connections = max(10, config.supabase_http_max_connections)
    max_keepalive_connections = max(
        5,
        min(max_connections, config.supabase_http_max_keepalive_connections),
    )
    timeout_seconds = max(1, config.supabase_postgrest_timeout_seconds)

    return httpx.Client(
        timeout=httpx.Timeout(timeout_seconds),
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        ),
    )


def _build_sync_options(http_client: httpx.Client, config: Settings) -> SyncClientOptions:
    timeout_seconds = max(1, config.supabase_postgrest_timeout_seconds)
    return SyncClientOptions(
        auto_refresh_token=False,
        persist_session=False,
        postgrest_client_timeout=timeout_seconds,
        storage_client_timeout=timeout_seconds,
        function_client_timeout=min(timeout_seconds, 30),
        httpx_client=http_client,
    )


def create_db_client(http_client: httpx.Client, config: Settings = settings) -> Client:
    """Return a service-role Supabase client over ``http_client``.

    The caller owns ``http_client`` and closes it when the process stops.
    """
    return create_client(
        config.supabase_url,
        config.supabase_service_key,
        options=_build_sync_options(http_client, config),
    )
