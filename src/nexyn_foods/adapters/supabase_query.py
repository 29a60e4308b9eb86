"""Shared helpers for executing Supabase queries."""

from typing import Any

import httpx
from supabase import PostgrestAPIError

from nexyn_foods.domain.errors import StoreFailure


def execute(query: Any, action: str) -> Any:
    """Execute a PostgREST query, mapping transport and API errors to StoreFailure."""
    try:
        return query.execute()
    except (PostgrestAPIError, httpx.HTTPError) as exc:
        raise StoreFailure(f"Failed to {action}") from exc
