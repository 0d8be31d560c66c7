"""
supabase_rest.py — HTTP-based access to Supabase's PostgREST API.
Used by the "supabase" storage backend so namespaces can live in a hosted
Postgres without a direct database driver. Uses only httpx.
"""
import httpx
from urllib.parse import quote

from tunimind import config

# Replaced in tests with an httpx.MockTransport
_transport = None


def _headers():
    return {
        "apikey": config.SUPABASE_SERVICE_ROLE_KEY,
        "Authorization": f"Bearer {config.SUPABASE_SERVICE_ROLE_KEY}",
        "Content-Type": "application/json",
        "Prefer": "return=representation",
    }


def _client() -> httpx.Client:
    return httpx.Client(timeout=10, transport=_transport)


def _eq_filters(filters: dict | None) -> str:
    if not filters:
        return ""
    return "".join(f"&{key}=eq.{quote(str(value))}" for key, value in filters.items())


def sb_select(table: str, filters: dict = None, columns: str = "*") -> list:
    """Select rows from a table with optional equality filters."""
    url = f"{config.SUPABASE_URL}/rest/v1/{table}?select={columns}{_eq_filters(filters)}"
    with _client() as client:
        resp = client.get(url, headers=_headers())
        resp.raise_for_status()
        return resp.json()


def sb_upsert(table: str, data: dict, on_conflict: str) -> dict:
    """Insert a row, or merge it into the row that collides on `on_conflict`."""
    url = f"{config.SUPABASE_URL}/rest/v1/{table}?on_conflict={on_conflict}"
    headers = {**_headers(), "Prefer": "resolution=merge-duplicates,return=representation"}
    with _client() as client:
        resp = client.post(url, json=data, headers=headers)
        resp.raise_for_status()
        result = resp.json()
        return result[0] if isinstance(result, list) and result else {}


def sb_delete(table: str, filters: dict) -> None:
    """Delete rows matching all equality filters."""
    if not filters:
        raise ValueError("Refusing to delete without filters")
    url = f"{config.SUPABASE_URL}/rest/v1/{table}?{_eq_filters(filters)[1:]}"
    with _client() as client:
        resp = client.delete(url, headers=_headers())
        resp.raise_for_status()
