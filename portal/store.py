# portal/store.py
"""
Thin async client for the Supabase REST (PostgREST) interface.

Every helper issues exactly one HTTP call to {SUPABASE_URL}/rest/v1/{table}
and parses the JSON body. Non-2xx responses raise ExternalStoreError.
No retries, no batching, no transactions across tables.
"""

from typing import Optional
from urllib.parse import quote

import httpx

from portal.config import settings
from portal.errors import ExternalStoreError
from portal.utils.logger import get_logger

logger = get_logger(__name__)


def eq_filter(column: str, value) -> str:
    """Build an exact-match filter clause, e.g. passcode=eq.ABC1"""
    return f"{column}=eq.{quote(str(value), safe='')}"


class SupabaseStore:
    def __init__(self, base_url: Optional[str], api_key: Optional[str],
                 timeout: float = 10.0, transport: httpx.AsyncBaseTransport = None):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport   # injected by tests (httpx.MockTransport)

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    async def _request(self, method: str, table: str, query: str = "",
                       body=None, prefer: str = ""):
        if not self.configured:
            raise ExternalStoreError(0, "Supabase URL or key not configured", method, table)

        url = f"{self.base_url}/rest/v1/{table}"
        if query:
            url += f"?{query}"
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }
        if prefer:
            headers["Prefer"] = prefer

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, headers=headers, json=body)
        except httpx.HTTPError as e:
            logger.error(f"[STORE] {method} {table} transport error: {e}")
            raise ExternalStoreError(0, str(e), method, table) from e

        if response.is_error:
            logger.error(f"[STORE] {method} {table} → HTTP {response.status_code}: {response.text}")
            raise ExternalStoreError(response.status_code, response.text, method, table)

        logger.debug(f"[STORE] {method} {table} → HTTP {response.status_code}")
        if not response.content:
            return []
        return response.json()

    async def select(self, table: str, filter: str = "", columns: str = "*") -> list:
        query = f"select={quote(columns, safe='')}" if columns else ""
        if filter:
            query += ("&" if query else "") + filter
        return await self._request("GET", table, query=query)

    async def insert(self, table: str, row: dict) -> Optional[dict]:
        result = await self._request("POST", table, body=row, prefer="return=representation")
        return result[0] if result else None

    async def upsert(self, table: str, row: dict, conflict_column: str = None) -> Optional[dict]:
        """Insert-or-update. Rows colliding on conflict_column are merged."""
        if conflict_column:
            prefer = "return=representation,resolution=merge-duplicates"
            query = f"on_conflict={quote(conflict_column, safe='')}"
        else:
            prefer, query = "return=representation", ""
        result = await self._request("POST", table, query=query, body=row, prefer=prefer)
        return result[0] if result else None

    async def delete(self, table: str, filter: str) -> None:
        await self._request("DELETE", table, query=filter)


def get_store() -> SupabaseStore:
    """FastAPI dependency — store client built from settings."""
    return SupabaseStore(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY,
                         timeout=settings.STORE_TIMEOUT_SECONDS)
