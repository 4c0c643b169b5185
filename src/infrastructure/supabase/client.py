"""Thin async PostgREST client for the Supabase REST API."""

from typing import Any

import httpx
import structlog

from core.exceptions import ErrorCode, RemoteServiceError

logger = structlog.get_logger()

Params = list[tuple[str, str]]


def _parse_count(content_range: str | None) -> int:
    """Total from a ``Content-Range`` header such as ``0-9/42`` or ``*/0``."""
    if not content_range or "/" not in content_range:
        return 0
    total = content_range.rsplit("/", 1)[1]
    try:
        return int(total)
    except ValueError:
        return 0


class SupabaseClient:
    """Table operations over PostgREST.

    Requests carry the anon key as ``apikey`` and, once a user is signed
    in, that user's access token as the bearer credential so row-level
    security applies.
    """

    def __init__(self, http: httpx.AsyncClient, rest_url: str, anon_key: str) -> None:
        self._http = http
        self._rest_url = rest_url.rstrip("/")
        self._anon_key = anon_key
        self._access_token: str | None = None

    def set_access_token(self, token: str | None) -> None:
        """Use a user's token for subsequent requests (None reverts to anon)."""
        self._access_token = token

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {self._access_token or self._anon_key}",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        table: str,
        params: Params,
        *,
        json: Any | None = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        url = f"{self._rest_url}/{table}"
        try:
            response = await self._http.request(
                method, url, params=params, json=json, headers=self._headers(prefer)
            )
        except httpx.HTTPError as e:
            raise RemoteServiceError(
                f"{method} {table} failed: {e}",
                error_code=ErrorCode.TRANSPORT_ERROR,
            ) from e

        if response.status_code >= 400:
            message = response.reason_phrase
            details: Any = None
            if method != "HEAD" and response.content:
                try:
                    details = response.json()
                    if isinstance(details, dict):
                        message = details.get("message") or message
                except ValueError:
                    details = response.text
            logger.warning(
                "supabase_request_rejected",
                method=method,
                table=table,
                status_code=response.status_code,
                message=message,
            )
            raise RemoteServiceError(message, status_code=response.status_code, details=details)
        return response

    async def select(self, table: str, params: Params) -> list[dict[str, Any]]:
        """GET rows."""
        response = await self._request("GET", table, params)
        return response.json()  # type: ignore[no-any-return]

    async def count(self, table: str, params: Params | None = None) -> int:
        """Exact row count without fetching a payload."""
        response = await self._request(
            "HEAD", table, [("select", "*"), *(params or [])], prefer="count=exact"
        )
        return _parse_count(response.headers.get("content-range"))

    async def insert(
        self, table: str, values: dict[str, Any], *, select: str = "*"
    ) -> dict[str, Any]:
        """POST one row and return it as stored."""
        response = await self._request(
            "POST",
            table,
            [("select", select)],
            json=values,
            prefer="return=representation",
        )
        rows = response.json()
        if not rows:
            raise RemoteServiceError(f"Insert into {table} returned no row")
        return rows[0]  # type: ignore[no-any-return]

    async def update(
        self, table: str, params: Params, values: dict[str, Any], *, select: str = "*"
    ) -> list[dict[str, Any]]:
        """PATCH matching rows in one request and return them."""
        response = await self._request(
            "PATCH",
            table,
            [*params, ("select", select)],
            json=values,
            prefer="return=representation",
        )
        return response.json()  # type: ignore[no-any-return]

    async def delete(self, table: str, params: Params) -> list[dict[str, Any]]:
        """DELETE matching rows and return what was removed."""
        response = await self._request(
            "DELETE", table, [*params, ("select", "id")], prefer="return=representation"
        )
        return response.json()  # type: ignore[no-any-return]
