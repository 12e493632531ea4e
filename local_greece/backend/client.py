"""
Local Greece - Directory backend client

Thin client for the hosted backend (Supabase): row CRUD through the
PostgREST API under /rest/v1 and user sessions through the auth API under
/auth/v1.

One client is constructed at startup and passed to whatever needs it; a
signed-in user gets a copy bound to their access token via
`with_access_token`.

Usage:
    from local_greece.backend.client import DirectoryClient

    client = DirectoryClient.from_config(config)
    if client is not None:
        rows = client.fetch_approved_listings()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import requests

from local_greece.shared.config import Settings
from local_greece.shared.errors import BackendError, NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class DirectoryClient:
    """
    REST client for the directory backend.

    All methods raise BackendError (or a subclass) on failure.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
        listings_table: str = "listings",
        session: requests.Session | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Project URL, e.g. https://xyz.supabase.co
            api_key: Public anon key
            access_token: User JWT; requests run as anon when omitted
            timeout: Per-request timeout in seconds
            listings_table: Name of the listings table
            session: Optional shared requests session
        """
        if not base_url or not api_key:
            raise ValueError("base_url and api_key are required")

        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout
        self.listings_table = listings_table
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Settings) -> DirectoryClient | None:
        """Build a client from settings, or None if the backend is not configured."""
        if not config.backend_configured:
            logger.warning(
                "Supabase credentials are not set; the directory will use sample data"
            )
            return None
        return cls(
            base_url=config.supabase_url,
            api_key=config.supabase_anon_key,
            timeout=config.backend.timeout_seconds,
            listings_table=config.backend.listings_table,
        )

    def with_access_token(self, access_token: str) -> DirectoryClient:
        """A client sharing this one's session, acting as the given user."""
        return DirectoryClient(
            base_url=self.base_url,
            api_key=self.api_key,
            access_token=access_token,
            timeout=self.timeout,
            listings_table=self.listings_table,
            session=self.session,
        )

    # ==========================================================================
    # Low-level HTTP
    # ==========================================================================

    def _headers(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
            "Content-Type": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        path: str,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(headers),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Backend request failed: {method} {path}: {e}")
            raise BackendError(f"Request to {path} failed: {e}") from e

        if response.status_code in (401, 403):
            raise PermissionDeniedError(
                f"HTTP {response.status_code}: {response.text[:200]}", response.status_code
            )
        if response.status_code == 404:
            raise NotFoundError(f"HTTP 404: {path}", 404)
        if response.status_code >= 400:
            raise BackendError(
                f"HTTP {response.status_code}: {response.text[:200]}", response.status_code
            )

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ==========================================================================
    # Row access (PostgREST)
    # ==========================================================================

    @staticmethod
    def _filter_params(filters: Mapping[str, Any] | None) -> dict[str, str]:
        return {column: f"eq.{_format_value(value)}" for column, value in (filters or {}).items()}

    def select(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        order: str | None = None,
        ascending: bool = True,
    ) -> list[dict[str, Any]]:
        """
        Select rows matching equality filters.

        Args:
            table: Table name
            filters: Column -> value equality filters
            order: Column to order by
            ascending: Sort direction for `order`
        """
        params = {"select": "*", **self._filter_params(filters)}
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"

        logger.debug(f"GET {table}?{urlencode(params)}")
        rows = self._request("GET", f"/rest/v1/{table}", params=params)
        return rows or []

    def select_one(self, table: str, filters: Mapping[str, Any]) -> dict[str, Any]:
        """
        Select exactly one row.

        Raises:
            NotFoundError: If no row matches.
        """
        rows = self.select(table, filters=filters)
        if not rows:
            raise NotFoundError(f"No row in {table} matching {dict(filters)}", 404)
        return rows[0]

    def insert(self, table: str, rows: list[Mapping[str, Any]]) -> list[dict[str, Any]]:
        """Insert rows and return them as stored."""
        result = self._request(
            "POST",
            f"/rest/v1/{table}",
            json=[dict(r) for r in rows],
            headers={"Prefer": "return=representation"},
        )
        return result or []

    def update(
        self, table: str, values: Mapping[str, Any], filters: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        """Update rows matching filters and return them as stored."""
        if not filters:
            raise ValueError("Refusing to update without filters")
        result = self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=self._filter_params(filters),
            json=dict(values),
            headers={"Prefer": "return=representation"},
        )
        return result or []

    def delete(self, table: str, filters: Mapping[str, Any]) -> None:
        """Delete rows matching filters."""
        if not filters:
            raise ValueError("Refusing to delete without filters")
        self._request("DELETE", f"/rest/v1/{table}", params=self._filter_params(filters))

    # ==========================================================================
    # Listings
    # ==========================================================================

    def fetch_approved_listings(self) -> list[dict[str, Any]]:
        """Listings visible to the public."""
        return self.select(self.listings_table, filters={"approved": True})

    def fetch_pending_listings(self) -> list[dict[str, Any]]:
        """Listings awaiting admin review."""
        return self.select(self.listings_table, filters={"approved": False})

    def fetch_listing(self, listing_id: int) -> dict[str, Any]:
        """A single listing by id."""
        return self.select_one(self.listings_table, {"id": listing_id})

    def fetch_user_listings(self, user_id: str) -> list[dict[str, Any]]:
        """A business user's own listings, newest first."""
        return self.select(
            self.listings_table,
            filters={"user_id": user_id},
            order="created_at",
            ascending=False,
        )

    def approve_listing(self, listing_id: int) -> None:
        self.update(self.listings_table, {"approved": True}, {"id": listing_id})

    def delete_listing(self, listing_id: int) -> None:
        self.delete(self.listings_table, {"id": listing_id})

    def create_listing(self, values: Mapping[str, Any]) -> dict[str, Any] | None:
        rows = self.insert(self.listings_table, [values])
        return rows[0] if rows else None

    def update_listing(self, listing_id: int, values: Mapping[str, Any]) -> dict[str, Any] | None:
        rows = self.update(self.listings_table, values, {"id": listing_id})
        return rows[0] if rows else None

    # ==========================================================================
    # Auth
    # ==========================================================================

    def authorize_url(self, provider: str = "google", redirect_to: str | None = None) -> str:
        """URL that starts an OAuth sign-in with the given provider."""
        params = {"provider": provider}
        if redirect_to:
            params["redirect_to"] = redirect_to
        return f"{self.base_url}/auth/v1/authorize?{urlencode(params)}"

    def get_user(self) -> dict[str, Any]:
        """
        The user behind the current access token.

        Raises:
            PermissionDeniedError: If no access token is set or it is rejected.
        """
        if not self.access_token:
            raise PermissionDeniedError("Not signed in", 401)
        return self._request("GET", "/auth/v1/user")

    def sign_out(self) -> None:
        """Revoke the current session."""
        if not self.access_token:
            return
        self._request("POST", "/auth/v1/logout")
        self.access_token = None
