"""Authenticated Directus REST client.

Every call fetches the bearer token from the :class:`TokenCache`, sends a
JSON request and unwraps the ``data`` envelope of the response. Non-success
responses are mapped onto the exception taxonomy in
:mod:`directus_setup.core.errors`. No retries are attempted here.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from directus_setup.client.auth import TokenCache
from directus_setup.core.config import DirectusConfig
from directus_setup.core.errors import (
    InvalidCredential,
    PermissionDenied,
    RequestFailed,
)
from directus_setup.core.types import CollectionDescriptor, Item

logger = logging.getLogger(__name__)


class DirectusClient:
    """Thin async wrapper over the Directus collections/items/fields API."""

    def __init__(
        self,
        config: DirectusConfig,
        *,
        access_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        token_cache: TokenCache | None = None,
    ) -> None:
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.api_base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
            transport=transport,
        )
        self.auth = token_cache or TokenCache(config, self._http, access_key=access_key)

    async def __aenter__(self) -> DirectusClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    # -- core request --------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Perform an authenticated request and return the ``data`` payload."""
        headers = await self.auth.auth_headers()
        try:
            resp = await self._http.request(
                method, path, json=json, params=params, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.error("Request failed (%s %s): %s", method, path, exc)
            raise

        if resp.status_code == 401:
            logger.error("401 Unauthorized (%s %s): token is invalid or expired", method, path)
            raise InvalidCredential(resp.status_code, method, path, resp.text)
        if resp.status_code == 403:
            logger.error(
                "403 Forbidden (%s %s): check token permissions for collections/items",
                method, path,
            )
            raise PermissionDenied(resp.status_code, method, path, resp.text)
        if not resp.is_success:
            logger.error("Request failed (%s %s): HTTP %d %s", method, path, resp.status_code, resp.text[:200])
            raise RequestFailed(resp.status_code, method, path, resp.text)

        if not resp.content:
            return None
        body = resp.json()
        if isinstance(body, dict):
            return body.get("data")
        return None

    # -- collections ---------------------------------------------------------

    async def get_collections(self) -> list[dict[str, Any]]:
        logger.debug("Fetching collections")
        return await self.request("GET", "/collections") or []

    async def collection_names(self) -> set[str]:
        return {c["collection"] for c in await self.get_collections()}

    async def create_collection(self, descriptor: CollectionDescriptor) -> dict[str, Any] | None:
        logger.debug("Creating collection: %s", descriptor.collection)
        return await self.request("POST", "/collections", json=descriptor.to_payload())

    async def update_collection(self, name: str, updates: dict[str, Any]) -> dict[str, Any] | None:
        logger.debug("Updating collection: %s", name)
        return await self.request("PATCH", f"/collections/{name}", json=updates)

    # -- items ---------------------------------------------------------------

    async def get_items(self, collection: str, **params: Any) -> list[Item]:
        logger.debug("Fetching items from %s", collection)
        raw = await self.request("GET", f"/items/{collection}", params=params or None) or []
        return [Item.from_api(collection, r) for r in raw]

    async def get_all_items(self, collection: str, **params: Any) -> list[Item]:
        """Fetch every item; without a limit Directus returns only its default page."""
        return await self.get_items(collection, limit=-1, **params)

    async def create_item(self, collection: str, data: dict[str, Any]) -> Item:
        logger.debug("Creating item in %s", collection)
        raw = await self.request("POST", f"/items/{collection}", json=data) or {}
        return Item.from_api(collection, raw)

    async def create_items(self, collection: str, items: list[dict[str, Any]]) -> list[Item]:
        logger.debug("Creating %d items in %s", len(items), collection)
        raw = await self.request("POST", f"/items/{collection}", json=items) or []
        return [Item.from_api(collection, r) for r in raw]

    async def update_item(self, collection: str, item_id: Any, data: dict[str, Any]) -> Item:
        logger.debug("Updating item %s in %s", item_id, collection)
        raw = await self.request("PATCH", f"/items/{collection}/{item_id}", json=data) or {}
        return Item.from_api(collection, raw)

    async def delete_item(self, collection: str, item_id: Any) -> None:
        logger.debug("Deleting item %s from %s", item_id, collection)
        await self.request("DELETE", f"/items/{collection}/{item_id}")

    # -- fields / server -----------------------------------------------------

    async def get_fields(self, collection: str | None = None) -> list[dict[str, Any]]:
        path = f"/fields/{collection}" if collection else "/fields"
        logger.debug("Fetching fields (%s)", collection or "all collections")
        return await self.request("GET", path) or []

    async def get_server_info(self) -> dict[str, Any]:
        return await self.request("GET", "/server/info") or {}

    async def test_connection(self) -> bool:
        """Pre-flight check: True when the server info endpoint answers."""
        logger.info("Testing Directus connection to %s", self.config.url)
        try:
            info = await self.get_server_info()
        except Exception as exc:
            logger.error("Connection failed: %s", exc)
            return False
        version = (info.get("directus") or {}).get("version", "unknown")
        logger.info("Connected to Directus %s", version)
        return True
