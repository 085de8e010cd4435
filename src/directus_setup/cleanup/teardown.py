"""Delete every record from the entity collections, dependents first."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from directus_setup.client.http import DirectusClient
from directus_setup.core.dependencies import teardown_order

logger = logging.getLogger(__name__)


class CollectionCleanup(BaseModel):
    collection: str
    deleted: int = 0
    failed: int = 0
    error: str | None = None


class CleanupResult(BaseModel):
    collections: list[CollectionCleanup] = Field(default_factory=list)

    @property
    def total_deleted(self) -> int:
        return sum(c.deleted for c in self.collections)

    @property
    def total_failed(self) -> int:
        return sum(c.failed for c in self.collections)

    def deleted_counts(self) -> dict[str, int]:
        return {c.collection: c.deleted for c in self.collections}


class TeardownEngine:
    """Destructive: removes all items, never the collections themselves."""

    def __init__(self, client: DirectusClient, order: list[str] | None = None) -> None:
        self._client = client
        self._order = order or teardown_order()

    async def clean(self) -> CleanupResult:
        existing = await self._client.collection_names()
        result = CleanupResult()
        for name in self._order:
            if name not in existing:
                logger.info("Collection %s does not exist, skipping", name)
                continue
            result.collections.append(await self.clean_collection(name))
        logger.info("Deleted %d records in total", result.total_deleted)
        return result

    async def clean_collection(self, collection: str) -> CollectionCleanup:
        logger.info("Cleaning %s", collection)
        outcome = CollectionCleanup(collection=collection)
        try:
            items = await self._client.get_all_items(collection)
        except Exception as exc:
            logger.error("Failed to clean %s: %s", collection, exc)
            outcome.error = str(exc)
            return outcome

        if not items:
            logger.info("%s is already empty", collection)
            return outcome

        for item in items:
            try:
                await self._client.delete_item(collection, item.id)
            except Exception as exc:
                logger.warning("Failed to delete item %s from %s: %s", item.id, collection, exc)
                outcome.failed += 1
                continue
            outcome.deleted += 1

        logger.info("Deleted %d items from %s", outcome.deleted, collection)
        return outcome


async def clean(client: DirectusClient) -> CleanupResult:
    return await TeardownEngine(client).clean()
