"""Create the declared collections on the backend, skipping existing ones."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from directus_setup.client.http import DirectusClient
from directus_setup.core.types import CollectionDescriptor

logger = logging.getLogger(__name__)


class ProvisionResult(BaseModel):
    """Outcome of one provisioning run."""

    created: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class SchemaProvisioner:
    """Ensures every descriptor has a matching collection on the backend."""

    def __init__(self, client: DirectusClient) -> None:
        self._client = client

    async def collection_exists(self, name: str) -> bool:
        return name in await self._client.collection_names()

    async def ensure_collection(self, descriptor: CollectionDescriptor) -> bool:
        """Create one collection. Returns False when it already existed."""
        name = descriptor.collection
        if await self.collection_exists(name):
            logger.warning('Collection "%s" already exists, skipping', name)
            return False

        try:
            await self._client.create_collection(descriptor)
        except Exception as exc:
            logger.error('Failed to create collection "%s": %s', name, exc)
            raise
        logger.info("Created collection: %s", name)
        return True

    async def ensure_collections(self, descriptors: list[CollectionDescriptor]) -> ProvisionResult:
        logger.info("Provisioning %d collections", len(descriptors))
        result = ProvisionResult()
        for descriptor in descriptors:
            if await self.ensure_collection(descriptor):
                result.created.append(descriptor.collection)
            else:
                result.skipped.append(descriptor.collection)
        logger.info(
            "Collections created: %d, skipped: %d",
            result.created_count, result.skipped_count,
        )
        return result


async def ensure_collections(
    client: DirectusClient, descriptors: list[CollectionDescriptor]
) -> ProvisionResult:
    """Convenience wrapper around :meth:`SchemaProvisioner.ensure_collections`."""
    return await SchemaProvisioner(client).ensure_collections(descriptors)
