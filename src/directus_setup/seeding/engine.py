"""Seed demo records tier by tier, resolving parent references by name.

Tiers run strictly in :data:`DEPENDENCY_ORDER`. Each dependent tier looks up
its parents' ids in the name map built by the tier before it, so a tier's
batch create must complete before the next tier is prepared. A failure
aborts the run; tiers already created stay on the backend.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Mapping

from pydantic import BaseModel, Field

from directus_setup.client.http import DirectusClient
from directus_setup.core.dependencies import DEPENDENCY_ORDER, Tier
from directus_setup.core.errors import (
    DependencyResolutionError,
    DuplicateNameError,
    MissingPrerequisite,
)
from directus_setup.core.types import Item
from directus_setup.seeding.demo_data import DEMO_PAYLOADS

logger = logging.getLogger(__name__)


class SeedSummary(BaseModel):
    """Records created per collection during one run."""

    created: dict[str, list[Any]] = Field(default_factory=dict)

    @property
    def counts(self) -> dict[str, int]:
        return {name: len(ids) for name, ids in self.created.items()}

    @property
    def total(self) -> int:
        return sum(self.counts.values())


class SeedingEngine:
    """Creates the demo dataset on a provisioned backend."""

    def __init__(
        self,
        client: DirectusClient,
        payloads: Mapping[str, list[dict[str, Any]]] | None = None,
        tiers: tuple[Tier, ...] = DEPENDENCY_ORDER,
    ) -> None:
        self._client = client
        self._payloads = payloads if payloads is not None else DEMO_PAYLOADS
        self._tiers = tiers
        self._parents = {t.parent for t in tiers if t.parent is not None}

    async def check_prerequisites(self) -> None:
        """Raise MissingPrerequisite unless every tier's collection exists."""
        existing = await self._client.collection_names()
        missing = [t.collection for t in self._tiers if t.collection not in existing]
        if missing:
            logger.error("Missing collections: %s", ", ".join(missing))
            raise MissingPrerequisite(missing)

    async def seed(self) -> SeedSummary:
        await self.check_prerequisites()

        name_maps: dict[str, dict[str, Any]] = {}
        summary = SeedSummary()
        for tier in self._tiers:
            created = await self.seed_tier(tier, name_maps)
            summary.created[tier.collection] = [item.id for item in created]
            if tier.collection in self._parents:
                name_maps[tier.collection] = {item.name: item.id for item in created}

        logger.info("Seeded %d records: %s", summary.total, summary.counts)
        return summary

    async def seed_tier(
        self, tier: Tier, name_maps: Mapping[str, Mapping[str, Any]]
    ) -> list[Item]:
        """Resolve, submit and return the created records of one tier."""
        records = self._payloads.get(tier.collection, [])
        if not records:
            logger.info("No %s to seed", tier.collection)
            return []

        logger.info("Populating %s", tier.collection)
        if tier.collection in self._parents:
            _reject_duplicate_names(tier.collection, records)
        prepared = [self._resolve(tier, record, name_maps) for record in records]

        try:
            created = await self._client.create_items(tier.collection, prepared)
        except Exception as exc:
            logger.error("Failed to populate %s: %s", tier.collection, exc)
            raise
        logger.info("Created %d %s", len(created), tier.collection)
        return created

    def _resolve(
        self,
        tier: Tier,
        record: dict[str, Any],
        name_maps: Mapping[str, Mapping[str, Any]],
    ) -> dict[str, Any]:
        if not tier.is_dependent:
            return dict(record)

        name = record.get(tier.reference_field)
        parents = name_maps.get(tier.parent, {})
        if name not in parents:
            logger.error(
                'Cannot resolve %s "%s" for %s', tier.reference_field, name, tier.collection
            )
            raise DependencyResolutionError(tier.collection, tier.reference_field, str(name))

        resolved = {k: v for k, v in record.items() if k != tier.reference_field}
        resolved[tier.foreign_key] = parents[name]
        return resolved


def _reject_duplicate_names(collection: str, records: list[dict[str, Any]]) -> None:
    counts = Counter(r.get("name") for r in records)
    for name, count in counts.items():
        if count > 1:
            raise DuplicateNameError(collection, str(name))


async def seed(
    client: DirectusClient, payloads: Mapping[str, list[dict[str, Any]]] | None = None
) -> SeedSummary:
    return await SeedingEngine(client, payloads).seed()
