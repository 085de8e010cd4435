"""Advisory integrity checks over the provisioned collections.

Verification never raises for what it finds: missing collections, empty
collections, request errors and orphaned foreign keys all end up as rows of
the :class:`VerificationReport`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import BaseModel, Field

from directus_setup.client.http import DirectusClient
from directus_setup.core.dependencies import Tier, dependent_tiers

logger = logging.getLogger(__name__)

EXPECTED_FIELDS: dict[str, list[str]] = {
    "courses": ["id", "name", "slug", "description"],
    "lessons": ["id", "name", "course_id", "content"],
    "problems": ["id", "question", "lesson_id", "correct_answer"],
    "ai_prompts": ["id", "name", "system_prompt"],
}


class CollectionCheck(BaseModel):
    collection: str
    exists: bool
    missing_fields: list[str] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.exists and not self.missing_fields and self.error is None


class DataCheck(BaseModel):
    collection: str
    records: int = 0
    sample: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.records > 0


class RelationshipCheck(BaseModel):
    child: str
    parent: str
    foreign_key: str
    child_count: int = 0
    parent_count: int = 0
    orphans: list[Any] = Field(default_factory=list)
    error: str | None = None

    @property
    def label(self) -> str:
        return f"{self.child} -> {self.parent}"

    @property
    def valid(self) -> bool:
        return self.error is None and not self.orphans


class VerificationReport(BaseModel):
    collections: list[CollectionCheck] = Field(default_factory=list)
    data: list[DataCheck] = Field(default_factory=list)
    relationships: list[RelationshipCheck] = Field(default_factory=list)

    @property
    def collections_ok(self) -> bool:
        return all(c.ok for c in self.collections)

    @property
    def data_ok(self) -> bool:
        return all(d.ok for d in self.data)

    @property
    def relationships_ok(self) -> bool:
        return all(r.valid for r in self.relationships)

    @property
    def ok(self) -> bool:
        return self.collections_ok and self.data_ok and self.relationships_ok

    def counts(self) -> dict[str, int]:
        return {d.collection: d.records for d in self.data}


class IntegrityVerifier:
    """Builds a :class:`VerificationReport` without mutating the backend."""

    def __init__(
        self,
        client: DirectusClient,
        expected_fields: dict[str, list[str]] | None = None,
    ) -> None:
        self._client = client
        self._expected = expected_fields or EXPECTED_FIELDS

    async def verify(self) -> VerificationReport:
        collections = await self.verify_collections()
        existing = {c.collection for c in collections if c.exists}
        data = [await self.verify_data(name, name in existing) for name in self._expected]
        relationships = await self.verify_relationships()

        report = VerificationReport(
            collections=collections, data=data, relationships=relationships
        )
        if report.ok:
            logger.info("Setup looks good")
        elif not report.collections_ok:
            logger.warning("Some collections are missing or incomplete. Run the collections step first.")
        return report

    async def verify_collections(self) -> list[CollectionCheck]:
        logger.info("Verifying collections")
        try:
            existing = await self._client.collection_names()
        except Exception as exc:
            logger.warning("Could not list collections: %s", exc)
            return [
                CollectionCheck(collection=name, exists=False, error=str(exc))
                for name in self._expected
            ]

        checks: list[CollectionCheck] = []
        for name, required in self._expected.items():
            if name not in existing:
                logger.warning("Collection %s is missing", name)
                checks.append(CollectionCheck(collection=name, exists=False))
                continue
            try:
                fields = {f.get("field") for f in await self._client.get_fields(name)}
            except Exception as exc:
                checks.append(CollectionCheck(collection=name, exists=True, error=str(exc)))
                continue
            missing = [f for f in required if f not in fields]
            if missing:
                logger.warning("Collection %s lacks fields: %s", name, ", ".join(missing))
            checks.append(CollectionCheck(collection=name, exists=True, missing_fields=missing))
        return checks

    async def verify_data(self, collection: str, exists: bool = True) -> DataCheck:
        if not exists:
            return DataCheck(collection=collection, error="collection missing")
        try:
            items = await self._client.get_all_items(collection)
        except Exception as exc:
            logger.warning("Could not read %s: %s", collection, exc)
            return DataCheck(collection=collection, error=str(exc))
        if not items:
            logger.warning("Collection %s is empty", collection)
            return DataCheck(collection=collection, records=0, sample="Empty")
        return DataCheck(collection=collection, records=len(items), sample=items[0].label)

    async def verify_relationships(self) -> list[RelationshipCheck]:
        logger.info("Verifying relationships")
        return list(await asyncio.gather(*(self._check(t) for t in dependent_tiers())))

    async def _check(self, tier: Tier) -> RelationshipCheck:
        check = RelationshipCheck(
            child=tier.collection, parent=tier.parent, foreign_key=tier.foreign_key
        )
        try:
            children = await self._client.get_all_items(tier.collection)
            parents = await self._client.get_all_items(tier.parent)
        except Exception as exc:
            logger.warning("Could not verify %s: %s", check.label, exc)
            check.error = str(exc)
            return check

        parent_ids = [p.id for p in parents]
        check.child_count = len(children)
        check.parent_count = len(parents)
        check.orphans = [c.id for c in children if c.get(tier.foreign_key) not in parent_ids]
        if check.orphans:
            logger.warning(
                "Broken relationship %s: %d orphaned record(s) %s",
                check.label, len(check.orphans), check.orphans,
            )
        return check


async def verify(client: DirectusClient) -> VerificationReport:
    return await IntegrityVerifier(client).verify()
