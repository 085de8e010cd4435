"""Tests for the integrity verifier."""

from __future__ import annotations

import pytest

from directus_setup.seeding.engine import seed
from directus_setup.verify.verifier import EXPECTED_FIELDS, IntegrityVerifier, verify


def _provision(fake) -> None:
    for name, fields in EXPECTED_FIELDS.items():
        fake.add_collection(name, fields)


class TestIntegrityVerifier:
    @pytest.mark.asyncio
    async def test_seeded_backend_is_healthy(self, fake, client):
        _provision(fake)
        await seed(client)
        report = await verify(client)

        assert report.ok
        assert report.counts() == {"courses": 4, "lessons": 2, "problems": 2, "ai_prompts": 3}
        assert [r.label for r in report.relationships] == [
            "lessons -> courses",
            "problems -> lessons",
        ]
        lessons = report.relationships[0]
        assert lessons.child_count == 2
        assert lessons.parent_count == 4

    @pytest.mark.asyncio
    async def test_sample_label(self, fake, client):
        _provision(fake)
        await seed(client)
        report = await verify(client)
        samples = {d.collection: d.sample for d in report.data}
        assert samples["courses"] == "Mathematics 101"
        assert samples["problems"] == "What is 2x + 3 = 11? Solve for x."

    @pytest.mark.asyncio
    async def test_verification_is_idempotent(self, fake, client):
        _provision(fake)
        await seed(client)
        first = await verify(client)
        second = await verify(client)
        assert first == second

    @pytest.mark.asyncio
    async def test_does_not_write(self, fake, client):
        _provision(fake)
        await seed(client)
        writes_before = [c for c in fake.calls if c[0] != "GET"]
        await verify(client)
        assert [c for c in fake.calls if c[0] != "GET"] == writes_before

    @pytest.mark.asyncio
    async def test_orphaned_lesson_is_reported(self, fake, client):
        _provision(fake)
        await seed(client)
        orphan = fake.insert("lessons", {"name": "Lost", "course_id": 999})

        report = await verify(client)

        assert not report.relationships_ok
        broken = report.relationships[0]
        assert broken.valid is False
        assert broken.orphans == [orphan["id"]]
        assert report.relationships[1].valid

    @pytest.mark.asyncio
    async def test_missing_collection_reported_not_raised(self, fake, client):
        fake.add_collection("courses", EXPECTED_FIELDS["courses"])
        report = await verify(client)

        assert not report.collections_ok
        missing = [c.collection for c in report.collections if not c.exists]
        assert missing == ["lessons", "problems", "ai_prompts"]
        lessons_data = next(d for d in report.data if d.collection == "lessons")
        assert lessons_data.error == "collection missing"
        # relationship checks hit 403s and become error rows
        assert all(r.error for r in report.relationships)

    @pytest.mark.asyncio
    async def test_empty_collections_reported(self, fake, client):
        _provision(fake)
        report = await verify(client)

        assert report.collections_ok
        assert not report.data_ok
        assert all(d.records == 0 and d.sample == "Empty" for d in report.data)
        # nothing to orphan
        assert report.relationships_ok

    @pytest.mark.asyncio
    async def test_missing_fields_reported(self, fake, client):
        _provision(fake)
        fake.add_collection("lessons", ["id", "name"])
        report = await IntegrityVerifier(client).verify()

        lessons = next(c for c in report.collections if c.collection == "lessons")
        assert lessons.exists
        assert lessons.missing_fields == ["course_id", "content"]
        assert not lessons.ok
        assert not report.collections_ok
        assert not report.ok

    @pytest.mark.asyncio
    async def test_sees_records_past_the_default_page(self, fake, client):
        _provision(fake)
        for i in range(120):
            fake.insert("courses", {"name": f"Course {i}"})
        # parent lives on the second page
        fake.insert("lessons", {"name": "Late", "course_id": 120})

        report = await verify(client)

        assert report.counts()["courses"] == 120
        lessons = report.relationships[0]
        assert lessons.parent_count == 120
        assert lessons.valid
