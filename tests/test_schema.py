"""Tests for the schema loader and the collection provisioner."""

from __future__ import annotations

import pytest
import yaml

from directus_setup.core.errors import RequestFailed
from directus_setup.core.types import CollectionDescriptor
from directus_setup.schema.loader import DEFAULT_SCHEMA_PATH, load_collections
from directus_setup.schema.provisioner import SchemaProvisioner, ensure_collections


def _descriptors(*names: str) -> list[CollectionDescriptor]:
    return [
        CollectionDescriptor(collection=n, fields=[{"field": "id", "type": "integer"}])
        for n in names
    ]


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


class TestLoadCollections:
    def test_default_schema(self):
        descriptors = load_collections()
        assert [d.collection for d in descriptors] == [
            "courses", "lessons", "problems", "ai_prompts",
        ]

    def test_default_schema_declares_foreign_keys(self):
        by_name = {d.collection: d for d in load_collections(DEFAULT_SCHEMA_PATH)}
        assert "course_id" in by_name["lessons"].field_names
        assert "lesson_id" in by_name["problems"].field_names

    def test_payload_uses_directus_keys(self):
        lessons = next(d for d in load_collections() if d.collection == "lessons")
        payload = lessons.to_payload()
        assert payload["schema"] == {"name": "lessons"}
        course_fk = next(f for f in payload["fields"] if f["field"] == "course_id")
        assert course_fk["schema"]["foreign_key_table"] == "courses"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_collections(tmp_path / "nope.yml")

    def test_duplicate_collection_rejected(self, tmp_path):
        path = tmp_path / "collections.yml"
        path.write_text(yaml.safe_dump({
            "collections": [{"collection": "courses"}, {"collection": "courses"}],
        }))
        with pytest.raises(ValueError, match="Duplicate collection"):
            load_collections(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "collections.yml"
        path.write_text("")
        assert load_collections(path) == []

    def test_descriptor_is_frozen(self):
        descriptor = _descriptors("courses")[0]
        with pytest.raises(Exception):
            descriptor.collection = "other"


# ---------------------------------------------------------------------------
# Provisioner
# ---------------------------------------------------------------------------


class TestSchemaProvisioner:
    @pytest.mark.asyncio
    async def test_creates_all_when_none_exist(self, fake, client):
        result = await ensure_collections(
            client, _descriptors("courses", "lessons", "problems", "ai_prompts")
        )
        assert result.created_count == 4
        assert result.skipped_count == 0
        assert set(fake.collections) == {"courses", "lessons", "problems", "ai_prompts"}

    @pytest.mark.asyncio
    async def test_rerun_skips_everything(self, fake, client):
        descriptors = _descriptors("courses", "lessons", "problems", "ai_prompts")
        await ensure_collections(client, descriptors)
        result = await ensure_collections(client, descriptors)

        assert result.created_count == 0
        assert result.skipped == ["courses", "lessons", "problems", "ai_prompts"]
        assert len(fake.calls_to("POST", "/api/collections")) == 4

    @pytest.mark.asyncio
    async def test_partially_provisioned_backend(self, fake, client):
        fake.add_collection("courses")
        fake.add_collection("problems")
        result = await SchemaProvisioner(client).ensure_collections(
            _descriptors("courses", "lessons", "problems", "ai_prompts")
        )
        assert result.created == ["lessons", "ai_prompts"]
        assert result.skipped == ["courses", "problems"]

    @pytest.mark.asyncio
    async def test_creation_failure_aborts_run(self, fake, client):
        fake.failing_creates.add("lessons")
        with pytest.raises(RequestFailed) as excinfo:
            await ensure_collections(client, _descriptors("courses", "lessons", "problems"))

        assert excinfo.value.status_code == 500
        assert "courses" in fake.collections
        assert "problems" not in fake.collections

    @pytest.mark.asyncio
    async def test_uses_real_default_schema(self, fake, client):
        result = await ensure_collections(client, load_collections())
        assert result.created_count == 4
        assert "course_id" in [f["field"] for f in fake.collections["lessons"]["fields"]]
