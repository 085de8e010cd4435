"""Core type definitions shared across the provisioning modules."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SYSTEM_COLLECTION_PREFIX = "directus_"


class FieldSpec(BaseModel):
    """One field of a collection as Directus expects it on creation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    field: str
    type: str
    meta: dict[str, Any] | None = None
    column: dict[str, Any] | None = Field(default=None, alias="schema")


class CollectionDescriptor(BaseModel):
    """Declarative description of a collection to provision."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    collection: str
    meta: dict[str, Any] = Field(default_factory=dict)
    table: dict[str, Any] = Field(default_factory=dict, alias="schema")
    fields: list[FieldSpec] = Field(default_factory=list)

    @property
    def field_names(self) -> list[str]:
        return [f.field for f in self.fields]

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the body of ``POST /collections``."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Item(BaseModel):
    """Generic record envelope: backend id plus its attributes."""

    id: Any = None
    collection: str
    attributes: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_api(cls, collection: str, raw: dict[str, Any]) -> Item:
        attributes = {k: v for k, v in raw.items() if k != "id"}
        return cls(id=raw.get("id"), collection=collection, attributes=attributes)

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    @property
    def name(self) -> str | None:
        return self.attributes.get("name")

    @property
    def label(self) -> str:
        """Short human label used in reports."""
        return str(self.attributes.get("name") or self.attributes.get("question") or "Item")


def is_system_collection(name: str) -> bool:
    return name.startswith(SYSTEM_COLLECTION_PREFIX)
