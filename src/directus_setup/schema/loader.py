"""Load collection descriptors from the YAML schema file."""

from __future__ import annotations

from pathlib import Path

import yaml

from directus_setup.core.types import CollectionDescriptor

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parents[3] / "config" / "collections.yml"


def load_collections(path: str | Path | None = None) -> list[CollectionDescriptor]:
    """Parse the ``collections:`` list of a schema file.

    Raises ``FileNotFoundError`` when the file is missing and ``ValueError``
    when two entries declare the same collection name.
    """
    schema_path = Path(path) if path else DEFAULT_SCHEMA_PATH
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    with open(schema_path) as fh:
        data = yaml.safe_load(fh) or {}

    descriptors = [CollectionDescriptor(**entry) for entry in data.get("collections", [])]

    seen: set[str] = set()
    for descriptor in descriptors:
        if descriptor.collection in seen:
            raise ValueError(f"Duplicate collection in schema: {descriptor.collection!r}")
        seen.add(descriptor.collection)
    return descriptors
