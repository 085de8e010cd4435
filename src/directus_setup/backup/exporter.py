"""Export every user collection to one JSON file per collection."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from pydantic import BaseModel

from directus_setup.client.http import DirectusClient
from directus_setup.core.types import is_system_collection

logger = logging.getLogger(__name__)


class BackupRecord(BaseModel):
    collection: str
    items: int = 0
    file: str | None = None
    error: str | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def backup_filename(collection: str, when: datetime) -> str:
    stamp = when.isoformat().replace(":", "-").replace(".", "-").replace("+", "_")
    return f"{collection}_{stamp}.json"


async def backup_collection(
    client: DirectusClient,
    collection: str,
    output_dir: Path,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> BackupRecord:
    """Write one collection's items; errors are reported, not raised."""
    logger.info("Backing up %s", collection)
    try:
        items = await client.get_all_items(collection)
        now = clock()
        path = output_dir / backup_filename(collection, now)
        document = {
            "collection": collection,
            "exported_at": now.isoformat(),
            "total_records": len(items),
            "data": [{"id": item.id, **item.attributes} for item in items],
        }
        path.write_text(json.dumps(document, indent=2, default=str), encoding="utf-8")
    except Exception as exc:
        logger.error("Failed to backup %s: %s", collection, exc)
        return BackupRecord(collection=collection, error=str(exc))

    logger.info("Backed up %d items to %s", len(items), path.name)
    return BackupRecord(collection=collection, items=len(items), file=path.name)


async def backup_collections(
    client: DirectusClient,
    output_dir: str | Path,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> list[BackupRecord]:
    """Back up every non-system collection into ``output_dir``."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    logger.info("Backup directory: %s", directory.resolve())

    results: list[BackupRecord] = []
    for entry in await client.get_collections():
        name = entry["collection"]
        if is_system_collection(name):
            continue
        results.append(await backup_collection(client, name, directory, clock=clock))
    return results
