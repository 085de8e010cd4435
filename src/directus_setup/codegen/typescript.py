"""Generate TypeScript interfaces from the live Directus schema."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from directus_setup.client.http import DirectusClient
from directus_setup.core.types import is_system_collection

logger = logging.getLogger(__name__)

TYPE_MAP: dict[str, str] = {
    "string": "string",
    "text": "string",
    "integer": "number",
    "bigInteger": "number",
    "float": "number",
    "decimal": "number",
    "boolean": "boolean",
    "date": "string",
    "time": "string",
    "dateTime": "string",
    "datetime": "string",
    "timestamp": "string",
    "json": "Record<string, any>",
    "csv": "string[]",
    "uuid": "string",
    "hash": "string",
}


def to_pascal_case(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def render_typescript(
    collections: list[dict[str, Any]],
    fields: list[dict[str, Any]],
    generated_at: datetime,
) -> str:
    """Render one interface per collection plus a ``Schema`` index type."""
    names = [c["collection"] for c in collections]
    lines = [
        "/**",
        " * Auto-generated TypeScript interfaces for Directus schema",
        f" * Generated: {generated_at.isoformat()}",
        " */",
        "",
        "/* eslint-disable */",
        "",
    ]

    for name in names:
        lines.append(f"export interface {to_pascal_case(name)} {{")
        for field in (f for f in fields if f.get("collection") == name):
            ts_type = TYPE_MAP.get(field.get("type") or "", "any")
            optional = "?" if (field.get("schema") or {}).get("is_nullable") else ""
            note = (field.get("meta") or {}).get("note")
            if note:
                lines.append(f"  /** {note} */")
            lines.append(f"  {field['field']}{optional}: {ts_type};")
        lines.append("}")
        lines.append("")

    lines.append("export interface Schema {")
    for name in names:
        lines.append(f"  {name}: {to_pascal_case(name)};")
    lines.append("}")
    lines.append("")
    lines.append("export type CollectionName = keyof Schema;")
    lines.append("")
    return "\n".join(lines)


async def generate_types(
    client: DirectusClient,
    output_path: str | Path,
    *,
    generated_at: datetime | None = None,
) -> list[str]:
    """Write the interfaces to ``output_path``; returns the collection names."""
    collections = [
        c for c in await client.get_collections() if not is_system_collection(c["collection"])
    ]
    fields = await client.get_fields()
    logger.info("Found %d collections", len(collections))

    code = render_typescript(collections, fields, generated_at or datetime.now(timezone.utc))
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(code, encoding="utf-8")
    logger.info("Types written to %s", path.resolve())
    return [c["collection"] for c in collections]
