"""Command-line entry point: ``directus-setup <command>``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Awaitable, Callable

import httpx

from directus_setup.backup.exporter import backup_collections
from directus_setup.cleanup.teardown import CleanupResult, TeardownEngine
from directus_setup.client.http import DirectusClient
from directus_setup.codegen.typescript import generate_types
from directus_setup.core.config import Settings
from directus_setup.core.errors import DirectusSetupError, MissingPrerequisite
from directus_setup.core.logging import setup_logging
from directus_setup.pipeline import PipelineResult, run_setup
from directus_setup.schema.loader import load_collections
from directus_setup.schema.provisioner import SchemaProvisioner
from directus_setup.seeding.engine import SeedingEngine
from directus_setup.verify.verifier import IntegrityVerifier, VerificationReport

logger = logging.getLogger("directus_setup.cli")

DEFAULT_TYPES_OUTPUT = "./src/generated/directus-schema.ts"


def section(title: str) -> None:
    print(f"\n{'=' * 50}")
    print(f"  {title}")
    print(f"{'=' * 50}")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="directus-setup",
        description="Automated Directus collection setup and data population.",
    )
    parser.add_argument("--url", default=settings.directus.url, help="Directus URL.")
    parser.add_argument(
        "--token", default=settings.directus.setup_token, help="Directus access token."
    )
    parser.add_argument(
        "--schema", default=settings.collections.path, help="Path to the collections YAML file."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("setup", help="Run complete setup: collections + data + verify.")
    sub.add_parser("collections", help="Create collections from schema.")
    sub.add_parser("data", help="Populate collections with demo data.")
    sub.add_parser("verify", help="Verify setup integrity.")

    backup = sub.add_parser("backup", help="Backup all collections to JSON.")
    backup.add_argument("--output", default=settings.backup.output_dir, help="Output directory.")

    clean = sub.add_parser("clean", help="Delete all collection data.")
    clean.add_argument(
        "--confirm",
        action="store_true",
        default=settings.confirm_cleanup,
        help="Confirm the irreversible deletion.",
    )

    types = sub.add_parser("generate-types", help="Generate TypeScript types from the schema.")
    types.add_argument("--output", default=DEFAULT_TYPES_OUTPUT, help="Output file path.")
    return parser


# ---------------------------------------------------------------------------
# Report printing
# ---------------------------------------------------------------------------


def print_pipeline(result: PipelineResult) -> None:
    section("Setup Summary")
    for stage in result.stages:
        status = "OK" if stage.success else ("FAILED" if stage.fatal else "WARN")
        suffix = f" ({stage.error})" if stage.error else ""
        print(f"  {stage.name:<12} {status}{suffix}")


def print_verification(report: VerificationReport) -> None:
    section("Collections")
    for c in report.collections:
        status = "exists" if c.exists else "MISSING"
        extra = f" missing fields: {', '.join(c.missing_fields)}" if c.missing_fields else ""
        print(f"  {c.collection:<12} {status}{extra}")
    section("Data")
    for d in report.data:
        detail = d.error or d.sample or ""
        print(f"  {d.collection:<12} {d.records:>5}  {detail}")
    section("Relationships")
    for r in report.relationships:
        status = "valid" if r.valid else ("ERROR" if r.error else "BROKEN")
        print(
            f"  {r.label:<22} {status:<7} "
            f"{r.child_count} {r.child}, {r.parent_count} {r.parent}"
        )


def print_cleanup(result: CleanupResult) -> None:
    section("Cleanup Complete")
    for c in result.collections:
        failed = f" ({c.failed} failed)" if c.failed else ""
        print(f"  {c.collection:<12} {c.deleted:>5} deleted{failed}")
    print(f"  {'total':<12} {result.total_deleted:>5}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def cmd_setup(client: DirectusClient, args: argparse.Namespace) -> int:
    result = await run_setup(client, load_collections(args.schema))
    print_pipeline(result)
    return 0 if result.success else 1


async def cmd_collections(client: DirectusClient, args: argparse.Namespace) -> int:
    descriptors = load_collections(args.schema)
    logger.info("Loaded schema with %d collections", len(descriptors))
    result = await SchemaProvisioner(client).ensure_collections(descriptors)
    section("Collection Creation Summary")
    print(f"  Created: {result.created_count}")
    print(f"  Skipped: {result.skipped_count}")
    return 0


async def cmd_data(client: DirectusClient, args: argparse.Namespace) -> int:
    try:
        summary = await SeedingEngine(client).seed()
    except MissingPrerequisite:
        logger.info("Run the collections command first")
        raise
    section("Data Population Summary")
    for name, count in summary.counts.items():
        print(f"  {name:<12} {count:>5}")
    return 0


async def cmd_verify(client: DirectusClient, args: argparse.Namespace) -> int:
    report = await IntegrityVerifier(client).verify()
    print_verification(report)
    return 0


async def cmd_backup(client: DirectusClient, args: argparse.Namespace) -> int:
    records = await backup_collections(client, args.output)
    section("Backup Complete")
    for r in records:
        print(f"  {r.collection:<20} {r.items:>5}  {r.file or 'ERROR: ' + str(r.error)}")
    return 0


async def cmd_clean(client: DirectusClient, args: argparse.Namespace) -> int:
    result = await TeardownEngine(client).clean()
    print_cleanup(result)
    return 0


async def cmd_generate_types(client: DirectusClient, args: argparse.Namespace) -> int:
    names = await generate_types(client, args.output)
    print(f"Types generated for: {', '.join(names)}")
    return 0


COMMANDS: dict[str, Callable[[DirectusClient, argparse.Namespace], Awaitable[int]]] = {
    "setup": cmd_setup,
    "collections": cmd_collections,
    "data": cmd_data,
    "verify": cmd_verify,
    "backup": cmd_backup,
    "clean": cmd_clean,
    "generate-types": cmd_generate_types,
}


async def run(args: argparse.Namespace, settings: Settings) -> int:
    config = settings.directus.model_copy(update={"url": args.url})
    async with DirectusClient(config, access_key=args.token) as client:
        # the setup pipeline runs its own pre-flight
        if args.command != "setup" and not await client.test_connection():
            return 1
        try:
            return await COMMANDS[args.command](client, args)
        except (DirectusSetupError, httpx.HTTPError, FileNotFoundError, ValueError) as exc:
            logger.error("%s failed: %s", args.command, exc)
            return 1


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    if not args.token:
        logger.error(
            "DIRECTUS_SETUP_TOKEN not set. Create an access token in Directus "
            "(Settings > Access Tokens) and export DIRECTUS_SETUP_TOKEN=<token> "
            "or pass --token."
        )
        return 1

    if args.command == "clean" and not args.confirm:
        logger.warning("This will DELETE ALL DATA from collections!")
        logger.warning("Cleanup cancelled. Pass --confirm or set DIRECTUS_SETUP_CONFIRM_CLEANUP=true.")
        return 0

    logger.info("Directus URL: %s", args.url)
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
