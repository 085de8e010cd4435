"""Full setup run: connectivity, collections, data, verification.

Stages run in-process in a fixed order. Each stage reports a
:class:`StageResult`; whether a failure stops the run depends on the stage:

* ``connection`` - fatal, nothing downstream can succeed
* ``collections`` - logged, the run continues (the data stage re-checks);
  credential and permission errors are fatal here as everywhere else
* ``data`` - fatal
* ``verify`` - advisory, reported as a warning
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, Field

from directus_setup.client.http import DirectusClient
from directus_setup.core.errors import (
    AuthenticationFailure,
    InvalidCredential,
    PermissionDenied,
)
from directus_setup.core.types import CollectionDescriptor
from directus_setup.schema.provisioner import SchemaProvisioner
from directus_setup.seeding.engine import SeedingEngine
from directus_setup.verify.verifier import IntegrityVerifier

logger = logging.getLogger(__name__)


class StageResult(BaseModel):
    name: str
    success: bool
    fatal: bool = False
    error: str | None = None
    detail: dict[str, Any] = Field(default_factory=dict)


class PipelineResult(BaseModel):
    stages: list[StageResult] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not any(s.fatal for s in self.stages)

    def stage(self, name: str) -> StageResult | None:
        return next((s for s in self.stages if s.name == name), None)


# Credential and permission problems stop the run whatever the stage.
ALWAYS_FATAL: tuple[type[Exception], ...] = (
    AuthenticationFailure,
    InvalidCredential,
    PermissionDenied,
)


async def _run_stage(
    name: str,
    action: Callable[[], Awaitable[dict[str, Any]]],
    *,
    fatal_on_error: bool,
) -> StageResult:
    logger.info("Stage %s started", name)
    try:
        detail = await action()
    except Exception as exc:
        fatal = fatal_on_error or isinstance(exc, ALWAYS_FATAL)
        if fatal:
            logger.error("Stage %s failed: %s", name, exc)
        else:
            logger.warning("Stage %s failed, continuing: %s", name, exc)
        return StageResult(name=name, success=False, fatal=fatal, error=str(exc))
    logger.info("Stage %s finished", name)
    return StageResult(name=name, success=True, detail=detail)


async def run_setup(
    client: DirectusClient,
    descriptors: list[CollectionDescriptor],
    *,
    payloads: dict[str, list[dict[str, Any]]] | None = None,
) -> PipelineResult:
    result = PipelineResult()

    if not await client.test_connection():
        logger.error("Cannot proceed without a valid connection")
        result.stages.append(
            StageResult(name="connection", success=False, fatal=True, error="connection failed")
        )
        return result
    result.stages.append(StageResult(name="connection", success=True))

    async def provision() -> dict[str, Any]:
        outcome = await SchemaProvisioner(client).ensure_collections(descriptors)
        return outcome.model_dump()

    async def populate() -> dict[str, Any]:
        summary = await SeedingEngine(client, payloads).seed()
        return {"created": summary.counts}

    async def check() -> dict[str, Any]:
        report = await IntegrityVerifier(client).verify()
        return {"ok": report.ok, "counts": report.counts()}

    collections_stage = await _run_stage("collections", provision, fatal_on_error=False)
    result.stages.append(collections_stage)
    if collections_stage.fatal:
        return result

    data_stage = await _run_stage("data", populate, fatal_on_error=True)
    result.stages.append(data_stage)
    if data_stage.fatal:
        return result

    verify_stage = await _run_stage("verify", check, fatal_on_error=False)
    if verify_stage.success and not verify_stage.detail.get("ok"):
        logger.warning("Verification reported problems; see the report above")
    result.stages.append(verify_stage)
    return result
