"""Provision a Directus instance: collections, demo data, verification and cleanup."""

from directus_setup.client import DirectusClient, TokenCache
from directus_setup.core.config import DirectusConfig, Settings
from directus_setup.pipeline import PipelineResult, StageResult, run_setup

__version__ = "1.0.0"

__all__ = [
    "DirectusClient",
    "DirectusConfig",
    "PipelineResult",
    "Settings",
    "StageResult",
    "TokenCache",
    "run_setup",
]
