"""Demo data seeding."""

from directus_setup.seeding.demo_data import DEMO_PAYLOADS
from directus_setup.seeding.engine import SeedingEngine, SeedSummary, seed

__all__ = ["DEMO_PAYLOADS", "SeedSummary", "SeedingEngine", "seed"]
