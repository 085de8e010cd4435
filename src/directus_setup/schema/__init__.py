"""Static collection schema and its provisioning on the backend."""

from directus_setup.schema.loader import DEFAULT_SCHEMA_PATH, load_collections
from directus_setup.schema.provisioner import ProvisionResult, SchemaProvisioner, ensure_collections

__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "ProvisionResult",
    "SchemaProvisioner",
    "ensure_collections",
    "load_collections",
]
