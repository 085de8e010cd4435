"""Authenticated Directus API client."""

from directus_setup.client.auth import Credential, TokenCache
from directus_setup.client.http import DirectusClient

__all__ = ["Credential", "DirectusClient", "TokenCache"]
