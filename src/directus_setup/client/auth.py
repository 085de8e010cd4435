"""Bearer token cache backed by a long-lived Directus access token.

The access token configured by the operator is exchanged at
``POST /auth/login`` for a short-lived JWT. The JWT is cached and reused
until a safety margin before its nominal expiry, then exchanged again.
Refreshes are single-flight: concurrent callers waiting on a refresh share
its result instead of issuing their own exchange.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import httpx

from directus_setup.core.config import DirectusConfig
from directus_setup.core.errors import AuthenticationFailure

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Credential:
    """Raw access key plus the token currently derived from it."""

    access_key: str
    token: str | None = None
    expires_at: datetime | None = None

    def is_fresh(self, now: datetime) -> bool:
        return (
            self.token is not None
            and self.expires_at is not None
            and now < self.expires_at
        )


class TokenCache:
    """Owns the credential and refreshes it lazily on expiry."""

    def __init__(
        self,
        config: DirectusConfig,
        http: httpx.AsyncClient,
        *,
        access_key: str | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        key = access_key if access_key is not None else config.setup_token
        if not key:
            raise ValueError("A Directus access token is required")
        self._config = config
        self._http = http
        self._clock = clock
        self._credential = Credential(access_key=key)
        self._lock = asyncio.Lock()
        self.refresh_count = 0

    @property
    def login_url(self) -> str:
        return f"{self._config.url.rstrip('/')}/auth/login"

    @property
    def expires_at(self) -> datetime | None:
        return self._credential.expires_at

    async def get_token(self) -> str:
        """Return a usable token, exchanging the access key if needed."""
        if self._credential.is_fresh(self._clock()):
            return self._credential.token  # type: ignore[return-value]

        async with self._lock:
            # another caller may have refreshed while we waited
            if self._credential.is_fresh(self._clock()):
                return self._credential.token  # type: ignore[return-value]
            logger.debug("Generating new JWT token from access token")
            return await self._exchange()

    async def refresh(self) -> str:
        """Force a credential exchange regardless of the cached expiry."""
        async with self._lock:
            return await self._exchange()

    def invalidate(self) -> None:
        self._credential.token = None
        self._credential.expires_at = None

    async def auth_headers(self) -> dict[str, str]:
        token = await self.get_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    # -- internal ------------------------------------------------------------

    async def _exchange(self) -> str:
        try:
            resp = await self._http.post(
                self.login_url,
                json={"access_token": self._credential.access_key},
            )
        except httpx.HTTPError as exc:
            logger.error("Authentication error: %s", exc)
            raise

        if not resp.is_success:
            logger.error("Failed to authenticate: %d %s", resp.status_code, resp.text[:200])
            raise AuthenticationFailure(resp.status_code, resp.text)

        data = resp.json().get("data") or {}
        token = data.get("access_token")
        if not token:
            logger.error("Login response did not include an access token")
            raise AuthenticationFailure(resp.status_code, resp.text)

        self._credential.token = token
        self._credential.expires_at = self._clock() + self._usable_lifetime(data.get("expires"))
        self.refresh_count += 1
        logger.info("JWT token generated, valid until %s", self._credential.expires_at.isoformat())
        return token

    def _usable_lifetime(self, expires_ms: int | None) -> timedelta:
        if expires_ms:
            nominal = timedelta(milliseconds=expires_ms)
        else:
            nominal = timedelta(minutes=self._config.token_lifetime_minutes)
        # margin is capped at a third of the lifetime so short tokens stay cached
        margin = min(
            timedelta(minutes=self._config.token_refresh_margin_minutes), nominal / 3
        )
        return nominal - margin
