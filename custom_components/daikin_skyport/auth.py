"""Access token lifecycle for the Daikin Skyport API."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from . import api
from .const import BASE_URL, TOKEN_EXPIRY_MARGIN

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from .models import Token

_LOGGER = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DaikinAuthSession:
    """Hand out a valid bearer token, logging in only when needed.

    One token is cached per session. It is reused strictly before its
    expiry instant and replaced by a fresh login afterwards. Concurrent
    callers share a single login through an asyncio lock.
    """

    def __init__(
        self,
        session: httpx.AsyncClient,
        email: str,
        password: str,
        *,
        base_url: str = BASE_URL,
        expiry_margin: timedelta = TOKEN_EXPIRY_MARGIN,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the auth session.

        Args:
            session: HTTP client used for the login exchange.
            email: Account email address.
            password: Account password.
            base_url: API root URL.
            expiry_margin: Time subtracted from the token lifetime.
            clock: Returns the current aware datetime.

        """
        self._session = session
        self._email = email
        self._password = password
        self._base_url = base_url
        self._expiry_margin = expiry_margin
        self._clock = clock
        self._token: Token | None = None
        self._expires_at: datetime | None = None
        self._lock = asyncio.Lock()

    @property
    def token_expires_at(self) -> datetime | None:
        """Return when the cached token stops being used, if any."""
        return self._expires_at

    def _cached_token(self) -> str | None:
        if self._token is None or self._expires_at is None:
            return None
        if self._clock() < self._expires_at:
            return self._token.access_token
        return None

    async def async_get_token(self) -> str:
        """Return a usable access token, logging in if the cache is stale.

        Raises:
            DaikinApiAuthError: If the login exchange fails.
            DaikinApiConnectionError: If the login request cannot be sent.

        """
        async with self._lock:
            if (access_token := self._cached_token()) is not None:
                return access_token

            _LOGGER.debug("No valid access token cached, logging in")
            token = await api.async_login(
                self._session,
                self._email,
                self._password,
                base_url=self._base_url,
            )
            issued_at = self._clock()
            self._token = token
            self._expires_at = (
                issued_at + timedelta(seconds=token.expires_in) - self._expiry_margin
            )
            _LOGGER.debug(
                "Obtained access token valid until %s", self._expires_at.isoformat()
            )
            return token.access_token

    def invalidate(self) -> None:
        """Forget the cached token so the next request logs in again."""
        self._token = None
        self._expires_at = None
