"""High level Daikin Skyport client combining auth, planning and API calls."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from . import api
from .auth import DaikinAuthSession
from .const import BASE_URL
from .models import (
    DaikinDevice,
    DaikinDeviceInfo,
    DeviceConstraints,
    Mode,
    SetpointPlan,
    SetpointRequest,
)
from .setpoint import async_plan_setpoints

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")


class DaikinSkyportClient:
    """Client for one Daikin Skyport account."""

    def __init__(
        self,
        session: httpx.AsyncClient,
        auth: DaikinAuthSession,
        *,
        base_url: str = BASE_URL,
    ) -> None:
        """Initialize the client.

        Args:
            session: HTTP client session for API calls.
            auth: Auth session supplying bearer tokens.
            base_url: API root URL.

        """
        self._session = session
        self._auth = auth
        self._base_url = base_url

    @property
    def auth(self) -> DaikinAuthSession:
        """Return the auth session used by this client."""
        return self._auth

    async def async_get_devices(self) -> list[DaikinDevice]:
        """Return the devices of the account."""
        return await self._async_call(api.async_get_devices)

    async def async_get_device_info(self, device_id: str) -> DaikinDeviceInfo:
        """Return the current state of a device."""
        return await self._async_call(api.async_get_device_info, device_id)

    async def async_get_constraints(self, device_id: str) -> DeviceConstraints:
        """Return the current setpoints and limits of a device."""
        info = await self.async_get_device_info(device_id)
        return DeviceConstraints.from_device_info(info)

    async def async_set_mode(self, device_id: str, mode: Mode) -> None:
        """Change the operating mode of a device."""
        _LOGGER.debug("Setting mode of %s to %s", device_id, Mode(mode).name)
        await self._async_update_device(device_id, {"mode": int(mode)})

    async def async_set_temp(
        self, device_id: str, request: SetpointRequest
    ) -> SetpointPlan:
        """Change the cool and/or heat setpoints of a device.

        The missing side is filled in from the device and the result
        overrides any running schedule.

        Returns:
            The setpoints that were sent.

        Raises:
            SetpointValidationError: If the request is rejected, in which
                case nothing is sent.
            DaikinApiClientError: If a request fails.

        """
        plan = await async_plan_setpoints(
            device_id, request, self.async_get_constraints
        )
        await self._async_update_device(device_id, plan.as_payload())
        return plan

    async def async_update_device_raw(
        self, device_id: str, payload: dict[str, Any] | str
    ) -> None:
        """Write arbitrary deviceData fields, bypassing validation."""
        await self._async_update_device(device_id, payload)

    async def _async_update_device(
        self, device_id: str, payload: dict[str, Any] | str
    ) -> None:
        await self._async_call(api.async_update_device, device_id, payload)

    async def _async_call(
        self,
        request: Callable[..., Awaitable[_T]],
        *args: Any,
    ) -> _T:
        """Run an authenticated request with the current access token.

        A token the server rejects is dropped so the next call logs in
        again. The failed request itself is not repeated.
        """
        token = await self._auth.async_get_token()
        try:
            return await request(self._session, token, *args, base_url=self._base_url)
        except api.DaikinApiAuthError:
            _LOGGER.debug("Access token was rejected, discarding it")
            self._auth.invalidate()
            raise
