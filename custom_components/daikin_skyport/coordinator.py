"""Coordinator for Daikin Skyport integration."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from . import api
from .const import DEFAULT_POLL_INTERVAL, DOMAIN
from .models import DaikinDeviceInfo

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .client import DaikinSkyportClient

_LOGGER = logging.getLogger(__name__)


class DaikinDeviceCoordinator(DataUpdateCoordinator[dict[str, DaikinDeviceInfo]]):
    """Coordinator that polls Daikin Skyport device states."""

    def __init__(
        self,
        hass: HomeAssistant,
        client: DaikinSkyportClient,
        device_ids: list[str],
    ) -> None:
        super().__init__(
            hass,
            _LOGGER,
            name=f"{DOMAIN}_devices",
            update_interval=timedelta(seconds=DEFAULT_POLL_INTERVAL),
        )
        self._client = client
        self._device_ids = device_ids
        self.data = {}

    @property
    def client(self) -> DaikinSkyportClient:
        """Return the API client used for polling."""
        return self._client

    async def _async_update_data(self) -> dict[str, DaikinDeviceInfo]:
        if not self._device_ids:
            _LOGGER.debug("No Daikin Skyport devices registered for polling")
            return {}

        states: dict[str, DaikinDeviceInfo] = {}
        for device_id in self._device_ids:
            try:
                states[device_id] = await self._client.async_get_device_info(
                    device_id
                )
            except api.DaikinApiAuthError as err:
                raise UpdateFailed(
                    f"Authentication error while polling {device_id}: {err}"
                ) from err
            except api.DaikinApiConnectionError as err:
                raise UpdateFailed(
                    f"Connection error while polling {device_id}: {err}"
                ) from err
            except api.DaikinApiClientError as err:
                raise UpdateFailed(
                    f"API error while polling {device_id}: {err}"
                ) from err

        _LOGGER.debug("Polled status for %d devices", len(states))
        return states
