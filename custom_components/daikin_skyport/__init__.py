from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_EMAIL, CONF_PASSWORD, Platform
from homeassistant.core import HomeAssistant

from . import api
from .api import create_session_client
from .auth import DaikinAuthSession
from .client import DaikinSkyportClient
from .const import DOMAIN
from .coordinator import DaikinDeviceCoordinator

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [Platform.CLIMATE]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Setting up Daikin Skyport integration for entry %s", entry.entry_id)

    if CONF_EMAIL not in entry.data or CONF_PASSWORD not in entry.data:
        _LOGGER.error(
            "Missing credentials in configuration for entry %s", entry.entry_id
        )
        return False

    session = create_session_client(hass)
    auth = DaikinAuthSession(session, entry.data[CONF_EMAIL], entry.data[CONF_PASSWORD])
    client = DaikinSkyportClient(session, auth)

    try:
        _LOGGER.debug("Fetching devices from Daikin Skyport API")
        devices = await client.async_get_devices()
        _LOGGER.info(
            "Successfully retrieved %d devices from Daikin Skyport API", len(devices)
        )
    except api.DaikinApiAuthError as err:
        _LOGGER.warning(
            "Authentication failed for entry %s: %s", entry.entry_id, str(err)
        )
        return False
    except api.DaikinApiConnectionError as err:
        _LOGGER.error("Connection error for entry %s: %s", entry.entry_id, str(err))
        return False
    except api.DaikinApiClientError as err:
        _LOGGER.error("API client error for entry %s: %s", entry.entry_id, str(err))
        return False

    device_coordinator = DaikinDeviceCoordinator(
        hass, client, [device.id for device in devices]
    )
    await device_coordinator.async_refresh()

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        "session": session,
        "client": client,
        "devices": devices,
        "device_coordinator": device_coordinator,
    }
    _LOGGER.debug("Stored data for entry %s: %d devices", entry.entry_id, len(devices))

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    _LOGGER.info(
        "Successfully setup Daikin Skyport integration for entry %s", entry.entry_id
    )
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Unloading Daikin Skyport integration for entry %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        if DOMAIN in hass.data and entry.entry_id in hass.data[DOMAIN]:
            hass.data[DOMAIN].pop(entry.entry_id)
            _LOGGER.debug("Cleaned up data for entry %s", entry.entry_id)
        _LOGGER.info(
            "Successfully unloaded Daikin Skyport integration for entry %s",
            entry.entry_id,
        )
    else:
        _LOGGER.warning("Failed to unload some platforms for entry %s", entry.entry_id)

    return unload_ok
