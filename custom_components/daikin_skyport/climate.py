"""Climate entities for Daikin Skyport thermostats.

This module exposes each thermostat on the account as a Home Assistant
climate entity with mode control and cool/heat setpoint control.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from homeassistant.components.climate import (
    ATTR_TARGET_TEMP_HIGH,
    ATTR_TARGET_TEMP_LOW,
    ClimateEntity,
    ClimateEntityFeature,
    HVACMode,
)
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers.device_registry import DeviceInfo

from .api import DaikinApiAuthError, DaikinApiClientError, DaikinApiConnectionError
from .const import DOMAIN, HVAC_ACTION_MAP, HVAC_MODE_MAP, HVAC_MODE_REVERSE_MAP
from .models import DaikinDevice, DaikinDeviceInfo, SetpointRequest
from .setpoint import SetpointValidationError

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .client import DaikinSkyportClient
    from .coordinator import DaikinDeviceCoordinator

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up climate entities for Daikin Skyport devices."""
    entry_data = hass.data[DOMAIN][entry.entry_id]

    entities = [
        DaikinSkyportClimateEntity(
            entry_data["client"],
            entry_data["device_coordinator"],
            device,
        )
        for device in entry_data["devices"]
    ]
    async_add_entities(entities)


class DaikinSkyportClimateEntity(ClimateEntity):
    """Climate entity for a Daikin Skyport thermostat."""

    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = 0.5
    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(
        self,
        client: DaikinSkyportClient,
        device_coordinator: DaikinDeviceCoordinator,
        device: DaikinDevice,
    ) -> None:
        """Initialize the Daikin Skyport climate entity.

        Args:
            client: API client for the account owning the device.
            device_coordinator: Device coordinator for polling device states.
            device: Device summary from the device list.

        """
        self._client = client
        self._device_coordinator = device_coordinator
        self._device = device
        self._attr_unique_id = device.id
        self._attr_name = device.name
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, device.id)},
            name=device.name,
            manufacturer="Daikin",
            model=device.model,
            sw_version=device.firmware_version,
        )

        self._attr_hvac_mode = HVACMode.OFF
        self._attr_hvac_modes = list(HVAC_MODE_MAP)
        self._attr_supported_features = (
            ClimateEntityFeature.TARGET_TEMPERATURE
            | ClimateEntityFeature.TARGET_TEMPERATURE_RANGE
            | ClimateEntityFeature.TURN_OFF
            | ClimateEntityFeature.TURN_ON
        )
        self._attr_min_temp = 10.0
        self._attr_max_temp = 32.0
        self._coordinator_listener_unsub = None

    async def async_added_to_hass(self) -> None:
        """Subscribe to device updates and apply the latest known state."""
        await super().async_added_to_hass()

        self._coordinator_listener_unsub = self._device_coordinator.async_add_listener(
            self._handle_coordinator_update
        )
        self._update_from_coordinator()

    async def async_will_remove_from_hass(self) -> None:
        """Handle entity being removed from Home Assistant."""
        await super().async_will_remove_from_hass()

        if self._coordinator_listener_unsub is not None:
            self._coordinator_listener_unsub()
            self._coordinator_listener_unsub = None

    def _handle_coordinator_update(self) -> None:
        """Handle updated data from the coordinator."""
        self._update_from_coordinator()
        self.async_write_ha_state()

    def _update_from_coordinator(self) -> None:
        """Update entity state from coordinator data."""
        if not self._device_coordinator.data:
            _LOGGER.debug("%s: No coordinator data", self.name)
            return

        info = self._device_coordinator.data.get(self._device.id)
        if info is None:
            _LOGGER.debug("%s: No device state in coordinator data", self.name)
            return

        self._apply_device_info(info)

    def _apply_device_info(self, info: DaikinDeviceInfo) -> None:
        hvac_mode = HVAC_MODE_REVERSE_MAP.get(info.mode)
        if hvac_mode is None:
            _LOGGER.warning("%s: Unknown mode %s", self.name, info.mode)
        else:
            self._attr_hvac_mode = hvac_mode

        self._attr_hvac_action = HVAC_ACTION_MAP.get(info.equipment_status)
        self._attr_current_temperature = info.temp_indoor
        self._attr_current_humidity = info.hum_indoor
        self._attr_min_temp = info.temp_sp_min
        self._attr_max_temp = info.temp_sp_max
        self._attr_target_temperature_high = info.csp_home
        self._attr_target_temperature_low = info.hsp_home

        if self._attr_hvac_mode == HVACMode.COOL:
            self._attr_target_temperature = info.csp_home
        elif self._attr_hvac_mode == HVACMode.HEAT:
            self._attr_target_temperature = info.hsp_home
        else:
            self._attr_target_temperature = None

        _LOGGER.debug("Updated %s from coordinator: %s", self.name, info)

    def _build_setpoint_request(
        self,
        **kwargs: Any,  # noqa: ANN401
    ) -> SetpointRequest | None:
        """Translate service call arguments into a setpoint request."""
        low = kwargs.get(ATTR_TARGET_TEMP_LOW)
        high = kwargs.get(ATTR_TARGET_TEMP_HIGH)
        if low is not None or high is not None:
            return SetpointRequest(cool=high, heat=low)

        temperature = kwargs.get(ATTR_TEMPERATURE)
        if temperature is None:
            return None
        if self.hvac_mode == HVACMode.COOL:
            return SetpointRequest(cool=temperature)
        if self.hvac_mode == HVACMode.HEAT:
            return SetpointRequest(heat=temperature)
        return None

    async def _async_execute_command(self, command: Awaitable[Any]) -> None:
        """Await a device command and refresh the state on success."""
        try:
            await command
        except SetpointValidationError as err:
            raise ServiceValidationError(str(err)) from err
        except DaikinApiAuthError:
            _LOGGER.exception(
                "Authentication error for %s. Please re-configure the integration.",
                self.name,
            )
        except DaikinApiConnectionError:
            _LOGGER.exception("Connection error while sending command to %s", self.name)
        except DaikinApiClientError:
            _LOGGER.exception("API error while sending command to %s", self.name)
        else:
            await self._device_coordinator.async_request_refresh()

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Set the HVAC mode.

        Args:
            hvac_mode: The HVAC mode to set.

        """
        mode = HVAC_MODE_MAP.get(hvac_mode)
        if mode is None:
            _LOGGER.warning("%s: Unsupported HVAC mode %s", self.name, hvac_mode)
            return

        self._attr_hvac_mode = hvac_mode
        self.async_write_ha_state()
        await self._async_execute_command(
            self._client.async_set_mode(self._device.id, mode)
        )

    async def async_set_temperature(self, **kwargs: Any) -> None:  # noqa: ANN401
        """Set the target temperature or temperature range.

        Args:
            **kwargs: Keyword arguments containing temperature data.

        """
        request = self._build_setpoint_request(**kwargs)
        if request is None:
            _LOGGER.debug(
                "%s: Nothing to set for %s in mode %s",
                self.name,
                kwargs,
                self.hvac_mode,
            )
            return

        await self._async_execute_command(
            self._client.async_set_temp(self._device.id, request)
        )

    async def async_turn_on(self) -> None:
        """Turn the device on in automatic heat/cool mode."""
        await self.async_set_hvac_mode(HVACMode.HEAT_COOL)

    async def async_turn_off(self) -> None:
        """Turn the device off."""
        await self.async_set_hvac_mode(HVACMode.OFF)
