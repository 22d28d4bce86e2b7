"""
Configuration flow for Daikin Skyport integration.

The user step signs in to the Skyport cloud with the entered credentials
and lists the account's thermostats before the entry is created. Only
the email and password are stored; access tokens are requested again on
every start.
"""

import logging
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_EMAIL, CONF_PASSWORD

from . import api
from .auth import DaikinAuthSession
from .client import DaikinSkyportClient
from .const import (
    DOMAIN,
    ERROR_API_ERROR,
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_AUTH,
    ERROR_NO_DEVICES,
    ERROR_TIMEOUT,
    ERROR_UNKNOWN,
)

_LOGGER = logging.getLogger(__name__)

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_EMAIL): str,
        vol.Required(CONF_PASSWORD): str,
    }
)


class DaikinSkyportConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle configuration flow for Daikin Skyport integration."""

    VERSION = 1

    async def _async_count_devices(self, email: str, password: str) -> int:
        """Sign in and return how many thermostats the account can see."""
        session = api.create_session_client(self.hass)
        try:
            client = DaikinSkyportClient(
                session, DaikinAuthSession(session, email, password)
            )
            devices = await client.async_get_devices()
        finally:
            await session.aclose()
        return len(devices)

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """
        Handle the initial step of the config flow.

        Args:
            user_input: User input data containing email and password.

        Returns:
            ConfigFlowResult indicating the next step or errors.

        """
        errors: dict[str, str] = {}

        if user_input is not None:
            email = user_input[CONF_EMAIL].strip()
            password = user_input[CONF_PASSWORD]

            await self.async_set_unique_id(email.lower())
            self._abort_if_unique_id_configured()

            try:
                device_count = await self._async_count_devices(email, password)
            except api.DaikinApiAuthError as err:
                _LOGGER.warning("Sign in to Daikin Skyport refused: %s", err)
                errors["base"] = ERROR_INVALID_AUTH
            except api.DaikinApiTimeoutError:
                _LOGGER.exception("Daikin Skyport did not answer in time")
                errors["base"] = ERROR_TIMEOUT
            except api.DaikinApiConnectionError:
                _LOGGER.exception("Could not reach Daikin Skyport")
                errors["base"] = ERROR_CANNOT_CONNECT
            except api.DaikinApiClientError:
                _LOGGER.exception("Daikin Skyport returned an error")
                errors["base"] = ERROR_API_ERROR
            except Exception:
                _LOGGER.exception("Unexpected error while signing in")
                errors["base"] = ERROR_UNKNOWN
            else:
                if device_count == 0:
                    _LOGGER.warning("No thermostats found for %s", email)
                    errors["base"] = ERROR_NO_DEVICES
                else:
                    _LOGGER.info(
                        "Signed in to Daikin Skyport, %d thermostats found",
                        device_count,
                    )
                    return self.async_create_entry(
                        title=f"Daikin Skyport ({email})",
                        data={CONF_EMAIL: email, CONF_PASSWORD: password},
                    )

        return self.async_show_form(
            step_id="user",
            data_schema=self.add_suggested_values_to_schema(
                STEP_USER_DATA_SCHEMA,
                {CONF_EMAIL: user_input[CONF_EMAIL]} if user_input else None,
            ),
            errors=errors,
        )
