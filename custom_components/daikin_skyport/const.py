"""Constants for Daikin Skyport integration.

This module contains all the constants used throughout the integration,
including API endpoints, configuration keys, and mapping dictionaries.
"""

from datetime import timedelta

from homeassistant.components.climate import HVACAction, HVACMode

from .models import EquipmentStatus, Mode

DOMAIN = "daikin_skyport"

BASE_URL = "https://api.daikinskyport.com"
API_TIMEOUT = 10.0  # Seconds, applied to every request

ENDPOINT_LOGIN = "/users/auth/login"
ENDPOINT_DEVICES = "/devices"
ENDPOINT_DEVICE_DATA = "/deviceData/{device_id}"

DEFAULT_POLL_INTERVAL = 60

# Subtracted from the token lifetime before it is considered expired.
TOKEN_EXPIRY_MARGIN = timedelta(0)

ERROR_INVALID_AUTH = "invalid_auth"
ERROR_CANNOT_CONNECT = "cannot_connect"
ERROR_TIMEOUT = "timeout_error"
ERROR_API_ERROR = "api_error"
ERROR_UNKNOWN = "unknown_error"
ERROR_NO_DEVICES = "no_devices"

HVAC_MODE_MAP = {
    HVACMode.OFF: Mode.OFF,
    HVACMode.HEAT: Mode.HEAT,
    HVACMode.COOL: Mode.COOL,
    HVACMode.HEAT_COOL: Mode.AUTO,
}
HVAC_MODE_REVERSE_MAP = {value: key for key, value in HVAC_MODE_MAP.items()}
HVAC_MODE_REVERSE_MAP[Mode.AUX_HEAT] = HVACMode.HEAT

HVAC_ACTION_MAP = {
    EquipmentStatus.COOL: HVACAction.COOLING,
    EquipmentStatus.OVERCOOL: HVACAction.DRYING,
    EquipmentStatus.HEAT: HVACAction.HEATING,
    EquipmentStatus.FAN: HVACAction.FAN,
    EquipmentStatus.IDLE: HVACAction.IDLE,
}
