"""API client for the Daikin Skyport cloud.

This module provides functions to interact with the Daikin Skyport API,
including authentication, device listing, device state and updates.
Functions here perform a single request each and never cache or retry.
"""

import logging
from enum import IntEnum
from typing import Any

import httpx
from homeassistant.core import HomeAssistant
from homeassistant.helpers.httpx_client import create_async_httpx_client

from .const import (
    API_TIMEOUT,
    BASE_URL,
    ENDPOINT_DEVICE_DATA,
    ENDPOINT_DEVICES,
    ENDPOINT_LOGIN,
)
from .models import (
    DaikinDevice,
    DaikinDeviceInfo,
    EquipmentStatus,
    Mode,
    Token,
)

_LOGGER = logging.getLogger(__name__)

# HTTP status codes
HTTP_OK = 200
HTTP_MULTIPLE_CHOICES = 300
HTTP_UNAUTHORIZED = 401


class DaikinApiClientError(Exception):
    """Base exception for Daikin Skyport API client errors.

    Attributes:
        operation: Name of the request that failed.
        status: HTTP status code, or None when no response was received.

    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        status: int | None = None,
    ) -> None:
        """Initialize the error with its request context."""
        super().__init__(message)
        self.operation = operation
        self.status = status


class DaikinApiAuthError(DaikinApiClientError):
    """Exception raised for authentication errors."""


class DaikinApiDecodeError(DaikinApiClientError):
    """Exception raised when a response body has an unexpected shape."""


class DaikinApiConnectionError(DaikinApiClientError):
    """Exception raised when the request could not be completed."""


class DaikinApiTimeoutError(DaikinApiConnectionError):
    """Exception raised when the request timed out."""


def create_headers(access_token: str | None = None) -> dict[str, str]:
    """Create HTTP headers for Daikin Skyport API requests.

    Args:
        access_token: Optional bearer token to include in headers.

    Returns:
        Dictionary containing HTTP headers for API requests.

    """
    headers = {
        "content-type": "application/json",
        "accept": "application/json",
    }
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    return headers


def is_http_error(status: int) -> bool:
    """Check if HTTP status code is anything other than a 2xx success."""
    return not HTTP_OK <= status < HTTP_MULTIPLE_CHOICES


def is_auth_error(status: int) -> bool:
    """Check if HTTP status code indicates authentication error."""
    return status == HTTP_UNAUTHORIZED


def validate_response(response: httpx.Response, operation: str) -> Any:
    """Validate HTTP response and return parsed JSON data.

    Args:
        response: HTTP response object to validate.
        operation: Request name used in error messages.

    Returns:
        Parsed JSON data from response.

    Raises:
        DaikinApiAuthError: If the token was rejected.
        DaikinApiClientError: If the response status is not a success.
        DaikinApiDecodeError: If the body is not valid JSON.

    """
    _validate_http_status(response, operation)
    try:
        return response.json()
    except ValueError as err:
        error_msg = f"{operation} response could not be decoded"
        raise DaikinApiDecodeError(
            error_msg, operation=operation, status=response.status_code
        ) from err


def _validate_http_status(response: httpx.Response, operation: str) -> None:
    status = response.status_code
    if not is_http_error(status):
        return

    if is_auth_error(status):
        auth_error = f"{operation} request was not authorized"
        raise DaikinApiAuthError(auth_error, operation=operation, status=status)

    client_error = f"{operation} request returned a non-success response: {status}"
    raise DaikinApiClientError(client_error, operation=operation, status=status)


async def _async_request(
    session: httpx.AsyncClient,
    method: str,
    url: str,
    operation: str,
    **kwargs: Any,
) -> httpx.Response:
    """Send a request, converting transport failures to client errors."""
    try:
        return await session.request(method, url, **kwargs)
    except httpx.TimeoutException as err:
        error_msg = f"{operation} request timed out"
        raise DaikinApiTimeoutError(error_msg, operation=operation) from err
    except httpx.RequestError as err:
        error_msg = f"{operation} request failed: {err}"
        raise DaikinApiConnectionError(error_msg, operation=operation) from err


def extract_token(data: dict[str, Any]) -> Token:
    """Extract the access token from a login response.

    Args:
        data: API response data dictionary.

    Returns:
        Token built from the response.

    Raises:
        KeyError: If accessToken or accessTokenExpiresIn is missing.
        TypeError: If the response is not an object.
        ValueError: If the token is empty or the lifetime is not a number.
        OverflowError: If the lifetime is infinite.

    """
    access_token = data["accessToken"]
    if not isinstance(access_token, str) or not access_token:
        error_msg = "accessToken must be a non-empty string"
        raise ValueError(error_msg)

    return Token(
        access_token=access_token,
        expires_in=int(data["accessTokenExpiresIn"]),
        refresh_token=data.get("refreshToken"),
        token_type=data.get("tokenType"),
    )


def extract_devices(data: list[dict[str, Any]]) -> list[DaikinDevice]:
    """Extract device list from API response.

    Args:
        data: API response data, a list of device objects.

    Returns:
        List of DaikinDevice objects.

    Raises:
        DaikinApiDecodeError: If the response is not a list of devices.

    """
    if not isinstance(data, list):
        error_msg = "Device list response is not a list"
        raise DaikinApiDecodeError(error_msg, operation="get devices")

    try:
        return [
            DaikinDevice(
                id=d["id"],
                name=d["name"],
                location_id=d.get("locationId"),
                model=d.get("model"),
                firmware_version=d.get("firmwareVersion"),
                created_date=d.get("createdDate"),
                has_owner=bool(d.get("hasOwner", False)),
                has_write=bool(d.get("hasWrite", False)),
            )
            for d in data
        ]
    except (KeyError, TypeError, AttributeError) as err:
        error_msg = f"Malformed device in device list: {err}"
        raise DaikinApiDecodeError(error_msg, operation="get devices") from err


def _to_enum(enum_cls: type[IntEnum], value: Any) -> Any:
    """Return value as a member of enum_cls, or unchanged if unknown."""
    try:
        return enum_cls(value)
    except ValueError:
        _LOGGER.debug("Unknown %s value: %s", enum_cls.__name__, value)
        return value


def extract_device_info(data: dict[str, Any]) -> DaikinDeviceInfo:
    """Extract device state from a deviceData response.

    Args:
        data: API response data dictionary.

    Returns:
        DaikinDeviceInfo with the modeled fields and the raw document.

    Raises:
        DaikinApiDecodeError: If a required field is missing or invalid.

    """
    try:
        return DaikinDeviceInfo(
            mode=_to_enum(Mode, data["mode"]),
            equipment_status=_to_enum(EquipmentStatus, data.get("equipmentStatus")),
            csp_home=float(data["cspHome"]),
            hsp_home=float(data["hspHome"]),
            temp_delta_min=float(data["tempDeltaMin"]),
            temp_sp_min=float(data["tempSPMin"]),
            temp_sp_max=float(data["tempSPMax"]),
            mode_limit=data.get("modeLimit"),
            temp_indoor=data.get("tempIndoor"),
            hum_indoor=data.get("humIndoor"),
            temp_outdoor=data.get("tempOutdoor"),
            hum_outdoor=data.get("humOutdoor"),
            sched_enabled=data.get("schedEnabled"),
            fan_circulate=data.get("fanCirculate"),
            raw=data,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as err:
        error_msg = f"Malformed device info: {err}"
        raise DaikinApiDecodeError(error_msg, operation="get device info") from err


def create_session_client(hass: HomeAssistant) -> httpx.AsyncClient:
    """Create HTTP client for the Daikin Skyport API.

    Args:
        hass: Home Assistant instance.

    Returns:
        Configured httpx AsyncClient with the request timeout applied.

    """
    return create_async_httpx_client(hass, timeout=API_TIMEOUT)


async def async_login(
    session: httpx.AsyncClient,
    email: str,
    password: str,
    *,
    base_url: str = BASE_URL,
) -> Token:
    """Authenticate with Daikin Skyport API using email and password.

    Args:
        session: HTTP client session.
        email: User email address.
        password: User password.
        base_url: API root URL.

    Returns:
        Token issued for the user.

    Raises:
        DaikinApiAuthError: If login is refused or the response is unusable.
        DaikinApiConnectionError: If the request could not be completed.

    """
    operation = "login"
    url = f"{base_url}{ENDPOINT_LOGIN}"
    payload = {"email": email, "password": password}

    _LOGGER.debug("Authenticating with Daikin Skyport API")
    response = await _async_request(
        session, "POST", url, operation, headers=create_headers(), json=payload
    )

    if is_http_error(response.status_code):
        error_msg = (
            f"Token request returned a non-success response: {response.status_code}"
        )
        raise DaikinApiAuthError(
            error_msg, operation=operation, status=response.status_code
        )

    try:
        token = extract_token(response.json())
    except (KeyError, TypeError, ValueError, OverflowError) as err:
        error_msg = f"Token response could not be decoded: {err}"
        raise DaikinApiAuthError(
            error_msg, operation=operation, status=response.status_code
        ) from err

    _LOGGER.debug(
        "Successfully authenticated with Daikin Skyport API, token valid for %ds",
        token.expires_in,
    )
    return token


async def async_get_devices(
    session: httpx.AsyncClient,
    access_token: str,
    *,
    base_url: str = BASE_URL,
) -> list[DaikinDevice]:
    """Fetch user devices from Daikin Skyport API.

    Args:
        session: HTTP client session.
        access_token: Bearer token.
        base_url: API root URL.

    Returns:
        List of DaikinDevice objects.

    Raises:
        DaikinApiAuthError: If the token was rejected.
        DaikinApiClientError: If API request fails.

    """
    operation = "get devices"
    url = f"{base_url}{ENDPOINT_DEVICES}"

    _LOGGER.debug("Fetching devices from Daikin Skyport API")
    response = await _async_request(
        session, "GET", url, operation, headers=create_headers(access_token)
    )
    data = validate_response(response, operation)
    devices = extract_devices(data)
    _LOGGER.debug("Retrieved %d devices from Daikin Skyport API", len(devices))
    return devices


async def async_get_device_info(
    session: httpx.AsyncClient,
    access_token: str,
    device_id: str,
    *,
    base_url: str = BASE_URL,
) -> DaikinDeviceInfo:
    """Fetch the current state of one device.

    Args:
        session: HTTP client session.
        access_token: Bearer token.
        device_id: Target device identifier.
        base_url: API root URL.

    Returns:
        DaikinDeviceInfo for the device.

    Raises:
        DaikinApiAuthError: If the token was rejected.
        DaikinApiClientError: If API request fails.

    """
    operation = "get device info"
    url = f"{base_url}{ENDPOINT_DEVICE_DATA.format(device_id=device_id)}"

    _LOGGER.debug("Fetching device info for %s", device_id)
    response = await _async_request(
        session, "GET", url, operation, headers=create_headers(access_token)
    )
    data = validate_response(response, operation)
    return extract_device_info(data)


async def async_update_device(
    session: httpx.AsyncClient,
    access_token: str,
    device_id: str,
    payload: dict[str, Any] | str,
    *,
    base_url: str = BASE_URL,
) -> None:
    """Write fields of a device.

    Args:
        session: HTTP client session.
        access_token: Bearer token.
        device_id: Target device identifier.
        payload: Fields to write, either a mapping sent as JSON or an
            already serialized JSON document sent as is.
        base_url: API root URL.

    Raises:
        DaikinApiAuthError: If the token was rejected.
        DaikinApiClientError: If API request fails.

    """
    operation = "update"
    url = f"{base_url}{ENDPOINT_DEVICE_DATA.format(device_id=device_id)}"
    headers = create_headers(access_token)

    if isinstance(payload, str):
        body: dict[str, Any] = {"content": payload.encode()}
    else:
        body = {"json": payload}

    _LOGGER.debug("Sending update to device %s: %s", device_id, payload)
    response = await _async_request(
        session, "PUT", url, operation, headers=headers, **body
    )
    _validate_http_status(response, operation)
    _LOGGER.debug("Update accepted for device %s", device_id)
