"""Pytest configuration and fixtures for Daikin Skyport tests."""

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from custom_components.daikin_skyport.models import (
    DaikinDeviceInfo,
    DeviceConstraints,
    EquipmentStatus,
    Mode,
)

TEST_EMAIL = "test@test.com"
TEST_PASSWORD = "mypassword"
TEST_ACCESS_TOKEN = "foo"
TEST_DEVICE_ID = "0000000-0000-0000-0000-000000000000"


class FakeClock:
    """Manually advanced clock returning aware datetimes."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    """Fixture providing a clock fixed at a known instant."""
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def sample_login_response() -> dict[str, Any]:
    """Fixture providing a sample login API response."""
    return {
        "accessToken": TEST_ACCESS_TOKEN,
        "accessTokenExpiresIn": 3600,
        "refreshToken": "bar",
        "tokenType": "Bearer",
    }


@pytest.fixture
def sample_devices_response() -> list[dict[str, Any]]:
    """Fixture providing a sample device list API response."""
    return [
        {
            "id": TEST_DEVICE_ID,
            "locationId": "0000000-1111-1111-1111-000000000000",
            "name": "Main Room",
            "model": "ONEPLUS",
            "firmwareVersion": "3.2.19",
            "createdDate": 1691622040,
            "hasOwner": True,
            "hasWrite": True,
        },
    ]


@pytest.fixture
def sample_device_info_response() -> dict[str, Any]:
    """Fixture providing a sample deviceData API response.

    The setpoint limits match the device_constraints fixture.
    """
    return {
        "mode": 2,
        "modeLimit": 0,
        "equipmentStatus": 2,
        "cspHome": 22,
        "hspHome": 17.5,
        "tempDeltaMin": 1.5,
        "tempSPMin": 10,
        "tempSPMax": 35,
        "tempIndoor": 23.1,
        "humIndoor": 48,
        "tempOutdoor": 14.5,
        "humOutdoor": 71,
        "schedEnabled": True,
        "fanCirculate": 0,
        "lightBarBrightness": 2,
    }


@pytest.fixture
def device_constraints() -> DeviceConstraints:
    """Fixture providing constraints matching the sample device."""
    return DeviceConstraints(
        current_cool=22,
        current_heat=17.5,
        minimum=10,
        maximum=35,
        min_delta=1.5,
    )


@pytest.fixture
def sample_device_info() -> DaikinDeviceInfo:
    """Fixture providing a decoded device state."""
    return DaikinDeviceInfo(
        mode=Mode.COOL,
        equipment_status=EquipmentStatus.OVERCOOL,
        csp_home=22.0,
        hsp_home=17.5,
        temp_delta_min=1.5,
        temp_sp_min=10.0,
        temp_sp_max=35.0,
        temp_indoor=23.1,
        hum_indoor=48,
    )
