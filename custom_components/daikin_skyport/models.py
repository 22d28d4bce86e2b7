"""Data models for Daikin Skyport integration."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class Mode(IntEnum):
    """Thermostat operating mode as encoded by the Skyport API."""

    OFF = 0
    HEAT = 1
    COOL = 2
    AUTO = 3
    AUX_HEAT = 4


class EquipmentStatus(IntEnum):
    """What the equipment is currently doing."""

    COOL = 1
    OVERCOOL = 2  # Cooling below setpoint to dehumidify
    HEAT = 3
    FAN = 4
    IDLE = 5


@dataclass(frozen=True)
class Token:
    """Represents an access token returned by a login exchange."""

    access_token: str
    expires_in: int
    refresh_token: str | None = None
    token_type: str | None = None


@dataclass(frozen=True)
class DaikinDevice:
    """Represents a thermostat in the user's device list.

    Attributes:
        id: Unique device identifier.
        name: Human-readable device name.

    """

    id: str
    name: str
    location_id: str | None = None
    model: str | None = None
    firmware_version: str | None = None
    created_date: int | None = None
    has_owner: bool = False
    has_write: bool = False


@dataclass(slots=True)
class DaikinDeviceInfo:
    """Represents the current state reported by the deviceData endpoint."""

    mode: Mode | int
    equipment_status: EquipmentStatus | int | None
    csp_home: float
    hsp_home: float
    temp_delta_min: float
    temp_sp_min: float
    temp_sp_max: float
    mode_limit: int | None = None
    temp_indoor: float | None = None
    hum_indoor: float | None = None
    temp_outdoor: float | None = None
    hum_outdoor: float | None = None
    sched_enabled: bool | None = None
    fan_circulate: int | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeviceConstraints:
    """Setpoint limits and defaults of a device at one point in time."""

    current_cool: float
    current_heat: float
    minimum: float
    maximum: float
    min_delta: float

    @classmethod
    def from_device_info(cls, info: DaikinDeviceInfo) -> "DeviceConstraints":
        """Build constraints from a device state record."""
        return cls(
            current_cool=info.csp_home,
            current_heat=info.hsp_home,
            minimum=info.temp_sp_min,
            maximum=info.temp_sp_max,
            min_delta=info.temp_delta_min,
        )


@dataclass(frozen=True)
class SetpointRequest:
    """Requested setpoints; None leaves that side at the device's value."""

    cool: float | None = None
    heat: float | None = None


@dataclass(frozen=True)
class SetpointPlan:
    """Validated cool/heat pair ready to be sent to the device."""

    cool: float
    heat: float

    def as_payload(self) -> dict[str, Any]:
        """Return the deviceData update body for this plan."""
        return {"cspHome": self.cool, "hspHome": self.heat, "schedOverride": 1}
