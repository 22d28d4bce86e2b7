"""Resolution and validation of cool/heat setpoint changes.

A request may name the cool setpoint, the heat setpoint, or both. The
missing side is taken from the device, and the pair is adjusted so the
device's minimum cool/heat gap holds before the range is checked. All
rejections happen before anything is written to the device.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models import DeviceConstraints, SetpointPlan, SetpointRequest

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_LOGGER = logging.getLogger(__name__)


class SetpointValidationError(Exception):
    """Base exception for rejected setpoint requests."""


class InvalidSetpointsError(SetpointValidationError):
    """Cool and heat setpoints are the same."""

    def __init__(self) -> None:
        super().__init__("invalid setpoints provided")


class CoolBelowHeatError(SetpointValidationError):
    """Cool setpoint is lower than the heat setpoint."""

    def __init__(self) -> None:
        super().__init__("cool setpoint can not be lower than heat setpoint")


class SetpointOutOfRangeError(SetpointValidationError):
    """A resolved setpoint falls outside the device's allowed range."""

    def __init__(self) -> None:
        super().__init__("setpoint(s) outside of allowable range")


def check_setpoint_request(request: SetpointRequest) -> None:
    """Reject requests that are invalid regardless of device state.

    Raises:
        InvalidSetpointsError: If both setpoints are given and equal.
        CoolBelowHeatError: If both are given and cool is below heat.

    """
    if request.cool is None or request.heat is None:
        return
    if request.cool == request.heat:
        raise InvalidSetpointsError
    if request.cool < request.heat:
        raise CoolBelowHeatError


def resolve_setpoints(
    request: SetpointRequest, constraints: DeviceConstraints
) -> SetpointPlan:
    """Fill in and adjust a request against the device's constraints.

    The cool side is settled first: defaulted if missing, then raised to
    keep the minimum gap above a known heat setpoint. The heat side is
    settled second against the now fixed cool setpoint.

    Raises:
        SetpointOutOfRangeError: If either result is outside the range.

    """
    min_delta = constraints.min_delta
    heat = request.heat

    cool = request.cool
    if cool is None:
        cool = constraints.current_cool
    if heat is not None and cool - heat < min_delta:
        cool = heat + min_delta

    if heat is None:
        heat = constraints.current_heat
    if cool - heat < min_delta:
        heat = cool - min_delta

    for value in (cool, heat):
        if not constraints.minimum <= value <= constraints.maximum:
            raise SetpointOutOfRangeError

    return SetpointPlan(cool=cool, heat=heat)


async def async_plan_setpoints(
    device_id: str,
    request: SetpointRequest,
    constraints_lookup: Callable[[str], Awaitable[DeviceConstraints]],
) -> SetpointPlan:
    """Validate a setpoint request and resolve it into a plan.

    Args:
        device_id: Device the request is for.
        request: Requested cool and/or heat setpoints.
        constraints_lookup: Fetches the device's current constraints. Only
            called once the request passed the device independent checks.

    Returns:
        SetpointPlan ready to be sent to the device.

    Raises:
        SetpointValidationError: If the request is rejected.

    """
    check_setpoint_request(request)
    constraints = await constraints_lookup(device_id)
    plan = resolve_setpoints(request, constraints)
    _LOGGER.debug(
        "Planned setpoints for %s: cool=%s heat=%s (requested %s)",
        device_id,
        plan.cool,
        plan.heat,
        request,
    )
    return plan
