"""Tests for the Daikin Skyport Config Flow."""

from unittest.mock import AsyncMock, Mock, patch

import pytest
from homeassistant.const import CONF_EMAIL, CONF_PASSWORD
from homeassistant.data_entry_flow import FlowResultType

from custom_components.daikin_skyport import api
from custom_components.daikin_skyport.config_flow import DaikinSkyportConfigFlow
from custom_components.daikin_skyport.const import (
    ERROR_API_ERROR,
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_AUTH,
    ERROR_NO_DEVICES,
    ERROR_TIMEOUT,
    ERROR_UNKNOWN,
)
from custom_components.daikin_skyport.models import DaikinDevice, Token

SESSION_PATH = "custom_components.daikin_skyport.api.create_session_client"
LOGIN_PATH = "custom_components.daikin_skyport.api.async_login"
GET_DEVICES_PATH = "custom_components.daikin_skyport.api.async_get_devices"


@pytest.fixture
def mock_hass() -> Mock:
    """Create a mock Home Assistant instance."""
    return Mock()


@pytest.fixture
def mock_session() -> Mock:
    """Create a mock HTTP session."""
    session = Mock()
    session.aclose = AsyncMock()
    return session


@pytest.fixture
def flow(mock_hass: Mock) -> DaikinSkyportConfigFlow:
    """Create a DaikinSkyportConfigFlow instance for testing."""
    flow_instance = DaikinSkyportConfigFlow()
    flow_instance.hass = mock_hass
    flow_instance.async_set_unique_id = AsyncMock()
    flow_instance._abort_if_unique_id_configured = Mock()
    flow_instance.async_create_entry = Mock(
        return_value={"type": FlowResultType.CREATE_ENTRY},
    )
    flow_instance.async_show_form = Mock(return_value={"type": FlowResultType.FORM})
    return flow_instance


@pytest.fixture
def user_input() -> dict[str, str]:
    """Create credentials as entered in the form."""
    return {CONF_EMAIL: " Test@Example.com ", CONF_PASSWORD: "password123"}


class TestDaikinSkyportConfigFlowAsyncStepUser:
    """Tests for async_step_user method."""

    @pytest.mark.asyncio
    async def test_async_step_user_shows_form_when_no_input(
        self,
        flow: DaikinSkyportConfigFlow,
    ) -> None:
        """Test that async_step_user shows form when no input provided."""
        result = await flow.async_step_user()
        flow.async_show_form.assert_called_once()
        assert flow.async_show_form.call_args[1]["errors"] == {}
        assert result["type"] == FlowResultType.FORM

    @pytest.mark.asyncio
    async def test_async_step_user_creates_entry_when_devices_found(
        self,
        flow: DaikinSkyportConfigFlow,
        mock_hass: Mock,
        mock_session: Mock,
        user_input: dict[str, str],
    ) -> None:
        """Test that a sign in listing thermostats stores only credentials."""
        devices = [DaikinDevice(id="device1", name="Main Room")]
        with (
            patch(SESSION_PATH, return_value=mock_session) as create_session,
            patch(LOGIN_PATH, AsyncMock(return_value=Token("foo", 3600))) as login,
            patch(GET_DEVICES_PATH, AsyncMock(return_value=devices)) as get_devices,
        ):
            result = await flow.async_step_user(user_input)

        create_session.assert_called_once_with(mock_hass)
        login.assert_awaited_once()
        assert login.await_args[0][1:] == ("Test@Example.com", "password123")
        assert get_devices.await_args[0][:2] == (mock_session, "foo")
        mock_session.aclose.assert_awaited_once()
        flow.async_set_unique_id.assert_called_once_with("test@example.com")
        flow._abort_if_unique_id_configured.assert_called_once()
        call_args = flow.async_create_entry.call_args
        assert call_args[1]["title"] == "Daikin Skyport (Test@Example.com)"
        assert call_args[1]["data"] == {
            CONF_EMAIL: "Test@Example.com",
            CONF_PASSWORD: "password123",
        }
        assert result["type"] == FlowResultType.CREATE_ENTRY

    @pytest.mark.asyncio
    async def test_async_step_user_shows_error_without_devices(
        self,
        flow: DaikinSkyportConfigFlow,
        mock_session: Mock,
        user_input: dict[str, str],
    ) -> None:
        """Test that an account without thermostats is not added."""
        with (
            patch(SESSION_PATH, return_value=mock_session),
            patch(LOGIN_PATH, AsyncMock(return_value=Token("foo", 3600))),
            patch(GET_DEVICES_PATH, AsyncMock(return_value=[])),
        ):
            result = await flow.async_step_user(user_input)

        assert flow.async_show_form.call_args[1]["errors"]["base"] == ERROR_NO_DEVICES
        flow.async_create_entry.assert_not_called()
        assert result["type"] == FlowResultType.FORM

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (api.DaikinApiAuthError("Invalid credentials"), ERROR_INVALID_AUTH),
            (api.DaikinApiTimeoutError("timed out"), ERROR_TIMEOUT),
            (api.DaikinApiConnectionError("refused"), ERROR_CANNOT_CONNECT),
            (api.DaikinApiDecodeError("bad body"), ERROR_API_ERROR),
            (api.DaikinApiClientError("500"), ERROR_API_ERROR),
            (RuntimeError("boom"), ERROR_UNKNOWN),
        ],
    )
    async def test_async_step_user_shows_error_on_failure(
        self,
        flow: DaikinSkyportConfigFlow,
        mock_session: Mock,
        user_input: dict[str, str],
        error: Exception,
        expected: str,
    ) -> None:
        """Test that each sign in failure is mapped to a form error."""
        with (
            patch(SESSION_PATH, return_value=mock_session),
            patch(LOGIN_PATH, AsyncMock(side_effect=error)),
        ):
            result = await flow.async_step_user(user_input)

        flow.async_show_form.assert_called_once()
        assert flow.async_show_form.call_args[1]["errors"]["base"] == expected
        mock_session.aclose.assert_awaited_once()
        flow.async_create_entry.assert_not_called()
        assert result["type"] == FlowResultType.FORM
