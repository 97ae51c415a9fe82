"""API client for Mitsubishi WF-RAC wireless adapters.

This module provides the local HTTP client that talks to the unit's
``/beaver/command`` endpoint, including state queries, state updates and
account management.
"""

import logging
import time
from typing import Any

import httpx
from homeassistant.core import HomeAssistant
from homeassistant.helpers.httpx_client import create_async_httpx_client
from httpx_retries import Retry, RetryTransport

from .const import (
    API_VERSION,
    COMMAND_DELETE_ACCOUNT_INFO,
    COMMAND_GET_AIRCON_STAT,
    COMMAND_GET_DEVICE_INFO,
    COMMAND_SET_AIRCON_STAT,
    COMMAND_UPDATE_ACCOUNT_INFO,
    ERROR_API,
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_RESPONSE,
    FIELD_AIRCON_STAT,
    REQUEST_TIMEOUT,
)

_LOGGER = logging.getLogger(__name__)

# HTTP status codes
HTTP_BAD_REQUEST = 400

RESULT_OK = 0


class WfracApiClientError(Exception):
    """Base exception for WF-RAC API client errors."""

    translation_key = ERROR_API


class WfracApiConnectionError(WfracApiClientError):
    """Exception raised when the unit cannot be reached."""

    translation_key = ERROR_CANNOT_CONNECT


class WfracApiResponseError(WfracApiClientError):
    """Exception raised when the unit answers with an error or garbage."""

    translation_key = ERROR_INVALID_RESPONSE


def is_http_error(status: int) -> bool:
    """Check if HTTP status code indicates an error.

    Args:
        status: HTTP status code to check.

    Returns:
        True if status code is 400 or higher, False otherwise.

    """
    return status >= HTTP_BAD_REQUEST


def is_command_error(data: dict[str, Any]) -> bool:
    """Check if a command response reports a failure.

    Args:
        data: Parsed response envelope.

    Returns:
        True if the result field is present and not 0, False otherwise.

    """
    return data.get("result", RESULT_OK) != RESULT_OK


def validate_response(response: httpx.Response) -> dict[str, Any]:
    """Validate HTTP response and return the command contents.

    Args:
        response: HTTP response object to validate.

    Returns:
        The ``contents`` block of the response envelope, or an empty
        dictionary when the unit sent none.

    Raises:
        WfracApiResponseError: If the HTTP status, body or result is invalid.

    """
    if is_http_error(response.status_code):
        error_msg = f"Request failed: {response.status_code}"
        raise WfracApiResponseError(error_msg)

    try:
        data = response.json()
    except ValueError as err:
        error_msg = f"Invalid JSON response: {err}"
        raise WfracApiResponseError(error_msg) from err

    if not isinstance(data, dict):
        error_msg = f"Unexpected response type: {type(data).__name__}"
        raise WfracApiResponseError(error_msg)

    if is_command_error(data):
        error_msg = f"Command {data.get('command')} failed: result {data.get('result')}"
        raise WfracApiResponseError(error_msg)

    contents = data.get("contents")
    return contents if isinstance(contents, dict) else {}


def create_session_client(hass: HomeAssistant) -> httpx.AsyncClient:
    """Create HTTP client with retry logic for WF-RAC units.

    Args:
        hass: Home Assistant instance.

    Returns:
        Configured httpx AsyncClient with retry transport.

    """
    base_client = create_async_httpx_client(hass, timeout=REQUEST_TIMEOUT)
    retry = Retry(total=3, backoff_factor=0.5)
    base_client._transport = RetryTransport(  # noqa: SLF001
        transport=base_client._transport,  # noqa: SLF001
        retry=retry,
    )
    return base_client


class WfracClient:
    """Client for the local command endpoint of one WF-RAC unit.

    ``address`` and ``port`` are plain attributes so they can follow the
    unit when discovery reports a new network location.
    """

    def __init__(
        self,
        session: httpx.AsyncClient,
        address: str,
        port: int,
        *,
        device_id: str,
        operator_id: str,
        aircon_id: str | None = None,
        timezone: str = "UTC",
    ) -> None:
        self._session = session
        self.address = address
        self.port = port
        self.device_id = device_id
        self.operator_id = operator_id
        self.aircon_id = aircon_id
        self.timezone = timezone

    def _url(self, command: str) -> str:
        return f"http://{self.address}:{self.port}/beaver/command/{command}"

    def _envelope(
        self, command: str, contents: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "apiVer": API_VERSION,
            "command": command,
            "deviceId": self.device_id,
            "operatorId": self.operator_id,
            "timestamp": int(time.time()),
        }
        if contents is not None:
            payload["contents"] = contents
        return payload

    async def _async_post(
        self, command: str, contents: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Send a command and return the response contents.

        Raises:
            WfracApiConnectionError: If the unit cannot be reached.
            WfracApiResponseError: If the unit rejects the command.

        """
        _LOGGER.debug("Sending %s to %s:%s", command, self.address, self.port)
        try:
            response = await self._session.post(
                self._url(command), json=self._envelope(command, contents)
            )
        except httpx.RequestError as err:
            error_msg = f"Connection error during {command}: {err}"
            raise WfracApiConnectionError(error_msg) from err

        return validate_response(response)

    async def async_get_device_info(self) -> dict[str, Any]:
        """Return the unit's identity block, including ``airconId``."""
        return await self._async_post(COMMAND_GET_DEVICE_INFO)

    async def async_get_aircon_stat(self) -> dict[str, Any]:
        """Return the full state of the unit."""
        return await self._async_post(COMMAND_GET_AIRCON_STAT)

    async def async_set_aircon_stat(self, aircon_stat: dict[str, Any]) -> dict[str, Any]:
        """Send a complete airconStat block and return the resulting state."""
        return await self._async_post(
            COMMAND_SET_AIRCON_STAT,
            {"airconId": self.aircon_id, FIELD_AIRCON_STAT: aircon_stat},
        )

    async def async_update_account_info(self) -> None:
        """Register this operator as an account on the unit."""
        await self._async_post(
            COMMAND_UPDATE_ACCOUNT_INFO,
            {
                "accountId": self.operator_id,
                "airconId": self.aircon_id,
                "remote": 0,
                "timezone": self.timezone,
            },
        )

    async def async_delete_account_info(self) -> None:
        """Ask the unit to forget this operator's account."""
        await self._async_post(
            COMMAND_DELETE_ACCOUNT_INFO, {"accountId": self.operator_id}
        )
