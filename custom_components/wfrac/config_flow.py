"""
Configuration flow for the Mitsubishi WF-RAC integration.

This module handles manual setup of a unit by address and the zeroconf
discovery of units announcing ``_beaver._tcp.local.``.
"""

import logging
import uuid
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_HOST, CONF_NAME, CONF_PORT
from homeassistant.helpers.httpx_client import get_async_client
from homeassistant.helpers.service_info.zeroconf import ZeroconfServiceInfo

from . import api
from .const import (
    CONF_AIRCON_ID,
    CONF_DEVICE_ID,
    CONF_OPERATOR_ID,
    CONF_REGISTERED,
    DEFAULT_PORT,
    DOMAIN,
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_RESPONSE,
    ERROR_UNKNOWN,
)
from .models import NetworkEndpoint

_LOGGER = logging.getLogger(__name__)

DEFAULT_NAME = "Air conditioner"


class WfracConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle configuration flow for the WF-RAC integration."""

    VERSION = 1

    def __init__(self) -> None:
        """Initialize the config flow."""
        super().__init__()
        self._host: str | None = None
        self._port: int = DEFAULT_PORT
        self._name: str = DEFAULT_NAME
        self._device_id = f"homeassistant-{uuid.uuid4().hex[:8]}"
        self._operator_id = str(uuid.uuid4())

    async def _async_get_aircon_id(self, host: str, port: int) -> str:
        """Ask the unit for its identifier.

        Raises:
            api.WfracApiClientError: If the unit cannot be queried.

        """
        client = api.WfracClient(
            get_async_client(self.hass),
            host,
            port,
            device_id=self._device_id,
            operator_id=self._operator_id,
        )
        info = await client.async_get_device_info()
        aircon_id = info.get("airconId")
        if not aircon_id:
            error_msg = "Device info does not contain an airconId"
            raise api.WfracApiResponseError(error_msg)
        return str(aircon_id)

    def _create_entry(self, aircon_id: str) -> ConfigFlowResult:
        return self.async_create_entry(
            title=self._name,
            data={
                CONF_HOST: self._host,
                CONF_PORT: self._port,
                CONF_AIRCON_ID: aircon_id,
                CONF_DEVICE_ID: self._device_id,
                CONF_OPERATOR_ID: self._operator_id,
                CONF_REGISTERED: False,
            },
        )

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """
        Handle manual setup by address.

        Args:
            user_input: User input data containing host, port and name.

        Returns:
            ConfigFlowResult indicating the next step or errors.

        """
        errors: dict[str, str] = {}

        if user_input is not None:
            self._host = user_input[CONF_HOST]
            self._port = user_input[CONF_PORT]
            self._name = user_input.get(CONF_NAME, DEFAULT_NAME)

            try:
                aircon_id = await self._async_get_aircon_id(self._host, self._port)
            except api.WfracApiConnectionError:
                _LOGGER.exception("Connection error (%s)", ERROR_CANNOT_CONNECT)
                errors["base"] = ERROR_CANNOT_CONNECT
            except api.WfracApiClientError:
                _LOGGER.exception("Invalid response (%s)", ERROR_INVALID_RESPONSE)
                errors["base"] = ERROR_INVALID_RESPONSE
            except Exception:
                _LOGGER.exception(
                    "Unexpected error during setup (%s)",
                    ERROR_UNKNOWN,
                )
                errors["base"] = ERROR_UNKNOWN

            else:
                await self.async_set_unique_id(aircon_id)
                self._abort_if_unique_id_configured(
                    updates={CONF_HOST: self._host, CONF_PORT: self._port}
                )
                return self._create_entry(aircon_id)

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema(
                {
                    vol.Required(CONF_HOST): str,
                    vol.Required(CONF_PORT, default=DEFAULT_PORT): int,
                    vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
                }
            ),
            errors=errors,
        )

    async def async_step_zeroconf(
        self, discovery_info: ZeroconfServiceInfo
    ) -> ConfigFlowResult:
        """Handle a unit announced over zeroconf."""
        self._host = discovery_info.host
        self._port = discovery_info.port or DEFAULT_PORT
        self._name = discovery_info.name.split(".", 1)[0] or DEFAULT_NAME
        _LOGGER.debug("Discovered WF-RAC unit at %s:%s", self._host, self._port)

        try:
            aircon_id = await self._async_get_aircon_id(self._host, self._port)
        except api.WfracApiClientError:
            _LOGGER.warning("Discovered unit at %s did not answer", self._host)
            return self.async_abort(reason=ERROR_CANNOT_CONNECT)

        await self.async_set_unique_id(aircon_id)

        entry = self.hass.config_entries.async_entry_for_domain_unique_id(
            DOMAIN, aircon_id
        )
        if entry is not None:
            entry_data = self.hass.data.get(DOMAIN, {}).get(entry.entry_id)
            if entry_data is not None:
                await entry_data["coordinator"].async_handle_discovery(
                    NetworkEndpoint(self._host, self._port)
                )
                return self.async_abort(reason="already_configured")

        self._abort_if_unique_id_configured(
            updates={CONF_HOST: self._host, CONF_PORT: self._port}
        )
        self.context["title_placeholders"] = {"name": self._name}
        return await self.async_step_zeroconf_confirm()

    async def async_step_zeroconf_confirm(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Confirm adding a discovered unit."""
        if user_input is not None:
            return self._create_entry(str(self.unique_id))

        return self.async_show_form(
            step_id="zeroconf_confirm",
            description_placeholders={"name": self._name, CONF_HOST: str(self._host)},
        )
