"""Coordinator for the Mitsubishi WF-RAC integration."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.const import CONF_HOST, CONF_PORT
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import issue_registry as ir
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .api import WfracClient
from .const import (
    CONF_AIRCON_ID,
    CONF_DEVICE_ID,
    CONF_OPERATOR_ID,
    DEFAULT_POLL_INTERVAL,
    DOMAIN,
    SUPPORTED_CAPABILITIES,
)
from .models import DeviceWarning, NetworkEndpoint
from .session import WfracCommandError, WfracSession

if TYPE_CHECKING:
    import httpx
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)


class WfracDeviceCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Coordinator that polls one WF-RAC unit.

    The coordinator is the host of the unit's session: capability values,
    stored values, settings and the warning banner all live here, backed by
    the config entry and the repair issue registry.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        session: httpx.AsyncClient,
        config_entry: ConfigEntry,
    ) -> None:
        """Initialize the coordinator."""
        super().__init__(
            hass,
            _LOGGER,
            config_entry=config_entry,
            name=f"{DOMAIN}_{config_entry.data[CONF_AIRCON_ID]}",
            update_interval=timedelta(seconds=DEFAULT_POLL_INTERVAL),
        )
        self.config_entry = config_entry
        self.client = WfracClient(
            session,
            config_entry.data[CONF_HOST],
            config_entry.data[CONF_PORT],
            device_id=config_entry.data[CONF_DEVICE_ID],
            operator_id=config_entry.data[CONF_OPERATOR_ID],
            aircon_id=config_entry.data[CONF_AIRCON_ID],
            timezone=str(hass.config.time_zone),
        )
        self.capabilities: dict[str, Any] = {}
        self.warning: DeviceWarning | None = None
        self._available = False
        self._unavailable_reason: tuple[str, dict[str, str] | None] | None = None
        self.data = {}
        self.session = WfracSession(self.client, self)

    @property
    def issue_id(self) -> str:
        """Return the repair issue id used for this unit's warning banner."""
        return f"{self.config_entry.entry_id}_warning"

    @property
    def endpoint(self) -> NetworkEndpoint:
        """Return the configured network location of the unit."""
        return NetworkEndpoint(
            self.config_entry.data[CONF_HOST], self.config_entry.data[CONF_PORT]
        )

    async def _async_update_data(self) -> dict[str, Any]:
        """Run a sync cycle and publish the resulting capability values."""
        if self._available:
            await self.session.async_sync()
        else:
            await self.session.async_discovery_available(self.endpoint)

        if self._unavailable_reason is not None:
            raise self._update_failed()

        return dict(self.capabilities)

    def _update_failed(self) -> UpdateFailed:
        key, placeholders = self._unavailable_reason or ("unknown_error", None)
        return UpdateFailed(
            translation_domain=DOMAIN,
            translation_key=key,
            translation_placeholders=placeholders,
        )

    async def async_set_capabilities(self, values: dict[str, Any]) -> None:
        """Send capability changes to the unit.

        Raises:
            HomeAssistantError: If the unit rejects or cannot receive the change.

        """
        try:
            await self.session.async_set_capabilities(values)
        except WfracCommandError as err:
            raise HomeAssistantError(
                translation_domain=DOMAIN,
                translation_key=err.translation_key,
                translation_placeholders=err.translation_placeholders or None,
            ) from err

        if self._unavailable_reason is not None:
            self.async_set_update_error(self._update_failed())
            return

        self.async_set_updated_data(dict(self.capabilities))

    async def async_set_capability(self, capability: str, value: Any) -> None:
        """Send a single capability change to the unit."""
        await self.async_set_capabilities({capability: value})

    async def async_handle_discovery(self, endpoint: NetworkEndpoint) -> None:
        """Route a zeroconf announcement of this unit to the session."""
        if endpoint != self.session.state.endpoint:
            self.session.discovery_address_changed(endpoint)
        else:
            self.session.discovery_last_seen_changed(endpoint)

        if not self._available:
            await self.async_request_refresh()

    # Host interface used by the session

    @property
    def available(self) -> bool:
        return self._available

    def set_available(self) -> None:
        if not self._available:
            _LOGGER.info("%s is available", self.name)
        self._available = True
        self._unavailable_reason = None

    def set_unavailable(
        self, translation_key: str, placeholders: dict[str, str] | None = None
    ) -> None:
        _LOGGER.debug("%s is unavailable: %s", self.name, translation_key)
        self._available = False
        self._unavailable_reason = (translation_key, placeholders or None)

    def has_capability(self, capability: str) -> bool:
        return capability in SUPPORTED_CAPABILITIES

    def get_capability_value(self, capability: str) -> Any:
        return self.capabilities.get(capability)

    def set_capability_value(self, capability: str, value: Any) -> None:
        self.capabilities[capability] = value

    def get_store_value(self, key: str) -> Any:
        return self.config_entry.data.get(key)

    def set_store_value(self, key: str, value: Any) -> None:
        self._update_entry_data({key: value})

    def set_settings(self, settings: dict[str, Any]) -> None:
        self._update_entry_data(settings)

    def _update_entry_data(self, values: dict[str, Any]) -> None:
        """Persist values in the config entry when they differ."""
        data = self.config_entry.data
        if all(data.get(key) == value for key, value in values.items()):
            return

        self.hass.config_entries.async_update_entry(
            self.config_entry, data={**data, **values}
        )

    def set_warning(
        self, warning: DeviceWarning, placeholders: dict[str, str] | None = None
    ) -> None:
        self.warning = warning
        ir.async_create_issue(
            self.hass,
            DOMAIN,
            self.issue_id,
            is_fixable=False,
            severity=ir.IssueSeverity.WARNING,
            translation_key=str(warning),
            translation_placeholders={"name": self.config_entry.title, **(placeholders or {})},
        )

    def unset_warning(self) -> None:
        self.warning = None
        ir.async_delete_issue(self.hass, DOMAIN, self.issue_id)
