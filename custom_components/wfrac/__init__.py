from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from .api import create_session_client
from .const import DOMAIN
from .coordinator import WfracDeviceCoordinator

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [Platform.CLIMATE, Platform.SENSOR, Platform.SWITCH]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Setting up WF-RAC integration for entry %s", entry.entry_id)

    session = create_session_client(hass)
    coordinator = WfracDeviceCoordinator(hass, session, entry)

    try:
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady:
        _LOGGER.warning(
            "Device for entry %s not reachable yet, will retry", entry.entry_id
        )
        raise

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        "session": session,
        "coordinator": coordinator,
    }
    _LOGGER.debug("Stored coordinator for entry %s", entry.entry_id)

    try:
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
        _LOGGER.info("Successfully setup WF-RAC integration for entry %s", entry.entry_id)
        return True
    except Exception as err:
        _LOGGER.error("Failed to setup platforms for entry %s: %s", entry.entry_id, err)
        return False


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Unloading WF-RAC integration for entry %s", entry.entry_id)

    try:
        unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
        if unload_ok:
            entry_data = hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)
            if entry_data is not None:
                coordinator: WfracDeviceCoordinator = entry_data["coordinator"]
                await coordinator.session.async_teardown()
                await entry_data["session"].aclose()
                _LOGGER.debug("Cleaned up data for entry %s", entry.entry_id)
            _LOGGER.info(
                "Successfully unloaded WF-RAC integration for entry %s", entry.entry_id
            )
        else:
            _LOGGER.warning(
                "Failed to unload some platforms for entry %s", entry.entry_id
            )

        return unload_ok
    except Exception as err:
        _LOGGER.error(
            "Error unloading WF-RAC integration for entry %s: %s",
            entry.entry_id,
            err,
        )
        return False
