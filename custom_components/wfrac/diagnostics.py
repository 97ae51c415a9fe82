"""Diagnostics support for the Mitsubishi WF-RAC integration."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Final

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import CONF_DEVICE_ID, CONF_OPERATOR_ID, DOMAIN

SENSITIVE_FIELDS: Final = {
    CONF_DEVICE_ID,
    CONF_OPERATOR_ID,
    "accountId",
    "deviceId",
    "operatorId",
    "remoteList",
}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return a diagnostics payload for ``entry``."""
    coordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]
    session = coordinator.session

    return {
        "entry": async_redact_data(dict(entry.data), SENSITIVE_FIELDS),
        "available": coordinator.available,
        "account_state": str(session.status),
        "session": async_redact_data(asdict(session.state), SENSITIVE_FIELDS),
        "capabilities": dict(coordinator.capabilities),
    }
