"""Base entity for the Mitsubishi WF-RAC integration."""

from __future__ import annotations

from typing import Any

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import (
    CONF_AIRCON_ID,
    DOMAIN,
    SETTING_FIRMWARE_TYPE,
    SETTING_MCU_FIRMWARE,
    SETTING_WIFI_FIRMWARE,
)
from .coordinator import WfracDeviceCoordinator


class WfracEntity(CoordinatorEntity[WfracDeviceCoordinator]):
    """Entity backed by the capability values of one unit."""

    _attr_has_entity_name = True

    def __init__(self, coordinator: WfracDeviceCoordinator, key: str | None = None) -> None:
        super().__init__(coordinator)
        data = coordinator.config_entry.data
        aircon_id = data[CONF_AIRCON_ID]
        self._attr_unique_id = aircon_id if key is None else f"{aircon_id}_{key}"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, aircon_id)},
            manufacturer="Mitsubishi Heavy Industries",
            model=data.get(SETTING_FIRMWARE_TYPE),
            name=coordinator.config_entry.title,
            sw_version=data.get(SETTING_WIFI_FIRMWARE),
            hw_version=data.get(SETTING_MCU_FIRMWARE),
        )

    def _capability(self, capability: str) -> Any:
        if not self.coordinator.data:
            return None
        return self.coordinator.data.get(capability)
