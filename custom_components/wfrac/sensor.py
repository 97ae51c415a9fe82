"""Sensor entities for Mitsubishi WF-RAC air conditioners."""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.const import UnitOfTemperature

from .const import CAPABILITY_MEASURE_TEMPERATURE_OUTDOOR, DOMAIN
from .entity import WfracEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up sensor entities for a WF-RAC unit."""
    coordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]
    async_add_entities([WfracOutdoorTemperatureSensor(coordinator, "outdoor_temperature")])


class WfracOutdoorTemperatureSensor(WfracEntity, SensorEntity):
    """Temperature measured by the outdoor unit."""

    _attr_device_class = SensorDeviceClass.TEMPERATURE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = UnitOfTemperature.CELSIUS
    _attr_translation_key = "outdoor_temperature"

    @property
    def native_value(self) -> float | None:
        return self._capability(CAPABILITY_MEASURE_TEMPERATURE_OUTDOOR)
