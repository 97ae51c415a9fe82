"""Climate entity for Mitsubishi WF-RAC air conditioners.

This module exposes the unit's power, operating mode, target temperature,
fan speed and vane positions as a single Home Assistant climate entity.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACMode,
)
from homeassistant.components.climate.const import ATTR_HVAC_MODE
from homeassistant.const import (
    ATTR_TEMPERATURE,
    UnitOfTemperature,
)

from .const import (
    CAPABILITY_FAN_SPEED,
    CAPABILITY_HORIZONTAL_POSITION,
    CAPABILITY_MEASURE_TEMPERATURE,
    CAPABILITY_ONOFF,
    CAPABILITY_OPERATING_MODE,
    CAPABILITY_TARGET_TEMPERATURE,
    CAPABILITY_VERTICAL_POSITION,
    DOMAIN,
    FAN_SPEED_MAPPING,
    HORIZONTAL_POSITION_MAPPING,
    OPERATION_MODE_MAP,
    VERTICAL_POSITION_MAPPING,
)
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
    """Set up the climate entity for a WF-RAC unit."""
    coordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]
    async_add_entities([WfracClimateEntity(coordinator)])


class WfracClimateEntity(WfracEntity, ClimateEntity):
    """Climate entity for a WF-RAC unit.

    Power and operating mode are separate fields on the unit; the entity
    folds them into a single HVAC mode.
    """

    _attr_name = None
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = 0.5
    _attr_hvac_modes = [HVACMode.OFF, *OPERATION_MODE_MAP]
    _attr_fan_modes = FAN_SPEED_MAPPING.values
    _attr_swing_modes = VERTICAL_POSITION_MAPPING.values
    _attr_swing_horizontal_modes = HORIZONTAL_POSITION_MAPPING.values
    _attr_supported_features = (
        ClimateEntityFeature.TARGET_TEMPERATURE
        | ClimateEntityFeature.FAN_MODE
        | ClimateEntityFeature.SWING_MODE
        | ClimateEntityFeature.SWING_HORIZONTAL_MODE
        | ClimateEntityFeature.TURN_OFF
        | ClimateEntityFeature.TURN_ON
    )

    @property
    def hvac_mode(self) -> HVACMode | None:
        """Return the current HVAC mode."""
        power = self._capability(CAPABILITY_ONOFF)
        if power is None:
            return None
        if not power:
            return HVACMode.OFF

        mode = self._capability(CAPABILITY_OPERATING_MODE)
        return HVACMode(mode) if mode is not None else None

    @property
    def current_temperature(self) -> float | None:
        return self._capability(CAPABILITY_MEASURE_TEMPERATURE)

    @property
    def target_temperature(self) -> float | None:
        return self._capability(CAPABILITY_TARGET_TEMPERATURE)

    @property
    def fan_mode(self) -> str | None:
        return self._capability(CAPABILITY_FAN_SPEED)

    @property
    def swing_mode(self) -> str | None:
        return self._capability(CAPABILITY_VERTICAL_POSITION)

    @property
    def swing_horizontal_mode(self) -> str | None:
        return self._capability(CAPABILITY_HORIZONTAL_POSITION)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the account state of the integration on the unit."""
        return {"account_state": str(self.coordinator.session.status)}

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Set the HVAC mode.

        Args:
            hvac_mode: The HVAC mode to set.

        """
        if hvac_mode == HVACMode.OFF:
            await self.coordinator.async_set_capability(CAPABILITY_ONOFF, False)
            return

        await self.coordinator.async_set_capabilities(
            {CAPABILITY_ONOFF: True, CAPABILITY_OPERATING_MODE: hvac_mode}
        )

    async def async_set_temperature(self, **kwargs: Any) -> None:  # noqa: ANN401
        """Set the target temperature, optionally together with a mode.

        Args:
            **kwargs: Keyword arguments containing temperature data.

        """
        values: dict[str, Any] = {}
        if (temperature := kwargs.get(ATTR_TEMPERATURE)) is not None:
            values[CAPABILITY_TARGET_TEMPERATURE] = temperature

        hvac_mode = kwargs.get(ATTR_HVAC_MODE)
        if hvac_mode == HVACMode.OFF:
            values[CAPABILITY_ONOFF] = False
        elif hvac_mode is not None:
            values[CAPABILITY_ONOFF] = True
            values[CAPABILITY_OPERATING_MODE] = hvac_mode

        if values:
            await self.coordinator.async_set_capabilities(values)

    async def async_set_fan_mode(self, fan_mode: str) -> None:
        """Set the fan speed."""
        await self.coordinator.async_set_capability(CAPABILITY_FAN_SPEED, fan_mode)

    async def async_set_swing_mode(self, swing_mode: str) -> None:
        """Set the vertical vane position."""
        await self.coordinator.async_set_capability(
            CAPABILITY_VERTICAL_POSITION, swing_mode
        )

    async def async_set_swing_horizontal_mode(self, swing_horizontal_mode: str) -> None:
        """Set the horizontal vane position."""
        await self.coordinator.async_set_capability(
            CAPABILITY_HORIZONTAL_POSITION, swing_horizontal_mode
        )

    async def async_turn_on(self) -> None:
        """Turn the unit on in its last operating mode."""
        await self.coordinator.async_set_capability(CAPABILITY_ONOFF, True)

    async def async_turn_off(self) -> None:
        """Turn the unit off."""
        await self.coordinator.async_set_capability(CAPABILITY_ONOFF, False)
