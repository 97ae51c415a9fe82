"""Switch entities for Mitsubishi WF-RAC air conditioners."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.switch import SwitchEntity

from .const import CAPABILITY_3D_AUTO, DOMAIN
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
    """Set up switch entities for a WF-RAC unit."""
    coordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]
    async_add_entities([WfracThreeDAutoSwitch(coordinator, "3d_auto")])


class WfracThreeDAutoSwitch(WfracEntity, SwitchEntity):
    """3D AUTO: the unit positions both vanes by itself.

    Setting any vane position by hand turns this off.
    """

    _attr_translation_key = "three_d_auto"

    @property
    def is_on(self) -> bool | None:
        return self._capability(CAPABILITY_3D_AUTO)

    async def async_turn_on(self, **kwargs: Any) -> None:  # noqa: ANN401
        await self.coordinator.async_set_capability(CAPABILITY_3D_AUTO, True)

    async def async_turn_off(self, **kwargs: Any) -> None:  # noqa: ANN401
        await self.coordinator.async_set_capability(CAPABILITY_3D_AUTO, False)
