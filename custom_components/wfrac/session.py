"""Session handling for a single WF-RAC unit.

The session keeps the local view of one unit consistent with the unit
itself. It pulls the full state on every sync cycle, reconciles it into
capability values and settings, resolves the account registration and
dispatches capability changes as merged state patches.

All host-side effects go through a ``DeviceHost``, so the session does not
depend on how capabilities, stored values or warnings are kept.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from .api import WfracApiClientError, WfracApiResponseError, WfracClient
from .const import (
    CAPABILITY_3D_AUTO,
    CAPABILITY_FAN_SPEED,
    CAPABILITY_HORIZONTAL_POSITION,
    CAPABILITY_ONOFF,
    CAPABILITY_OPERATING_MODE,
    CAPABILITY_TARGET_TEMPERATURE,
    CAPABILITY_VERTICAL_POSITION,
    CONF_OPERATOR_ID,
    CONF_REGISTERED,
    ERROR_ACCOUNTS_UNKNOWN,
    ERROR_DEVICE_UNAVAILABLE,
    ERROR_UNKNOWN,
    FAN_SPEED_MAPPING,
    FIELD_AIR_FLOW,
    FIELD_ENTRUST,
    FIELD_OPERATION,
    FIELD_OPERATION_MODE,
    FIELD_PRESET_TEMP,
    FIELD_WIND_DIRECTION_LR,
    FIELD_WIND_DIRECTION_UD,
    HORIZONTAL_POSITION_MAPPING,
    MAX_ACCOUNTS,
    OPERATION_MODE_MAPPING,
    SETTING_ACCOUNTS,
    SETTING_FIRMWARE_TYPE,
    SETTING_IP_ADDRESS,
    SETTING_MCU_FIRMWARE,
    SETTING_PORT,
    SETTING_WIFI_FIRMWARE,
    STAT_BINDINGS,
    SUPPORTED_FIRMWARE,
    VERTICAL_POSITION_MAPPING,
)
from .models import (
    AccountState,
    AirconStat,
    DevicePayload,
    DeviceSession,
    DeviceWarning,
    NetworkEndpoint,
    UnmappedCodeError,
)

_LOGGER = logging.getLogger(__name__)


class WfracSessionError(Exception):
    """Session failure carrying a translation key for the user message."""

    def __init__(self, translation_key: str, **placeholders: str) -> None:
        super().__init__(translation_key)
        self.translation_key = translation_key
        self.translation_placeholders = placeholders


class WfracCommandError(WfracSessionError):
    """Raised when a capability change cannot be delivered to the unit."""


class DeviceHost(Protocol):
    """Host-side operations the session reads and writes."""

    @property
    def available(self) -> bool: ...

    def set_available(self) -> None: ...

    def set_unavailable(
        self, translation_key: str, placeholders: dict[str, str] | None = None
    ) -> None: ...

    def has_capability(self, capability: str) -> bool: ...

    def get_capability_value(self, capability: str) -> Any: ...

    def set_capability_value(self, capability: str, value: Any) -> None: ...

    def get_store_value(self, key: str) -> Any: ...

    def set_store_value(self, key: str, value: Any) -> None: ...

    def set_settings(self, settings: dict[str, Any]) -> None: ...

    def set_warning(
        self, warning: DeviceWarning, placeholders: dict[str, str] | None = None
    ) -> None: ...

    def unset_warning(self) -> None: ...


def fan_speed_patch(value: str) -> dict[str, Any]:
    return {FIELD_AIR_FLOW: FAN_SPEED_MAPPING.to_code(value)}


def horizontal_position_patch(value: str) -> dict[str, Any]:
    # Manual vane positions and 3D AUTO exclude each other
    return {
        FIELD_WIND_DIRECTION_LR: HORIZONTAL_POSITION_MAPPING.to_code(value),
        FIELD_ENTRUST: False,
    }


def vertical_position_patch(value: str) -> dict[str, Any]:
    return {
        FIELD_WIND_DIRECTION_UD: VERTICAL_POSITION_MAPPING.to_code(value),
        FIELD_ENTRUST: False,
    }


def three_d_auto_patch(value: bool) -> dict[str, Any]:
    return {FIELD_ENTRUST: bool(value)}


def onoff_patch(value: bool) -> dict[str, Any]:
    return {FIELD_OPERATION: bool(value)}


def operating_mode_patch(value: str) -> dict[str, Any]:
    return {FIELD_OPERATION_MODE: OPERATION_MODE_MAPPING.to_code(value)}


def target_temperature_patch(value: float) -> dict[str, Any]:
    return {FIELD_PRESET_TEMP: float(value)}


CAPABILITY_PRODUCERS: dict[str, Callable[[Any], dict[str, Any]]] = {
    CAPABILITY_3D_AUTO: three_d_auto_patch,
    CAPABILITY_FAN_SPEED: fan_speed_patch,
    CAPABILITY_HORIZONTAL_POSITION: horizontal_position_patch,
    CAPABILITY_ONOFF: onoff_patch,
    CAPABILITY_OPERATING_MODE: operating_mode_patch,
    CAPABILITY_TARGET_TEMPERATURE: target_temperature_patch,
    CAPABILITY_VERTICAL_POSITION: vertical_position_patch,
}


class WfracSession:
    """Synchronizes one unit and dispatches commands to it.

    Sync cycles and commands are serialized by a lock, so at most one
    operation talks to the unit at any time.
    """

    def __init__(self, client: WfracClient, host: DeviceHost) -> None:
        self._client = client
        self._host = host
        self._lock = asyncio.Lock()
        self.state = DeviceSession(
            endpoint=NetworkEndpoint(client.address, client.port),
            registered=bool(host.get_store_value(CONF_REGISTERED)),
            operator_id=host.get_store_value(CONF_OPERATOR_ID),
        )

    @property
    def status(self) -> AccountState:
        """Return the account state derived from the last cycle."""
        warning = self.state.warning
        if warning is DeviceWarning.FIRMWARE_UNSUPPORTED:
            return AccountState.WARNING_FIRMWARE_UNSUPPORTED
        if warning is DeviceWarning.TOO_MANY_ACCOUNTS:
            return AccountState.WARNING_TOO_MANY_ACCOUNTS
        if warning is DeviceWarning.UNREGISTERED:
            return AccountState.WARNING_UNREGISTERED
        if self.state.registered:
            return AccountState.REGISTERED
        return AccountState.UNREGISTERED

    # Synchronization

    async def async_sync(self, pushed: dict[str, Any] | None = None) -> None:
        """Run one sync cycle.

        Args:
            pushed: State returned by a command that was just sent. When
                None the state is fetched from the unit.

        """
        async with self._lock:
            await self._async_sync(pushed)

    async def _async_sync(self, pushed: dict[str, Any] | None = None) -> None:
        _LOGGER.debug("Sync data")
        self.state.warning = None

        try:
            payload = await self._async_sync_aircon_stat(pushed)
            if payload is None:
                return
            self._sync_capabilities(payload.stat)
            firmware_unsupported = self._sync_settings(payload)
            await self._async_sync_account(firmware_unsupported)
        except (WfracApiClientError, WfracSessionError) as err:
            _LOGGER.error("Sync error: %s", err)
            self._host.set_unavailable(
                err.translation_key, getattr(err, "translation_placeholders", None)
            )
            return
        except Exception:
            _LOGGER.exception("Unexpected sync error")
            self._host.set_unavailable(ERROR_UNKNOWN)
            return

        _LOGGER.debug("Sync data done")

    async def _async_sync_aircon_stat(
        self, pushed: dict[str, Any] | None = None
    ) -> DevicePayload | None:
        contents = pushed
        if contents is None:
            contents = await self._client.async_get_aircon_stat()

        if not contents:
            _LOGGER.debug("Empty state received, nothing to sync")
            return None

        _LOGGER.debug("[Sync] %s", contents)

        self._host.set_available()

        payload = DevicePayload.from_contents(contents)
        self.state.control_state = payload.control_state
        self.state.raw_contents = payload.raw_contents
        self.state.account_count = payload.num_of_account
        self.state.firmware_id = payload.firm_type
        return payload

    def _sync_capabilities(self, stat: AirconStat | None) -> None:
        if stat is None:
            return

        for binding in STAT_BINDINGS:
            code = getattr(stat, binding.attribute)
            if code is None or not self._host.has_capability(binding.capability):
                continue

            value = code
            if binding.mapping is not None:
                try:
                    value = binding.mapping.to_value(code)
                except UnmappedCodeError:
                    _LOGGER.warning(
                        "Unknown %s code %r, keeping current value",
                        binding.capability,
                        code,
                    )
                    continue

            self._host.set_capability_value(binding.capability, value)

    def _sync_settings(self, payload: DevicePayload) -> bool:
        """Persist reported settings.

        Returns:
            True if the firmware warning owns the banner for this cycle.

        """
        settings: dict[str, Any] = {}

        if payload.num_of_account:
            settings[SETTING_ACCOUNTS] = str(payload.num_of_account)
        if payload.firm_type:
            settings[SETTING_FIRMWARE_TYPE] = payload.firm_type
        if payload.wireless_firm_ver:
            settings[SETTING_WIFI_FIRMWARE] = payload.wireless_firm_ver
        if payload.mcu_firm_ver:
            settings[SETTING_MCU_FIRMWARE] = payload.mcu_firm_ver

        if settings:
            self._host.set_settings(settings)

        if self._set_firmware_warning():
            return True

        self._host.unset_warning()
        return False

    def _set_firmware_warning(self) -> bool:
        firmware = self.state.firmware_id
        if not firmware or firmware == SUPPORTED_FIRMWARE:
            return False

        _LOGGER.error("Firmware '%s' is not supported", firmware)
        self.state.warning = DeviceWarning.FIRMWARE_UNSUPPORTED
        self._host.set_warning(DeviceWarning.FIRMWARE_UNSUPPORTED, {"firmware": firmware})
        return True

    async def _async_sync_account(self, firmware_unsupported: bool) -> None:
        if self.state.registered or not self._host.available:
            return

        # Zero counts as not reported
        if not self.state.account_count:
            error_msg = "[Sync] [Account] Number of accounts not set"
            _LOGGER.error(error_msg)
            raise WfracSessionError(ERROR_ACCOUNTS_UNKNOWN)

        _LOGGER.debug("[Sync] [Account] %d accounts", self.state.account_count)

        if self.state.account_count <= MAX_ACCOUNTS:
            await self._async_register_account()

        warning = self.account_warning()

        # The firmware warning keeps the banner for this cycle
        if firmware_unsupported:
            return

        self.state.warning = warning
        if warning is None:
            self._host.unset_warning()
            return

        _LOGGER.warning("Account warning: %s", warning)
        self._host.set_warning(warning)

    # Accounts

    def account_warning(self) -> DeviceWarning | None:
        """Return the warning for the current account situation, if any."""
        if self.state.registered or not self.state.account_count:
            return None

        if self.state.account_count > MAX_ACCOUNTS:
            return DeviceWarning.TOO_MANY_ACCOUNTS

        return DeviceWarning.UNREGISTERED

    def _set_registered(self, registered: bool) -> None:
        self.state.registered = registered
        self._host.set_store_value(CONF_REGISTERED, registered)
        _LOGGER.info("Device %s", "registered" if registered else "unregistered")

    async def _async_register_account(self) -> None:
        if not self._host.available:
            return

        _LOGGER.info("[Account] Registering operator %s", self.state.operator_id)
        await self._client.async_update_account_info()
        self._set_registered(True)

    async def async_delete_account(self, *, uninit: bool = False) -> None:
        """Remove this operator's account from the unit.

        Args:
            uninit: Keep the stored registration flag untouched.

        """
        if not self.state.registered:
            return

        _LOGGER.info("[Account] Deleting operator %s", self.state.operator_id)
        async with self._lock:
            await self._client.async_delete_account_info()
        _LOGGER.info("[Account] Deleted")

        if not uninit:
            self._set_registered(False)

    async def async_teardown(self) -> None:
        """Deregister from the unit on a best-effort basis."""
        try:
            await self.async_delete_account()
        except WfracApiClientError as err:
            _LOGGER.warning("Could not delete account from device: %s", err)

    # Commands

    async def async_set_capability(self, capability: str, value: Any) -> None:
        """Apply a single capability change."""
        await self.async_set_capabilities({capability: value})

    async def async_set_capabilities(self, values: dict[str, Any]) -> None:
        """Translate capability changes into one patch and apply it.

        Raises:
            WfracCommandError: If a value has no native code or the patch
                cannot be applied.

        """
        patch: dict[str, Any] = {}
        for capability, value in values.items():
            _LOGGER.info("%s changed to '%s'", capability, value)
            try:
                patch.update(CAPABILITY_PRODUCERS[capability](value))
            except UnmappedCodeError as err:
                raise WfracCommandError(
                    err.translation_key, capability=capability, value=str(value)
                ) from err

        await self.async_apply_patch(patch)

    async def async_apply_patch(self, patch: dict[str, Any]) -> None:
        """Merge a field patch into the current state and send it.

        Raises:
            WfracCommandError: If the unit is unavailable, not registered or
                the exchange fails.

        """
        if not self._host.available:
            _LOGGER.error("Update device: Device not available")
            raise WfracCommandError(ERROR_DEVICE_UNAVAILABLE)

        _LOGGER.debug("Updating device")

        async with self._lock:
            if not self.state.registered:
                warning = self.account_warning() or DeviceWarning.UNREGISTERED
                _LOGGER.error("Update error: %s", warning)
                raise WfracCommandError(warning)

            try:
                payload = await self._async_sync_aircon_stat()
                # Never merge into state left over from an earlier cycle
                if payload is None or payload.control_state is None:
                    error_msg = "No airconStat received from device"
                    raise WfracApiResponseError(error_msg)

                for key, value in patch.items():
                    _LOGGER.debug("-- AirconStat '%s' is now '%s'", key, value)
                self.state.control_state = {**payload.control_state, **patch}

                _LOGGER.debug("-- Send to device: %s", self.state.control_state)
                result = await self._client.async_set_aircon_stat(
                    self.state.control_state
                )
            except WfracApiClientError as err:
                _LOGGER.error("Update error: %s", err)
                raise WfracCommandError(err.translation_key) from err
            except Exception as err:
                _LOGGER.exception("Unexpected update error")
                raise WfracCommandError(ERROR_UNKNOWN) from err

            _LOGGER.debug("Device updated")
            await self._async_sync(result)

    # Discovery

    def set_network(self, endpoint: NetworkEndpoint) -> None:
        """Point the client at a new network location."""
        _LOGGER.debug("Network information: %s:%s", endpoint.address, endpoint.port)
        self.state.endpoint = endpoint
        self._client.address = endpoint.address
        self._client.port = endpoint.port
        self._host.set_settings(
            {SETTING_IP_ADDRESS: endpoint.address, SETTING_PORT: endpoint.port}
        )

    async def async_discovery_available(self, endpoint: NetworkEndpoint) -> None:
        """Handle the unit becoming reachable."""
        if self._host.available:
            return

        _LOGGER.info("Available at %s:%s", endpoint.address, endpoint.port)
        self.set_network(endpoint)
        self._host.set_available()
        await self.async_sync()

    def discovery_address_changed(self, endpoint: NetworkEndpoint) -> None:
        """Handle the unit moving to a new address."""
        _LOGGER.info("Address changed")
        self.set_network(endpoint)

    def discovery_last_seen_changed(self, endpoint: NetworkEndpoint) -> None:
        """Handle a discovery heartbeat."""
        _LOGGER.debug("Last seen changed %s:%s", endpoint.address, endpoint.port)
