"""Data models for the Mitsubishi WF-RAC integration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any


class UnmappedCodeError(Exception):
    """Raised when a value has no counterpart in a capability mapping."""

    translation_key = "unmapped_value"

    def __init__(self, capability: str, value: Any) -> None:
        super().__init__(f"No mapping for {capability} value {value!r}")
        self.capability = capability
        self.value = value


class DeviceWarning(StrEnum):
    """Advisory conditions shown as a persistent banner for the unit."""

    TOO_MANY_ACCOUNTS = "too_many_accounts"
    UNREGISTERED = "unregistered"
    FIRMWARE_UNSUPPORTED = "firmware_unsupported"


class AccountState(StrEnum):
    """Account status of this integration on the unit."""

    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    WARNING_TOO_MANY_ACCOUNTS = "warning_too_many_accounts"
    WARNING_UNREGISTERED = "warning_unregistered"
    WARNING_FIRMWARE_UNSUPPORTED = "warning_firmware_unsupported"


@dataclass(frozen=True)
class NetworkEndpoint:
    """Address and port the unit answers on."""

    address: str
    port: int


@dataclass(frozen=True)
class CapabilityMapping:
    """Bidirectional mapping between capability values and native codes."""

    capability: str
    codes: Mapping[str, int]

    def to_value(self, code: int) -> str:
        """Return the capability value for a native code."""
        for value, native in self.codes.items():
            if native == code:
                return value
        raise UnmappedCodeError(self.capability, code)

    def to_code(self, value: str) -> int:
        """Return the native code for a capability value."""
        try:
            return self.codes[value]
        except KeyError as err:
            raise UnmappedCodeError(self.capability, value) from err

    @property
    def values(self) -> list[str]:
        """Return all capability values in code order."""
        return [str(value) for value in self.codes]


@dataclass(frozen=True)
class StatBinding:
    """Links an AirconStat attribute to the capability it feeds."""

    capability: str
    attribute: str
    mapping: CapabilityMapping | None = None


def _native(key: str) -> Any:
    return field(default=None, metadata={"key": key})


@dataclass(slots=True)
class AirconStat:
    """Operational parameters reported by the unit.

    Each attribute is None when the unit did not report the field, so a
    reported zero or False is never confused with an absent value.
    """

    operation: bool | None = _native("operation")
    operation_mode: int | None = _native("operationMode")
    air_flow: int | None = _native("airFlow")
    wind_direction_ud: int | None = _native("windDirectionUD")
    wind_direction_lr: int | None = _native("windDirectionLR")
    preset_temp: float | None = _native("presetTemp")
    indoor_temp: float | None = _native("indoorTemp")
    outdoor_temp: float | None = _native("outdoorTemp")
    entrust: bool | None = _native("entrust")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AirconStat:
        """Build an AirconStat from the native airconStat block."""
        return cls(
            **{
                attr.name: data[attr.metadata["key"]]
                for attr in fields(cls)
                if attr.metadata["key"] in data
            }
        )


def _filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _firmware_version(contents: Mapping[str, Any], section: str) -> str | None:
    block = contents.get(section)
    if not isinstance(block, Mapping):
        return None
    version = block.get("firmVer")
    return str(version) if _filled(version) else None


@dataclass(slots=True)
class DevicePayload:
    """A full getAirconStat contents block split into its parts."""

    control_state: dict[str, Any] | None
    stat: AirconStat | None
    raw_contents: dict[str, Any]
    num_of_account: int | None = None
    firm_type: str | None = None
    wireless_firm_ver: str | None = None
    mcu_firm_ver: str | None = None

    @classmethod
    def from_contents(cls, contents: Mapping[str, Any]) -> DevicePayload:
        """Split the control block from the descriptive metadata."""
        raw_contents = {k: v for k, v in contents.items() if k != "airconStat"}
        control = contents.get("airconStat")
        control_state = dict(control) if isinstance(control, Mapping) else None

        accounts = raw_contents.get("numOfAccount")
        firm_type = raw_contents.get("firmType")

        return cls(
            control_state=control_state,
            stat=AirconStat.from_dict(control_state) if control_state else None,
            raw_contents=raw_contents,
            num_of_account=int(accounts) if _filled(accounts) else None,
            firm_type=str(firm_type) if _filled(firm_type) else None,
            wireless_firm_ver=_firmware_version(raw_contents, "wireless"),
            mcu_firm_ver=_firmware_version(raw_contents, "mcu"),
        )


@dataclass
class DeviceSession:
    """Local session state of one unit, carried across sync cycles."""

    endpoint: NetworkEndpoint
    registered: bool = False
    operator_id: str | None = None
    account_count: int | None = None
    firmware_id: str | None = None
    raw_contents: dict[str, Any] | None = None
    control_state: dict[str, Any] | None = None
    warning: DeviceWarning | None = None
