"""Constants for the Mitsubishi WF-RAC integration.

This module contains all the constants used throughout the integration,
including protocol settings, configuration keys, capability names and the
mappings between capability values and the unit's native codes.
"""

from homeassistant.components.climate import (
    HVACMode,
)
from homeassistant.components.climate.const import (
    FAN_AUTO,
    FAN_HIGH,
    FAN_LOW,
)
from homeassistant.const import CONF_HOST, CONF_PORT

from .models import CapabilityMapping, StatBinding

DOMAIN = "wfrac"

API_VERSION = "1.0"
DEFAULT_PORT = 51443
DEFAULT_POLL_INTERVAL = 60
REQUEST_TIMEOUT = 10.0

# The unit accepts at most this many concurrent accounts
MAX_ACCOUNTS = 3
SUPPORTED_FIRMWARE = "WF-RAC"

CONF_AIRCON_ID = "aircon_id"
CONF_DEVICE_ID = "device_id"
CONF_OPERATOR_ID = "operator_id"
CONF_REGISTERED = "registered"

SETTING_IP_ADDRESS = CONF_HOST
SETTING_PORT = CONF_PORT
SETTING_ACCOUNTS = "accounts"
SETTING_FIRMWARE_TYPE = "firmware_type"
SETTING_WIFI_FIRMWARE = "wifi_firmware"
SETTING_MCU_FIRMWARE = "mcu_firmware"

ERROR_CANNOT_CONNECT = "cannot_connect"
ERROR_INVALID_RESPONSE = "invalid_response"
ERROR_UNKNOWN = "unknown_error"
ERROR_API = "api_error"
ERROR_ACCOUNTS_UNKNOWN = "accounts_unknown"
ERROR_DEVICE_UNAVAILABLE = "device_unavailable"
ERROR_UNMAPPED_VALUE = "unmapped_value"

COMMAND_GET_DEVICE_INFO = "getDeviceInfo"
COMMAND_GET_AIRCON_STAT = "getAirconStat"
COMMAND_SET_AIRCON_STAT = "setAirconStat"
COMMAND_UPDATE_ACCOUNT_INFO = "updateAccountInfo"
COMMAND_DELETE_ACCOUNT_INFO = "deleteAccountInfo"

FIELD_AIRCON_STAT = "airconStat"
FIELD_ENTRUST = "entrust"
FIELD_AIR_FLOW = "airFlow"
FIELD_WIND_DIRECTION_LR = "windDirectionLR"
FIELD_WIND_DIRECTION_UD = "windDirectionUD"
FIELD_OPERATION = "operation"
FIELD_OPERATION_MODE = "operationMode"
FIELD_PRESET_TEMP = "presetTemp"

CAPABILITY_3D_AUTO = "3d_auto"
CAPABILITY_FAN_SPEED = "fan_speed"
CAPABILITY_HORIZONTAL_POSITION = "horizontal_position"
CAPABILITY_MEASURE_TEMPERATURE = "measure_temperature"
CAPABILITY_MEASURE_TEMPERATURE_OUTDOOR = "measure_temperature.outdoor"
CAPABILITY_ONOFF = "onoff"
CAPABILITY_OPERATING_MODE = "operating_mode"
CAPABILITY_TARGET_TEMPERATURE = "target_temperature"
CAPABILITY_VERTICAL_POSITION = "vertical_position"

SUPPORTED_CAPABILITIES = frozenset(
    {
        CAPABILITY_3D_AUTO,
        CAPABILITY_FAN_SPEED,
        CAPABILITY_HORIZONTAL_POSITION,
        CAPABILITY_MEASURE_TEMPERATURE,
        CAPABILITY_MEASURE_TEMPERATURE_OUTDOOR,
        CAPABILITY_ONOFF,
        CAPABILITY_OPERATING_MODE,
        CAPABILITY_TARGET_TEMPERATURE,
        CAPABILITY_VERTICAL_POSITION,
    }
)

FAN_LOWEST = "lowest"
FAN_HIGHEST = "highest"

OPERATION_MODE_MAP = {
    HVACMode.AUTO: 0,
    HVACMode.COOL: 1,
    HVACMode.HEAT: 2,
    HVACMode.FAN_ONLY: 3,
    HVACMode.DRY: 4,
}
FAN_SPEED_MAP = {
    FAN_AUTO: 0,
    FAN_LOWEST: 1,
    FAN_LOW: 2,
    FAN_HIGH: 3,
    FAN_HIGHEST: 4,
}
VERTICAL_POSITION_MAP = {
    "auto": 0,
    "highest": 1,
    "middle": 2,
    "normal": 3,
    "lowest": 4,
}
HORIZONTAL_POSITION_MAP = {
    "auto": 0,
    "left_left": 1,
    "left_center": 2,
    "center_center": 3,
    "center_right": 4,
    "right_right": 5,
    "left_right": 6,
    "right_left": 7,
}

OPERATION_MODE_MAPPING = CapabilityMapping(CAPABILITY_OPERATING_MODE, OPERATION_MODE_MAP)
FAN_SPEED_MAPPING = CapabilityMapping(CAPABILITY_FAN_SPEED, FAN_SPEED_MAP)
VERTICAL_POSITION_MAPPING = CapabilityMapping(
    CAPABILITY_VERTICAL_POSITION, VERTICAL_POSITION_MAP
)
HORIZONTAL_POSITION_MAPPING = CapabilityMapping(
    CAPABILITY_HORIZONTAL_POSITION, HORIZONTAL_POSITION_MAP
)

STAT_BINDINGS = (
    StatBinding(CAPABILITY_3D_AUTO, "entrust"),
    StatBinding(CAPABILITY_FAN_SPEED, "air_flow", FAN_SPEED_MAPPING),
    StatBinding(
        CAPABILITY_HORIZONTAL_POSITION, "wind_direction_lr", HORIZONTAL_POSITION_MAPPING
    ),
    StatBinding(CAPABILITY_MEASURE_TEMPERATURE, "indoor_temp"),
    StatBinding(CAPABILITY_ONOFF, "operation"),
    StatBinding(CAPABILITY_OPERATING_MODE, "operation_mode", OPERATION_MODE_MAPPING),
    StatBinding(CAPABILITY_MEASURE_TEMPERATURE_OUTDOOR, "outdoor_temp"),
    StatBinding(CAPABILITY_TARGET_TEMPERATURE, "preset_temp"),
    StatBinding(
        CAPABILITY_VERTICAL_POSITION, "wind_direction_ud", VERTICAL_POSITION_MAPPING
    ),
)
