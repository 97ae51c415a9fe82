"""Pytest configuration and fixtures for WF-RAC tests."""

from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from custom_components.wfrac.api import WfracClient
from custom_components.wfrac.const import (
    CONF_OPERATOR_ID,
    CONF_REGISTERED,
    SUPPORTED_CAPABILITIES,
)
from custom_components.wfrac.models import DeviceWarning

TEST_HOST = "192.168.1.50"
TEST_PORT = 51443
TEST_AIRCON_ID = "aabbccddeeff"
TEST_OPERATOR_ID = "0d0e1f62-98a0-4d7c-8e5b-8a6bd4a0f5e1"
TEST_DEVICE_ID = "homeassistant-test"


class RecordingHost:
    """In-memory host that records what the session does to it."""

    def __init__(self, *, available: bool = False, registered: bool = False) -> None:
        self.available = available
        self.capabilities: dict[str, Any] = {}
        self.store: dict[str, Any] = {
            CONF_REGISTERED: registered,
            CONF_OPERATOR_ID: TEST_OPERATOR_ID,
        }
        self.settings: dict[str, Any] = {}
        self.warning: DeviceWarning | None = None
        self.warning_placeholders: dict[str, str] | None = None
        self.warnings_set: list[DeviceWarning] = []
        self.unset_warning_calls = 0
        self.unavailable_reason: str | None = None
        self.supported = set(SUPPORTED_CAPABILITIES)

    def set_available(self) -> None:
        self.available = True
        self.unavailable_reason = None

    def set_unavailable(
        self, translation_key: str, placeholders: dict[str, str] | None = None
    ) -> None:
        self.available = False
        self.unavailable_reason = translation_key

    def has_capability(self, capability: str) -> bool:
        return capability in self.supported

    def get_capability_value(self, capability: str) -> Any:
        return self.capabilities.get(capability)

    def set_capability_value(self, capability: str, value: Any) -> None:
        self.capabilities[capability] = value

    def get_store_value(self, key: str) -> Any:
        return self.store.get(key)

    def set_store_value(self, key: str, value: Any) -> None:
        self.store[key] = value

    def set_settings(self, settings: dict[str, Any]) -> None:
        self.settings.update(settings)

    def set_warning(
        self, warning: DeviceWarning, placeholders: dict[str, str] | None = None
    ) -> None:
        self.warning = warning
        self.warning_placeholders = placeholders
        self.warnings_set.append(warning)

    def unset_warning(self) -> None:
        self.warning = None
        self.unset_warning_calls += 1


@pytest.fixture
def host() -> RecordingHost:
    """Fixture providing an unregistered host that has not seen the unit yet."""
    return RecordingHost()


@pytest.fixture
def mock_client() -> Mock:
    """Fixture providing a transport client with no network behind it."""
    client = Mock(spec=WfracClient)
    client.address = TEST_HOST
    client.port = TEST_PORT
    client.async_get_aircon_stat = AsyncMock()
    client.async_set_aircon_stat = AsyncMock()
    client.async_update_account_info = AsyncMock()
    client.async_delete_account_info = AsyncMock()
    client.async_get_device_info = AsyncMock()
    return client


@pytest.fixture
def sample_aircon_stat() -> dict[str, Any]:
    """Fixture providing a decoded airconStat block."""
    return {
        "operation": True,
        "operationMode": 1,
        "airFlow": 2,
        "windDirectionUD": 3,
        "windDirectionLR": 3,
        "presetTemp": 22.5,
        "indoorTemp": 24.0,
        "outdoorTemp": 31.5,
        "entrust": False,
    }


@pytest.fixture
def sample_contents(sample_aircon_stat: dict[str, Any]) -> dict[str, Any]:
    """Fixture providing a full getAirconStat contents block.

    Args:
        sample_aircon_stat: Decoded airconStat fixture.

    Returns:
        A dictionary as returned in the contents of getAirconStat.

    """
    return {
        "airconId": TEST_AIRCON_ID,
        "airconStat": dict(sample_aircon_stat),
        "numOfAccount": 1,
        "firmType": "WF-RAC",
        "wireless": {"firmVer": "010"},
        "mcu": {"firmVer": "126"},
        "timezone": "Europe/Amsterdam",
    }


@pytest.fixture
def sample_response(sample_contents: dict[str, Any]) -> dict[str, Any]:
    """Fixture providing a complete getAirconStat response envelope."""
    return {
        "apiVer": "1.0",
        "command": "getAirconStat",
        "deviceId": TEST_DEVICE_ID,
        "operatorId": TEST_OPERATOR_ID,
        "timestamp": 1700000000,
        "result": 0,
        "contents": sample_contents,
    }
