from __future__ import annotations

from typing import Any

import pytest

from sms_ubidots.config import Settings, get_settings
from sms_ubidots.errors import SendError, ValueLookupError


class FakeLookup:
    """Fake Ubidots client: returns canned values and records every call."""

    def __init__(
        self,
        values: dict[tuple[str, str], Any] | None = None,
        missing: set[tuple[str, str]] | None = None,
    ) -> None:
        self.values = values or {}
        self.missing = missing or set()
        self.calls: list[tuple[str, str]] = []

    def get_last_value(self, device: str, variable: str) -> Any:
        self.calls.append((device, variable))
        if (device, variable) in self.missing or (device, variable) not in self.values:
            raise ValueLookupError(f"404 - lookup of {device}/{variable} failed", device, variable)
        return self.values[(device, variable)]


class FakeSender:
    """Fake Vonage client that records what would have been sent."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[dict[str, Any]] = []

    def send_message(
        self,
        api_key: str | None,
        message_type: str,
        recipient: str | None,
        sender: str | None,
        text: str,
    ) -> dict[str, Any]:
        self.sent.append(
            {
                "api_key": api_key,
                "message_type": message_type,
                "recipient": recipient,
                "sender": sender,
                "text": text,
            }
        )
        if self.fail:
            raise SendError("Vonage send failed: 401 Unauthorized")
        return {"message_uuid": f"uuid-{len(self.sent)}"}


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ubidots_token="BBFF-test-token",
        ubidots_base_url="https://ubidots.test",
        vonage_api_secret="vonage-secret",
        vonage_base_url="https://vonage.test",
        trigger_keyword="UBIDOTS",
        reply_on_invalid_command=False,
        request_timeout=5,
    )


@pytest.fixture
def example_values() -> dict[tuple[str, str], Any]:
    return {
        ("balcony", "humidity"): 50.87,
        ("balcony", "temperature"): 36.39,
        ("kitchen", "humidity"): 55.72,
        ("kitchen", "temperature"): 29.45,
    }


@pytest.fixture
def inbound_payload() -> dict[str, Any]:
    return {
        "api-key": "abcd1234",
        "keyword": "UBIDOTS",
        "msisdn": "447700900001",
        "text": "UBIDOTS Devices: balcony, kitchen Variables: humidity, temperature",
        "to": "447700900000",
        "type": "text",
        "messageId": "0A0000000123ABCD1",
        "message-timestamp": "2020-06-24 12:00:00",
    }
