from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class InboundEvent(BaseModel):
    """
    Payload of a Vonage inbound-SMS webhook.

    The same endpoint also receives delivery receipts, which are told apart
    by the presence of `status`. Fields we don't model are kept so a receipt
    can be handed back exactly as it arrived.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    status: str | None = None
    api_key: str | None = Field(default=None, alias="api-key")
    keyword: str | None = None
    msisdn: str | None = None
    text: str = ""
    # A plain number on inbound messages, an {"type", "number"} object on receipts
    to: str | dict[str, Any] | None = None
    message_type: str = Field(default="text", alias="type")
    message_timestamp: str | None = Field(default=None, alias="message-timestamp")
    message_id: str | None = Field(default=None, alias="messageId")

    @property
    def virtual_number(self) -> str | None:
        """The number the SMS was sent to, i.e. the one we reply from."""
        if isinstance(self.to, dict):
            return self.to.get("number")
        return self.to

    @property
    def is_delivery_receipt(self) -> bool:
        return self.status is not None

    def to_payload(self) -> dict[str, Any]:
        """The event as received, using the wire field names."""
        return self.model_dump(by_alias=True, exclude_unset=True)
