from __future__ import annotations

import logging
from typing import Any, Final, Protocol

from .command import USAGE, Command, is_trigger, parse_command
from .config import Settings
from .errors import ParseError, SendError, ValueLookupError
from .sms import InboundEvent

logger = logging.getLogger(__name__)

REPLY_HEADER: Final[str] = "Data requested:\n"


class ValueLookup(Protocol):
    def get_last_value(self, device: str, variable: str) -> Any: ...


class MessageSender(Protocol):
    def send_message(
        self,
        api_key: str | None,
        message_type: str,
        recipient: str | None,
        sender: str | None,
        text: str,
    ) -> dict[str, Any]: ...


def format_value(value: Any) -> str:
    """Render a JSON value the way it reads in an SMS (50.0 -> "50")."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_reply(command: Command, lookup: ValueLookup) -> str:
    """
    Fetch every (device, variable) pair in order and assemble the reply.

    Lookups run one at a time; the first ValueLookupError propagates and
    whatever was assembled so far is dropped.

      Data requested:

      Device: balcony
      Variable: humidity = 50.87
      Variable: temperature = 36.39
    """
    reply = REPLY_HEADER
    for device in command.devices:
        reply += f"\nDevice: {device}"
        for variable in command.variables:
            value = lookup.get_last_value(device, variable)
            reply += f"\nVariable: {variable} = {format_value(value)}"
        reply += "\n"
    return reply


class CommandHandler:
    """Turns one inbound webhook event into (at most) one reply SMS."""

    def __init__(self, settings: Settings, lookup: ValueLookup, sender: MessageSender) -> None:
        self.settings = settings
        self.lookup = lookup
        self.sender = sender

    def _reply(self, event: InboundEvent, text: str) -> dict[str, Any]:
        return self.sender.send_message(
            event.api_key, event.message_type, event.msisdn, event.virtual_number, text
        )

    def _notify_quietly(self, event: InboundEvent, text: str) -> None:
        try:
            self._reply(event, text)
        except SendError:
            logger.warning("Could not notify %s", event.msisdn, exc_info=True)

    def handle(self, event: InboundEvent) -> dict[str, Any]:
        """
        Serve one webhook call.

        Returns the event itself for delivery receipts, `{"message": ...}`
        when a lookup fails, otherwise the messaging provider's response.
        """
        # Receipts for replies we sent earlier (submitted, delivered, ...)
        if event.is_delivery_receipt:
            logger.debug("Delivery receipt: %s", event.status)
            return event.to_payload()

        reply = ""
        if is_trigger(event.keyword, self.settings.trigger_keyword):
            try:
                command = parse_command(event.text)
            except ParseError as exc:
                if not self.settings.reply_on_invalid_command:
                    raise
                logger.info("Malformed command from %s: %s", event.msisdn, exc)
                self._notify_quietly(event, USAGE)
                return {"message": str(exc)}

            logger.info(
                "Command from %s: %d device(s) x %d variable(s)",
                event.msisdn,
                len(command.devices),
                len(command.variables),
            )
            try:
                reply = build_reply(command, self.lookup)
            except ValueLookupError as exc:
                logger.warning("Aborting command from %s: %s", event.msisdn, exc)
                self._notify_quietly(event, self.settings.fallback_message)
                return {"message": str(exc)}
        elif self.settings.reply_on_invalid_command:
            reply = f"Start your message with {self.settings.trigger_keyword}. {USAGE}"

        return self._reply(event, reply)
