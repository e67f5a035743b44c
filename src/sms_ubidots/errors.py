from __future__ import annotations


class CommandError(Exception):
    """Base class for failures while serving an inbound SMS command."""


class ParseError(CommandError):
    """The SMS text does not follow the `Devices: ... Variables: ...` grammar."""


class ValueLookupError(CommandError):
    """A last-value lookup failed (not found, auth or network)."""

    def __init__(self, message: str, device: str, variable: str) -> None:
        super().__init__(message)
        self.device = device
        self.variable = variable


class SendError(CommandError):
    """The outbound SMS could not be handed to the messaging provider."""
