from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .errors import ParseError

DEVICES_MARKER: Final[str] = "devices:"
VARIABLES_MARKER: Final[str] = "variables:"
_MARKERS: Final[tuple[str, ...]] = (DEVICES_MARKER, VARIABLES_MARKER)

USAGE: Final[str] = (
    "Send: Devices: <device1>, <device2> Variables: <variable1>, <variable2>"
)


@dataclass(frozen=True)
class Command:
    devices: tuple[str, ...]
    variables: tuple[str, ...]


def is_trigger(keyword: str | None, trigger: str) -> bool:
    if not keyword:
        return False
    return keyword.strip().lower() == trigger.strip().lower()


def _segment(text: str, marker: str) -> str:
    """
    Return what follows `marker`, up to the end of its line or the start of
    the other marker, whichever comes first.
    """
    start = text.find(marker)
    if start == -1:
        raise ParseError(f"Missing '{marker[:-1].capitalize()}:' list")
    start += len(marker)

    end = text.find("\n", start)
    if end == -1:
        end = len(text)
    for other in _MARKERS:
        if other == marker:
            continue
        pos = text.find(other, start, end)
        if pos != -1:
            end = pos
    return text[start:end]


def _split_list(segment: str, marker: str) -> tuple[str, ...]:
    items = tuple(item.strip() for item in segment.split(","))
    items = tuple(item for item in items if item)
    if not items:
        raise ParseError(f"Empty '{marker[:-1].capitalize()}:' list")
    return items


def parse_command(text: str) -> Command:
    """
    Parse `Devices: a, b Variables: x, y` (one line or two) into a Command.

    Labels are lowercased, matching how the data platform stores them.
    """
    lowered = text.lower()
    devices = _split_list(_segment(lowered, DEVICES_MARKER), DEVICES_MARKER)
    variables = _split_list(_segment(lowered, VARIABLES_MARKER), VARIABLES_MARKER)
    return Command(devices=devices, variables=variables)
