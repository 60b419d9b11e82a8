"""Parsing of free-text GiroMilano wait messages into minutes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re

MINUTES_MARKER = "min"
ARRIVING_NOW_MINUTES = 1

# Lowercased exact phrases; add locale variants here.
ARRIVING_NOW_PHRASES = {"in arrivo", "arriving"}
UPDATING_PHRASES = {"updating", "aggiornamento"}

_DIGITS = re.compile(r"(\d+)")


class WaitKind(Enum):
    NUMERIC_MINUTES = "numeric_minutes"
    ARRIVING_NOW = "arriving_now"
    UPDATING = "updating"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParsedWait:
    """Recognized pattern of a wait message and its minutes, if any."""

    kind: WaitKind
    minutes: int | None = None


_UNKNOWN = ParsedWait(WaitKind.UNKNOWN)


def classify_wait_message(message: str | None) -> ParsedWait:
    """Classify a raw wait message such as ``"5 min"`` or ``"in arrivo"``."""
    if not message or not isinstance(message, str):
        return _UNKNOWN
    text = message.strip().casefold()

    if MINUTES_MARKER in text:
        match = _DIGITS.search(text)
        if match:
            return ParsedWait(WaitKind.NUMERIC_MINUTES, int(match.group(1)))
        return _UNKNOWN
    if text in ARRIVING_NOW_PHRASES:
        return ParsedWait(WaitKind.ARRIVING_NOW, ARRIVING_NOW_MINUTES)
    if text in UPDATING_PHRASES:
        return ParsedWait(WaitKind.UPDATING)
    return _UNKNOWN


def parse_wait_message(message: str | None) -> int | None:
    """Return minutes until arrival, or None when the message is not understood."""
    return classify_wait_message(message).minutes


__all__ = [
    "ARRIVING_NOW_PHRASES",
    "UPDATING_PHRASES",
    "ParsedWait",
    "WaitKind",
    "classify_wait_message",
    "parse_wait_message",
]
