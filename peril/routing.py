"""Exchange names, routing keys and the messages sent between server and clients."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

ARMY_MOVES_PREFIX = "army_moves"
WAR_RECOGNITIONS_PREFIX = "war"
PAUSE_KEY = "pause"
GAME_LOG_SLUG = "game_logs"

EXCHANGE_PERIL_DIRECT = "peril_direct"
EXCHANGE_PERIL_TOPIC = "peril_topic"

_ZERO_TIME = "0001-01-01T00:00:00Z"
_TIMESTAMP = re.compile(
    r"(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<zone>[Zz]|[+-]\d{2}:\d{2})?"
)


def _format_time(moment: datetime) -> str:
    text = moment.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def _parse_time(text: str) -> datetime:
    match = _TIMESTAMP.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    fraction = (match["frac"] or "")[:6].ljust(6, "0")
    zone = match["zone"] or ""
    if zone in ("Z", "z"):
        zone = "+00:00"
    return datetime.fromisoformat(f"{match['base']}.{fraction}{zone}")


@dataclass
class PlayingState:
    """Whether the game is paused."""

    is_paused: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"IsPaused": self.is_paused}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PlayingState:
        return cls(is_paused=bool(data.get("IsPaused", False)))


@dataclass
class GameLog:
    """A log line produced by a player."""

    current_time: datetime
    message: str
    username: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "CurrentTime": _format_time(self.current_time),
            "Message": self.message,
            "Username": self.username,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GameLog:
        return cls(
            current_time=_parse_time(data.get("CurrentTime") or _ZERO_TIME),
            message=data.get("Message", ""),
            username=data.get("Username", ""),
        )