"""Players, units and the messages describing their moves."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

Location = str


class UnitRank(str, Enum):
    """The kinds of unit a player can spawn."""

    INFANTRY = "infantry"
    CAVALRY = "cavalry"
    ARTILLERY = "artillery"

    def __str__(self) -> str:
        return self.value


Rank = Union[UnitRank, str]


def _parse_rank(value: str) -> Rank:
    try:
        return UnitRank(value)
    except ValueError:
        return value


def _rank_text(rank: Rank) -> str:
    return rank.value if isinstance(rank, UnitRank) else rank


@dataclass(frozen=True)
class Unit:
    """A single unit on the map."""

    id: int
    rank: Rank
    location: Location

    def to_dict(self) -> dict[str, Any]:
        return {"ID": self.id, "Rank": _rank_text(self.rank), "Location": self.location}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Unit:
        return cls(
            id=int(data.get("ID", 0)),
            rank=_parse_rank(data.get("Rank", "")),
            location=data.get("Location", ""),
        )


@dataclass
class Player:
    """A player and the units they own, keyed by unit id."""

    username: str
    units: dict[int, Unit] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "Username": self.username,
            "Units": {str(key): unit.to_dict() for key, unit in self.units.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Player:
        units = data.get("Units") or {}
        return cls(
            username=data.get("Username", ""),
            units={int(key): Unit.from_dict(value) for key, value in units.items()},
        )


@dataclass
class ArmyMove:
    """Units of a player moving to a new location."""

    player: Player
    units: list[Unit]
    to_location: Location

    def to_dict(self) -> dict[str, Any]:
        return {
            "Player": self.player.to_dict(),
            "Units": [unit.to_dict() for unit in self.units],
            "ToLocation": self.to_location,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ArmyMove:
        return cls(
            player=Player.from_dict(data.get("Player") or {}),
            units=[Unit.from_dict(item) for item in data.get("Units") or []],
            to_location=data.get("ToLocation", ""),
        )


@dataclass
class RecognitionOfWar:
    """An attacker declaring war on a defender."""

    attacker: Player
    defender: Player

    def to_dict(self) -> dict[str, Any]:
        return {"Attacker": self.attacker.to_dict(), "Defender": self.defender.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RecognitionOfWar:
        return cls(
            attacker=Player.from_dict(data.get("Attacker") or {}),
            defender=Player.from_dict(data.get("Defender") or {}),
        )


def all_ranks() -> frozenset[UnitRank]:
    """Every rank a unit may have."""
    return frozenset(UnitRank)


def all_locations() -> frozenset[Location]:
    """Every location on the map."""
    return frozenset(
        {"americas", "europe", "africa", "asia", "australia", "antarctica"}
    )