"""The state of one player's game and the commands that change it."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterable, Optional

from peril.gamedata import (
    ArmyMove,
    Location,
    Player,
    RecognitionOfWar,
    Unit,
    UnitRank,
    all_locations,
)
from peril.routing import PlayingState

_DIVIDER = "------------------------"
_INTEGER = re.compile(r"[+-]?[0-9]+")


class CommandError(Exception):
    """A player command could not be carried out."""


class MoveOutcome(IntEnum):
    SAME_PLAYER = 0
    SAFE = 1
    MAKE_WAR = 2


class WarOutcome(IntEnum):
    NOT_INVOLVED = 0
    NO_UNITS = 1
    YOU_WON = 2
    OPPONENT_WON = 3
    DRAW = 4


@dataclass(frozen=True)
class WarResult:
    """The outcome of a war and, when one was fought, who won and lost."""

    outcome: WarOutcome
    winner: Optional[str] = None
    loser: Optional[str] = None


def overlapping_location(first: Player, second: Player) -> Optional[Location]:
    """Return a location where both players have units, or None."""
    for mine in first.units.values():
        for theirs in second.units.values():
            if mine.location == theirs.location:
                return mine.location
    return None


def units_power_level(units: Iterable[Unit]) -> int:
    """Sum the fighting power of the given units."""
    power = 0
    for unit in units:
        if unit.rank == UnitRank.ARTILLERY:
            power += 10
        elif unit.rank == UnitRank.CAVALRY:
            power += 5
        elif unit.rank == UnitRank.INFANTRY:
            power += 1
    return power


class GameState:
    """One player's view of the game, safe to share between threads."""

    def __init__(self, username: str) -> None:
        self.player = Player(username)
        self.paused = False
        self._lock = threading.RLock()

    def _set_paused(self, paused: bool) -> None:
        with self._lock:
            self.paused = paused

    def _add_unit(self, unit: Unit) -> None:
        with self._lock:
            self.player.units[unit.id] = unit

    def _remove_units_in_location(self, location: Location) -> None:
        with self._lock:
            self.player.units = {
                key: unit
                for key, unit in self.player.units.items()
                if unit.location != location
            }

    def get_unit(self, unit_id: int) -> Optional[Unit]:
        with self._lock:
            return self.player.units.get(unit_id)

    def update_unit(self, unit: Unit) -> None:
        with self._lock:
            self.player.units[unit.id] = unit

    def player_snapshot(self) -> Player:
        """Return a copy of the player that later changes do not affect."""
        with self._lock:
            return Player(self.player.username, dict(self.player.units))

    def handle_pause(self, state: PlayingState) -> None:
        try:
            print()
            if state.is_paused:
                print("==== Pause Detected ====")
                self._set_paused(True)
            else:
                print("==== Resume Detected ====")
                self._set_paused(False)
        finally:
            print(_DIVIDER)

    def handle_move(self, move: ArmyMove) -> MoveOutcome:
        try:
            player = self.player_snapshot()
            mover = move.player.username
            print()
            print("==== Move Detected ====")
            print(f"{mover} is moving {len(move.units)} unit(s) to {move.to_location}")
            for unit in move.units:
                print(f"* {unit.rank}")

            if player.username == mover:
                return MoveOutcome.SAME_PLAYER

            location = overlapping_location(player, move.player)
            if location is not None:
                print(f"You have units in {location}! You are at war with {mover}!")
                return MoveOutcome.MAKE_WAR
            print(f"You are safe from {mover}'s units.")
            return MoveOutcome.SAFE
        finally:
            print(_DIVIDER)

    def command_move(self, words: list[str]) -> ArmyMove:
        if self.paused:
            raise CommandError("the game is paused, you can not move units")
        if len(words) < 3:
            raise CommandError("usage: move <location> <unitID> <unitID> <unitID> etc")
        location = words[1]
        if location not in all_locations():
            raise CommandError(f"error: {location} is not a valid location")

        unit_ids = []
        for word in words[2:]:
            if not _INTEGER.fullmatch(word):
                raise CommandError(f"error: {word} is not a valid unit ID")
            unit_ids.append(int(word))

        moved = []
        for unit_id in unit_ids:
            unit = self.get_unit(unit_id)
            if unit is None:
                raise CommandError(f"error: unit with ID {unit_id} not found")
            unit = replace(unit, location=location)
            self.update_unit(unit)
            moved.append(unit)

        move = ArmyMove(player=self.player_snapshot(), units=moved, to_location=location)
        print(f"Moved {len(move.units)} units to {move.to_location}")
        return move

    def command_spawn(self, words: list[str]) -> Unit:
        if len(words) < 3:
            raise CommandError("usage: spawn <location> <rank>")
        location = words[1]
        if location not in all_locations():
            raise CommandError(f"error: {location} is not a valid location")
        try:
            rank = UnitRank(words[2])
        except ValueError:
            raise CommandError(f"error: {words[2]} is not a valid unit") from None

        with self._lock:
            unit = Unit(id=len(self.player.units) + 1, rank=rank, location=location)
            self._add_unit(unit)
        print(f"Spawned a(n) {rank} in {location} with id {unit.id}")
        return unit

    def handle_war(self, war: RecognitionOfWar) -> WarResult:
        attacker = war.attacker.username
        defender = war.defender.username
        try:
            print()
            print("==== War Declared ====")
            print(f"{attacker} has declared war on {defender}!")

            player = self.player_snapshot()
            if player.username == defender:
                print(f"{player.username}, you published the war.")
                return WarResult(WarOutcome.NOT_INVOLVED)
            if player.username != attacker:
                print(f"{player.username}, you are not involved in this war.")
                return WarResult(WarOutcome.NOT_INVOLVED)

            location = overlapping_location(war.attacker, war.defender)
            if location is None:
                print("Error! No units are in the same location. No war will be fought.")
                return WarResult(WarOutcome.NO_UNITS)

            attacker_units = [u for u in war.attacker.units.values() if u.location == location]
            defender_units = [u for u in war.defender.units.values() if u.location == location]
            print(f"{attacker}'s units:")
            for unit in attacker_units:
                print(f"  * {unit.rank}")
            print(f"{defender}'s units:")
            for unit in defender_units:
                print(f"  * {unit.rank}")

            attacker_power = units_power_level(attacker_units)
            defender_power = units_power_level(defender_units)
            print(f"Attacker has a power level of {attacker_power}")
            print(f"Defender has a power level of {defender_power}")

            if attacker_power > defender_power:
                print(f"{attacker} has won the war!")
                if player.username == defender:
                    self._lose_units(location)
                    return WarResult(WarOutcome.OPPONENT_WON, attacker, defender)
                return WarResult(WarOutcome.YOU_WON, attacker, defender)
            if defender_power > attacker_power:
                print(f"{defender} has won the war!")
                if player.username == attacker:
                    self._lose_units(location)
                    return WarResult(WarOutcome.OPPONENT_WON, defender, attacker)
                return WarResult(WarOutcome.YOU_WON, defender, attacker)

            print("The war ended in a draw!")
            print(f"Your units in {location} have been killed.")
            self._remove_units_in_location(location)
            return WarResult(WarOutcome.DRAW, attacker, defender)
        finally:
            print(_DIVIDER)

    def _lose_units(self, location: Location) -> None:
        print("You have lost the war!")
        self._remove_units_in_location(location)
        print(f"Your units in {location} have been killed.")

    def command_status(self) -> None:
        if self.paused:
            print("The game is paused.")
            return
        print("The game is not paused.")
        player = self.player_snapshot()
        print(f"You are {player.username}, and you have {len(player.units)} units.")
        for unit in player.units.values():
            print(f"* {unit.id}: {unit.location}, {unit.rank}")