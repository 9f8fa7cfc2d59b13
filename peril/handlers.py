"""Handlers the client registers for messages arriving from the broker."""

from __future__ import annotations

from typing import Any, Callable

import pika.exceptions

from peril.gamedata import ArmyMove, RecognitionOfWar
from peril.gamestate import GameState, MoveOutcome, WarOutcome
from peril.pubsub import AckType, publish_json
from peril.routing import EXCHANGE_PERIL_TOPIC, WAR_RECOGNITIONS_PREFIX, PlayingState


def handler_move(game_state: GameState, channel: Any) -> Callable[[ArmyMove], AckType]:
    """Build a handler reacting to other players' army moves."""

    def handle(move: ArmyMove) -> AckType:
        try:
            outcome = game_state.handle_move(move)
            if outcome == MoveOutcome.SAFE:
                return AckType.ACK
            if outcome == MoveOutcome.MAKE_WAR:
                key = f"{WAR_RECOGNITIONS_PREFIX}.{game_state.player.username}"
                try:
                    publish_json(channel, EXCHANGE_PERIL_TOPIC, key, outcome)
                except (pika.exceptions.AMQPError, TypeError, ValueError):
                    print("error publishing event/message")
                return AckType.NACK_REQUEUE
            return AckType.NACK_DISCARD
        finally:
            print("> ", end="", flush=True)

    return handle


def handler_pause(game_state: GameState) -> Callable[[PlayingState], AckType]:
    """Build a handler that toggles the pause state on every message."""

    def handle(state: PlayingState) -> AckType:
        try:
            game_state.handle_pause(PlayingState(is_paused=not game_state.paused))
            return AckType.ACK
        finally:
            print("> ", end="", flush=True)

    return handle


def handler_war(game_state: GameState) -> Callable[[RecognitionOfWar], AckType]:
    """Build a handler that fights wars declared on or by this player."""

    def handle(war: RecognitionOfWar) -> AckType:
        try:
            outcome = game_state.handle_war(war).outcome
            if outcome == WarOutcome.NOT_INVOLVED:
                return AckType.NACK_REQUEUE
            if outcome == WarOutcome.NO_UNITS:
                return AckType.NACK_DISCARD
            if outcome in (WarOutcome.OPPONENT_WON, WarOutcome.YOU_WON, WarOutcome.DRAW):
                return AckType.ACK
            print("error: will nackDiscard")
            return AckType.NACK_DISCARD
        finally:
            print("> ", end="", flush=True)

    return handle