# peril

Game rules, game state and message plumbing for **Peril**, a small
multiplayer strategy game. Players spawn units, move them around the world
and go to war when their units meet. Moves, pauses and declarations of war
travel between players as JSON messages over an AMQP broker such as
RabbitMQ, using `pika`.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `peril.routing`: exchange names (`EXCHANGE_PERIL_DIRECT`,
  `EXCHANGE_PERIL_TOPIC`), routing keys and prefixes (`ARMY_MOVES_PREFIX`,
  `WAR_RECOGNITIONS_PREFIX`, `PAUSE_KEY`, `GAME_LOG_SLUG`), and the
  `PlayingState` and `GameLog` messages with `to_dict()` / `from_dict()`.
- `peril.gamedata`: the world model. It holds `UnitRank` (infantry, cavalry,
  artillery), `Unit`, `Player`, `ArmyMove` and `RecognitionOfWar`, each with
  `to_dict()` / `from_dict()`. It also has `all_ranks()` and
  `all_locations()`. The locations are americas, europe, africa, asia,
  australia and antarctica.
- `peril.gamestate`: `GameState` holds one player's units behind a lock. Its
  commands are `command_spawn` (returns the new `Unit`), `command_move`
  (returns an `ArmyMove`) and `command_status`. Its event handlers are
  `handle_pause`, `handle_move` (returns a `MoveOutcome`) and `handle_war`
  (returns a `WarResult` with `outcome`, `winner` and `loser`). The module
  also has `get_unit`, `update_unit` and `player_snapshot`, plus the helpers
  `overlapping_location()` and `units_power_level()`. An invalid command
  raises `CommandError`.
- `peril.console`: `print_client_help()`, `print_server_help()`,
  `print_quit()`, `get_input(stream=None)`, `client_welcome(stream=None)`
  and `get_malicious_log()`. `client_welcome` raises `CommandError` when no
  username is entered.
- `peril.gamelog`: `write_log(game_log, path="game.log", delay=1.0)` waits
  for `delay` seconds. It then appends a line of the form
  `<RFC 3339 time> <username>: <message>` to the file. It raises
  `LogWriteError` if the file cannot be opened or written.
- `peril.pubsub`: `AckType`, `SimpleQueueType`, `declare_and_bind()`,
  `encode_json()`, `publish_json()` and `subscribe_json()`:
  - `declare_and_bind` declares the queue with the `peril_dlx` dead-letter
    exchange. A durable queue is durable. A transient queue is exclusive and
    auto-deleted.
  - `subscribe_json` registers a consumer on the queue. The consumer decodes
    each body with your `decode` callable and passes it to your handler. The
    handler's `AckType` decides whether the message is acked, requeued or
    discarded. A message that fails to decode is discarded. It returns the
    channel, and you start delivery yourself, e.g. with
    `channel.start_consuming()`.
- `peril.handlers`: the subscription handlers `handler_move(game_state,
  channel)`, `handler_pause(game_state)` and `handler_war(game_state)`.
  `handler_move` publishes to `war.<username>` on the topic exchange when a
  move brings an opponent into one of your locations. `handler_pause` toggles
  the pause state on every message.

## Example

```python
from peril.gamestate import GameState, CommandError

state = GameState("alice")
state.command_spawn(["spawn", "europe", "infantry"])   # unit 1
state.command_spawn(["spawn", "asia", "cavalry"])      # unit 2

try:
    move = state.command_move(["move", "africa", "1"])
except CommandError as exc:
    print(exc)

state.command_status()
```

Subscribing to pause messages:

```python
import pika
from peril.gamestate import GameState
from peril.handlers import handler_pause
from peril.pubsub import SimpleQueueType, subscribe_json
from peril.routing import EXCHANGE_PERIL_DIRECT, PAUSE_KEY, PlayingState

connection = pika.BlockingConnection(pika.ConnectionParameters("localhost"))
state = GameState("alice")
channel = subscribe_json(
    connection, EXCHANGE_PERIL_DIRECT, "pause.alice", PAUSE_KEY,
    SimpleQueueType.TRANSIENT, handler_pause(state), PlayingState.from_dict,
)
channel.start_consuming()
```

## Rules in brief

Units come in three ranks. Infantry has power 1, cavalry has power 5 and
artillery has power 10. A move that brings an opponent's units into a
location where you have units means war. `handle_war` fights only for the
player named as attacker and compares the total power of each side in the
shared location. If that player loses, or the war is a draw, that player's
units in the location are removed.

## What this package does not do

There is no client or server program and no command to run. The package
provides the game state, the console helpers and the messaging functions. A
program that reads commands in a loop, connects to the broker and publishes
moves has to be written on top of them. The package creates no exchanges: it
expects `peril_direct`, `peril_topic` and `peril_dlx` to exist on the broker.