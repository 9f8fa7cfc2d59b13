import pytest

from peril.gamedata import ArmyMove, Player, RecognitionOfWar, Unit, UnitRank
from peril.gamestate import (
    CommandError,
    GameState,
    MoveOutcome,
    WarOutcome,
    overlapping_location,
    units_power_level,
)
from peril.routing import PlayingState


def _other(name, rank, location):
    return Player(name, {1: Unit(1, rank, location)})


def test_spawn_adds_unit():
    gs = GameState("alice")
    unit = gs.command_spawn(["spawn", "europe", "infantry"])
    assert gs.get_unit(unit.id) == unit
    assert unit.rank == UnitRank.INFANTRY
    assert unit.location == "europe"


def test_spawn_ids_are_distinct():
    gs = GameState("alice")
    first = gs.command_spawn(["spawn", "asia", "cavalry"])
    second = gs.command_spawn(["spawn", "asia", "artillery"])
    assert first.id != second.id
    assert set(gs.player_snapshot().units) == {first.id, second.id}


@pytest.mark.parametrize(
    "words, message",
    [
        (["spawn", "asia"], "usage: spawn <location> <rank>"),
        (["spawn", "mars", "infantry"], "mars is not a valid location"),
        (["spawn", "asia", "dragon"], "dragon is not a valid unit"),
    ],
)
def test_spawn_errors(words, message):
    with pytest.raises(CommandError, match=message):
        GameState("alice").command_spawn(words)


def test_move_relocates_units():
    gs = GameState("alice")
    unit = gs.command_spawn(["spawn", "europe", "infantry"])
    move = gs.command_move(["move", "asia", str(unit.id)])
    assert move.to_location == "asia"
    assert gs.get_unit(unit.id).location == "asia"
    assert move.player.units[unit.id].location == "asia"
    assert [u.id for u in move.units] == [unit.id]


def test_move_while_paused_fails():
    gs = GameState("alice")
    gs.command_spawn(["spawn", "europe", "infantry"])
    gs.handle_pause(PlayingState(is_paused=True))
    with pytest.raises(CommandError, match="the game is paused"):
        gs.command_move(["move", "asia", "1"])


@pytest.mark.parametrize(
    "words, message",
    [
        (["move", "asia"], "usage: move"),
        (["move", "mars", "1"], "mars is not a valid location"),
        (["move", "asia", "x"], "x is not a valid unit ID"),
        (["move", "asia", "7"], "unit with ID 7 not found"),
    ],
)
def test_move_errors(words, message):
    with pytest.raises(CommandError, match=message):
        GameState("alice").command_move(words)


def test_pause_and_resume():
    gs = GameState("alice")
    gs.handle_pause(PlayingState(is_paused=True))
    assert gs.paused is True
    gs.handle_pause(PlayingState(is_paused=False))
    assert gs.paused is False


def test_snapshot_is_independent():
    gs = GameState("alice")
    snapshot = gs.player_snapshot()
    gs.command_spawn(["spawn", "asia", "infantry"])
    assert snapshot.units == {}
    assert len(gs.player_snapshot().units) == 1


def test_handle_move_same_player():
    gs = GameState("alice")
    move = ArmyMove(Player("alice"), [], "asia")
    assert gs.handle_move(move) == MoveOutcome.SAME_PLAYER


def test_handle_move_war_and_safe():
    gs = GameState("alice")
    gs.command_spawn(["spawn", "asia", "infantry"])
    enemy_here = _other("bob", UnitRank.CAVALRY, "asia")
    enemy_away = _other("bob", UnitRank.CAVALRY, "europe")
    assert gs.handle_move(ArmyMove(enemy_here, [], "asia")) == MoveOutcome.MAKE_WAR
    assert gs.handle_move(ArmyMove(enemy_away, [], "europe")) == MoveOutcome.SAFE


def test_war_published_by_me_is_not_involved():
    gs = GameState("alice")
    war = RecognitionOfWar(Player("bob"), Player("alice"))
    assert gs.handle_war(war).outcome == WarOutcome.NOT_INVOLVED


def test_war_between_others_is_not_involved():
    gs = GameState("carol")
    war = RecognitionOfWar(Player("alice"), Player("bob"))
    result = gs.handle_war(war)
    assert result.outcome == WarOutcome.NOT_INVOLVED
    assert result.winner is None


def test_war_without_overlap():
    gs = GameState("alice")
    war = RecognitionOfWar(
        _other("alice", UnitRank.INFANTRY, "asia"),
        _other("bob", UnitRank.INFANTRY, "europe"),
    )
    assert gs.handle_war(war).outcome == WarOutcome.NO_UNITS


def test_war_attacker_stronger():
    gs = GameState("alice")
    war = RecognitionOfWar(
        _other("alice", UnitRank.ARTILLERY, "asia"),
        _other("bob", UnitRank.INFANTRY, "asia"),
    )
    result = gs.handle_war(war)
    assert (result.outcome, result.winner, result.loser) == (WarOutcome.YOU_WON, "alice", "bob")


def test_war_defender_stronger_kills_my_units():
    gs = GameState("alice")
    unit = gs.command_spawn(["spawn", "asia", "infantry"])
    war = RecognitionOfWar(gs.player_snapshot(), _other("bob", UnitRank.ARTILLERY, "asia"))
    result = gs.handle_war(war)
    assert (result.outcome, result.winner, result.loser) == (
        WarOutcome.OPPONENT_WON,
        "bob",
        "alice",
    )
    assert gs.get_unit(unit.id) is None


def test_war_draw_kills_units_in_location_only():
    gs = GameState("alice")
    fighting = gs.command_spawn(["spawn", "asia", "cavalry"])
    safe = gs.command_spawn(["spawn", "europe", "cavalry"])
    war = RecognitionOfWar(
        gs.player_snapshot(),
        Player("bob", {1: Unit(1, UnitRank.CAVALRY, "asia")}),
    )
    result = gs.handle_war(war)
    assert result.outcome == WarOutcome.DRAW
    assert gs.get_unit(fighting.id) is None
    assert gs.get_unit(safe.id) == safe


def test_power_levels():
    artillery = Unit(1, UnitRank.ARTILLERY, "asia")
    cavalry = Unit(2, UnitRank.CAVALRY, "asia")
    infantry = Unit(3, UnitRank.INFANTRY, "asia")
    assert units_power_level([artillery]) == 10
    assert units_power_level([cavalry]) == 5
    assert units_power_level([infantry]) == 1
    assert units_power_level([artillery, cavalry, infantry]) == sum(
        units_power_level([u]) for u in (artillery, cavalry, infantry)
    )
    assert units_power_level([]) == 0


def test_overlapping_location():
    a = _other("alice", UnitRank.INFANTRY, "asia")
    b = _other("bob", UnitRank.CAVALRY, "asia")
    c = _other("carol", UnitRank.CAVALRY, "africa")
    assert overlapping_location(a, b) == "asia"
    assert overlapping_location(a, c) is None


def test_status_paused(capsys):
    gs = GameState("alice")
    gs.handle_pause(PlayingState(is_paused=True))
    capsys.readouterr()
    gs.command_status()
    assert capsys.readouterr().out == "The game is paused.\n"


def test_status_lists_units(capsys):
    gs = GameState("alice")
    gs.command_spawn(["spawn", "asia", "infantry"])
    capsys.readouterr()
    gs.command_status()
    out = capsys.readouterr().out
    assert "The game is not paused." in out
    assert "You are alice, and you have 1 units." in out
    assert "* 1: asia, infantry" in out