import io

import pytest

from peril.console import (
    client_welcome,
    get_input,
    get_malicious_log,
    print_client_help,
    print_quit,
    print_server_help,
)
from peril.gamestate import CommandError


def test_get_input_splits_words(capsys):
    words = get_input(io.StringIO("  move asia 1 2 \nignored\n"))
    assert words == ["move", "asia", "1", "2"]
    assert capsys.readouterr().out == "> "


def test_get_input_at_end_of_input():
    assert get_input(io.StringIO("")) == []


def test_client_welcome_returns_first_word(capsys):
    assert client_welcome(io.StringIO("alice extra\n")) == "alice"
    out = capsys.readouterr().out
    assert "Welcome, alice!" in out
    assert "Possible commands:" in out


def test_client_welcome_without_name():
    with pytest.raises(CommandError, match="you must enter a username"):
        client_welcome(io.StringIO("   \n"))


def test_malicious_log_is_known_quote():
    known = {
        "Never interrupt your enemy when he is making a mistake.",
        "The hardest thing of all for a soldier is to retreat.",
        "A soldier will fight long and hard for a bit of colored ribbon.",
        "It is well that war is so terrible, otherwise we should grow too fond of it.",
        "The art of war is simple enough. Find out where your enemy is. Get at him as "
        "soon as you can. Strike him as hard as you can, and keep moving on.",
        "All warfare is based on deception.",
    }
    assert {get_malicious_log() for _ in range(50)} <= known


def test_help_texts(capsys):
    print_client_help()
    client = capsys.readouterr().out
    print_server_help()
    server = capsys.readouterr().out
    assert "* spawn <location> <rank>" in client
    assert "* pause" in server
    assert "* resume" in server
    assert "* pause" not in client


def test_print_quit(capsys):
    print_quit()
    assert capsys.readouterr().out == "I hate this game! (╯°□°)╯︵ ┻━┻\n"