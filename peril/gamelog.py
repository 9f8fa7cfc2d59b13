"""Append received game logs to a file on disk."""

from __future__ import annotations

import logging
import os
import time
from datetime import datetime
from typing import Union

from peril.routing import GameLog

LOGS_FILE = "game.log"
WRITE_TO_DISK_DELAY = 1.0

_log = logging.getLogger(__name__)


class LogWriteError(Exception):
    """The game log could not be written."""


def _rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def write_log(
    game_log: GameLog,
    path: Union[str, os.PathLike] = LOGS_FILE,
    delay: float = WRITE_TO_DISK_DELAY,
) -> None:
    """Wait for the simulated disk delay, then append one line for the log."""
    _log.info("received game log...")
    time.sleep(delay)
    line = f"{_rfc3339(game_log.current_time)} {game_log.username}: {game_log.message}\n"
    try:
        handle = open(path, "a", encoding="utf-8")
    except OSError as exc:
        raise LogWriteError(f"could not open logs file: {exc}") from exc
    with handle:
        try:
            handle.write(line)
        except OSError as exc:
            raise LogWriteError(f"could not write to logs file: {exc}") from exc