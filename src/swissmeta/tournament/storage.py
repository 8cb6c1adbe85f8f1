"""Stage record persistence.

Day 1 standings are handed to Day 2 through a record store when the caller
does not pass them directly. Stores map a fixed key ("Day1Records" or
"Day2Records") to a list of players.
"""

# Swiss Meta
# Copyright (C) 2025  Swiss Meta developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import json
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from swissmeta.constants import SAVE_FILE_EXTENSION
from swissmeta.exceptions import (
    RecordCorruptedException,
    StorageException,
)
from swissmeta.player import Player
from swissmeta.utils import setup_logger

logger = setup_logger(__name__)


class RecordStore(Protocol):
    """Persistence collaborator used to carry standings between stages."""

    def get(self, key: str) -> Optional[List[Player]]:
        """Return the players stored under ``key``, or None if absent."""
        ...

    def put(self, key: str, players: List[Player]) -> None:
        """Store ``players`` under ``key``, replacing any previous value."""
        ...


class InMemoryRecordStore:
    """Record store kept in a dictionary.

    Players are copied on the way in and out, so callers never share state
    with the store.
    """

    def __init__(self) -> None:
        self._records: Dict[str, List[Player]] = {}

    def get(self, key: str) -> Optional[List[Player]]:
        players = self._records.get(key)
        if players is None:
            return None
        return [player.copy() for player in players]

    def put(self, key: str, players: List[Player]) -> None:
        self._records[key] = [player.copy() for player in players]
        logger.debug("Stored %s players under '%s'", len(players), key)

    def clear(self) -> None:
        self._records.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._records


class JsonFileRecordStore:
    """Record store writing one JSON file per key into a directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}{SAVE_FILE_EXTENSION}"

    def get(self, key: str) -> Optional[List[Player]]:
        path = self.path_for(key)
        if not path.exists():
            logger.debug("No record file at %s", path)
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [Player.from_dict(item) for item in data]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error("Failed to read records from %s: %s", path, e)
            raise RecordCorruptedException(
                f"Records in {path} could not be decoded: {e}"
            ) from e

    def put(self, key: str, players: List[Player]) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump([player.to_dict() for player in players], f)
        except OSError as e:
            logger.error("Failed to write records to %s: %s", path, e)
            raise StorageException(f"Could not write records to {path}: {e}") from e
        logger.debug("Saved %s players to %s", len(players), path)
