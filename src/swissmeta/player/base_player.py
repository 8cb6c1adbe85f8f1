"""A player entered in a simulated event, piloting one deck."""

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

from __future__ import annotations

from typing import Any, Dict, List, Optional

from swissmeta.constants import BYE_OPPONENT_ID, BYE_POINTS
from swissmeta.utils import setup_logger

logger = setup_logger(__name__)


class Player:
    """Represents a player in the simulated tournament.

    Attributes:
        id: Identifier, unique within the event
        deck: Name of the deck this player pilots
        skill: Additive modifier to this player's game win probability
        match_points: Accumulated match points (3 win, 1 tie, 0 loss, 3 bye)
        opponents: Opponent ids in play order, ``0`` for a bye
        day2_id: Sequential Day 2 identifier, ``None`` until re-keyed for Day 2
    """

    def __init__(
        self,
        id: int,
        deck: str,
        skill: float = 0.0,
        match_points: int = 0,
        opponents: Optional[List[int]] = None,
        day2_id: Optional[int] = None,
    ) -> None:
        self.id: int = id
        self.deck: str = deck
        self.skill: float = skill
        self.match_points: int = match_points
        self.opponents: List[int] = list(opponents) if opponents else []
        self.day2_id: Optional[int] = day2_id

    @property
    def pairing_key(self) -> int:
        """Identifier used to track who is paired in a round.

        The Day 2 id once the player has been re-keyed, the primary id before.
        """
        return self.day2_id if self.day2_id is not None else self.id

    @property
    def rounds_played(self) -> int:
        return len(self.opponents)

    @property
    def byes(self) -> int:
        return self.opponents.count(BYE_OPPONENT_ID)

    def has_played(self, other: "Player") -> bool:
        """Check whether ``other`` already appears in this player's history."""
        return other.id in self.opponents

    def record_match(self, opponent: "Player", points: int) -> None:
        """Record a played match against ``opponent`` worth ``points``."""
        self.opponents.append(opponent.id)
        self.match_points += points

    def record_bye(self) -> None:
        """Record a bye for this round."""
        self.opponents.append(BYE_OPPONENT_ID)
        self.match_points += BYE_POINTS
        logger.debug("Player %s (%s) received a bye", self.id, self.deck)

    def copy(self) -> "Player":
        """Return an independent copy, including the opponent history."""
        return Player(
            id=self.id,
            deck=self.deck,
            skill=self.skill,
            match_points=self.match_points,
            opponents=list(self.opponents),
            day2_id=self.day2_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player data to a JSON compatible dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "deck": self.deck,
            "skill": self.skill,
            "match_points": self.match_points,
            "opponents": list(self.opponents),
        }
        if self.day2_id is not None:
            data["day2_id"] = self.day2_id
        return data

    @classmethod
    def from_dict(cls, player_data: Dict[str, Any]) -> "Player":
        """Create a Player from serialized dictionary data.

        Legacy camelCase records (``matchPoints``, ``Day2id``) are
        accepted as well.

        Args:
            player_data: Dictionary containing player data

        Returns:
            Player with restored state
        """
        match_points = player_data.get("match_points")
        if match_points is None:
            match_points = player_data.get("matchPoints", 0)

        day2_id = player_data.get("day2_id")
        if day2_id is None:
            day2_id = player_data.get("Day2id")

        return cls(
            id=int(player_data["id"]),
            deck=player_data["deck"],
            skill=float(player_data.get("skill", 0.0)),
            match_points=int(match_points),
            opponents=[int(opp) for opp in player_data.get("opponents") or []],
            day2_id=int(day2_id) if day2_id is not None else None,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"Player(id={self.id}, deck='{self.deck}', "
            f"match_points={self.match_points}, skill={self.skill})"
        )

    def __str__(self) -> str:
        return f"#{self.id} {self.deck} ({self.match_points} pts)"
