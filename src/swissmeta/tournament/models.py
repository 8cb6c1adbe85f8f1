"""Core data models for event simulation.

This module defines the configuration and result structures exchanged with
callers of the simulation core.
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

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from swissmeta.constants import DAY1_ROUNDS, DAY2_MATCH_POINT_THRESHOLD, DAY2_ROUNDS
from swissmeta.player import Player
from swissmeta.type_hints import MatchupMatrix, RoundPairings


class Stage(Enum):
    """The two sequential stages of an event."""

    DAY1 = "day1"
    DAY2 = "day2"


@dataclass
class TournamentConfig:
    """Configuration for a simulated event.

    Attributes:
        matchup_matrix: ``matrix[i][j]`` is the probability deck i beats deck j
        meta_percentages: Share of the field per deck, need not sum to 100
        deck_names: Deck names, parallel to the matrix rows and meta vector
        n_players: Total Day 1 player count
        skill_percents: Percentage of skilled pilots per deck (0-100)
        is_day2: Whether a single run simulates Day 2 instead of Day 1
        tuff_enabled: Per deck flag enabling the elite tier
        tuff_counts: Per deck number of elite pilots
        day1_rounds: Swiss rounds on Day 1
        day2_rounds: Swiss rounds on Day 2
        day2_threshold: Minimum Day 1 match points to play Day 2
        seed: Seed for a reproducible random source, None for unseeded
    """

    matchup_matrix: MatchupMatrix
    meta_percentages: List[float]
    deck_names: List[str]
    n_players: int
    skill_percents: List[float]
    is_day2: bool = False
    tuff_enabled: Dict[str, bool] = field(default_factory=dict)
    tuff_counts: Dict[str, int] = field(default_factory=dict)
    day1_rounds: int = DAY1_ROUNDS
    day2_rounds: int = DAY2_ROUNDS
    day2_threshold: int = DAY2_MATCH_POINT_THRESHOLD
    seed: Optional[int] = None

    @property
    def stage(self) -> Stage:
        return Stage.DAY2 if self.is_day2 else Stage.DAY1

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "matchup_matrix": [list(row) for row in self.matchup_matrix],
            "meta_percentages": list(self.meta_percentages),
            "deck_names": list(self.deck_names),
            "n_players": self.n_players,
            "skill_percents": list(self.skill_percents),
            "is_day2": self.is_day2,
            "tuff_enabled": dict(self.tuff_enabled),
            "tuff_counts": dict(self.tuff_counts),
            "day1_rounds": self.day1_rounds,
            "day2_rounds": self.day2_rounds,
            "day2_threshold": self.day2_threshold,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary.

        camelCase keys (``matchupMatrix``, ``isDay2``, ...) are accepted too.
        """

        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            return default

        deck_names = list(pick("deck_names", "matchupNames", "matchup_names"))
        return cls(
            matchup_matrix=[
                [float(value) for value in row]
                for row in pick("matchup_matrix", "matchupMatrix")
            ],
            meta_percentages=[
                float(value) for value in pick("meta_percentages", "metaPercentages")
            ],
            deck_names=deck_names,
            n_players=int(pick("n_players", "nPlayers")),
            skill_percents=[
                float(value)
                for value in pick(
                    "skill_percents", "skillPercents", default=[0] * len(deck_names)
                )
            ],
            is_day2=bool(pick("is_day2", "isDay2", default=False)),
            tuff_enabled=dict(pick("tuff_enabled", "tuffEnabled", default={}) or {}),
            tuff_counts={
                deck: int(count)
                for deck, count in (
                    pick("tuff_counts", "tuffCounts", default={}) or {}
                ).items()
            },
            day1_rounds=int(pick("day1_rounds", default=DAY1_ROUNDS)),
            day2_rounds=int(pick("day2_rounds", default=DAY2_ROUNDS)),
            day2_threshold=int(
                pick("day2_threshold", default=DAY2_MATCH_POINT_THRESHOLD)
            ),
            seed=pick("seed"),
        )


@dataclass
class RoundData:
    """Contains all data for a single round.

    Attributes:
        round_number: The round number (1-indexed)
        players: Snapshot of every player after the round, in input order
        pairings: List of (player1_id, player2_id) tuples
        bye_player_id: Id of the player receiving the bye, or None
        unpaired_ids: Players left without an opponent this round
    """

    round_number: int
    players: List[Player] = field(default_factory=list)
    pairings: RoundPairings = field(default_factory=list)
    bye_player_id: Optional[int] = None
    unpaired_ids: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "round_number": self.round_number,
            "pairings": [list(pair) for pair in self.pairings],
            "bye_player_id": self.bye_player_id,
            "unpaired_ids": list(self.unpaired_ids),
        }


@dataclass
class StageResult:
    """Final standings of one stage.

    Attributes:
        stage: Which stage produced these standings
        players: Players sorted by match points, highest first
        end_of_round: Number of the last round played in this stage
    """

    stage: Stage
    players: List[Player] = field(default_factory=list)
    end_of_round: Optional[int] = None

    @property
    def deck_counts(self) -> Dict[str, int]:
        """Number of players per deck in these standings."""
        counts: Dict[str, int] = {}
        for player in self.players:
            counts[player.deck] = counts.get(player.deck, 0) + 1
        return counts

    def top(self, cut: int) -> List[Player]:
        """The first ``cut`` players of the standings."""
        return self.players[:cut]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the stage result to dictionary."""
        return {
            "stage": self.stage.value,
            "players": [player.to_dict() for player in self.players],
            "end_of_round": self.end_of_round,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StageResult":
        """Deserialize a stage result from dictionary."""
        return cls(
            stage=Stage(data["stage"]),
            players=[Player.from_dict(p) for p in data.get("players", [])],
            end_of_round=data.get("end_of_round"),
        )
