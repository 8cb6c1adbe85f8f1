"""Swiss pairing by match-point brackets, with rematch avoidance."""

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

import random
from typing import Dict, List, Optional, Set

from swissmeta.player import Player
from swissmeta.tournament.models import RoundData
from swissmeta.tournament.result_simulator import MatchOutcomeResolver
from swissmeta.type_hints import Players
from swissmeta.utils import create_rng, setup_logger

logger = setup_logger(__name__)


def _sort_players_for_pairing(players: Players) -> Players:
    """Sort players by match points desc, keeping input order within a score."""
    return sorted(players, key=lambda p: -p.match_points)


def _group_players_by_points(players: Players) -> Dict[int, Players]:
    brackets: Dict[int, Players] = {}
    for player in players:
        brackets.setdefault(player.match_points, []).append(player)
    return brackets


class SwissPairingEngine:
    """Pairs and plays one Swiss round at a time.

    Every round works on a fresh copy of the players it is given; the copies
    are returned in the round's ``RoundData`` and the input is left untouched.
    """

    def __init__(
        self, resolver: MatchOutcomeResolver, rng: Optional[random.Random] = None
    ):
        self.resolver = resolver
        self.random = rng or create_rng()

    def play_round(self, players: Players, round_number: int = 1) -> RoundData:
        """Pair every player and resolve the matches of one round.

        Players are visited from the highest score down. The last unpaired
        player gets a bye. A player with no legal opponent at or below their
        own score sits the round out with no change in match points.

        Args:
            players: The field before the round
            round_number: Number of this round, for logging and the record

        Returns:
            The round's pairings and the field after the round
        """
        roster = [player.copy() for player in players]
        ordered = _sort_players_for_pairing(roster)
        brackets = _group_players_by_points(ordered)
        bracket_points = sorted(brackets, reverse=True)

        round_data = RoundData(round_number=round_number, players=roster)
        paired: Set[int] = set()

        for player in ordered:
            if player.pairing_key in paired:
                continue

            if len(roster) - len(paired) == 1:
                player.record_bye()
                paired.add(player.pairing_key)
                round_data.bye_player_id = player.id
                continue

            opponent = self._find_opponent(player, brackets, bracket_points, paired)
            if opponent is None:
                round_data.unpaired_ids.append(player.id)
                logger.warning(
                    "Round %s: no eligible opponent for player %s (%s pts)",
                    round_number,
                    player.id,
                    player.match_points,
                )
                continue

            self.resolver.resolve(player, opponent)
            paired.add(player.pairing_key)
            paired.add(opponent.pairing_key)
            round_data.pairings.append((player.id, opponent.id))

        logger.debug(
            "Round %s: %s pairings, bye: %s, unpaired: %s",
            round_number,
            len(round_data.pairings),
            round_data.bye_player_id,
            len(round_data.unpaired_ids),
        )
        return round_data

    def _find_opponent(
        self,
        player: Player,
        brackets: Dict[int, Players],
        bracket_points: List[int],
        paired: Set[int],
    ) -> Optional[Player]:
        """Search the player's own bracket, then every lower one."""
        for points in bracket_points:
            if points > player.match_points:
                continue

            candidates = list(brackets[points])
            self.random.shuffle(candidates)
            for candidate in candidates:
                if self._is_eligible(player, candidate, paired):
                    return candidate
        return None

    @staticmethod
    def _is_eligible(player: Player, candidate: Player, paired: Set[int]) -> bool:
        return (
            candidate.id != player.id
            and candidate.pairing_key not in paired
            and not player.has_played(candidate)
        )
