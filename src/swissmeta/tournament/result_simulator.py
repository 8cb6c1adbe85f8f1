"""Match result simulation from the matchup table and pilot skill."""

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
from dataclasses import dataclass
from typing import Optional

from swissmeta.constants import (
    DEFAULT_TIE_RATE,
    GAMES_PER_MATCH,
    GAMES_TO_WIN,
    LOSS_POINTS,
    TIE_POINTS,
    WIN_POINTS,
)
from swissmeta.player import Player
from swissmeta.tournament.matchup import MatchupModel
from swissmeta.utils import create_rng, setup_logger

logger = setup_logger(__name__)


@dataclass
class MatchOutcome:
    """Result of one match between two players.

    Attributes:
        player1_id: Id of the first player
        player2_id: Id of the second player
        player1_points: Match points earned by the first player
        player2_points: Match points earned by the second player
        player1_games: Games won by the first player, 0 for a tie
        is_tie: Whether the match was drawn
    """

    player1_id: int
    player2_id: int
    player1_points: int
    player2_points: int
    player1_games: int = 0
    is_tie: bool = False


def tie_rate(win_rate1: float, win_rate2: float) -> float:
    """Probability that a match between two decks is drawn.

    When the two directions of the matchup sum to exactly 1 the table
    carries no tie information, so a flat rate is used. Otherwise the missing
    mass is the tie rate, which is negative (never a tie) above 1.
    """
    total = win_rate1 + win_rate2
    if total == 1:
        return DEFAULT_TIE_RATE
    return 1 - abs(total)


class MatchOutcomeResolver:
    """Simulates best-of-three matches and applies them to both players."""

    def __init__(self, model: MatchupModel, rng: Optional[random.Random] = None):
        self.model = model
        self.random = rng or create_rng()

    def resolve(self, player1: Player, player2: Player) -> MatchOutcome:
        """Play a match, award match points and record both opponents.

        Args:
            player1: First player
            player2: Second player

        Returns:
            The outcome that was applied
        """
        win_rate1 = self.model.win_rate(player1.deck, player2.deck)
        win_rate2 = self.model.win_rate(player2.deck, player1.deck)

        if self.random.random() < tie_rate(win_rate1, win_rate2):
            outcome = MatchOutcome(
                player1.id, player2.id, TIE_POINTS, TIE_POINTS, is_tie=True
            )
        else:
            # Probabilities outside [0, 1] are left to the caller's data
            game_win_rate = win_rate1 + (player1.skill - player2.skill)
            games = sum(
                1
                for _ in range(GAMES_PER_MATCH)
                if self.random.random() < game_win_rate
            )
            if games >= GAMES_TO_WIN:
                outcome = MatchOutcome(
                    player1.id, player2.id, WIN_POINTS, LOSS_POINTS, games
                )
            else:
                outcome = MatchOutcome(
                    player1.id, player2.id, LOSS_POINTS, WIN_POINTS, games
                )

        player1.record_match(player2, outcome.player1_points)
        player2.record_match(player1, outcome.player2_points)

        logger.debug(
            "%s (%s) vs %s (%s): %s-%s",
            player1.id,
            player1.deck,
            player2.id,
            player2.deck,
            outcome.player1_points,
            outcome.player2_points,
        )
        return outcome
