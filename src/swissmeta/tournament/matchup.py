"""Meta normalization and matchup lookup.

Turns the raw meta shares of a configuration into per deck player counts,
adding the synthetic "Other" deck when the declared shares leave part of the
field unaccounted for.
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

from typing import Dict, List, Optional, Sequence

from swissmeta.constants import (
    FULL_META_PERCENT,
    OTHER_DECK,
    OTHER_MIRROR_WIN_RATE,
    OTHER_SKILL_PERCENT,
    OTHER_WIN_RATE,
    REAL_VS_OTHER_WIN_RATE,
)
from swissmeta.tournament.models import TournamentConfig
from swissmeta.type_hints import MatchupMatrix
from swissmeta.utils import round_half_up, setup_logger

logger = setup_logger(__name__)


def allocate_players(meta_percentages: Sequence[float], n_players: int) -> List[int]:
    """Split ``n_players`` across decks in proportion to their meta share.

    Each share is rounded to the nearest integer, then the whole rounding
    drift goes to the deck with the largest count (first one on a tie), so the
    counts always sum to ``n_players``.
    """
    total = sum(meta_percentages)
    if total:
        counts = [
            round_half_up(n_players * (share / total)) for share in meta_percentages
        ]
    else:
        counts = [0 for _ in meta_percentages]

    drift = n_players - sum(counts)
    if drift and counts:
        largest = counts.index(max(counts))
        counts[largest] += drift
        logger.debug("Moved rounding drift of %s players to deck %s", drift, largest)
    return counts


class MatchupModel:
    """Deck list, matchup table and player counts for one event.

    Deck positions are resolved through a name index, so lookups stay valid
    after the "Other" deck has been appended.
    """

    def __init__(
        self,
        deck_names: List[str],
        matchup_matrix: MatchupMatrix,
        skill_percents: List[float],
        player_counts: Optional[List[int]] = None,
    ):
        self.deck_names = deck_names
        self.matchup_matrix = matchup_matrix
        self.skill_percents = skill_percents
        self.player_counts = player_counts or [0] * len(deck_names)
        self._index: Dict[str, int] = {}
        for position, name in enumerate(deck_names):
            self._index.setdefault(name, position)

    @classmethod
    def from_config(cls, config: TournamentConfig) -> "MatchupModel":
        """Build the model for ``config``, injecting "Other" when needed."""
        return cls.build(
            meta_percentages=config.meta_percentages,
            matchup_matrix=config.matchup_matrix,
            deck_names=config.deck_names,
            skill_percents=config.skill_percents,
            n_players=config.n_players,
        )

    @classmethod
    def build(
        cls,
        meta_percentages: Sequence[float],
        matchup_matrix: MatchupMatrix,
        deck_names: Sequence[str],
        skill_percents: Sequence[float],
        n_players: int,
    ) -> "MatchupModel":
        """Normalize the meta and derive per deck player counts.

        The inputs are copied, never modified.

        Args:
            meta_percentages: Declared share of the field per deck
            matchup_matrix: Win probability table for the declared decks
            deck_names: Declared deck names
            skill_percents: Percentage of skilled pilots per deck
            n_players: Total number of players

        Returns:
            A model whose player counts sum to ``n_players``
        """
        meta = list(meta_percentages)
        names = list(deck_names)
        skills = list(skill_percents)
        matrix = [list(row) for row in matchup_matrix]

        declared = sum(meta)
        if declared < FULL_META_PERCENT:
            other_share = FULL_META_PERCENT - declared
            logger.info(
                "Meta shares sum to %.2f%%, adding '%s' with %.2f%%",
                declared,
                OTHER_DECK,
                other_share,
            )
            meta.append(other_share)
            names.append(OTHER_DECK)
            skills.append(OTHER_SKILL_PERCENT)
            for row in matrix:
                row.append(REAL_VS_OTHER_WIN_RATE)
            matrix.append([OTHER_WIN_RATE] * (len(names) - 1) + [OTHER_MIRROR_WIN_RATE])

        counts = allocate_players(meta, n_players)
        return cls(names, matrix, skills, counts)

    @property
    def total_players(self) -> int:
        return sum(self.player_counts)

    @property
    def has_other(self) -> bool:
        return OTHER_DECK in self._index

    def deck_index(self, deck: str) -> int:
        """Position of ``deck`` in the deck list and matrix."""
        return self._index[deck]

    def win_rate(self, deck: str, opponent_deck: str) -> float:
        """Probability that ``deck`` wins a game against ``opponent_deck``."""
        return self.matchup_matrix[self._index[deck]][self._index[opponent_deck]]

    def counts_by_deck(self) -> Dict[str, int]:
        """Player count keyed by deck name."""
        return dict(zip(self.deck_names, self.player_counts))

    def __repr__(self) -> str:
        return f"MatchupModel(decks={self.deck_names}, counts={self.player_counts})"
