"""Player population generation for a fresh Day 1 field."""

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

import math
import random
from typing import Dict, List, Optional

from swissmeta.constants import BASE_SKILL, SKILLED_SKILL, TUFF_SKILL
from swissmeta.player import Player
from swissmeta.tournament.matchup import MatchupModel
from swissmeta.utils import create_rng, round_half_up, setup_logger

logger = setup_logger(__name__)


def skill_period(skill_percent: float) -> float:
    """Convert a skilled-pilot percentage into "every Xth player".

    20% gives every 5th player, 10% every 10th. Zero means nobody, returned
    as infinity, and so does a percentage too large to give a whole period.
    """
    if skill_percent > 0:
        period = round_half_up(100 / skill_percent)
        if period > 0:
            return period
    return math.inf


class PlayerPopulationGenerator:
    """Factory for the players of a fresh event."""

    def __init__(
        self,
        tuff_enabled: Optional[Dict[str, bool]] = None,
        tuff_counts: Optional[Dict[str, int]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.tuff_enabled = tuff_enabled or {}
        self.tuff_counts = tuff_counts or {}
        self.random = rng or create_rng()

    def create_players(self, model: MatchupModel) -> List[Player]:
        """Create every player of the event.

        Decks are visited in shuffled order. Ids are sequential across all
        decks, starting at 1.
        """
        players: List[Player] = []
        deck_order = list(range(len(model.deck_names)))
        self.random.shuffle(deck_order)

        next_id = 1
        for deck_index in deck_order:
            deck = model.deck_names[deck_index]
            skills = self.deck_skills(
                deck,
                model.player_counts[deck_index],
                model.skill_percents[deck_index],
            )
            for skill in skills:
                players.append(Player(id=next_id, deck=deck, skill=skill))
                next_id += 1

        logger.debug(
            "Created %s players across %s decks", len(players), len(deck_order)
        )
        return players

    def deck_skills(
        self, deck: str, player_count: int, skill_percent: float
    ) -> List[float]:
        """Skill modifiers for the pilots of one deck, in creation order.

        The first ``tuff_count`` pilots are elite when the tier is enabled for
        the deck; after that every Xth pilot (1-indexed) is skilled.
        """
        tuff_count = 0
        if self.tuff_enabled.get(deck):
            tuff_count = self.tuff_counts.get(deck, 0)
        period = skill_period(skill_percent)

        skills = []
        for position in range(1, player_count + 1):
            if position <= tuff_count:
                skills.append(TUFF_SKILL)
            elif period != math.inf and position % period == 0:
                skills.append(SKILLED_SKILL)
            else:
                skills.append(BASE_SKILL)
        return skills
