"""Per deck analysis of batch results.

This module turns the raw counts of a batch into the figures analysts read:
Day 2 share, Day 2 conversion rate, placement brackets and the average top
16 presence per event.
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
from typing import Dict, List

from swissmeta.batch.aggregator import BatchResults
from swissmeta.constants import BRACKET_LABELS, TOP_CUTS
from swissmeta.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class DeckSummary:
    """Summary of one deck's performance over a batch."""

    deck: str
    day1_players: int = 0
    day2_players: int = 0

    # Share of all Day 1 / Day 2 entries, in percent
    day1_share: float = 0.0
    day2_share: float = 0.0

    # Day 2 entries per Day 1 entry, in percent
    conversion_rate: float = 0.0

    # Non-cumulative placement counts, keyed by BRACKET_LABELS
    brackets: Dict[str, int] = field(default_factory=dict)

    average_top16: float = 0.0

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            "deck": self.deck,
            "day1_players": self.day1_players,
            "day2_players": self.day2_players,
            "day1_share": self.day1_share,
            "day2_share": self.day2_share,
            "conversion_rate": self.conversion_rate,
            "brackets": dict(self.brackets),
            "average_top16": self.average_top16,
        }


def placement_brackets(results: BatchResults, deck: str) -> Dict[str, int]:
    """Split a deck's cumulative cut counts into disjoint brackets.

    Top 16, 17-32, 33-64, 65-128, 129-256 and the rest of Day 2.
    """
    cumulative = [results.top_cuts[cut].get(deck, 0) for cut in TOP_CUTS]
    cumulative.append(results.day2.get(deck, 0))

    counts = [cumulative[0]]
    counts.extend(
        later - earlier for earlier, later in zip(cumulative, cumulative[1:])
    )
    return dict(zip(BRACKET_LABELS, counts))


def _percent(part: float, whole: float) -> float:
    return (part / whole) * 100 if whole else 0.0


def summarize_batch(results: BatchResults) -> List[DeckSummary]:
    """Build one summary per deck, in the order decks were registered.

    Args:
        results: Accumulated batch counts

    Returns:
        Deck summaries
    """
    if results.iterations == 0:
        logger.warning("Summarizing a batch with no completed simulations")

    total_day1 = sum(results.day1.values())
    total_day2 = sum(results.day2.values())

    summaries = []
    for deck in results.decks:
        day1_players = results.day1.get(deck, 0)
        day2_players = results.day2.get(deck, 0)
        top16 = results.top16.get(deck, 0)
        summaries.append(
            DeckSummary(
                deck=deck,
                day1_players=day1_players,
                day2_players=day2_players,
                day1_share=_percent(day1_players, total_day1),
                day2_share=_percent(day2_players, total_day2),
                conversion_rate=_percent(day2_players, day1_players),
                brackets=placement_brackets(results, deck),
                average_top16=(
                    top16 / results.iterations if results.iterations else 0.0
                ),
            )
        )
    return summaries
