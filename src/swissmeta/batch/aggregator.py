"""Repeated Day 1 to Day 2 simulation with per deck placement tallies.

This module runs many simulated events back to back and accumulates how
often each deck reaches Day 2 and each placement cut.
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

import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from swissmeta.constants import DEFAULT_BATCH_ITERATIONS, TOP_CUTS
from swissmeta.tournament.models import StageResult, TournamentConfig
from swissmeta.tournament.runner import TournamentRunner
from swissmeta.tournament.storage import RecordStore
from swissmeta.type_hints import DeckCounts
from swissmeta.utils import create_rng, setup_logger

logger = setup_logger(__name__)

ProgressCallback = Callable[[int, int], None]
StopCheck = Callable[[], bool]


@dataclass
class BatchResults:
    """Per deck counts accumulated over a batch.

    Attributes:
        top_cuts: Cut size -> deck -> players finishing inside that cut
        day1: Deck -> Day 1 participants
        day2: Deck -> Day 2 participants
        iterations: Number of completed Day 1 to Day 2 pairs
    """

    top_cuts: Dict[int, DeckCounts] = field(
        default_factory=lambda: {cut: {} for cut in TOP_CUTS}
    )
    day1: DeckCounts = field(default_factory=dict)
    day2: DeckCounts = field(default_factory=dict)
    iterations: int = 0

    @classmethod
    def for_decks(cls, decks: Iterable[str]) -> "BatchResults":
        results = cls()
        for deck in decks:
            results.register_deck(deck)
        return results

    @property
    def decks(self) -> List[str]:
        """Deck names in registration order."""
        return list(self.day1)

    @property
    def top16(self) -> DeckCounts:
        return self.top_cuts[16]

    @property
    def top32(self) -> DeckCounts:
        return self.top_cuts[32]

    @property
    def top64(self) -> DeckCounts:
        return self.top_cuts[64]

    @property
    def top128(self) -> DeckCounts:
        return self.top_cuts[128]

    @property
    def top256(self) -> DeckCounts:
        return self.top_cuts[256]

    def mappings(self) -> List[DeckCounts]:
        """Every deck -> count mapping held by the results."""
        return [*self.top_cuts.values(), self.day1, self.day2]

    def register_deck(self, deck: str) -> bool:
        """Add ``deck`` with a zero count to every mapping.

        Returns:
            True if the deck was new
        """
        if deck in self.day1:
            return False
        for mapping in self.mappings():
            mapping.setdefault(deck, 0)
        return True

    def add_day1(self, result: StageResult) -> None:
        """Tally Day 1 participation, registering decks seen for the first time."""
        counts = result.deck_counts
        for deck in counts:
            if self.register_deck(deck):
                logger.debug("Registered deck '%s' discovered at runtime", deck)
        for deck, count in counts.items():
            self.day1[deck] += count

    def add_day2(self, result: StageResult) -> None:
        """Tally Day 2 participation and cumulative placement cuts."""
        for deck, count in result.deck_counts.items():
            self.register_deck(deck)
            self.day2[deck] += count
        for cut, mapping in self.top_cuts.items():
            for player in result.top(cut):
                mapping[player.deck] += 1

    def to_dict(self) -> Dict[str, Any]:
        """Serialize results to dictionary."""
        data: Dict[str, Any] = {
            f"top{cut}": dict(mapping) for cut, mapping in self.top_cuts.items()
        }
        data["day1"] = dict(self.day1)
        data["day2"] = dict(self.day2)
        data["iterations"] = self.iterations
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BatchResults":
        """Deserialize results from dictionary."""
        results = cls(
            top_cuts={cut: dict(data.get(f"top{cut}", {})) for cut in TOP_CUTS},
            day1=dict(data.get("day1", {})),
            day2=dict(data.get("day2", {})),
            iterations=data.get("iterations", 0),
        )
        for deck in list(results.day1) + list(results.day2):
            results.register_deck(deck)
        return results


class BatchAggregator:
    """Runs many Day 1 to Day 2 pairs and accumulates placement counts.

    Each Day 1 result is handed straight to the Day 2 run. A record store
    may still be given, in which case both stages are saved to it as in a
    single ad hoc run.
    """

    def __init__(
        self,
        config: TournamentConfig,
        store: Optional[RecordStore] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.store = store
        self.random = rng or create_rng(config.seed)
        self.runner = TournamentRunner(config, store=store, rng=self.random)

    def run(
        self,
        iterations: int = DEFAULT_BATCH_ITERATIONS,
        progress_callback: Optional[ProgressCallback] = None,
        should_stop: Optional[StopCheck] = None,
    ) -> BatchResults:
        """Run ``iterations`` events and return the accumulated counts.

        Args:
            iterations: Number of Day 1 to Day 2 pairs to simulate
            progress_callback: Called with (completed, total) after each pair
            should_stop: Checked before each pair; the batch ends early with
                the counts so far when it returns True

        Returns:
            The accumulated batch results
        """
        results = BatchResults.for_decks(self.config.deck_names)
        logger.info(
            "Starting batch of %s simulations with %s players",
            iterations,
            self.config.n_players,
        )
        start_time = time.perf_counter()

        for iteration in range(1, iterations + 1):
            if should_stop is not None and should_stop():
                logger.info(
                    "Batch stopped after %s of %s simulations",
                    results.iterations,
                    iterations,
                )
                break

            day1 = self.runner.run_day1()
            results.add_day1(day1)

            day2 = self.runner.run_day2(day1.players)
            results.add_day2(day2)

            results.iterations = iteration
            if progress_callback is not None:
                progress_callback(iteration, iterations)

        logger.info(
            "Batch finished: %s simulations in %.2fs",
            results.iterations,
            time.perf_counter() - start_time,
        )
        return results
