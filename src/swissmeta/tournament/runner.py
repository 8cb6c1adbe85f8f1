"""Stage orchestration for a simulated event.

Day 1 starts from a freshly generated field. Day 2 continues with the Day 1
finishers at or above the match-point threshold, re-keyed with sequential
Day 2 ids, keeping their match points, skill and opponent history.
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
from typing import List, Optional

from swissmeta.constants import DAY1_RECORDS_KEY, DAY2_RECORDS_KEY
from swissmeta.exceptions import MissingDay1DataException
from swissmeta.pairing.swiss import SwissPairingEngine
from swissmeta.player import Player
from swissmeta.tournament.matchup import MatchupModel
from swissmeta.tournament.models import Stage, StageResult, TournamentConfig
from swissmeta.tournament.population import PlayerPopulationGenerator
from swissmeta.tournament.result_simulator import MatchOutcomeResolver
from swissmeta.tournament.storage import RecordStore
from swissmeta.utils import create_rng, setup_logger

logger = setup_logger(__name__)


def sort_standings(players: List[Player]) -> List[Player]:
    """Sort by match points, highest first. Ties keep their current order."""
    return sorted(players, key=lambda p: -p.match_points)


def qualify_for_day2(players: List[Player], threshold: int) -> List[Player]:
    """Copy the players at or above ``threshold`` and number them 1..k.

    The input order is kept, and the input players are not modified.
    """
    qualified = [
        player.copy() for player in players if player.match_points >= threshold
    ]
    for day2_id, player in enumerate(qualified, start=1):
        player.day2_id = day2_id
    return qualified


class TournamentRunner:
    """Runs the Day 1 and Day 2 stages of an event.

    Args:
        config: Event configuration
        store: Optional record store; stage results are saved to it and
            Day 2 reads Day 1 standings from it when none are passed in
        rng: Random source shared by every step; built from ``config.seed``
            when omitted
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
        self.model = MatchupModel.from_config(config)
        self.population = PlayerPopulationGenerator(
            tuff_enabled=config.tuff_enabled,
            tuff_counts=config.tuff_counts,
            rng=self.random,
        )
        self.resolver = MatchOutcomeResolver(self.model, rng=self.random)
        self.pairing_engine = SwissPairingEngine(self.resolver, rng=self.random)

    def run(self, day1_records: Optional[List[Player]] = None) -> StageResult:
        """Run the stage selected by ``config.is_day2``."""
        logger.info(
            "Running %s with %s configured players",
            self.config.stage.value,
            self.config.n_players,
        )
        if self.config.is_day2:
            result = self.run_day2(day1_records)
        else:
            result = self.run_day1()
        logger.info(
            "%s finished with %s players", result.stage.value, len(result.players)
        )
        return result

    def run_day1(self) -> StageResult:
        """Run Day 1 on a freshly generated field."""
        players = self.population.create_players(self.model)
        logger.debug(
            "Starting Day 1: %s players, %s rounds",
            len(players),
            self.config.day1_rounds,
        )
        result = self._run_stage(Stage.DAY1, players, self.config.day1_rounds)
        self._save(DAY1_RECORDS_KEY, result)
        return result

    def run_day2(self, day1_records: Optional[List[Player]] = None) -> StageResult:
        """Run Day 2 on the qualified Day 1 finishers.

        Args:
            day1_records: Day 1 standings; read from the store when omitted

        Raises:
            MissingDay1DataException: When no Day 1 standings are available
        """
        if day1_records is None and self.store is not None:
            day1_records = self.store.get(DAY1_RECORDS_KEY)
        if day1_records is None:
            logger.error("Day 2 requested but no Day 1 records are available")
            raise MissingDay1DataException("Day 1 data not found")

        players = qualify_for_day2(day1_records, self.config.day2_threshold)
        logger.debug(
            "Starting Day 2: %s of %s players qualified with %s+ points, %s rounds",
            len(players),
            len(day1_records),
            self.config.day2_threshold,
            self.config.day2_rounds,
        )
        result = self._run_stage(Stage.DAY2, players, self.config.day2_rounds)
        self._save(DAY2_RECORDS_KEY, result)
        return result

    def _run_stage(
        self, stage: Stage, players: List[Player], rounds: int
    ) -> StageResult:
        for round_number in range(1, rounds + 1):
            players = self.pairing_engine.play_round(players, round_number).players

        result = StageResult(
            stage=stage, players=sort_standings(players), end_of_round=rounds
        )
        logger.debug("Finished %s after %s rounds", stage.value, rounds)
        return result

    def _save(self, key: str, result: StageResult) -> None:
        if self.store is not None:
            self.store.put(key, result.players)
