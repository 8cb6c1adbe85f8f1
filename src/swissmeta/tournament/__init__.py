"""Event simulation for Swiss Meta.

This package turns a tournament configuration into simulated Day 1 and
Day 2 standings.
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

# Import order matters: the pairing engine loaded by the runner imports
# models and result_simulator from this package.
from swissmeta.tournament.models import RoundData, Stage, StageResult, TournamentConfig
from swissmeta.tournament.matchup import MatchupModel, allocate_players
from swissmeta.tournament.population import PlayerPopulationGenerator
from swissmeta.tournament.result_simulator import MatchOutcome, MatchOutcomeResolver
from swissmeta.tournament.storage import (
    InMemoryRecordStore,
    JsonFileRecordStore,
    RecordStore,
)
from swissmeta.tournament.runner import TournamentRunner

__all__ = [
    "TournamentConfig",
    "Stage",
    "StageResult",
    "RoundData",
    "MatchupModel",
    "allocate_players",
    "PlayerPopulationGenerator",
    "MatchOutcome",
    "MatchOutcomeResolver",
    "RecordStore",
    "InMemoryRecordStore",
    "JsonFileRecordStore",
    "TournamentRunner",
]
