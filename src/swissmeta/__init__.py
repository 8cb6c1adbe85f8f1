"""Swiss Meta: Monte Carlo simulation of Swiss card game events.

A deck meta, a matchup matrix and a player count go in; simulated Day 1 and
Day 2 standings, and batch statistics of how each deck converts into Day 2
and the top cuts, come out.
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

# The tournament package loads first: the pairing engine depends on its
# models and result simulator.
from swissmeta.tournament import (
    MatchupModel,
    PlayerPopulationGenerator,
    StageResult,
    TournamentConfig,
    TournamentRunner,
)
from swissmeta.pairing import SwissPairingEngine
from swissmeta.batch import BatchAggregator, BatchResults, summarize_batch

__version__ = "0.1.0"

__all__ = [
    "TournamentConfig",
    "StageResult",
    "MatchupModel",
    "PlayerPopulationGenerator",
    "SwissPairingEngine",
    "TournamentRunner",
    "BatchAggregator",
    "BatchResults",
    "summarize_batch",
    "__version__",
]
