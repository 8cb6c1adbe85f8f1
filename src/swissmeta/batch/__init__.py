"""Batch simulation for Swiss Meta.

This package runs many simulated events, accumulates per deck placement
counts and turns them into reports.
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

from swissmeta.batch.aggregator import BatchAggregator, BatchResults
from swissmeta.batch.analyzer import DeckSummary, placement_brackets, summarize_batch
from swissmeta.batch.reporter import BatchReporter, generate_batch_report
from swissmeta.batch.worker import BatchWorker, WorkerMessage

__all__ = [
    "BatchAggregator",
    "BatchResults",
    "DeckSummary",
    "placement_brackets",
    "summarize_batch",
    "BatchReporter",
    "generate_batch_report",
    "BatchWorker",
    "WorkerMessage",
]
