"""JSON reports and terminal tables for simulation results."""

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

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from rich.table import Table

from swissmeta.batch.aggregator import BatchResults
from swissmeta.batch.analyzer import DeckSummary, summarize_batch
from swissmeta.constants import BRACKET_LABELS
from swissmeta.player import Player
from swissmeta.utils import setup_logger

logger = setup_logger(__name__)

REPORT_VERSION = "1.0.0"


class BatchReporter:
    """Reporter for batch simulation results."""

    def generate_report(
        self,
        results: BatchResults,
        configuration: Optional[Dict] = None,
    ) -> Dict:
        """Generate a complete batch report.

        Args:
            results: Accumulated batch counts
            configuration: Optional configuration metadata

        Returns:
            Complete report as dictionary
        """
        return {
            "metadata": self._generate_metadata(results.iterations, configuration),
            "results": results.to_dict(),
            "summary": [summary.to_dict() for summary in summarize_batch(results)],
        }

    def save_report(self, report: Dict, output_path: Path, pretty: bool = True) -> None:
        """Save report to JSON file.

        Args:
            report: Report dictionary
            output_path: Path to save JSON file
            pretty: Whether to pretty-print JSON
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            if pretty:
                json.dump(report, f, indent=2, ensure_ascii=False)
            else:
                json.dump(report, f, ensure_ascii=False)

        logger.info("Report saved to: %s", output_path)

    def _generate_metadata(
        self, iterations: int, configuration: Optional[Dict]
    ) -> Dict:
        metadata = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "iterations": iterations,
            "report_version": REPORT_VERSION,
        }

        if configuration:
            metadata["configuration"] = configuration

        return metadata


def generate_batch_report(
    results: BatchResults,
    output_path: Optional[Path] = None,
    configuration: Optional[Dict] = None,
) -> Dict:
    """Generate and optionally save a batch report.

    Args:
        results: Accumulated batch counts
        output_path: Optional path to save report
        configuration: Optional configuration metadata

    Returns:
        Complete report dictionary
    """
    reporter = BatchReporter()
    report = reporter.generate_report(results, configuration)

    if output_path:
        reporter.save_report(report, output_path)

    return report


def summary_table(summaries: List[DeckSummary], title: str = "Deck summary") -> Table:
    """Build a terminal table of deck summaries."""
    table = Table(title=title)
    table.add_column("Deck", style="bold")
    table.add_column("Day 1", justify="right")
    table.add_column("Day 2", justify="right")
    table.add_column("Day 2 %", justify="right")
    table.add_column("Conversion", justify="right")
    for label in BRACKET_LABELS:
        table.add_column(label, justify="right")
    table.add_column("Avg top 16", justify="right")

    for summary in sorted(summaries, key=lambda s: -s.conversion_rate):
        table.add_row(
            summary.deck,
            str(summary.day1_players),
            str(summary.day2_players),
            f"{summary.day2_share:.1f}%",
            f"{summary.conversion_rate:.1f}%",
            *(str(summary.brackets.get(label, 0)) for label in BRACKET_LABELS),
            f"{summary.average_top16:.2f}",
        )
    return table


def standings_table(players: List[Player], limit: int, title: str) -> Table:
    """Build a terminal table of the top ``limit`` players."""
    table = Table(title=title)
    table.add_column("Place", justify="right")
    table.add_column("Id", justify="right")
    table.add_column("Deck")
    table.add_column("Points", justify="right")
    table.add_column("Skill", justify="right")

    for place, player in enumerate(players[:limit], start=1):
        table.add_row(
            str(place),
            str(player.id),
            player.deck,
            str(player.match_points),
            f"{player.skill:.1f}",
        )
    return table
