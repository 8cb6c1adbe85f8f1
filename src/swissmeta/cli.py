"""Command-line interface for Swiss Meta.

This module provides the ``swiss-meta`` command: a single ad hoc stage run
and a batch run with a progress bar and an optional JSON report.
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

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, TimeRemainingColumn

from swissmeta.batch.aggregator import BatchAggregator, BatchResults
from swissmeta.batch.analyzer import summarize_batch
from swissmeta.batch.reporter import (
    generate_batch_report,
    standings_table,
    summary_table,
)
from swissmeta.batch.worker import BatchWorker
from swissmeta.constants import DEFAULT_BATCH_ITERATIONS
from swissmeta.exceptions import SwissMetaException
from swissmeta.tournament.models import TournamentConfig
from swissmeta.tournament.runner import TournamentRunner
from swissmeta.tournament.storage import JsonFileRecordStore
from swissmeta.utils import set_log_level, setup_logger
from swissmeta.utils.loaders import load_config, load_matchup_csv
from swissmeta.utils.validation import validate_config

logger = setup_logger(__name__)

DEFAULT_TOP = 16


def build_config(args: argparse.Namespace) -> TournamentConfig:
    """Load the configuration file and apply command-line overrides.

    Args:
        args: Parsed command-line arguments

    Returns:
        The validated configuration

    Raises:
        InvalidConfigurationException: If a file cannot be read
        ValidationException: If the resulting configuration is unusable
    """
    config = load_config(args.config)

    if args.matchups:
        config.matchup_matrix = load_matchup_csv(args.matchups, config.deck_names)
    if args.seed is not None:
        config.seed = args.seed
    if getattr(args, "day2", False):
        config.is_day2 = True

    result = validate_config(config, strict=True)
    for warning in result.warnings:
        logger.warning("%s", warning)
    return config


def run_single(args: argparse.Namespace, console: Console) -> int:
    """Run one stage and print its top standings.

    Args:
        args: Parsed command-line arguments
        console: Console to print to

    Returns:
        Exit code (0 for success)
    """
    config = build_config(args)
    store = JsonFileRecordStore(args.store) if args.store else None

    runner = TournamentRunner(config, store=store)
    result = runner.run()

    title = f"{result.stage.value.upper()} standings after round {result.end_of_round}"
    console.print(standings_table(result.players, args.top, title))

    counts = ", ".join(
        f"{deck}: {count}" for deck, count in sorted(result.deck_counts.items())
    )
    console.print(f"Players per deck: {counts}")
    if store is not None:
        console.print(f"Records saved to: {store.directory}")
    return 0


def _run_worker(worker: BatchWorker, console: Console) -> Optional[BatchResults]:
    """Drive a batch worker, drawing its progress, until it finishes."""
    results = None
    with Progress(
        "[progress.description]{task.description}",
        BarColumn(),
        "[progress.percentage]{task.percentage:>3.0f}%",
        TimeRemainingColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Simulating", total=worker.iterations)
        worker.start()
        while True:
            try:
                message = worker.messages.get()
            except KeyboardInterrupt:
                console.print(
                    "[yellow]Stopping after the current simulation...[/yellow]"
                )
                worker.cancel()
                continue

            progress.update(task, completed=message.current_simulation)
            if message.type == "complete":
                results = message.results
                break
            if message.type == "error":
                console.print(f"[red]Batch failed: {message.error}[/red]")
                break

    worker.join()
    return results


def run_batch(args: argparse.Namespace, console: Console) -> int:
    """Run a batch, print the per deck summary and optionally save a report.

    Args:
        args: Parsed command-line arguments
        console: Console to print to

    Returns:
        Exit code (0 for success)
    """
    config = build_config(args)
    config.is_day2 = False
    store = JsonFileRecordStore(args.store) if args.store else None

    worker = BatchWorker(BatchAggregator(config, store=store), args.iterations)
    results = _run_worker(worker, console)
    if results is None:
        return 1

    if worker.cancelled:
        console.print(
            f"[yellow]Batch cancelled after {results.iterations} of "
            f"{args.iterations} simulations[/yellow]"
        )

    console.print(
        summary_table(
            summarize_batch(results),
            title=f"Deck summary over {results.iterations} simulations",
        )
    )

    if args.output:
        configuration = config.to_dict()
        configuration["requested_iterations"] = args.iterations
        generate_batch_report(
            results, output_path=Path(args.output), configuration=configuration
        )
        console.print(f"Report saved to: {args.output}")

    console.print("[green]Simulation complete.[/green]")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", required=True, help="Tournament configuration JSON file"
    )
    parser.add_argument(
        "--matchups",
        help="CSV of deck1,deck2,wins,losses[,ties] rows replacing the matrix",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducibility")
    parser.add_argument("--store", help="Directory for Day 1 / Day 2 record files")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="swiss-meta",
        description="Simulate Swiss card game events to study deck performance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Day 1 of one event, saving the standings
  swiss-meta run --config meta.json --store records

  # Day 2 continuing from the saved Day 1 standings
  swiss-meta run --config meta.json --store records --day2

  # 1000 events with a JSON report
  swiss-meta batch --config meta.json -n 1000 --output report.json
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate a single stage")
    _add_common_arguments(run_parser)
    run_parser.add_argument(
        "--day2", action="store_true", help="Simulate Day 2 instead of Day 1"
    )
    run_parser.add_argument(
        "--top",
        type=int,
        default=DEFAULT_TOP,
        help=f"Number of standings rows to print (default: {DEFAULT_TOP})",
    )
    run_parser.set_defaults(handler=run_single)

    batch_parser = subparsers.add_parser(
        "batch", help="Simulate many Day 1 to Day 2 events"
    )
    _add_common_arguments(batch_parser)
    batch_parser.add_argument(
        "-n",
        "--iterations",
        type=int,
        default=DEFAULT_BATCH_ITERATIONS,
        help=f"Number of simulated events (default: {DEFAULT_BATCH_ITERATIONS})",
    )
    batch_parser.add_argument("--output", help="Write a JSON report to this file")
    batch_parser.set_defaults(handler=run_batch)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    console = Console()
    try:
        return args.handler(args, console)
    except KeyboardInterrupt:
        logger.info("Simulation interrupted by user")
        return 130
    except SwissMetaException as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
