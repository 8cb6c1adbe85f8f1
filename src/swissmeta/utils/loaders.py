"""Loading configurations and matchup tables from files."""

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

import csv
import json
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple, Union

from swissmeta.exceptions import InvalidConfigurationException
from swissmeta.tournament.models import TournamentConfig
from swissmeta.type_hints import MatchupMatrix
from swissmeta.utils import setup_logger

logger = setup_logger(__name__)

UNKNOWN_MATCHUP = 0.5


def load_config(path: Union[str, Path]) -> TournamentConfig:
    """Load a tournament configuration from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        The parsed configuration

    Raises:
        InvalidConfigurationException: If the file is missing, is not JSON,
            or lacks required fields
    """
    config_path = Path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.error("Configuration file not found: %s", config_path)
        raise InvalidConfigurationException(
            f"Configuration file not found: {config_path}"
        )
    except json.JSONDecodeError as e:
        logger.error("Configuration file %s is not valid JSON: %s", config_path, e)
        raise InvalidConfigurationException(
            f"Configuration file {config_path} is not valid JSON: {e}"
        ) from e

    if not isinstance(data, dict):
        raise InvalidConfigurationException(
            f"Configuration file {config_path} must hold a JSON object"
        )

    try:
        config = TournamentConfig.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Configuration file %s is incomplete: %s", config_path, e)
        raise InvalidConfigurationException(
            f"Configuration file {config_path} is incomplete or malformed: {e}"
        ) from e

    logger.info("Loaded configuration from: %s", config_path)
    return config


def calculate_true_win_rate(wins: float, losses: float) -> float:
    """Win rate with ties excluded, 0 when no decided games were played."""
    decided = wins + losses
    return wins / decided if decided > 0 else 0.0


def matchup_matrix_from_rows(
    rows: Iterable[Sequence], deck_names: List[str]
) -> MatchupMatrix:
    """Build a matchup matrix from ``deck1, deck2, wins, losses[, ties]`` rows.

    Rows naming a deck outside ``deck_names`` are skipped. Cells without a
    row, or whose row has a zero win rate, default to 0.5.
    """
    index = {name: i for i, name in enumerate(deck_names)}
    matrix = [[UNKNOWN_MATCHUP] * len(deck_names) for _ in deck_names]

    for row in rows:
        deck1, deck2 = row[0], row[1]
        if deck1 not in index or deck2 not in index:
            logger.debug(
                "Skipping matchup row for unknown decks %s vs %s", deck1, deck2
            )
            continue
        rate = calculate_true_win_rate(float(row[2]), float(row[3]))
        matrix[index[deck1]][index[deck2]] = rate or UNKNOWN_MATCHUP
    return matrix


def expected_win_rates(
    rows: Iterable[Sequence], play_rates: Dict[str, float]
) -> Dict[str, float]:
    """Meta weighted win rate of every deck that has matchup rows.

    Each row contributes the opponent's play rate times the true win rate
    against it. Play rates are percentages; decks without one weigh 0.

    Args:
        rows: ``deck1, deck2, wins, losses[, ties]`` rows
        play_rates: Deck name -> share of the field in percent

    Returns:
        Deck name -> expected win rate against the field
    """
    expected: Dict[str, float] = {}
    for row in rows:
        deck1, deck2 = row[0], row[1]
        weight = play_rates.get(deck2, 0) / 100
        rate = calculate_true_win_rate(float(row[2]), float(row[3]))
        expected[deck1] = expected.get(deck1, 0.0) + weight * rate
    return expected


def read_matchup_csv(path: Union[str, Path]) -> List[Tuple[str, str, float, float]]:
    """Read matchup rows from a CSV file.

    A header row is skipped when its count columns are not numeric.

    Raises:
        InvalidConfigurationException: If the file is missing or a row is short
    """
    csv_path = Path(path)
    rows = []
    try:
        with open(csv_path, "r", encoding="utf-8", newline="") as f:
            for line_number, row in enumerate(csv.reader(f), start=1):
                if not row or not any(cell.strip() for cell in row):
                    continue
                if len(row) < 4:
                    raise InvalidConfigurationException(
                        f"{csv_path}:{line_number}: expected at least 4 columns"
                    )
                try:
                    wins, losses = float(row[2]), float(row[3])
                except ValueError:
                    if line_number == 1:
                        continue
                    raise InvalidConfigurationException(
                        f"{csv_path}:{line_number}: wins and losses must be numbers"
                    )
                rows.append((row[0].strip(), row[1].strip(), wins, losses))
    except FileNotFoundError:
        logger.error("Matchup file not found: %s", csv_path)
        raise InvalidConfigurationException(f"Matchup file not found: {csv_path}")

    logger.info("Read %s matchup rows from %s", len(rows), csv_path)
    return rows


def load_matchup_csv(path: Union[str, Path], deck_names: List[str]) -> MatchupMatrix:
    """Read a matchup CSV and convert it into a matrix over ``deck_names``."""
    return matchup_matrix_from_rows(read_matchup_csv(path), deck_names)
