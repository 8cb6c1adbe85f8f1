"""Validation utilities for Swiss Meta.

The simulation core trusts its inputs. These helpers let callers check a
configuration before handing it over.
"""

from typing import List, Optional

from swissmeta.exceptions import ValidationException
from swissmeta.tournament.models import TournamentConfig


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        errors: Problems that make the configuration unusable
        warnings: Accepted oddities worth reporting
    """

    def __init__(
        self,
        is_valid: bool,
        errors: Optional[List[str]] = None,
        warnings: Optional[List[str]] = None,
    ):
        self.is_valid = is_valid
        self.errors = errors or []
        self.warnings = warnings or []

    @property
    def error_message(self) -> Optional[str]:
        return "; ".join(self.errors) if self.errors else None

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, warnings={len(self.warnings)})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Matchup Validation ==========


def validate_matchup_matrix(matrix: List[List[float]], deck_count: int) -> List[str]:
    """Check that the matrix is square over the decks and holds probabilities.

    Returns:
        List of error messages, empty when valid
    """
    errors = []
    if len(matrix) != deck_count:
        errors.append(
            f"Matchup matrix has {len(matrix)} rows but there are {deck_count} decks"
        )
    for index, row in enumerate(matrix):
        if len(row) != deck_count:
            errors.append(
                f"Matchup matrix row {index} has {len(row)} values, "
                f"expected {deck_count}"
            )
        for value in row:
            if not 0 <= value <= 1:
                errors.append(
                    f"Matchup matrix row {index} holds {value}, outside [0, 1]"
                )
                break
    return errors


# ========== Config Validation ==========


def validate_config(
    config: TournamentConfig, strict: bool = False
) -> ValidationResult:
    """Validate a tournament configuration.

    Args:
        config: Configuration to check
        strict: Raise instead of returning an invalid result

    Returns:
        ValidationResult with errors and warnings

    Raises:
        ValidationException: If strict and the configuration is invalid

    Example:
        >>> result = validate_config(config)
        >>> for warning in result.warnings:
        ...     print(warning)
    """
    deck_count = len(config.deck_names)
    errors = validate_matchup_matrix(config.matchup_matrix, deck_count)
    warnings = []

    if len(config.meta_percentages) != deck_count:
        errors.append(
            f"{len(config.meta_percentages)} meta percentages for {deck_count} decks"
        )
    if len(config.skill_percents) != deck_count:
        errors.append(
            f"{len(config.skill_percents)} skill percentages for {deck_count} decks"
        )
    if any(share < 0 for share in config.meta_percentages):
        errors.append("Meta percentages must not be negative")
    if any(not 0 <= pct <= 100 for pct in config.skill_percents):
        errors.append("Skill percentages must be between 0 and 100")
    if config.n_players < 0:
        errors.append("Player count must not be negative")
    if len(set(config.deck_names)) != deck_count:
        errors.append("Deck names must be unique")

    meta_total = sum(config.meta_percentages)
    if meta_total > 100:
        warnings.append(
            f"Meta percentages sum to {meta_total:g}, above 100; "
            "no Other deck is added"
        )
    if config.n_players % 2:
        warnings.append("Odd player count: one bye per round")
    for deck, count in config.tuff_counts.items():
        if deck not in config.deck_names:
            warnings.append(f"Elite tier set for unknown deck {deck!r}")
        elif count < 0:
            errors.append(f"Elite pilot count for {deck!r} must not be negative")

    result = ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)
    if strict and not result.is_valid:
        raise ValidationException(result.error_message)
    return result
