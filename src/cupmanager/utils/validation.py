"""Validation utilities for Cup Manager.

This module provides reusable validation functions with consistent error handling.
"""

# Cup Manager
# Copyright (C) 2025  Cup Manager developers
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

from typing import Any, Optional, Tuple

from cupmanager.constants import FIGC_CATEGORIES
from cupmanager.exceptions import (
    InvalidPenaltiesException,
    InvalidPlayerDataException,
    InvalidScoreException,
    InvalidTeamNameException,
    PenaltiesRequiredException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


def _is_count(value: Any) -> bool:
    # bool is an int subclass but never a goal count
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


# ========== Score Validation ==========


def validate_score(score: Any, label: str = "score") -> ValidationResult:
    """Validate a goal count for one side of a match.

    Args:
        score: Value to validate
        label: Name used in the error message ("home score", ...)

    Returns:
        ValidationResult with the score as sanitized value

    Example:
        >>> bool(validate_score(2))
        True
        >>> bool(validate_score(-1))
        False
    """
    if not _is_count(score):
        return ValidationResult(
            is_valid=False,
            error_message=f"Invalid {label}: {score!r} (must be a non-negative integer)",
        )
    return ValidationResult(is_valid=True, sanitized_value=score)


def validate_scores_strict(home_score: Any, away_score: Any) -> Tuple[int, int]:
    """Validate both scores of a match and raise if either is invalid.

    Raises:
        InvalidScoreException: If a score is not a non-negative integer
    """
    for value, label in ((home_score, "home score"), (away_score, "away score")):
        result = validate_score(value, label)
        if not result:
            raise InvalidScoreException(result.error_message)
    return home_score, away_score


# ========== Penalty Validation ==========


def validate_penalties_strict(
    home_score: int,
    away_score: int,
    home_penalties: Optional[int],
    away_penalties: Optional[int],
) -> Tuple[Optional[int], Optional[int]]:
    """Validate a penalty shoot-out against the regular-time score.

    Penalties are stored as a pair: both set or both None. They are
    mandatory and must differ when regular time ends level, and are not
    accepted when regular time already decided the match.

    Raises:
        PenaltiesRequiredException: Score is level and penalties are missing or level
        InvalidPenaltiesException: Penalties are malformed or given for a decided match
    """
    given = [p for p in (home_penalties, away_penalties) if p is not None]

    if home_score != away_score:
        if given:
            raise InvalidPenaltiesException(
                f"Penalties given for a match decided in regular time "
                f"({home_score}-{away_score})"
            )
        return None, None

    if len(given) < 2:
        raise PenaltiesRequiredException(
            f"Penalties are required to decide a drawn match ({home_score}-{away_score})"
        )

    for value, label in (
        (home_penalties, "home penalties"),
        (away_penalties, "away penalties"),
    ):
        result = validate_score(value, label)
        if not result:
            raise InvalidPenaltiesException(result.error_message)

    if home_penalties == away_penalties:
        raise PenaltiesRequiredException(
            f"Penalty shoot-out cannot end level ({home_penalties}-{away_penalties})"
        )

    return home_penalties, away_penalties


# ========== Name Validation ==========


def validate_name(name: Optional[str], field: str = "name") -> ValidationResult:
    """Validate a display name (team or player).

    Args:
        name: Name to validate
        field: Field label used in the error message

    Returns:
        ValidationResult with the stripped name as sanitized value
    """
    if name is None or not name.strip():
        return ValidationResult(is_valid=False, error_message=f"{field} is required")
    return ValidationResult(is_valid=True, sanitized_value=name.strip())


def validate_team_name_strict(name: Optional[str]) -> str:
    """Validate a team name and raise if it is empty."""
    result = validate_name(name, "Team name")
    if not result:
        raise InvalidTeamNameException(result.error_message)
    return result.sanitized_value


# ========== Player Validation ==========


def validate_jersey_number(number: Optional[int]) -> ValidationResult:
    """Validate an optional jersey number (1-99)."""
    if number is None:
        return ValidationResult(is_valid=True, sanitized_value=None)
    if not isinstance(number, int) or isinstance(number, bool) or not 1 <= number <= 99:
        return ValidationResult(
            is_valid=False,
            error_message=f"Invalid jersey number: {number!r} (must be 1-99)",
        )
    return ValidationResult(is_valid=True, sanitized_value=number)


def validate_player_entry(
    name: Optional[str],
    is_figc: bool = False,
    figc_category: Optional[str] = None,
    jersey_number: Optional[int] = None,
) -> str:
    """Validate the caller-side fields of a new roster entry.

    This is the check a form or API layer runs before handing the entry to
    the roster manager; the roster manager itself only enforces quotas.

    Returns:
        The stripped player name

    Raises:
        InvalidPlayerDataException: If any field is invalid
    """
    result = validate_name(name, "Player name")
    if not result:
        raise InvalidPlayerDataException(result.error_message)

    if is_figc and not figc_category:
        raise InvalidPlayerDataException(
            "A FIGC category is required for FIGC-registered players"
        )
    if figc_category is not None and figc_category not in FIGC_CATEGORIES:
        raise InvalidPlayerDataException(f"Unknown FIGC category: {figc_category}")

    jersey = validate_jersey_number(jersey_number)
    if not jersey:
        raise InvalidPlayerDataException(jersey.error_message)

    return result.sanitized_value
