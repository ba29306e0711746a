"""Exceptions for use in Cup Manager"""

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

from typing import List, Optional

# ========== Base Application Exception ==========


class CupManagerException(Exception):
    """Base exception for all Cup Manager errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Validation Exceptions ==========


class ValidationException(CupManagerException):
    """Base exception for input rejected before any write is attempted."""

    pass


class InvalidScoreException(ValidationException):
    """Raised when a score is not a non-negative integer."""

    pass


class InvalidPenaltiesException(ValidationException):
    """Raised when a penalty shoot-out score is malformed or not allowed."""

    pass


class PenaltiesRequiredException(ValidationException):
    """Raised when a drawn knockout match has no decisive penalty shoot-out."""

    pass


class ScorerParseError(ValidationException):
    """Raised when a scorer token has no extractable player name."""

    pass


class RosterFullException(ValidationException):
    """Raised when a team roster already holds the maximum number of players."""

    pass


class FigcQuotaExceededException(ValidationException):
    """Raised when a team already holds the maximum number of FIGC players."""

    pass


class InvalidPlayerDataException(ValidationException):
    """Raised when player data is invalid or incomplete."""

    pass


class InvalidTeamNameException(ValidationException):
    """Raised when a team name is empty."""

    pass


class KnockoutMatchNotReadyException(ValidationException):
    """Raised when a knockout match is recorded before both teams are known."""

    pass


class WinnerAlreadyDecidedException(ValidationException):
    """Raised when a replay would change a winner that has already advanced."""

    pass


# ========== Lookup Exceptions ==========


class NotFoundException(CupManagerException):
    """Base exception for references to records that do not exist."""

    pass


class TournamentNotFoundException(NotFoundException):
    """Raised when a requested tournament does not exist."""

    pass


class MatchNotFoundException(NotFoundException):
    """Raised when a requested group or knockout match does not exist."""

    pass


class TeamNotFoundException(NotFoundException):
    """Raised when a requested team does not exist."""

    pass


class PhaseNotFoundException(NotFoundException):
    """Raised when a requested knockout phase does not exist."""

    pass


# ========== Write Sequence Exceptions ==========


class PartialWriteFailure(CupManagerException):
    """Raised when a multi-step write failed after some steps were committed.

    Nothing is rolled back. ``completed_steps`` lists the committed steps in
    order and ``failed_step`` names the step that raised, so the caller can
    reconcile or retry the operation.
    """

    def __init__(
        self,
        operation: str,
        failed_step: str,
        completed_steps: List[str],
        cause: Optional[BaseException] = None,
    ) -> None:
        self.operation = operation
        self.failed_step = failed_step
        self.completed_steps = list(completed_steps)
        self.cause = cause
        super().__init__(
            f"{operation}: step '{failed_step}' failed after "
            f"{', '.join(self.completed_steps)} committed: {cause}"
        )


class AdvancementFailure(CupManagerException):
    """Reported when a recorded knockout result has no destination slot.

    The result itself stays recorded. This error is attached to the outcome
    of the recording call and logged; it is not raised by the engine.
    """

    def __init__(self, match_id: str, phase_type: str, reason: str) -> None:
        self.match_id = match_id
        self.phase_type = phase_type
        self.reason = reason
        super().__init__(
            f"Cannot advance result of {phase_type} match {match_id}: {reason}"
        )


# ========== Configuration Exceptions ==========


class ConfigurationException(CupManagerException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


# ========== Storage Exceptions ==========


class StoreException(CupManagerException):
    """Base exception for errors raised by a store implementation."""

    pass


class RecordNotFoundException(StoreException):
    """Raised when a store is asked to update a record id it does not hold."""

    pass


class UnknownEntityKindException(StoreException):
    """Raised when a store is asked for an entity kind it does not hold."""

    pass


class FileLoadException(StoreException):
    """Raised when a store file cannot be loaded."""

    pass


class FileSaveException(StoreException):
    """Raised when a store file cannot be saved."""

    pass
