"""Knockout phase and match records."""

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

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from cupmanager.constants import PHASE_NAMES
from cupmanager.exceptions import AdvancementFailure
from cupmanager.utils import parse_timestamp


@dataclass
class KnockoutPhase:
    """One round of the bracket (quarterfinals, semifinals, third_place, final)."""

    id: str
    tournament_id: str
    phase_type: str

    @property
    def display_name(self) -> str:
        return PHASE_NAMES.get(self.phase_type, self.phase_type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "phase_type": self.phase_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KnockoutPhase":
        return cls(
            id=data["id"],
            tournament_id=data["tournament_id"],
            phase_type=data["phase_type"],
        )


@dataclass
class KnockoutMatch:
    """A bracket match.

    Attributes:
        id: Store id
        phase_id: Owning phase
        match_order: 1-based position inside the phase
        home_id: Home team id, None until seeded or advanced into
        away_id: Away team id, None until seeded or advanced into
        home_score: Regular-time goals of the home team
        away_score: Regular-time goals of the away team
        home_penalties: Shoot-out goals of the home team (set with away_penalties)
        away_penalties: Shoot-out goals of the away team (set with home_penalties)
        winner_id: One of home_id/away_id once decided
        played_at: Time the result was last saved
        updated_at: Time the record was last written
    """

    id: str
    phase_id: str
    match_order: int
    home_id: Optional[str] = None
    away_id: Optional[str] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    home_penalties: Optional[int] = None
    away_penalties: Optional[int] = None
    winner_id: Optional[str] = None
    played_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_ready(self) -> bool:
        """Both teams are known."""
        return self.home_id is not None and self.away_id is not None

    @property
    def is_played(self) -> bool:
        return self.winner_id is not None

    @property
    def went_to_penalties(self) -> bool:
        return self.home_penalties is not None and self.away_penalties is not None

    @property
    def loser_id(self) -> Optional[str]:
        """The team that did not win, or None while undecided."""
        if self.winner_id is None:
            return None
        return self.away_id if self.winner_id == self.home_id else self.home_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize knockout match to dictionary."""
        return {
            "id": self.id,
            "phase_id": self.phase_id,
            "match_order": self.match_order,
            "home_id": self.home_id,
            "away_id": self.away_id,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "home_penalties": self.home_penalties,
            "away_penalties": self.away_penalties,
            "winner_id": self.winner_id,
            "played_at": self.played_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KnockoutMatch":
        """Deserialize knockout match from dictionary."""
        return cls(
            id=data["id"],
            phase_id=data["phase_id"],
            match_order=data["match_order"],
            home_id=data.get("home_id"),
            away_id=data.get("away_id"),
            home_score=data.get("home_score"),
            away_score=data.get("away_score"),
            home_penalties=data.get("home_penalties"),
            away_penalties=data.get("away_penalties"),
            winner_id=data.get("winner_id"),
            played_at=parse_timestamp(data.get("played_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )


@dataclass
class PhaseView:
    """A phase together with its matches in match order."""

    phase: KnockoutPhase
    matches: List[KnockoutMatch] = field(default_factory=list)


@dataclass(frozen=True)
class SlotAssignment:
    """A team written into a downstream bracket slot."""

    phase_type: str
    match_order: int
    slot: str
    team_id: str


@dataclass
class KnockoutOutcome:
    """What happened when a knockout result was recorded.

    Attributes:
        match: The match as stored after the result was written
        winner_id: Team that goes through
        loser_id: Team that goes out (or to the third-place match)
        assignments: Downstream slots filled by this result
        advancement_error: Set when a destination could not be resolved;
            the result itself is stored regardless
    """

    match: KnockoutMatch
    winner_id: str
    loser_id: str
    assignments: List[SlotAssignment] = field(default_factory=list)
    advancement_error: Optional[AdvancementFailure] = None

    @property
    def advanced(self) -> bool:
        return self.advancement_error is None
