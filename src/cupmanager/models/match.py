"""Group match records and the per-match rows written on every result save."""

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

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from cupmanager.utils import parse_timestamp


@dataclass
class Match:
    """A group-stage match.

    Attributes:
        id: Store id
        group_id: Owning group
        home_id: Home team id
        away_id: Away team id
        match_day: 1-based index of the match inside its group
        home_score: Goals of the home team, None while unplayed
        away_score: Goals of the away team, None while unplayed
        played_at: Time the result was last saved
        updated_at: Time the record was last written
    """

    id: str
    group_id: str
    home_id: str
    away_id: str
    match_day: int
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    played_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_played(self) -> bool:
        """A match is played once both scores are set."""
        return self.home_score is not None and self.away_score is not None

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_id, self.away_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "group_id": self.group_id,
            "home_id": self.home_id,
            "away_id": self.away_id,
            "match_day": self.match_day,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "played_at": self.played_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            id=data["id"],
            group_id=data["group_id"],
            home_id=data["home_id"],
            away_id=data["away_id"],
            match_day=data["match_day"],
            home_score=data.get("home_score"),
            away_score=data.get("away_score"),
            played_at=parse_timestamp(data.get("played_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )


@dataclass(frozen=True)
class ScorerEntry:
    """One parsed ``Name-Goals`` token, not yet bound to a match."""

    team_id: str
    player_name: str
    goals: int


@dataclass
class Scorer:
    """Goals of one player in one match.

    Exactly one of ``match_id`` (group stage) and ``knockout_match_id``
    is set.
    """

    team_id: str
    player_name: str
    goals: int
    match_id: Optional[str] = None
    knockout_match_id: Optional[str] = None
    id: Optional[str] = None

    @property
    def is_knockout(self) -> bool:
        return self.knockout_match_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "match_id": self.match_id,
            "knockout_match_id": self.knockout_match_id,
            "team_id": self.team_id,
            "player_name": self.player_name,
            "goals": self.goals,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Scorer":
        return cls(
            id=data.get("id"),
            match_id=data.get("match_id"),
            knockout_match_id=data.get("knockout_match_id"),
            team_id=data["team_id"],
            player_name=data["player_name"],
            goals=data["goals"],
        )


@dataclass
class Goalkeeper:
    """Auto-provisioned goalkeeper of a team, named after the team at creation."""

    id: str
    name: str
    team_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "team_id": self.team_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goalkeeper":
        return cls(id=data["id"], name=data["name"], team_id=data["team_id"])


@dataclass
class GoalkeeperStat:
    """Goals conceded by one goalkeeper in one match."""

    goalkeeper_id: str
    goals_conceded: int
    clean_sheet: bool
    match_id: Optional[str] = None
    knockout_match_id: Optional[str] = None
    id: Optional[str] = None

    @property
    def is_knockout(self) -> bool:
        return self.knockout_match_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "goalkeeper_id": self.goalkeeper_id,
            "match_id": self.match_id,
            "knockout_match_id": self.knockout_match_id,
            "goals_conceded": self.goals_conceded,
            "clean_sheet": self.clean_sheet,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GoalkeeperStat":
        return cls(
            id=data.get("id"),
            goalkeeper_id=data["goalkeeper_id"],
            match_id=data.get("match_id"),
            knockout_match_id=data.get("knockout_match_id"),
            goals_conceded=data["goals_conceded"],
            clean_sheet=data["clean_sheet"],
        )
