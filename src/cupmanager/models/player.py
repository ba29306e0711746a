"""Player and roster records."""

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
from datetime import date, datetime
from typing import Any, Dict, Optional

from cupmanager.utils import parse_timestamp


@dataclass
class Player:
    """A registered player.

    Attributes:
        id: Store id
        name: Full name
        is_figc: Whether the player is registered with the federation
        figc_category: Federation category, required when is_figc is set
        figc_details: Free-text registration notes
        birth_date: Optional date of birth
    """

    id: str
    name: str
    is_figc: bool = False
    figc_category: Optional[str] = None
    figc_details: Optional[str] = None
    birth_date: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "is_figc": self.is_figc,
            "figc_category": self.figc_category,
            "figc_details": self.figc_details,
            "birth_date": self.birth_date.isoformat() if self.birth_date else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        birth = data.get("birth_date")
        if isinstance(birth, str):
            birth = parse_timestamp(birth).date()
        return cls(
            id=data["id"],
            name=data["name"],
            is_figc=data.get("is_figc", False),
            figc_category=data.get("figc_category"),
            figc_details=data.get("figc_details"),
            birth_date=birth,
        )


@dataclass
class TeamRoster:
    """Link between a player and the team they play for."""

    team_id: str
    player_id: str
    jersey_number: Optional[int] = None
    is_captain: bool = False
    added_at: Optional[datetime] = None
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "team_id": self.team_id,
            "player_id": self.player_id,
            "jersey_number": self.jersey_number,
            "is_captain": self.is_captain,
            "added_at": self.added_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamRoster":
        return cls(
            id=data.get("id"),
            team_id=data["team_id"],
            player_id=data["player_id"],
            jersey_number=data.get("jersey_number"),
            is_captain=data.get("is_captain", False),
            added_at=parse_timestamp(data.get("added_at")),
        )


@dataclass
class RosterEntry:
    """A roster link joined with its player, as listed for a team."""

    roster: TeamRoster
    player: Player
