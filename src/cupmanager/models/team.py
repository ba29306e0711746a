"""Tournament, group and team records."""

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

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from cupmanager.constants import PLACEHOLDER_TEAM_PREFIX
from cupmanager.utils import parse_timestamp


def is_placeholder_name(name: str, prefix: str = PLACEHOLDER_TEAM_PREFIX) -> bool:
    """Return True if ``name`` is an auto-generated team name such as ``Sq7``."""
    return re.fullmatch(rf"{re.escape(prefix)}\d+", name) is not None


@dataclass
class Tournament:
    """A single cup edition."""

    id: str
    name: str
    year: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "year": self.year}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        return cls(id=data["id"], name=data["name"], year=data["year"])


@dataclass
class Team:
    """A participating team.

    Attributes:
        id: Store id
        name: Display name
        is_placeholder: True while the team still carries its generated name.
            Written alongside the name by the rename operation only.
        logo_url: Optional logo location
        updated_at: Last rename time
    """

    id: str
    name: str
    is_placeholder: bool = False
    logo_url: Optional[str] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "is_placeholder": self.is_placeholder,
            "logo_url": self.logo_url,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            is_placeholder=data.get("is_placeholder", False),
            logo_url=data.get("logo_url"),
            updated_at=parse_timestamp(data.get("updated_at")),
        )

    def __str__(self) -> str:
        return self.name


@dataclass
class Group:
    """A group of the round-robin stage, labelled A to D."""

    id: str
    tournament_id: str
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "tournament_id": self.tournament_id, "label": self.label}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        return cls(
            id=data["id"], tournament_id=data["tournament_id"], label=data["label"]
        )


@dataclass
class Participation:
    """Membership of a team in a group."""

    group_id: str
    team_id: str
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "group_id": self.group_id, "team_id": self.team_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participation":
        return cls(group_id=data["group_id"], team_id=data["team_id"], id=data.get("id"))
