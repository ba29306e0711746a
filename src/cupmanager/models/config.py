"""TournamentConfig data class."""

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
from typing import Any, Dict, List

from cupmanager.constants import (
    DEFAULT_TIEBREAK_ORDER,
    DRAW_POINTS,
    GOALKEEPER_NAME_PREFIX,
    LOSS_POINTS,
    MAX_FIGC_PLAYERS,
    MAX_ROSTER_SIZE,
    PLACEHOLDER_TEAM_PREFIX,
    TB_POINTS,
    TB_TEAM_NAME,
    TIEBREAK_NAMES,
    WIN_POINTS,
)
from cupmanager.exceptions import InvalidConfigurationException


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    year : int
        Edition year.
    win_points, draw_points, loss_points : int
        Points awarded per group-stage outcome.
    max_roster_size : int
        Maximum number of players on a team roster.
    max_figc_players : int
        Maximum number of FIGC-registered players on a team roster.
    goalkeeper_prefix : str
        Prefix of auto-provisioned goalkeeper names ("P1_" + team name).
    placeholder_prefix : str
        Prefix of auto-generated team names ("Sq1" .. "Sq16").
    tiebreak_order : list of str
        Standings criteria in priority order. Points must come first and the
        team name draw must come last so the order stays total.
    """

    name: str = "Untitled Cup"
    year: int = 2025
    win_points: int = WIN_POINTS
    draw_points: int = DRAW_POINTS
    loss_points: int = LOSS_POINTS
    max_roster_size: int = MAX_ROSTER_SIZE
    max_figc_players: int = MAX_FIGC_PLAYERS
    goalkeeper_prefix: str = GOALKEEPER_NAME_PREFIX
    placeholder_prefix: str = PLACEHOLDER_TEAM_PREFIX
    tiebreak_order: List[str] = field(
        default_factory=lambda: list(DEFAULT_TIEBREAK_ORDER)
    )

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check the configuration for inconsistent values.

        Raises:
            InvalidConfigurationException: If a value is out of range
        """
        if not self.win_points > self.draw_points >= self.loss_points:
            raise InvalidConfigurationException(
                "Points must satisfy win > draw >= loss, got "
                f"{self.win_points}/{self.draw_points}/{self.loss_points}"
            )
        if self.max_roster_size < 1:
            raise InvalidConfigurationException(
                f"max_roster_size must be positive, got {self.max_roster_size}"
            )
        if not 0 <= self.max_figc_players <= self.max_roster_size:
            raise InvalidConfigurationException(
                f"max_figc_players must be between 0 and {self.max_roster_size}"
            )
        if not self.goalkeeper_prefix or not self.placeholder_prefix:
            raise InvalidConfigurationException("Name prefixes cannot be empty")

        unknown = [key for key in self.tiebreak_order if key not in TIEBREAK_NAMES]
        if unknown:
            raise InvalidConfigurationException(f"Unknown tiebreak keys: {unknown}")
        if len(set(self.tiebreak_order)) != len(self.tiebreak_order):
            raise InvalidConfigurationException("Tiebreak keys must be unique")
        if (
            not self.tiebreak_order
            or self.tiebreak_order[0] != TB_POINTS
            or self.tiebreak_order[-1] != TB_TEAM_NAME
        ):
            raise InvalidConfigurationException(
                f"Tiebreak order must start with '{TB_POINTS}' "
                f"and end with '{TB_TEAM_NAME}'"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "year": self.year,
            "win_points": self.win_points,
            "draw_points": self.draw_points,
            "loss_points": self.loss_points,
            "max_roster_size": self.max_roster_size,
            "max_figc_players": self.max_figc_players,
            "goalkeeper_prefix": self.goalkeeper_prefix,
            "placeholder_prefix": self.placeholder_prefix,
            "tiebreak_order": list(self.tiebreak_order),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Untitled Cup"),
            year=data.get("year", 2025),
            win_points=data.get("win_points", WIN_POINTS),
            draw_points=data.get("draw_points", DRAW_POINTS),
            loss_points=data.get("loss_points", LOSS_POINTS),
            max_roster_size=data.get("max_roster_size", MAX_ROSTER_SIZE),
            max_figc_players=data.get("max_figc_players", MAX_FIGC_PLAYERS),
            goalkeeper_prefix=data.get("goalkeeper_prefix", GOALKEEPER_NAME_PREFIX),
            placeholder_prefix=data.get("placeholder_prefix", PLACEHOLDER_TEAM_PREFIX),
            tiebreak_order=data.get("tiebreak_order", list(DEFAULT_TIEBREAK_ORDER)),
        )
