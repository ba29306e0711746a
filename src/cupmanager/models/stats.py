"""Read-side statistics records (standings rows, scorer and goalkeeper tables)."""

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
from typing import Any, Dict

from cupmanager.models.match import Goalkeeper
from cupmanager.models.team import Team


@dataclass
class TeamStats:
    """Standings row of one team in its group.

    Attributes:
        team: The team
        played: Played matches
        won: Matches won
        drawn: Matches drawn
        lost: Matches lost
        goals_for: Goals scored
        goals_against: Goals conceded
        points: Points from won/drawn/lost under the tournament's point system
        cards: Discipline score, reserved (always 0)
    """

    team: Team
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0
    cards: int = 0

    @property
    def goal_difference(self) -> int:
        """Recomputed from the totals on every read."""
        return self.goals_for - self.goals_against

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standings row to dictionary."""
        return {
            "team_id": self.team.id,
            "team_name": self.team.name,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
            "goal_difference": self.goal_difference,
            "points": self.points,
            "cards": self.cards,
        }


@dataclass
class HeadToHeadRecord:
    """Aggregate of the played matches between two teams of a group."""

    team1_id: str
    team2_id: str
    team1_points: int = 0
    team2_points: int = 0
    team1_goals: int = 0
    team2_goals: int = 0


@dataclass
class TopScorer:
    """Goals of one (player name, team name) pair across the whole cup."""

    player_name: str
    team_name: str
    total_goals: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_name": self.player_name,
            "team_name": self.team_name,
            "total_goals": self.total_goals,
        }


@dataclass
class GoalkeeperRanking:
    """Goalkeeper table row merging group and knockout statistics."""

    goalkeeper: Goalkeeper
    team_name: str
    group_matches_played: int = 0
    knockout_matches_played: int = 0
    clean_sheets: int = 0
    goals_conceded: int = 0
    knockout_goals_conceded: int = 0

    @property
    def matches_played(self) -> int:
        return self.group_matches_played + self.knockout_matches_played

    @property
    def reached_quarterfinals(self) -> bool:
        """True as soon as the goalkeeper has any knockout statistic."""
        return self.knockout_matches_played > 0

    @property
    def average_goals_conceded(self) -> float:
        if self.matches_played == 0:
            return 0.0
        return self.goals_conceded / self.matches_played

    def to_dict(self) -> Dict[str, Any]:
        """Serialize goalkeeper row to dictionary."""
        return {
            "goalkeeper_id": self.goalkeeper.id,
            "goalkeeper_name": self.goalkeeper.name,
            "team_name": self.team_name,
            "matches_played": self.matches_played,
            "knockout_matches_played": self.knockout_matches_played,
            "clean_sheets": self.clean_sheets,
            "goals_conceded": self.goals_conceded,
            "knockout_goals_conceded": self.knockout_goals_conceded,
            "average_goals_conceded": self.average_goals_conceded,
            "reached_quarterfinals": self.reached_quarterfinals,
        }
