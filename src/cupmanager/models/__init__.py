"""Data records used by Cup Manager."""

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

from cupmanager.models.config import TournamentConfig
from cupmanager.models.knockout import (
    KnockoutMatch,
    KnockoutOutcome,
    KnockoutPhase,
    PhaseView,
    SlotAssignment,
)
from cupmanager.models.match import (
    Goalkeeper,
    GoalkeeperStat,
    Match,
    Scorer,
    ScorerEntry,
)
from cupmanager.models.player import Player, RosterEntry, TeamRoster
from cupmanager.models.stats import (
    GoalkeeperRanking,
    HeadToHeadRecord,
    TeamStats,
    TopScorer,
)
from cupmanager.models.team import Group, Participation, Team, Tournament

__all__ = [
    "TournamentConfig",
    "Tournament",
    "Group",
    "Team",
    "Participation",
    "Match",
    "Scorer",
    "ScorerEntry",
    "Goalkeeper",
    "GoalkeeperStat",
    "KnockoutPhase",
    "KnockoutMatch",
    "KnockoutOutcome",
    "PhaseView",
    "SlotAssignment",
    "Player",
    "TeamRoster",
    "RosterEntry",
    "TeamStats",
    "HeadToHeadRecord",
    "TopScorer",
    "GoalkeeperRanking",
]
