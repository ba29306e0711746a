"""Cup management for a 16-team football tournament.

The group stage, rosters, knockout bracket and statistics are handled by
specialized managers; :class:`Cup` ties them together over one store.
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

from cupmanager.tournament.bracket import BracketEdge, BracketNode, BracketTopology
from cupmanager.tournament.cup import Cup
from cupmanager.tournament.knockout_engine import KnockoutEngine
from cupmanager.tournament.result_recorder import MatchResultRecorder, MatchStatsWriter
from cupmanager.tournament.roster import RosterManager, RosterValidator
from cupmanager.tournament.scorer_parser import parse_scorers, total_goals
from cupmanager.tournament.standings_calculator import (
    StandingsCalculator,
    TiebreakContext,
    TiebreakStep,
)
from cupmanager.tournament.stats_aggregator import StatsAggregator
from cupmanager.tournament.tournament_setup import TournamentSetup
from cupmanager.tournament.write_sequence import WriteSequence

__all__ = [
    "Cup",
    "BracketEdge",
    "BracketNode",
    "BracketTopology",
    "KnockoutEngine",
    "MatchResultRecorder",
    "MatchStatsWriter",
    "RosterManager",
    "RosterValidator",
    "StandingsCalculator",
    "StatsAggregator",
    "TiebreakContext",
    "TiebreakStep",
    "TournamentSetup",
    "WriteSequence",
    "parse_scorers",
    "total_goals",
]
