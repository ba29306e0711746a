"""Group standings and tie-break ordering.

This module derives per-team statistics from the played matches of a group
and orders them through a chain of tie-break steps.
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

import functools
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from cupmanager.constants import (
    QUALIFIERS_PER_GROUP,
    TB_CARDS,
    TB_GOAL_DIFFERENCE,
    TB_GOALS_AGAINST,
    TB_GOALS_FOR,
    TB_HEAD_TO_HEAD,
    TB_POINTS,
    TB_TEAM_NAME,
    TIEBREAK_NAMES,
)
from cupmanager.exceptions import InvalidConfigurationException
from cupmanager.models import HeadToHeadRecord, Match, Team, TeamStats, TournamentConfig
from cupmanager.store import Store
from cupmanager.tournament.lookups import get_matches_for_group, get_teams_in_group
from cupmanager.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class TiebreakContext:
    """Data a tie-break step may look at besides the two rows compared."""

    matches: List[Match]
    standings: Dict[str, TeamStats]


# Returns < 0 if the first row ranks higher, > 0 if the second does, 0 if tied
TiebreakComparator = Callable[[TeamStats, TeamStats, TiebreakContext], int]


@dataclass(frozen=True)
class TiebreakStep:
    key: str
    name: str
    compare: TiebreakComparator


def _higher_first(attribute: str) -> TiebreakComparator:
    def compare(a: TeamStats, b: TeamStats, context: TiebreakContext) -> int:
        return getattr(b, attribute) - getattr(a, attribute)

    return compare


def _lower_first(attribute: str) -> TiebreakComparator:
    def compare(a: TeamStats, b: TeamStats, context: TiebreakContext) -> int:
        return getattr(a, attribute) - getattr(b, attribute)

    return compare


def _head_to_head_undecided(a: TeamStats, b: TeamStats, context: TiebreakContext) -> int:
    # Whether this is a two-team aggregate or a mini-league among all tied
    # teams is not settled; the step keeps its place in the chain until it is.
    return 0


def _team_name(a: TeamStats, b: TeamStats, context: TiebreakContext) -> int:
    # Stands in for the drawing of lots; the id keeps the order total
    first = (a.team.name, a.team.id)
    second = (b.team.name, b.team.id)
    return (first > second) - (first < second)


DEFAULT_COMPARATORS: Dict[str, TiebreakComparator] = {
    TB_POINTS: _higher_first("points"),
    TB_HEAD_TO_HEAD: _head_to_head_undecided,
    TB_GOAL_DIFFERENCE: _higher_first("goal_difference"),
    TB_GOALS_FOR: _higher_first("goals_for"),
    TB_GOALS_AGAINST: _lower_first("goals_against"),
    TB_CARDS: _lower_first("cards"),
    TB_TEAM_NAME: _team_name,
}


class StandingsCalculator:
    """Calculates group standings.

    Ordering follows the configured tiebreak order (by default: points,
    head-to-head, goal difference, goals scored, goals conceded, discipline,
    team name). Each criterion is consulted only when all previous ones tie.
    Head-to-head and discipline are registered but currently never separate
    two teams. Use :meth:`register_tiebreak` to plug in a real comparator.

    All calculations are pure functions of the matches passed in.
    """

    def __init__(
        self, config: Optional[TournamentConfig] = None, store: Optional[Store] = None
    ) -> None:
        self.config = config or TournamentConfig()
        self.store = store
        self._comparators: Dict[str, TiebreakComparator] = dict(DEFAULT_COMPARATORS)

    @property
    def tiebreak_steps(self) -> List[TiebreakStep]:
        """The active tie-break chain in priority order."""
        return [
            TiebreakStep(key, TIEBREAK_NAMES[key], self._comparators[key])
            for key in self.config.tiebreak_order
        ]

    def register_tiebreak(self, key: str, compare: TiebreakComparator) -> None:
        """Replace the comparator used for a tiebreak key.

        Args:
            key: One of the ``TB_*`` keys in :mod:`cupmanager.constants`
            compare: Comparator returning < 0 when its first row ranks higher

        Raises:
            InvalidConfigurationException: If the key is unknown
        """
        if key not in TIEBREAK_NAMES:
            raise InvalidConfigurationException(f"Unknown tiebreak key: {key}")
        self._comparators[key] = compare
        logger.info(f"Registered comparator for tiebreak '{key}'")

    # ========== Statistics ==========

    def build_stats(self, teams: Iterable[Team], matches: Iterable[Match]) -> Dict[str, TeamStats]:
        """Tally statistics for ``teams`` from the played matches among them.

        Unplayed matches and matches involving a team outside ``teams`` are
        ignored.
        """
        stats = {team.id: TeamStats(team=team) for team in teams}

        for match in matches:
            if not match.is_played:
                continue
            home = stats.get(match.home_id)
            away = stats.get(match.away_id)
            if home is None or away is None:
                logger.debug(f"Ignoring match {match.id}: team outside the group")
                continue

            home.played += 1
            away.played += 1
            home.goals_for += match.home_score
            home.goals_against += match.away_score
            away.goals_for += match.away_score
            away.goals_against += match.home_score

            if match.home_score > match.away_score:
                home.won += 1
                away.lost += 1
            elif match.home_score < match.away_score:
                away.won += 1
                home.lost += 1
            else:
                home.drawn += 1
                away.drawn += 1

        for row in stats.values():
            row.points = (
                row.won * self.config.win_points
                + row.drawn * self.config.draw_points
                + row.lost * self.config.loss_points
            )
        return stats

    def calculate(self, teams: Iterable[Team], matches: Iterable[Match]) -> List[TeamStats]:
        """Return the standings of a group, best team first.

        Args:
            teams: Teams of the group
            matches: Matches of the group (played or not)

        Returns:
            One TeamStats per team in ranking order
        """
        matches = list(matches)
        stats = self.build_stats(teams, matches)
        context = TiebreakContext(
            matches=[m for m in matches if m.is_played], standings=stats
        )
        steps = self.tiebreak_steps

        def compare(a: TeamStats, b: TeamStats) -> int:
            for step in steps:
                result = step.compare(a, b, context)
                if result:
                    return result
            return 0

        return sorted(stats.values(), key=functools.cmp_to_key(compare))

    def qualified(
        self, standings: List[TeamStats], count: int = QUALIFIERS_PER_GROUP
    ) -> List[TeamStats]:
        """The rows that go through to the bracket (top two by default)."""
        return standings[:count]

    def group_standings(self, group_id: str) -> List[TeamStats]:
        """Load a group from the store and return its standings."""
        if self.store is None:
            raise InvalidConfigurationException(
                "StandingsCalculator needs a store to load group standings"
            )
        teams = get_teams_in_group(self.store, group_id)
        matches = get_matches_for_group(self.store, group_id)
        return self.calculate(teams, matches)

    # ========== Head-to-Head ==========

    def head_to_head(
        self, team1_id: str, team2_id: str, matches: Iterable[Match]
    ) -> HeadToHeadRecord:
        """Aggregate points and goals of the played matches between two teams.

        This is a read-only summary and does not take part in the ordering.
        """
        record = HeadToHeadRecord(team1_id=team1_id, team2_id=team2_id)
        for match in matches:
            if not match.is_played:
                continue
            if {match.home_id, match.away_id} != {team1_id, team2_id}:
                continue

            if match.home_id == team1_id:
                team1_goals, team2_goals = match.home_score, match.away_score
            else:
                team1_goals, team2_goals = match.away_score, match.home_score

            record.team1_goals += team1_goals
            record.team2_goals += team2_goals
            if team1_goals > team2_goals:
                record.team1_points += self.config.win_points
                record.team2_points += self.config.loss_points
            elif team1_goals < team2_goals:
                record.team2_points += self.config.win_points
                record.team1_points += self.config.loss_points
            else:
                record.team1_points += self.config.draw_points
                record.team2_points += self.config.draw_points
        return record
