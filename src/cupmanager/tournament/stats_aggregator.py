"""Cup-wide statistics: top scorers and the goalkeeper table."""

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

from functools import cmp_to_key
from typing import Callable, Dict, List, Optional, Tuple

from cupmanager.constants import (
    ENTITY_GOALKEEPER_STATS,
    ENTITY_GOALKEEPERS,
    ENTITY_KNOCKOUT_MATCHES,
    ENTITY_KNOCKOUT_PHASES,
    ENTITY_SCORERS,
    ENTITY_TEAMS,
    PHASE_QUARTERFINALS,
)
from cupmanager.models import Goalkeeper, GoalkeeperRanking, GoalkeeperStat, Scorer, TopScorer
from cupmanager.store import Store
from cupmanager.utils import setup_logger

logger = setup_logger(__name__)

# Orders two top scorers already level on goals and name; negative means `a` first
ScorerTiebreak = Callable[[TopScorer, TopScorer], int]


class StatsAggregator:
    """Read-only aggregation over the rows written by result recording.

    Args:
        store: Store holding scorer and goalkeeper rows
        scorer_tiebreak: Optional comparator applied to top scorers level on
            goals and player name; rows it cannot separate keep store order
    """

    def __init__(self, store: Store, scorer_tiebreak: Optional[ScorerTiebreak] = None):
        self.store = store
        self.scorer_tiebreak = scorer_tiebreak

    def _team_names(self) -> Dict[str, str]:
        return {record["id"]: record["name"] for record in self.store.query(ENTITY_TEAMS)}

    def top_scorers(self) -> List[TopScorer]:
        """Goals per (player name, team name) over group and knockout matches."""
        team_names = self._team_names()
        totals: Dict[Tuple[str, str], TopScorer] = {}
        for record in self.store.query(ENTITY_SCORERS):
            scorer = Scorer.from_dict(record)
            team_name = team_names.get(scorer.team_id, "")
            key = (scorer.player_name, team_name)
            if key in totals:
                totals[key].total_goals += scorer.goals
            else:
                totals[key] = TopScorer(scorer.player_name, team_name, scorer.goals)

        def compare(a: TopScorer, b: TopScorer) -> int:
            if a.total_goals != b.total_goals:
                return b.total_goals - a.total_goals
            if a.player_name != b.player_name:
                return -1 if a.player_name < b.player_name else 1
            if self.scorer_tiebreak is not None:
                return self.scorer_tiebreak(a, b)
            return 0

        ranking = sorted(totals.values(), key=cmp_to_key(compare))
        logger.debug(f"Top scorers computed from {len(totals)} player(s)")
        return ranking

    def all_goalkeepers(self) -> List[Goalkeeper]:
        return sorted(
            (Goalkeeper.from_dict(r) for r in self.store.query(ENTITY_GOALKEEPERS)),
            key=lambda g: g.name,
        )

    def goalkeeper_ranking(self) -> List[GoalkeeperRanking]:
        """Goalkeeper table.

        Goalkeepers without any statistic are not listed. Order: goalkeepers
        who played a knockout match first, then more clean sheets, then lower
        average goals conceded, then name.
        """
        team_names = self._team_names()
        goalkeepers = {g.id: g for g in self.all_goalkeepers()}
        rows: Dict[str, GoalkeeperRanking] = {}

        for record in self.store.query(ENTITY_GOALKEEPER_STATS):
            stat = GoalkeeperStat.from_dict(record)
            goalkeeper = goalkeepers.get(stat.goalkeeper_id)
            if goalkeeper is None:
                logger.warning(f"Goalkeeper stat {stat.id} references unknown goalkeeper")
                continue
            row = rows.get(goalkeeper.id)
            if row is None:
                row = GoalkeeperRanking(
                    goalkeeper=goalkeeper,
                    team_name=team_names.get(goalkeeper.team_id, ""),
                )
                rows[goalkeeper.id] = row

            if stat.is_knockout:
                row.knockout_matches_played += 1
                row.knockout_goals_conceded += stat.goals_conceded
            else:
                row.group_matches_played += 1
            if stat.clean_sheet:
                row.clean_sheets += 1
            row.goals_conceded += stat.goals_conceded

        return sorted(
            rows.values(),
            key=lambda r: (
                not r.reached_quarterfinals,
                -r.clean_sheets,
                r.average_goals_conceded,
                r.goalkeeper.name,
            ),
        )

    def team_reached_quarterfinals(self, team_id: str) -> bool:
        """True if the team has been seeded into any quarterfinal."""
        for phase in self.store.query(ENTITY_KNOCKOUT_PHASES, {"phase_type": PHASE_QUARTERFINALS}):
            for match in self.store.query(ENTITY_KNOCKOUT_MATCHES, {"phase_id": phase["id"]}):
                if team_id in (match.get("home_id"), match.get("away_id")):
                    return True
        return False
