"""Main Cup class - orchestrates all cup operations.

This is the primary interface for running a cup, coordinating the
specialized managers over one store, clock and configuration.
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

from datetime import date
from typing import List, Optional

from cupmanager.models import (
    Goalkeeper,
    GoalkeeperRanking,
    Group,
    HeadToHeadRecord,
    KnockoutOutcome,
    Match,
    PhaseView,
    RosterEntry,
    Team,
    TeamStats,
    TopScorer,
    Tournament,
    TournamentConfig,
)
from cupmanager.store import Clock, Store, SystemClock
from cupmanager.tournament import lookups
from cupmanager.tournament.bracket import BracketTopology
from cupmanager.tournament.knockout_engine import KnockoutEngine
from cupmanager.tournament.result_recorder import MatchResultRecorder, MatchStatsWriter
from cupmanager.tournament.roster import RosterManager
from cupmanager.tournament.standings_calculator import StandingsCalculator
from cupmanager.tournament.stats_aggregator import ScorerTiebreak, StatsAggregator
from cupmanager.tournament.tournament_setup import TournamentSetup
from cupmanager.type_hints import SeededPair
from cupmanager.utils import setup_logger
from cupmanager.utils.validation import validate_player_entry

logger = setup_logger(__name__)


class Cup:
    """Main cup management class.

    This class coordinates all cup operations through specialized managers:
    - TournamentSetup: creates the tournament skeleton and renames teams
    - StandingsCalculator: computes group tables
    - MatchResultRecorder: records group results
    - RosterManager: maintains team rosters under the quotas
    - KnockoutEngine: seeds and advances the bracket
    - StatsAggregator: top scorers and goalkeeper table

    All managers share the same store, clock and configuration.
    """

    def __init__(
        self,
        store: Store,
        clock: Optional[Clock] = None,
        config: Optional[TournamentConfig] = None,
        topology: Optional[BracketTopology] = None,
        scorer_tiebreak: Optional[ScorerTiebreak] = None,
    ) -> None:
        """Initialize the cup.

        Args
        ----
        store: Persistence for every entity
        clock: Time source for played/updated timestamps (system UTC by default)
        config: Points, quotas, naming and tiebreak order
        topology: Knockout bracket graph (the eight-team bracket by default)
        scorer_tiebreak: Extra ordering for top scorers level on goals and name
        """
        self.store = store
        self.clock = clock or SystemClock()
        self.config = config or TournamentConfig()

        # Specialized managers
        self.setup = TournamentSetup(store, self.clock, self.config)
        self.standings = StandingsCalculator(self.config, store)
        self.stats_writer = MatchStatsWriter(store, self.config)
        self.result_recorder = MatchResultRecorder(
            store, self.clock, self.config, stats_writer=self.stats_writer
        )
        self.roster_manager = RosterManager(store, self.clock, self.config)
        self.knockout = KnockoutEngine(
            store,
            self.clock,
            self.config,
            standings=self.standings,
            stats_writer=self.stats_writer,
            topology=topology,
        )
        self.stats = StatsAggregator(store, scorer_tiebreak=scorer_tiebreak)

    # ========== Setup ==========

    def create_tournament(self, name: Optional[str] = None, year: Optional[int] = None) -> Tournament:
        return self.setup.create_tournament(name, year)

    def get_tournament(self, tournament_id: str) -> Tournament:
        return lookups.get_tournament(self.store, tournament_id)

    def rename_team(self, team_id: str, name: str, logo_url: Optional[str] = None) -> Team:
        return self.setup.rename_team(team_id, name, logo_url)

    # ========== Group Stage ==========

    def get_groups(self, tournament_id: str) -> List[Group]:
        return lookups.get_groups(self.store, tournament_id)

    def get_teams_in_group(self, group_id: str) -> List[Team]:
        return lookups.get_teams_in_group(self.store, group_id)

    def get_matches_for_group(self, group_id: str) -> List[Match]:
        return lookups.get_matches_for_group(self.store, group_id)

    def get_group_standings(self, group_id: str) -> List[TeamStats]:
        return self.standings.group_standings(group_id)

    def head_to_head(self, group_id: str, team1_id: str, team2_id: str) -> HeadToHeadRecord:
        """Points and goals between two teams over their played group matches."""
        matches = self.get_matches_for_group(group_id)
        return self.standings.head_to_head(team1_id, team2_id, matches)

    def record_group_result(
        self,
        match_id: str,
        home_score: int,
        away_score: int,
        scorers_home_text: Optional[str] = "",
        scorers_away_text: Optional[str] = "",
    ) -> Match:
        return self.result_recorder.record_group_result(
            match_id, home_score, away_score, scorers_home_text, scorers_away_text
        )

    # ========== Rosters ==========

    def get_team_roster(self, team_id: str) -> List[RosterEntry]:
        return self.roster_manager.get_team_roster(team_id)

    def add_player_to_team(
        self,
        team_id: str,
        player_name: str,
        is_figc: bool = False,
        figc_category: Optional[str] = None,
        jersey_number: Optional[int] = None,
        is_captain: bool = False,
        birth_date: Optional[date] = None,
        figc_details: Optional[str] = None,
    ) -> RosterEntry:
        """Validate a roster entry and add it to a team.

        Raises:
            InvalidPlayerDataException: If the entry itself is malformed
            TeamNotFoundException: If the team does not exist
            RosterFullException: If the roster is full
            FigcQuotaExceededException: If the FIGC quota is used up
        """
        name = validate_player_entry(player_name, is_figc, figc_category, jersey_number)
        return self.roster_manager.add_player_to_team(
            team_id,
            name,
            is_figc=is_figc,
            figc_category=figc_category,
            jersey_number=jersey_number,
            is_captain=is_captain,
            birth_date=birth_date,
            figc_details=figc_details,
        )

    # ========== Knockout ==========

    def create_phases(self, tournament_id: str) -> List[PhaseView]:
        return self.knockout.create_phases(tournament_id)

    def phases_exist(self, tournament_id: str) -> bool:
        return self.knockout.phases_exist(tournament_id)

    def get_knockout_phases(self, tournament_id: str) -> List[PhaseView]:
        return self.knockout.get_knockout_phases(tournament_id)

    def qualify_to_quarterfinals(self, tournament_id: str) -> List[SeededPair]:
        return self.knockout.qualify_to_quarterfinals(tournament_id)

    def record_knockout_result(
        self,
        match_id: str,
        home_score: int,
        away_score: int,
        home_penalties: Optional[int] = None,
        away_penalties: Optional[int] = None,
        scorers_home_text: Optional[str] = "",
        scorers_away_text: Optional[str] = "",
        override: bool = False,
    ) -> KnockoutOutcome:
        return self.knockout.record_knockout_result(
            match_id,
            home_score,
            away_score,
            home_penalties=home_penalties,
            away_penalties=away_penalties,
            scorers_home_text=scorers_home_text,
            scorers_away_text=scorers_away_text,
            override=override,
        )

    # ========== Statistics ==========

    def top_scorers(self) -> List[TopScorer]:
        return self.stats.top_scorers()

    def goalkeeper_ranking(self) -> List[GoalkeeperRanking]:
        return self.stats.goalkeeper_ranking()

    def all_goalkeepers(self) -> List[Goalkeeper]:
        return self.stats.all_goalkeepers()

    def team_reached_quarterfinals(self, team_id: str) -> bool:
        return self.stats.team_reached_quarterfinals(team_id)
