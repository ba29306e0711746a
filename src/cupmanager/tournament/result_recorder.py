"""Result recording for group-stage matches.

This module records match results with validation before any write and
replaces the per-match scorer and goalkeeper rows on every save.
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

from typing import List, Optional, Tuple

from cupmanager.constants import (
    ENTITY_GOALKEEPER_STATS,
    ENTITY_GOALKEEPERS,
    ENTITY_MATCHES,
    ENTITY_SCORERS,
)
from cupmanager.models import (
    Goalkeeper,
    GoalkeeperStat,
    Match,
    Scorer,
    ScorerEntry,
    Team,
    TournamentConfig,
)
from cupmanager.store import Clock, Store
from cupmanager.tournament.lookups import get_match, get_team
from cupmanager.tournament.scorer_parser import parse_scorers, total_goals
from cupmanager.tournament.write_sequence import WriteSequence
from cupmanager.utils import setup_logger
from cupmanager.utils.validation import validate_scores_strict

logger = setup_logger(__name__)

# Foreign key naming the match a scorer or goalkeeper stat belongs to
GROUP_MATCH_KEY = "match_id"
KNOCKOUT_MATCH_KEY = "knockout_match_id"


class MatchStatsWriter:
    """Writes the rows that hang off a played match.

    Shared by group and knockout recording; ``match_key`` selects which
    foreign key (``match_id`` or ``knockout_match_id``) the rows carry.
    """

    def __init__(self, store: Store, config: Optional[TournamentConfig] = None):
        self.store = store
        self.config = config or TournamentConfig()

    def goalkeeper_name(self, team: Team) -> str:
        return f"{self.config.goalkeeper_prefix}{team.name}"

    def resolve_goalkeeper(self, team: Team) -> Goalkeeper:
        """Return the team's goalkeeper under its current name, creating it if needed.

        Goalkeepers are never renamed; after a team rename a new goalkeeper
        is created on the next save.
        """
        name = self.goalkeeper_name(team)
        record = self.store.first(ENTITY_GOALKEEPERS, {"name": name, "team_id": team.id})
        if record is None:
            record = self.store.insert(ENTITY_GOALKEEPERS, {"name": name, "team_id": team.id})
            logger.info(f"Created goalkeeper {name} for team {team.name}")
        return Goalkeeper.from_dict(record)

    def provision_goalkeepers(self, home: Team, away: Team) -> Tuple[Goalkeeper, Goalkeeper]:
        return self.resolve_goalkeeper(home), self.resolve_goalkeeper(away)

    def replace_scorers(
        self, match_key: str, match_id: str, entries: List[ScorerEntry]
    ) -> List[Scorer]:
        """Delete every scorer row of the match and insert ``entries``."""
        self.store.delete(ENTITY_SCORERS, {match_key: match_id})
        scorers = []
        for entry in entries:
            scorer = Scorer(
                team_id=entry.team_id,
                player_name=entry.player_name,
                goals=entry.goals,
                match_id=match_id if match_key == GROUP_MATCH_KEY else None,
                knockout_match_id=match_id if match_key == KNOCKOUT_MATCH_KEY else None,
            )
            scorers.append(Scorer.from_dict(self.store.insert(ENTITY_SCORERS, scorer.to_dict())))
        return scorers

    def replace_goalkeeper_stats(
        self,
        match_key: str,
        match_id: str,
        goalkeepers: Tuple[Goalkeeper, Goalkeeper],
        home_score: int,
        away_score: int,
    ) -> List[GoalkeeperStat]:
        """Delete the goalkeeper rows of the match and write one per side.

        The home goalkeeper concedes the away score and vice versa.
        """
        self.store.delete(ENTITY_GOALKEEPER_STATS, {match_key: match_id})
        home_gk, away_gk = goalkeepers
        stats = []
        for goalkeeper, conceded in ((home_gk, away_score), (away_gk, home_score)):
            stat = GoalkeeperStat(
                goalkeeper_id=goalkeeper.id,
                goals_conceded=conceded,
                clean_sheet=conceded == 0,
                match_id=match_id if match_key == GROUP_MATCH_KEY else None,
                knockout_match_id=match_id if match_key == KNOCKOUT_MATCH_KEY else None,
            )
            stats.append(
                GoalkeeperStat.from_dict(
                    self.store.insert(ENTITY_GOALKEEPER_STATS, stat.to_dict())
                )
            )
        return stats

    def write(
        self,
        sequence: WriteSequence,
        match_key: str,
        match_id: str,
        teams: Tuple[Team, Team],
        scores: Tuple[int, int],
        entries: List[ScorerEntry],
    ) -> None:
        """Run the goalkeeper, scorer and goalkeeper-stat steps on ``sequence``."""
        home, away = teams
        home_score, away_score = scores
        goalkeepers = sequence.step(
            "provision_goalkeepers", self.provision_goalkeepers, home, away
        )
        sequence.step("replace_scorers", self.replace_scorers, match_key, match_id, entries)
        sequence.step(
            "replace_goalkeeper_stats",
            self.replace_goalkeeper_stats,
            match_key,
            match_id,
            goalkeepers,
            home_score,
            away_score,
        )


def parse_match_scorers(
    home: Team,
    away: Team,
    scorers_home_text: Optional[str],
    scorers_away_text: Optional[str],
    scores: Tuple[int, int],
) -> List[ScorerEntry]:
    """Parse both tallies of a match, home entries first.

    Tallies that do not add up to the score are accepted; they are
    independent inputs.
    """
    home_entries = parse_scorers(scorers_home_text, home.id)
    away_entries = parse_scorers(scorers_away_text, away.id)
    for team, entries, score in ((home, home_entries, scores[0]), (away, away_entries, scores[1])):
        if entries and total_goals(entries) != score:
            logger.debug(
                f"Scorer tally for {team.name} adds up to {total_goals(entries)}, "
                f"score is {score}"
            )
    return home_entries + away_entries


class MatchResultRecorder:
    """Records group-stage results.

    This class is responsible for:
    - Validating scores and scorer tallies before anything is written
    - Writing the score and played time onto the match (replays overwrite)
    - Provisioning one goalkeeper per team on first save
    - Replacing the scorer and goalkeeper-stat rows of the match
    """

    def __init__(
        self,
        store: Store,
        clock: Clock,
        config: Optional[TournamentConfig] = None,
        stats_writer: Optional[MatchStatsWriter] = None,
    ):
        self.store = store
        self.clock = clock
        self.config = config or TournamentConfig()
        self.stats_writer = stats_writer or MatchStatsWriter(store, self.config)

    def record_group_result(
        self,
        match_id: str,
        home_score: int,
        away_score: int,
        scorers_home_text: Optional[str] = "",
        scorers_away_text: Optional[str] = "",
    ) -> Match:
        """Record the result of a group match.

        Args:
            match_id: Match to record
            home_score: Goals of the home team
            away_score: Goals of the away team
            scorers_home_text: Home tally, e.g. ``"Rossi-2;Verdi-1"``
            scorers_away_text: Away tally

        Returns:
            The match as stored after the update

        Raises:
            InvalidScoreException: If a score is not a non-negative integer
            ScorerParseError: If a tally token has no player name
            MatchNotFoundException: If the match does not exist
            TeamNotFoundException: If a team of the match does not exist
            PartialWriteFailure: If a later write step fails
        """
        validate_scores_strict(home_score, away_score)
        match = get_match(self.store, match_id)
        home = get_team(self.store, match.home_id)
        away = get_team(self.store, match.away_id)
        entries = parse_match_scorers(
            home, away, scorers_home_text, scorers_away_text, (home_score, away_score)
        )

        if match.is_played:
            logger.info(
                f"Match {home.name} vs {away.name} already has a result "
                f"({match.home_score}-{match.away_score}), overwriting"
            )

        now = self.clock.now()
        sequence = WriteSequence("record_group_result")
        stored = sequence.step(
            "update_match",
            self.store.update,
            ENTITY_MATCHES,
            match_id,
            {
                "home_score": home_score,
                "away_score": away_score,
                "played_at": now,
                "updated_at": now,
            },
        )
        self.stats_writer.write(
            sequence,
            GROUP_MATCH_KEY,
            match_id,
            (home, away),
            (home_score, away_score),
            entries,
        )

        logger.info(f"Recorded: {home.name} {home_score}-{away_score} {away.name}")
        return Match.from_dict(stored)
