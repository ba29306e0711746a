"""Tournament skeleton creation and team renaming."""

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

from itertools import combinations
from typing import List, Optional

from cupmanager.constants import (
    ENTITY_GROUPS,
    ENTITY_MATCHES,
    ENTITY_PARTICIPATIONS,
    ENTITY_TEAMS,
    ENTITY_TOURNAMENTS,
    GROUP_LABELS,
    TEAMS_PER_GROUP,
)
from cupmanager.models import Group, Team, Tournament, TournamentConfig
from cupmanager.models.team import is_placeholder_name
from cupmanager.store import Clock, Store
from cupmanager.tournament.lookups import get_team
from cupmanager.tournament.write_sequence import WriteSequence
from cupmanager.utils import setup_logger
from cupmanager.utils.validation import validate_team_name_strict

logger = setup_logger(__name__)


class TournamentSetup:
    """Creates the fixed tournament skeleton and maintains team names.

    A new tournament gets groups A to D, sixteen placeholder teams
    ``Sq1`` .. ``Sq16`` (four per group, in order) and the six round-robin
    matches of every group.
    """

    def __init__(self, store: Store, clock: Clock, config: Optional[TournamentConfig] = None):
        self.store = store
        self.clock = clock
        self.config = config or TournamentConfig()

    def create_tournament(
        self, name: Optional[str] = None, year: Optional[int] = None
    ) -> Tournament:
        """Create a tournament with its groups, teams and group matches.

        Args:
            name: Tournament name (defaults to the configured name)
            year: Edition year (defaults to the configured year)

        Returns:
            The stored tournament
        """
        name = name or self.config.name
        year = year if year is not None else self.config.year
        sequence = WriteSequence("create_tournament")

        tournament = Tournament.from_dict(
            sequence.step(
                "insert_tournament",
                self.store.insert,
                ENTITY_TOURNAMENTS,
                {"name": name, "year": year},
            )
        )
        groups = sequence.step("insert_groups", self._insert_groups, tournament.id)
        teams = sequence.step("insert_teams", self._insert_teams)
        sequence.step("insert_participations", self._insert_participations, groups, teams)
        sequence.step("insert_matches", self._insert_matches, groups, teams)

        logger.info(
            f"Created tournament '{name}' ({year}) with {len(groups)} groups "
            f"and {len(teams)} teams"
        )
        return tournament

    def _insert_groups(self, tournament_id: str) -> List[Group]:
        return [
            Group.from_dict(
                self.store.insert(
                    ENTITY_GROUPS, {"tournament_id": tournament_id, "label": label}
                )
            )
            for label in GROUP_LABELS
        ]

    def _insert_teams(self) -> List[Team]:
        now = self.clock.now()
        count = len(GROUP_LABELS) * TEAMS_PER_GROUP
        return [
            Team.from_dict(
                self.store.insert(
                    ENTITY_TEAMS,
                    {
                        "name": f"{self.config.placeholder_prefix}{number}",
                        "is_placeholder": True,
                        "logo_url": None,
                        "updated_at": now,
                    },
                )
            )
            for number in range(1, count + 1)
        ]

    def _group_slice(self, teams: List[Team], index: int) -> List[Team]:
        return teams[index * TEAMS_PER_GROUP : (index + 1) * TEAMS_PER_GROUP]

    def _insert_participations(self, groups: List[Group], teams: List[Team]) -> None:
        for index, group in enumerate(groups):
            for team in self._group_slice(teams, index):
                self.store.insert(
                    ENTITY_PARTICIPATIONS, {"group_id": group.id, "team_id": team.id}
                )

    def _insert_matches(self, groups: List[Group], teams: List[Team]) -> None:
        now = self.clock.now()
        for index, group in enumerate(groups):
            pairs = combinations(self._group_slice(teams, index), 2)
            for match_day, (home, away) in enumerate(pairs, start=1):
                self.store.insert(
                    ENTITY_MATCHES,
                    {
                        "group_id": group.id,
                        "home_id": home.id,
                        "away_id": away.id,
                        "match_day": match_day,
                        "home_score": None,
                        "away_score": None,
                        "played_at": None,
                        "updated_at": now,
                    },
                )

    def rename_team(self, team_id: str, name: str, logo_url: Optional[str] = None) -> Team:
        """Rename a team and set its placeholder flag alongside the name.

        Existing goalkeepers keep the name they were created with.

        Raises:
            TeamNotFoundException: If the team does not exist
            InvalidTeamNameException: If the name is empty
        """
        name = validate_team_name_strict(name)
        team = get_team(self.store, team_id)
        placeholder = is_placeholder_name(name, self.config.placeholder_prefix)

        updated = Team.from_dict(
            self.store.update(
                ENTITY_TEAMS,
                team_id,
                {
                    "name": name,
                    "logo_url": logo_url,
                    "is_placeholder": placeholder,
                    "updated_at": self.clock.now(),
                },
            )
        )
        logger.info(f"Renamed team '{team.name}' to '{name}' (placeholder: {placeholder})")
        return updated
