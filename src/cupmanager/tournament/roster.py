"""Team rosters and the squad-size and FIGC quota checks."""

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

from cupmanager.constants import ENTITY_PLAYERS, ENTITY_TEAM_ROSTERS
from cupmanager.exceptions import FigcQuotaExceededException, RosterFullException
from cupmanager.models import Player, RosterEntry, Team, TeamRoster, TournamentConfig
from cupmanager.store import Clock, Store
from cupmanager.tournament.lookups import get_team
from cupmanager.tournament.write_sequence import WriteSequence
from cupmanager.utils import setup_logger

logger = setup_logger(__name__)


class RosterValidator:
    """Enforces the roster invariants when a player is added."""

    def __init__(self, config: Optional[TournamentConfig] = None):
        self.config = config or TournamentConfig()

    def check_can_add(self, team: Team, roster: List[RosterEntry], is_figc: bool) -> None:
        """Raise if adding a player to ``roster`` would break a quota.

        Raises:
            RosterFullException: The roster already has the maximum size
            FigcQuotaExceededException: The player is FIGC and the FIGC quota is used up
        """
        if len(roster) >= self.config.max_roster_size:
            raise RosterFullException(
                f"Roster of {team.name} is full: at most "
                f"{self.config.max_roster_size} players per team"
            )

        figc_count = sum(1 for entry in roster if entry.player.is_figc)
        if is_figc and figc_count >= self.config.max_figc_players:
            raise FigcQuotaExceededException(
                f"FIGC quota of {team.name} reached: at most "
                f"{self.config.max_figc_players} FIGC players per team"
            )


class RosterManager:
    """Adds players to teams and lists team rosters."""

    def __init__(
        self,
        store: Store,
        clock: Clock,
        config: Optional[TournamentConfig] = None,
        validator: Optional[RosterValidator] = None,
    ):
        self.store = store
        self.clock = clock
        self.config = config or TournamentConfig()
        self.validator = validator or RosterValidator(self.config)

    def get_team_roster(self, team_id: str) -> List[RosterEntry]:
        """Roster of a team ordered by jersey number, unnumbered players last."""
        entries = []
        for record in self.store.query(ENTITY_TEAM_ROSTERS, {"team_id": team_id}):
            roster = TeamRoster.from_dict(record)
            player = self.store.get(ENTITY_PLAYERS, roster.player_id)
            if player is None:
                logger.warning(
                    f"Roster link {roster.id} points at missing player {roster.player_id}"
                )
                continue
            entries.append(RosterEntry(roster=roster, player=Player.from_dict(player)))

        return sorted(
            entries,
            key=lambda e: (e.roster.jersey_number is None, e.roster.jersey_number or 0),
        )

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
        """Create a player and link them to a team.

        Quotas are checked before anything is written. The player record and
        the roster link are two separate writes; if the link fails, the
        raised PartialWriteFailure names the committed ``insert_player``
        step so the orphan player can be reconciled.

        Raises:
            TeamNotFoundException: If the team does not exist
            RosterFullException: If the roster is full
            FigcQuotaExceededException: If the FIGC quota is used up
            PartialWriteFailure: If the roster link cannot be written
        """
        team = get_team(self.store, team_id)
        roster = self.get_team_roster(team_id)
        self.validator.check_can_add(team, roster, is_figc)

        player = Player(
            id=None,
            name=player_name,
            is_figc=is_figc,
            figc_category=figc_category,
            figc_details=figc_details,
            birth_date=birth_date,
        )
        sequence = WriteSequence("add_player_to_team")
        stored_player = Player.from_dict(
            sequence.step("insert_player", self.store.insert, ENTITY_PLAYERS, player.to_dict())
        )

        link = TeamRoster(
            team_id=team_id,
            player_id=stored_player.id,
            jersey_number=jersey_number,
            is_captain=is_captain,
            added_at=self.clock.now(),
        )
        stored_link = TeamRoster.from_dict(
            sequence.step("insert_roster_link", self.store.insert, ENTITY_TEAM_ROSTERS, link.to_dict())
        )

        logger.info(
            f"Added {player_name} to {team.name} "
            f"({len(roster) + 1}/{self.config.max_roster_size}, FIGC: {is_figc})"
        )
        return RosterEntry(roster=stored_link, player=stored_player)
