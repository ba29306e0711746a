"""Typed lookups of tournament records through a Store."""

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

from typing import List

from cupmanager.constants import (
    ENTITY_GROUPS,
    ENTITY_KNOCKOUT_MATCHES,
    ENTITY_KNOCKOUT_PHASES,
    ENTITY_MATCHES,
    ENTITY_PARTICIPATIONS,
    ENTITY_TEAMS,
    ENTITY_TOURNAMENTS,
)
from cupmanager.exceptions import (
    MatchNotFoundException,
    PhaseNotFoundException,
    TeamNotFoundException,
    TournamentNotFoundException,
)
from cupmanager.models import (
    Group,
    KnockoutMatch,
    KnockoutPhase,
    Match,
    Team,
    Tournament,
)
from cupmanager.store import Store


def get_tournament(store: Store, tournament_id: str) -> Tournament:
    record = store.get(ENTITY_TOURNAMENTS, tournament_id)
    if record is None:
        raise TournamentNotFoundException(f"Tournament {tournament_id} does not exist")
    return Tournament.from_dict(record)


def get_team(store: Store, team_id: str) -> Team:
    record = store.get(ENTITY_TEAMS, team_id)
    if record is None:
        raise TeamNotFoundException(f"Team {team_id} does not exist")
    return Team.from_dict(record)


def get_match(store: Store, match_id: str) -> Match:
    record = store.get(ENTITY_MATCHES, match_id)
    if record is None:
        raise MatchNotFoundException(f"Match {match_id} does not exist")
    return Match.from_dict(record)


def get_knockout_match(store: Store, match_id: str) -> KnockoutMatch:
    record = store.get(ENTITY_KNOCKOUT_MATCHES, match_id)
    if record is None:
        raise MatchNotFoundException(f"Knockout match {match_id} does not exist")
    return KnockoutMatch.from_dict(record)


def get_phase(store: Store, phase_id: str) -> KnockoutPhase:
    record = store.get(ENTITY_KNOCKOUT_PHASES, phase_id)
    if record is None:
        raise PhaseNotFoundException(f"Knockout phase {phase_id} does not exist")
    return KnockoutPhase.from_dict(record)


def get_groups(store: Store, tournament_id: str) -> List[Group]:
    """Groups of a tournament ordered by label."""
    groups = [
        Group.from_dict(r)
        for r in store.query(ENTITY_GROUPS, {"tournament_id": tournament_id})
    ]
    return sorted(groups, key=lambda g: g.label)


def get_teams_in_group(store: Store, group_id: str) -> List[Team]:
    """Teams linked to a group, in participation order."""
    teams = []
    for participation in store.query(ENTITY_PARTICIPATIONS, {"group_id": group_id}):
        record = store.get(ENTITY_TEAMS, participation["team_id"])
        if record is not None:
            teams.append(Team.from_dict(record))
    return teams


def get_matches_for_group(store: Store, group_id: str) -> List[Match]:
    """All matches of a group ordered by match day."""
    matches = [
        Match.from_dict(r) for r in store.query(ENTITY_MATCHES, {"group_id": group_id})
    ]
    return sorted(matches, key=lambda m: m.match_day)


def get_phases(store: Store, tournament_id: str) -> List[KnockoutPhase]:
    """Knockout phases of a tournament in creation order."""
    return [
        KnockoutPhase.from_dict(r)
        for r in store.query(ENTITY_KNOCKOUT_PHASES, {"tournament_id": tournament_id})
    ]


def get_phase_matches(store: Store, phase_id: str) -> List[KnockoutMatch]:
    """Matches of a phase ordered by match order."""
    matches = [
        KnockoutMatch.from_dict(r)
        for r in store.query(ENTITY_KNOCKOUT_MATCHES, {"phase_id": phase_id})
    ]
    return sorted(matches, key=lambda m: m.match_order)
