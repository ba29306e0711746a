import pytest

from cupmanager.store import FixedClock, InMemoryStore
from cupmanager.tournament import Cup


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def cup(store, clock):
    return Cup(store, clock)


@pytest.fixture
def tournament(cup):
    return cup.create_tournament("Test Cup", 2025)


@pytest.fixture
def groups(cup, tournament):
    """Groups of the test tournament keyed by label."""
    return {group.label: group for group in cup.get_groups(tournament.id)}


@pytest.fixture
def team_ids(cup, groups):
    """Team ids keyed by team name."""
    return {
        team.name: team.id
        for group in groups.values()
        for team in cup.get_teams_in_group(group.id)
    }


@pytest.fixture
def play_groups(cup, groups):
    """Play every group match so that teams finish in insertion order.

    The team listed first in a group beats everyone, the second beats the
    last two and so on, each time 1-0. Group A then ends Sq1, Sq2, Sq3, Sq4.
    """

    def play():
        for group in groups.values():
            rank = {t.id: i for i, t in enumerate(cup.get_teams_in_group(group.id))}
            for match in cup.get_matches_for_group(group.id):
                if rank[match.home_id] < rank[match.away_id]:
                    cup.record_group_result(match.id, 1, 0)
                else:
                    cup.record_group_result(match.id, 0, 1)

    return play


@pytest.fixture
def knockout_match(cup, tournament):
    """Fresh read of a knockout match by phase type and match order."""

    def find(phase_type, order):
        for view in cup.get_knockout_phases(tournament.id):
            if view.phase.phase_type == phase_type:
                return next(m for m in view.matches if m.match_order == order)
        raise LookupError(phase_type)

    return find
