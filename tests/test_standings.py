import pytest

from cupmanager.constants import (
    TB_GOALS_AGAINST,
    TB_HEAD_TO_HEAD,
    TB_POINTS,
    TB_TEAM_NAME,
)
from cupmanager.exceptions import InvalidConfigurationException
from cupmanager.models import Match, Team, TournamentConfig
from cupmanager.tournament.standings_calculator import StandingsCalculator

A = Team(id="a", name="Alpha")
B = Team(id="b", name="Bravo")
C = Team(id="c", name="Charlie")
D = Team(id="d", name="Delta")
TEAMS = [A, B, C, D]


def _match(home, away, home_score=None, away_score=None, match_id=None):
    return Match(
        id=match_id or f"{home.id}{away.id}",
        group_id="g",
        home_id=home.id,
        away_id=away.id,
        match_day=1,
        home_score=home_score,
        away_score=away_score,
    )


def _names(standings):
    return [row.team.name for row in standings]


def test_unplayed_group_is_ordered_by_name():
    calculator = StandingsCalculator()
    standings = calculator.calculate([D, B, C, A], [_match(A, B), _match(C, D)])
    assert _names(standings) == ["Alpha", "Bravo", "Charlie", "Delta"]
    assert all(row.played == 0 and row.points == 0 for row in standings)


def test_points_and_totals():
    calculator = StandingsCalculator()
    matches = [_match(A, B, 2, 0), _match(C, D, 1, 1), _match(A, C, 0, 3)]
    rows = {row.team.id: row for row in calculator.calculate(TEAMS, matches)}

    assert (rows["a"].won, rows["a"].lost, rows["a"].points) == (1, 1, 3)
    assert (rows["c"].won, rows["c"].drawn, rows["c"].points) == (1, 1, 4)
    assert rows["d"].points == 1
    assert rows["b"].points == 0
    assert rows["a"].goals_for == 2 and rows["a"].goals_against == 3
    assert rows["a"].goal_difference == -1
    assert rows["c"].cards == 0


def test_goal_difference_breaks_points_tie():
    matches = [_match(A, C, 3, 0), _match(B, D, 1, 0)]
    standings = StandingsCalculator().calculate(TEAMS, matches)
    assert _names(standings) == ["Alpha", "Bravo", "Delta", "Charlie"]


def test_goals_for_breaks_goal_difference_tie():
    matches = [_match(B, D, 2, 0), _match(A, C, 3, 1)]
    standings = StandingsCalculator().calculate(TEAMS, matches)
    assert _names(standings) == ["Alpha", "Bravo", "Charlie", "Delta"]


def test_name_then_id_makes_the_order_total():
    twin1 = Team(id="z1", name="Same")
    twin2 = Team(id="a1", name="Same")
    standings = StandingsCalculator().calculate([twin1, twin2], [])
    assert [row.team.id for row in standings] == ["a1", "z1"]


def test_unplayed_and_foreign_matches_are_ignored():
    outsider = Team(id="x", name="Outsider")
    matches = [_match(A, B), _match(A, outsider, 5, 0), _match(C, D, 0, 2)]
    rows = {row.team.id: row for row in StandingsCalculator().calculate(TEAMS, matches)}
    assert rows["a"].played == 0
    assert rows["d"].points == 3
    assert "x" not in rows


def test_calculation_is_repeatable():
    calculator = StandingsCalculator()
    matches = [_match(A, B, 1, 1), _match(C, D, 0, 0), _match(A, C, 2, 2)]
    first = [row.to_dict() for row in calculator.calculate(TEAMS, matches)]
    second = [row.to_dict() for row in calculator.calculate(list(reversed(TEAMS)), matches)]
    assert first == second


def test_configured_points():
    config = TournamentConfig(win_points=2, draw_points=1, loss_points=0)
    matches = [_match(A, B, 1, 0), _match(C, D, 0, 0)]
    rows = {row.team.id: row for row in StandingsCalculator(config).calculate(TEAMS, matches)}
    assert rows["a"].points == 2
    assert rows["c"].points == 1


def test_configured_tiebreak_order():
    config = TournamentConfig(tiebreak_order=[TB_POINTS, TB_GOALS_AGAINST, TB_TEAM_NAME])
    matches = [_match(A, C, 3, 1), _match(B, D, 1, 0)]
    standings = StandingsCalculator(config).calculate(TEAMS, matches)
    assert _names(standings)[:2] == ["Bravo", "Alpha"]


def test_head_to_head_step_is_registered_but_neutral():
    calculator = StandingsCalculator()
    keys = [step.key for step in calculator.tiebreak_steps]
    assert keys[0] == TB_POINTS
    assert TB_HEAD_TO_HEAD in keys
    assert keys[-1] == TB_TEAM_NAME

    # Bravo beat Alpha, but goal difference still decides
    matches = [_match(B, A, 1, 0), _match(A, C, 4, 0), _match(C, D, 0, 0)]
    standings = StandingsCalculator().calculate(TEAMS, matches)
    assert _names(standings)[:2] == ["Alpha", "Bravo"]


def test_registered_head_to_head_comparator_is_used():
    def winner_of_direct_match(a, b, context):
        for match in context.matches:
            if {match.home_id, match.away_id} == {a.team.id, b.team.id}:
                a_goals = match.home_score if match.home_id == a.team.id else match.away_score
                b_goals = match.away_score if match.home_id == a.team.id else match.home_score
                return b_goals - a_goals
        return 0

    calculator = StandingsCalculator()
    calculator.register_tiebreak(TB_HEAD_TO_HEAD, winner_of_direct_match)
    matches = [_match(B, A, 1, 0), _match(A, C, 4, 0), _match(C, D, 0, 0)]
    standings = calculator.calculate(TEAMS, matches)
    assert _names(standings)[:2] == ["Bravo", "Alpha"]


def test_register_unknown_tiebreak_raises():
    with pytest.raises(InvalidConfigurationException):
        StandingsCalculator().register_tiebreak("coin_toss", lambda a, b, c: 0)


def test_qualified_returns_top_two():
    matches = [_match(A, C, 3, 0), _match(B, D, 1, 0)]
    calculator = StandingsCalculator()
    top = calculator.qualified(calculator.calculate(TEAMS, matches))
    assert _names(top) == ["Alpha", "Bravo"]


def test_head_to_head_record():
    matches = [_match(A, B, 2, 1, "m1"), _match(B, A, 1, 1, "m2"), _match(A, C, 5, 0)]
    record = StandingsCalculator().head_to_head("a", "b", matches)
    assert (record.team1_points, record.team2_points) == (4, 1)
    assert (record.team1_goals, record.team2_goals) == (3, 2)


def test_group_standings_need_a_store():
    with pytest.raises(InvalidConfigurationException):
        StandingsCalculator().group_standings("g")


def test_group_standings_from_store(cup, groups):
    group = groups["A"]
    match = cup.get_matches_for_group(group.id)[0]
    cup.record_group_result(match.id, 0, 2)

    standings = cup.get_group_standings(group.id)
    assert len(standings) == 4
    assert standings[0].team.id == match.away_id
    assert standings[0].points == 3


def test_team_beating_everyone_ranks_first_despite_goal_difference():
    matches = [
        _match(A, B, 1, 0),
        _match(A, C, 1, 0),
        _match(D, A, 0, 1),
        _match(B, C, 6, 0),
        _match(B, D, 0, 0),
        _match(C, D, 1, 1),
    ]
    standings = StandingsCalculator().calculate(TEAMS, matches)
    rows = {row.team.id: row for row in standings}

    assert rows["a"].goal_difference < rows["b"].goal_difference
    assert _names(standings) == ["Alpha", "Bravo", "Delta", "Charlie"]
    assert (rows["a"].points, rows["b"].points) == (9, 4)
