"""Knockout bracket management.

This module creates the knockout phases, seeds the quarterfinals from the
group standings, records knockout results (with penalty shoot-outs) and
advances winners and losers through the bracket.
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

from typing import Dict, List, Optional, Tuple

from cupmanager.constants import (
    ENTITY_KNOCKOUT_MATCHES,
    ENTITY_KNOCKOUT_PHASES,
    KNOCKOUT_PHASES,
    PHASE_MATCH_COUNTS,
    PHASE_QUARTERFINALS,
    QUARTERFINAL_PAIRINGS,
)
from cupmanager.exceptions import (
    AdvancementFailure,
    KnockoutMatchNotReadyException,
    PhaseNotFoundException,
    WinnerAlreadyDecidedException,
)
from cupmanager.models import (
    KnockoutMatch,
    KnockoutOutcome,
    KnockoutPhase,
    PhaseView,
    SlotAssignment,
    TournamentConfig,
)
from cupmanager.store import Clock, Store
from cupmanager.tournament.bracket import BracketEdge, BracketTopology
from cupmanager.tournament.lookups import (
    get_groups,
    get_knockout_match,
    get_phase,
    get_phase_matches,
    get_phases,
    get_team,
    get_tournament,
)
from cupmanager.tournament.result_recorder import (
    KNOCKOUT_MATCH_KEY,
    MatchStatsWriter,
    parse_match_scorers,
)
from cupmanager.tournament.standings_calculator import StandingsCalculator
from cupmanager.tournament.write_sequence import WriteSequence
from cupmanager.type_hints import Seed, SeededPair
from cupmanager.utils import setup_logger
from cupmanager.utils.validation import (
    validate_penalties_strict,
    validate_scores_strict,
)

logger = setup_logger(__name__)


class KnockoutEngine:
    """Owns the bracket state of a tournament.

    This class is responsible for:
    - Creating the quarterfinal, semifinal, third-place and final phases
    - Seeding the quarterfinals with the cross pairing of group qualifiers
    - Recording knockout results, with penalties deciding drawn matches
    - Advancing winners (and semifinal losers) along the bracket topology
    """

    def __init__(
        self,
        store: Store,
        clock: Clock,
        config: Optional[TournamentConfig] = None,
        standings: Optional[StandingsCalculator] = None,
        stats_writer: Optional[MatchStatsWriter] = None,
        topology: Optional[BracketTopology] = None,
    ):
        self.store = store
        self.clock = clock
        self.config = config or TournamentConfig()
        self.standings = standings or StandingsCalculator(self.config, store)
        self.stats_writer = stats_writer or MatchStatsWriter(store, self.config)
        self.topology = topology or BracketTopology.standard()

    # ========== Phases ==========

    def phases_exist(self, tournament_id: str) -> bool:
        return bool(get_phases(self.store, tournament_id))

    def get_phase_by_type(self, tournament_id: str, phase_type: str) -> Optional[KnockoutPhase]:
        """First phase of the given type for a tournament, or None."""
        record = self.store.first(
            ENTITY_KNOCKOUT_PHASES,
            {"tournament_id": tournament_id, "phase_type": phase_type},
        )
        return KnockoutPhase.from_dict(record) if record else None

    def create_phases(self, tournament_id: str) -> List[PhaseView]:
        """Create all knockout phases of a tournament with empty matches.

        This does not check for existing phases: calling it twice creates a
        second set. Use :meth:`phases_exist` first, as
        :meth:`qualify_to_quarterfinals` does.

        Returns:
            The created phases with their matches
        """
        if self.phases_exist(tournament_id):
            logger.warning(
                f"Tournament {tournament_id} already has knockout phases; "
                "creating a duplicate set"
            )

        sequence = WriteSequence("create_phases")
        views = [
            sequence.step(f"create_{phase_type}", self._create_phase, tournament_id, phase_type)
            for phase_type in KNOCKOUT_PHASES
        ]
        logger.info(
            f"Created knockout phases for tournament {tournament_id}: "
            + ", ".join(f"{v.phase.phase_type} ({len(v.matches)})" for v in views)
        )
        return views

    def _create_phase(self, tournament_id: str, phase_type: str) -> PhaseView:
        phase = KnockoutPhase.from_dict(
            self.store.insert(
                ENTITY_KNOCKOUT_PHASES,
                {"tournament_id": tournament_id, "phase_type": phase_type},
            )
        )
        now = self.clock.now()
        matches = []
        for order in range(1, PHASE_MATCH_COUNTS[phase_type] + 1):
            empty = KnockoutMatch(id=None, phase_id=phase.id, match_order=order, updated_at=now)
            matches.append(
                KnockoutMatch.from_dict(self.store.insert(ENTITY_KNOCKOUT_MATCHES, empty.to_dict()))
            )
        return PhaseView(phase=phase, matches=matches)

    def get_knockout_phases(self, tournament_id: str) -> List[PhaseView]:
        """Phases of a tournament with their matches, in bracket order."""
        rank = {phase_type: index for index, phase_type in enumerate(KNOCKOUT_PHASES)}
        phases = sorted(
            get_phases(self.store, tournament_id),
            key=lambda p: rank.get(p.phase_type, len(rank)),
        )
        return [PhaseView(phase=p, matches=get_phase_matches(self.store, p.id)) for p in phases]

    # ========== Qualification ==========

    def group_seeds(self, tournament_id: str) -> Dict[Seed, str]:
        """Team id of every qualified group position, e.g. ``{("A", 1): team_id}``."""
        seeds: Dict[Seed, str] = {}
        for group in get_groups(self.store, tournament_id):
            standings = self.standings.group_standings(group.id)
            for position, row in enumerate(self.standings.qualified(standings), start=1):
                seeds[(group.label, position)] = row.team.id
        return seeds

    def qualify_to_quarterfinals(self, tournament_id: str) -> List[SeededPair]:
        """Seed the quarterfinals from the current group standings.

        Pairing: QF1 = 1A v 2B, QF2 = 1B v 2A, QF3 = 1C v 2D, QF4 = 1D v 2C.
        Pairs with an unresolved seed are skipped and keep their teams.
        Seeded teams are overwritten on every call.

        Returns:
            The (match_order, home_id, away_id) triples written

        Raises:
            TournamentNotFoundException: If the tournament does not exist
            PhaseNotFoundException: If no quarterfinal phase can be found
        """
        get_tournament(self.store, tournament_id)
        if not self.phases_exist(tournament_id):
            self.create_phases(tournament_id)

        seeds = self.group_seeds(tournament_id)
        phase = self.get_phase_by_type(tournament_id, PHASE_QUARTERFINALS)
        if phase is None:
            raise PhaseNotFoundException(
                f"Tournament {tournament_id} has no quarterfinal phase"
            )
        quarterfinals = {m.match_order: m for m in get_phase_matches(self.store, phase.id)}

        sequence = WriteSequence("qualify_to_quarterfinals")
        seeded: List[SeededPair] = []
        for order, (home_seed, away_seed) in enumerate(QUARTERFINAL_PAIRINGS, start=1):
            match = quarterfinals.get(order)
            home_id = seeds.get(home_seed)
            away_id = seeds.get(away_seed)
            if match is None:
                logger.warning(f"Quarterfinal {order} is missing; skipping")
                continue
            if home_id is None or away_id is None:
                logger.info(
                    f"Quarterfinal {order}: seeds {home_seed}/{away_seed} not resolved yet"
                )
                continue

            sequence.step(
                f"seed_quarterfinal_{order}",
                self.store.update,
                ENTITY_KNOCKOUT_MATCHES,
                match.id,
                {"home_id": home_id, "away_id": away_id, "updated_at": self.clock.now()},
            )
            seeded.append((order, home_id, away_id))

        logger.info(f"Seeded {len(seeded)} quarterfinal(s) for tournament {tournament_id}")
        return seeded

    # ========== Results ==========

    def decide_winner(
        self,
        match: KnockoutMatch,
        home_score: int,
        away_score: int,
        home_penalties: Optional[int],
        away_penalties: Optional[int],
    ) -> Tuple[str, str]:
        """Return (winner_id, loser_id) of a knockout match.

        Raises:
            PenaltiesRequiredException: Level score without decisive penalties
            InvalidPenaltiesException: Malformed penalties or penalties after a decided score
        """
        validate_penalties_strict(home_score, away_score, home_penalties, away_penalties)
        if home_score == away_score:
            home_wins = home_penalties > away_penalties
        else:
            home_wins = home_score > away_score
        if home_wins:
            return match.home_id, match.away_id
        return match.away_id, match.home_id

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
        """Record a knockout result and advance the teams.

        Everything is validated before the first write. The result is then
        stored with overwrite semantics and the teams are moved along the
        bracket. A destination that cannot be resolved does not undo the
        stored result; it is reported on the returned outcome.

        Args:
            match_id: Knockout match to record
            home_score: Regular-time goals of the home team
            away_score: Regular-time goals of the away team
            home_penalties: Shoot-out goals of the home team (drawn matches only)
            away_penalties: Shoot-out goals of the away team (drawn matches only)
            scorers_home_text: Home tally, e.g. ``"Rossi-2"``
            scorers_away_text: Away tally
            override: Allow a replay to change an already decided winner

        Returns:
            KnockoutOutcome with the stored match and the filled slots

        Raises:
            InvalidScoreException: If a score is not a non-negative integer
            PenaltiesRequiredException: If a level score has no decisive penalties
            InvalidPenaltiesException: If penalties are malformed or not allowed
            ScorerParseError: If a tally token has no player name
            MatchNotFoundException: If the match does not exist
            KnockoutMatchNotReadyException: If a team of the match is not known yet
            WinnerAlreadyDecidedException: If the winner would change without
                override, or a match fed by this one has already been played
            PartialWriteFailure: If a write step fails after the match was updated
        """
        validate_scores_strict(home_score, away_score)
        match = get_knockout_match(self.store, match_id)
        phase = get_phase(self.store, match.phase_id)

        if not match.is_ready:
            raise KnockoutMatchNotReadyException(
                f"{phase.display_name} match {match.match_order} has no opponents yet"
            )

        winner_id, loser_id = self.decide_winner(
            match, home_score, away_score, home_penalties, away_penalties
        )
        if match.winner_id is not None and match.winner_id != winner_id:
            if not override:
                raise WinnerAlreadyDecidedException(
                    f"{phase.display_name} match {match.match_order} was already won by "
                    f"{match.winner_id}; pass override=True to change the winner"
                )
            played = self.played_destinations(phase, match)
            if played:
                targets = ", ".join(str(edge.target) for edge in played)
                raise WinnerAlreadyDecidedException(
                    f"Cannot change the winner of {phase.display_name} match "
                    f"{match.match_order}: {targets} already played"
                )
            logger.warning(
                f"Overriding winner of {phase.display_name} match {match.match_order}: "
                f"{match.winner_id} -> {winner_id}"
            )

        home = get_team(self.store, match.home_id)
        away = get_team(self.store, match.away_id)
        entries = parse_match_scorers(
            home, away, scorers_home_text, scorers_away_text, (home_score, away_score)
        )
        penalties = (home_penalties, away_penalties) if home_score == away_score else (None, None)

        now = self.clock.now()
        sequence = WriteSequence("record_knockout_result")
        stored = KnockoutMatch.from_dict(
            sequence.step(
                "update_match",
                self.store.update,
                ENTITY_KNOCKOUT_MATCHES,
                match_id,
                {
                    "home_score": home_score,
                    "away_score": away_score,
                    "home_penalties": penalties[0],
                    "away_penalties": penalties[1],
                    "winner_id": winner_id,
                    "played_at": now,
                    "updated_at": now,
                },
            )
        )
        self.stats_writer.write(
            sequence,
            KNOCKOUT_MATCH_KEY,
            match_id,
            (home, away),
            (home_score, away_score),
            entries,
        )

        shootout = f" ({penalties[0]}-{penalties[1]} pens)" if penalties[0] is not None else ""
        logger.info(
            f"Recorded {phase.display_name} {match.match_order}: "
            f"{home.name} {home_score}-{away_score} {away.name}{shootout}"
        )

        outcome = KnockoutOutcome(match=stored, winner_id=winner_id, loser_id=loser_id)
        try:
            outcome.assignments = self.advance(phase, stored, winner_id, loser_id)
        except AdvancementFailure as e:
            logger.warning(str(e))
            outcome.advancement_error = e
        return outcome

    # ========== Advancement ==========

    def advance(
        self, phase: KnockoutPhase, match: KnockoutMatch, winner_id: str, loser_id: str
    ) -> List[SlotAssignment]:
        """Write the teams of a decided match into their downstream slots.

        Terminal matches (final, third place) have no outgoing edges and
        return an empty list. All destinations are resolved before any of
        them is written.

        Raises:
            AdvancementFailure: If a destination phase or match is missing or
                cannot be written
        """
        edges = self.topology.edges_from(phase.phase_type, match.match_order)
        if not edges:
            logger.debug(f"{phase.display_name} match {match.match_order} is terminal")
            return []

        destinations = [
            (edge, self._destination(phase, match, edge)) for edge in edges
        ]

        assignments = []
        now = self.clock.now()
        for edge, destination in destinations:
            team_id = winner_id if edge.outcome == "winner" else loser_id
            try:
                self.store.update(
                    ENTITY_KNOCKOUT_MATCHES,
                    destination.id,
                    {f"{edge.slot}_id": team_id, "updated_at": now},
                )
            except Exception as e:
                raise AdvancementFailure(
                    match.id, phase.phase_type, f"writing {edge.target} failed: {e}"
                ) from e
            assignments.append(
                SlotAssignment(
                    phase_type=edge.target.phase_type,
                    match_order=edge.target.match_order,
                    slot=edge.slot,
                    team_id=team_id,
                )
            )
            logger.info(f"Advanced {edge.outcome} {team_id} to {edge.target} ({edge.slot})")
        return assignments

    def played_destinations(self, phase: KnockoutPhase, match: KnockoutMatch) -> List[BracketEdge]:
        """Edges out of ``match`` whose destination match already has a result.

        Destinations that cannot be resolved are left to ``advance`` to report.
        """
        played = []
        for edge in self.topology.edges_from(phase.phase_type, match.match_order):
            try:
                destination = self._destination(phase, match, edge)
            except AdvancementFailure:
                continue
            if destination.is_played:
                played.append(edge)
        return played

    def _destination(
        self, phase: KnockoutPhase, match: KnockoutMatch, edge: BracketEdge
    ) -> KnockoutMatch:
        target_phase = self.get_phase_by_type(phase.tournament_id, edge.target.phase_type)
        if target_phase is None:
            raise AdvancementFailure(
                match.id, phase.phase_type, f"phase {edge.target.phase_type} does not exist"
            )
        record = self.store.first(
            ENTITY_KNOCKOUT_MATCHES,
            {"phase_id": target_phase.id, "match_order": edge.target.match_order},
        )
        if record is None:
            raise AdvancementFailure(match.id, phase.phase_type, f"match {edge.target} does not exist")
        return KnockoutMatch.from_dict(record)
