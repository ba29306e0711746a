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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"

# Match outcome points
WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0

# Tournament shape
GROUP_LABELS = ("A", "B", "C", "D")
TEAMS_PER_GROUP = 4
TEAM_COUNT = len(GROUP_LABELS) * TEAMS_PER_GROUP
QUALIFIERS_PER_GROUP = 2

# Roster limits
MAX_ROSTER_SIZE = 10
MAX_FIGC_PLAYERS = 3

# FIGC eligibility categories
FIGC_PRIMA_CATEGORIA_PLUS = "prima_categoria_plus"
FIGC_CALCIO_A_5 = "calcio_a_5"
FIGC_PROFESSIONAL_ABROAD = "professional_abroad"
FIGC_CATEGORIES = (
    FIGC_PRIMA_CATEGORIA_PLUS,
    FIGC_CALCIO_A_5,
    FIGC_PROFESSIONAL_ABROAD,
)

# Auto-generated names
PLACEHOLDER_TEAM_PREFIX = "Sq"
GOALKEEPER_NAME_PREFIX = "P1_"

# Scorer mini-format separators ("Rossi-2;Verdi-1")
SCORER_TOKEN_SEPARATOR = ";"
SCORER_GOALS_SEPARATOR = "-"

# Knockout phases
PHASE_QUARTERFINALS = "quarterfinals"
PHASE_SEMIFINALS = "semifinals"
PHASE_THIRD_PLACE = "third_place"
PHASE_FINAL = "final"

# Creation order of the phases
KNOCKOUT_PHASES = (
    PHASE_QUARTERFINALS,
    PHASE_SEMIFINALS,
    PHASE_THIRD_PLACE,
    PHASE_FINAL,
)

PHASE_MATCH_COUNTS = {
    PHASE_QUARTERFINALS: 4,
    PHASE_SEMIFINALS: 2,
    PHASE_THIRD_PLACE: 1,
    PHASE_FINAL: 1,
}

PHASE_NAMES = {
    PHASE_QUARTERFINALS: "Quarterfinals",
    PHASE_SEMIFINALS: "Semifinals",
    PHASE_THIRD_PLACE: "Third Place",
    PHASE_FINAL: "Final",
}

# Quarterfinal cross pairing: (home group, home position), (away group, away position)
QUARTERFINAL_PAIRINGS = (
    (("A", 1), ("B", 2)),
    (("B", 1), ("A", 2)),
    (("C", 1), ("D", 2)),
    (("D", 1), ("C", 2)),
)

# Bracket slots
SLOT_HOME = "home"
SLOT_AWAY = "away"

# Store entity kinds
ENTITY_TOURNAMENTS = "tournaments"
ENTITY_GROUPS = "groups"
ENTITY_TEAMS = "teams"
ENTITY_PARTICIPATIONS = "participations"
ENTITY_MATCHES = "matches"
ENTITY_SCORERS = "scorers"
ENTITY_GOALKEEPERS = "goalkeepers"
ENTITY_GOALKEEPER_STATS = "goalkeeper_stats"
ENTITY_KNOCKOUT_PHASES = "knockout_phases"
ENTITY_KNOCKOUT_MATCHES = "knockout_matches"
ENTITY_PLAYERS = "players"
ENTITY_TEAM_ROSTERS = "team_rosters"

ENTITY_KINDS = (
    ENTITY_TOURNAMENTS,
    ENTITY_GROUPS,
    ENTITY_TEAMS,
    ENTITY_PARTICIPATIONS,
    ENTITY_MATCHES,
    ENTITY_SCORERS,
    ENTITY_GOALKEEPERS,
    ENTITY_GOALKEEPER_STATS,
    ENTITY_KNOCKOUT_PHASES,
    ENTITY_KNOCKOUT_MATCHES,
    ENTITY_PLAYERS,
    ENTITY_TEAM_ROSTERS,
)

# Standings tiebreak keys
TB_POINTS = "points"
TB_HEAD_TO_HEAD = "h2h"  # Registered, not yet decided
TB_GOAL_DIFFERENCE = "goal_difference"
TB_GOALS_FOR = "goals_for"
TB_GOALS_AGAINST = "goals_against"
TB_CARDS = "cards"  # Reserved, always 0
TB_TEAM_NAME = "team_name"  # Stands in for the draw

TIEBREAK_NAMES = {
    TB_POINTS: "Points",
    TB_HEAD_TO_HEAD: "Head-to-Head",
    TB_GOAL_DIFFERENCE: "Goal Difference",
    TB_GOALS_FOR: "Goals Scored",
    TB_GOALS_AGAINST: "Goals Conceded",
    TB_CARDS: "Discipline",
    TB_TEAM_NAME: "Draw (Team Name)",
}

DEFAULT_TIEBREAK_ORDER = [
    TB_POINTS,
    TB_HEAD_TO_HEAD,
    TB_GOAL_DIFFERENCE,
    TB_GOALS_FOR,
    TB_GOALS_AGAINST,
    TB_CARDS,
    TB_TEAM_NAME,
]
