"""Parser for the free-text goal tally format ("Rossi-2;Verdi-1")."""

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

from typing import List, Optional

from cupmanager.constants import SCORER_GOALS_SEPARATOR, SCORER_TOKEN_SEPARATOR
from cupmanager.exceptions import ScorerParseError
from cupmanager.models.match import ScorerEntry
from cupmanager.utils import setup_logger

logger = setup_logger(__name__)


def parse_scorers(text: Optional[str], team_id: str) -> List[ScorerEntry]:
    """Parse a goal tally into scorer entries for one team.

    Tokens are separated by ``;`` and split on their first ``-`` into a
    player name and a goal count. Surrounding whitespace is ignored, as are
    empty tokens. A token whose count is not a positive integer is dropped.

    Args:
        text: The tally, e.g. ``"Rossi-2; Verdi-1"``. None or blank gives []
        team_id: Team the goals are credited to

    Returns:
        Entries in the order they appear in ``text``

    Raises:
        ScorerParseError: If a token has no ``-`` or an empty player name

    Example:
        >>> [(e.player_name, e.goals) for e in parse_scorers("Rossi-0;Verdi-1", "t1")]
        [('Verdi', 1)]
    """
    if text is None or not text.strip():
        return []

    entries: List[ScorerEntry] = []
    for position, token in enumerate(text.split(SCORER_TOKEN_SEPARATOR), start=1):
        token = token.strip()
        if not token:
            continue

        name, separator, goals_text = token.partition(SCORER_GOALS_SEPARATOR)
        name = name.strip()
        if not separator or not name:
            raise ScorerParseError(
                f"Scorer token {position} ('{token}') has no player name; "
                f"expected Name{SCORER_GOALS_SEPARATOR}Goals"
            )

        try:
            goals = int(goals_text.strip())
        except ValueError:
            logger.debug(f"Dropping scorer token '{token}': goal count is not a number")
            continue

        if goals <= 0:
            logger.debug(f"Dropping scorer token '{token}': goal count {goals} <= 0")
            continue

        entries.append(ScorerEntry(team_id=team_id, player_name=name, goals=goals))

    return entries


def total_goals(entries: List[ScorerEntry]) -> int:
    """Sum of the goals in ``entries``."""
    return sum(entry.goals for entry in entries)
