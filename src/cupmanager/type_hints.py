"""Type hints used in Cup Manager."""

from typing import Any, Dict, List, Literal, Optional, Tuple

# Knockout phase type literals
PhaseType = Literal["quarterfinals", "semifinals", "third_place", "final"]

# Bracket slot of a knockout match
Slot = Literal["home", "away"]

# Which team of a decided match moves on through a bracket edge
Outcome = Literal["winner", "loser"]

# Group label literals
GroupLabel = Literal["A", "B", "C", "D"]

# A plain store record and a store equality filter
Record = Dict[str, Any]
Filters = Optional[Dict[str, Any]]
Records = List[Record]

# Seeding position inside a group, e.g. ("A", 1)
Seed = Tuple[str, int]
# (match_order, home_team_id, away_team_id) written into a quarterfinal
SeededPair = Tuple[int, str, str]
