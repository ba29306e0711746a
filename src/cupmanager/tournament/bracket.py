"""Bracket topology as an explicit graph.

Every knockout match is a node. An edge says which team of a decided match
(winner or loser) is written into which slot of which downstream match.
Advancement is a lookup of the outgoing edges of the match just played.
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

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from cupmanager.constants import (
    PHASE_FINAL,
    PHASE_MATCH_COUNTS,
    PHASE_QUARTERFINALS,
    PHASE_SEMIFINALS,
    PHASE_THIRD_PLACE,
    SLOT_AWAY,
    SLOT_HOME,
)
from cupmanager.exceptions import InvalidConfigurationException


@dataclass(frozen=True)
class BracketNode:
    phase_type: str
    match_order: int

    def __str__(self) -> str:
        return f"{self.phase_type}#{self.match_order}"


@dataclass(frozen=True)
class BracketEdge:
    """``outcome`` ("winner" or "loser") of ``source`` fills ``slot`` of ``target``."""

    source: BracketNode
    outcome: str
    target: BracketNode
    slot: str


class BracketTopology:
    """Directed graph of knockout matches.

    Args:
        phase_sizes: Number of matches per phase type
        edges: Advancement edges between matches of those phases

    Raises:
        InvalidConfigurationException: If an edge references a missing match
            or two edges feed the same slot
    """

    def __init__(self, phase_sizes: Dict[str, int], edges: Iterable[BracketEdge]) -> None:
        self.phase_sizes = dict(phase_sizes)
        self.edges: List[BracketEdge] = list(edges)
        self._outgoing: Dict[BracketNode, List[BracketEdge]] = {}
        self._validate()
        for edge in self.edges:
            self._outgoing.setdefault(edge.source, []).append(edge)

    def _validate(self) -> None:
        nodes = set(self.nodes)
        fed: Dict[Tuple[BracketNode, str], BracketEdge] = {}
        for edge in self.edges:
            for node in (edge.source, edge.target):
                if node not in nodes:
                    raise InvalidConfigurationException(f"Bracket edge references unknown match {node}")
            if edge.slot not in (SLOT_HOME, SLOT_AWAY):
                raise InvalidConfigurationException(f"Unknown bracket slot: {edge.slot}")
            key = (edge.target, edge.slot)
            if key in fed:
                raise InvalidConfigurationException(
                    f"Slot {edge.slot} of {edge.target} is fed by both "
                    f"{fed[key].source} and {edge.source}"
                )
            fed[key] = edge

    @property
    def nodes(self) -> List[BracketNode]:
        return [
            BracketNode(phase_type, order)
            for phase_type, size in self.phase_sizes.items()
            for order in range(1, size + 1)
        ]

    def edges_from(self, phase_type: str, match_order: int) -> List[BracketEdge]:
        """Outgoing edges of a match; empty for terminal matches."""
        return list(self._outgoing.get(BracketNode(phase_type, match_order), []))

    def feeder(self, phase_type: str, match_order: int, slot: str) -> Optional[BracketEdge]:
        """The edge that fills ``slot`` of a match, if any."""
        target = BracketNode(phase_type, match_order)
        for edge in self.edges:
            if edge.target == target and edge.slot == slot:
                return edge
        return None

    def is_terminal(self, phase_type: str, match_order: int) -> bool:
        return not self._outgoing.get(BracketNode(phase_type, match_order))

    @classmethod
    def standard(cls) -> "BracketTopology":
        """The eight-team bracket.

        Quarterfinal n feeds semifinal ceil(n/2), home slot for odd n and
        away slot for even n. Semifinal 1 feeds the home slots of the final
        (winner) and third-place match (loser); semifinal 2 feeds the away
        slots.
        """
        edges = []
        for order in range(1, PHASE_MATCH_COUNTS[PHASE_QUARTERFINALS] + 1):
            edges.append(
                BracketEdge(
                    source=BracketNode(PHASE_QUARTERFINALS, order),
                    outcome="winner",
                    target=BracketNode(PHASE_SEMIFINALS, math.ceil(order / 2)),
                    slot=SLOT_HOME if order % 2 == 1 else SLOT_AWAY,
                )
            )
        for order in range(1, PHASE_MATCH_COUNTS[PHASE_SEMIFINALS] + 1):
            slot = SLOT_HOME if order == 1 else SLOT_AWAY
            source = BracketNode(PHASE_SEMIFINALS, order)
            edges.append(BracketEdge(source, "winner", BracketNode(PHASE_FINAL, 1), slot))
            edges.append(BracketEdge(source, "loser", BracketNode(PHASE_THIRD_PLACE, 1), slot))
        return cls(PHASE_MATCH_COUNTS, edges)
