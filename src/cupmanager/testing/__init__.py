"""Testing module for Cup Manager.

This module provides:
- Random Cup Generator (RCG)
- A unified testing CLI: cup-test
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

from cupmanager.testing.rtg import (
    RandomCupGenerator,
    RCGConfig,
    ResultPattern,
    ResultSimulator,
    TeamFactory,
)

__all__ = [
    "RandomCupGenerator",
    "RCGConfig",
    "ResultPattern",
    "ResultSimulator",
    "TeamFactory",
]
