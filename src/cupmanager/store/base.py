"""Collaborator interfaces consumed by the tournament core.

The core never talks to a database directly. It reads and writes plain
``dict`` records through a :class:`Store` and stamps times from a
:class:`Clock`.
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

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional

from cupmanager.type_hints import Filters, Record, Records


class Store(ABC):
    """Entity storage used by every manager.

    Entity kinds are the ``ENTITY_*`` names in :mod:`cupmanager.constants`.
    Filters are equality matches on record fields. Implementations return
    copies, so callers may mutate the records they receive.
    """

    @abstractmethod
    def get(self, kind: str, record_id: str) -> Optional[Record]:
        """Return the record with ``record_id`` or None."""

    @abstractmethod
    def query(self, kind: str, filters: Filters = None) -> Records:
        """Return all records matching ``filters``, in insertion order."""

    @abstractmethod
    def insert(self, kind: str, record: Record) -> Record:
        """Store ``record`` and return it with its id set."""

    @abstractmethod
    def update(self, kind: str, record_id: str, partial: Record) -> Record:
        """Merge ``partial`` into an existing record and return the result."""

    @abstractmethod
    def delete(self, kind: str, filters: Filters) -> int:
        """Delete all records matching ``filters`` and return how many went."""

    def first(self, kind: str, filters: Filters = None) -> Optional[Record]:
        """Return the first record matching ``filters`` or None."""
        records = self.query(kind, filters)
        return records[0] if records else None


class Clock(ABC):
    """Source of the timestamps written into records."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time."""


class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock that only moves when told to; used by tests and the simulator."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self._now = start or datetime(2025, 6, 1, 18, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta = timedelta(hours=1)) -> datetime:
        """Move the clock forward and return the new time."""
        self._now = self._now + delta
        return self._now
