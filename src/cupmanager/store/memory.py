"""In-memory and JSON-file implementations of the Store interface."""

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

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from cupmanager.constants import ENTITY_KINDS, SAVE_FILE_EXTENSION
from cupmanager.exceptions import (
    FileLoadException,
    FileSaveException,
    RecordNotFoundException,
    UnknownEntityKindException,
)
from cupmanager.store.base import Store
from cupmanager.type_hints import Filters, Record, Records
from cupmanager.utils import (
    format_timestamp,
    generate_id,
    parse_timestamp,
    setup_logger,
)

logger = setup_logger(__name__)


def _matches(record: Record, filters: Filters) -> bool:
    if not filters:
        return True
    return all(record.get(key) == value for key, value in filters.items())


class InMemoryStore(Store):
    """Store keeping every entity kind in an insertion-ordered dict.

    Records are deep-copied on the way in and out so no caller can alter
    stored state without going through :meth:`update`.
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[str, Record]] = {kind: {} for kind in ENTITY_KINDS}

    def _table(self, kind: str) -> Dict[str, Record]:
        try:
            return self._tables[kind]
        except KeyError:
            raise UnknownEntityKindException(f"Unknown entity kind: {kind}") from None

    def get(self, kind: str, record_id: str) -> Optional[Record]:
        record = self._table(kind).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def query(self, kind: str, filters: Filters = None) -> Records:
        return [
            copy.deepcopy(record)
            for record in self._table(kind).values()
            if _matches(record, filters)
        ]

    def insert(self, kind: str, record: Record) -> Record:
        table = self._table(kind)
        stored = copy.deepcopy(record)
        if stored.get("id") is None:
            stored["id"] = generate_id()
        table[stored["id"]] = stored
        logger.debug(f"Inserted {kind}/{stored['id']}")
        return copy.deepcopy(stored)

    def update(self, kind: str, record_id: str, partial: Record) -> Record:
        table = self._table(kind)
        if record_id not in table:
            raise RecordNotFoundException(f"No {kind} record with id {record_id}")
        table[record_id].update(copy.deepcopy(partial))
        table[record_id]["id"] = record_id
        return copy.deepcopy(table[record_id])

    def delete(self, kind: str, filters: Filters) -> int:
        table = self._table(kind)
        doomed = [rid for rid, record in table.items() if _matches(record, filters)]
        for record_id in doomed:
            del table[record_id]
        if doomed:
            logger.debug(f"Deleted {len(doomed)} {kind} record(s) matching {filters}")
        return len(doomed)

    def count(self, kind: str, filters: Filters = None) -> int:
        return sum(1 for record in self._table(kind).values() if _matches(record, filters))

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize every table to JSON-compatible dictionaries."""
        return {
            kind: [
                {key: _encode(key, value) for key, value in record.items()}
                for record in table.values()
            ]
            for kind, table in self._tables.items()
        }

    def load_dict(self, data: Dict[str, Any]) -> None:
        """Replace the store contents with serialized tables."""
        tables: Dict[str, Dict[str, Record]] = {kind: {} for kind in ENTITY_KINDS}
        for kind, records in data.items():
            if kind not in tables:
                raise UnknownEntityKindException(f"Unknown entity kind: {kind}")
            for record in records:
                decoded = {key: _decode(key, value) for key, value in record.items()}
                tables[kind][decoded["id"]] = decoded
        self._tables = tables


def _encode(key: str, value: Any) -> Any:
    return format_timestamp(value) if key.endswith("_at") else value


def _decode(key: str, value: Any) -> Any:
    return parse_timestamp(value) if key.endswith("_at") else value


class JsonFileStore(InMemoryStore):
    """In-memory store written through to a JSON file after every change."""

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__()
        path = Path(path)
        if not path.suffix:
            path = path.with_suffix(SAVE_FILE_EXTENSION)
        self.path = path
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                self.load_dict(json.load(f))
        except (OSError, ValueError) as e:
            raise FileLoadException(f"Cannot load store file {self.path}: {e}") from e
        logger.info(f"Loaded store from {self.path}")

    def save(self) -> None:
        """Write the whole store to disk.

        The data goes to a sibling temporary file first, which then replaces
        the save file, so a failed write leaves the previous save intact.
        """
        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
            temp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            temp_path.unlink(missing_ok=True)
            raise FileSaveException(f"Cannot save store file {self.path}: {e}") from e

    def insert(self, kind: str, record: Record) -> Record:
        stored = super().insert(kind, record)
        self.save()
        return stored

    def update(self, kind: str, record_id: str, partial: Record) -> Record:
        stored = super().update(kind, record_id, partial)
        self.save()
        return stored

    def delete(self, kind: str, filters: Filters) -> int:
        deleted = super().delete(kind, filters)
        if deleted:
            self.save()
        return deleted
