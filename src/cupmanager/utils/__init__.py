"""Shared helpers for Cup Manager."""

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

import logging
import uuid
from datetime import datetime
from typing import Optional, Union

from dateutil.parser import isoparse

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Return a module logger with a single stream handler attached.

    Args:
        name: Logger name, normally ``__name__`` of the calling module
        level: Logging level for the logger

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger


def generate_id(prefix: str = "") -> str:
    """Generate a unique record id, optionally prefixed with an entity name."""
    unique = uuid.uuid4().hex
    return f"{prefix.lower()}_{unique}" if prefix else unique


def parse_timestamp(value: Optional[Union[str, datetime]]) -> Optional[datetime]:
    """Return a datetime for a stored timestamp (ISO 8601 text or datetime)."""
    if value is None or isinstance(value, datetime):
        return value
    return isoparse(value)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Return the ISO 8601 text form of a timestamp, or None."""
    return value.isoformat() if value is not None else None
