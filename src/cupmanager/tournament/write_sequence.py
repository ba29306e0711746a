"""Step lists for multi-record writes.

The store gives no multi-row transactions. Every write operation therefore
runs as a named list of steps with a cursor of the steps already committed.
When a step fails after others were committed, the caller receives a
:class:`~cupmanager.exceptions.PartialWriteFailure` naming the failing step
and the committed ones, so the operation can be reconciled or retried.
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

from typing import Any, Callable, List, Optional

from cupmanager.exceptions import PartialWriteFailure
from cupmanager.utils import setup_logger

logger = setup_logger(__name__)


class WriteSequence:
    """Runs the write steps of one operation in order.

    Example:
        >>> sequence = WriteSequence("record_group_result")
        >>> sequence.step("update_match", lambda: None)
        >>> sequence.completed_steps
        ['update_match']
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        self.completed_steps: List[str] = []
        self.current_step: Optional[str] = None

    @property
    def last_completed(self) -> Optional[str]:
        return self.completed_steps[-1] if self.completed_steps else None

    def step(self, name: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run one step and record it as committed.

        A failure before any step committed is re-raised unchanged, since
        nothing needs reconciling. A later failure is wrapped.

        Raises:
            PartialWriteFailure: If the step fails after earlier steps committed
        """
        self.current_step = name
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            if not self.completed_steps:
                raise
            logger.error(
                f"{self.operation}: step '{name}' failed after "
                f"{self.completed_steps} committed: {e}"
            )
            raise PartialWriteFailure(
                self.operation, name, self.completed_steps, cause=e
            ) from e
        finally:
            self.current_step = None

        self.completed_steps.append(name)
        logger.debug(f"{self.operation}: step '{name}' committed")
        return result
