from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.types import EntityId
from .model import RawPunch


class PunchRepository(Protocol):
    def list_range(self, *, start: date, end: date, employee_id: Optional[EntityId] = None) -> Sequence[RawPunch]:
        raise NotImplementedError


class LeaveRepository(Protocol):
    def list_approved(
        self, *, start: date, end: date, employee_id: Optional[EntityId] = None
    ) -> Sequence[tuple[EntityId, date]]:
        """(employee_id, date) pairs covered by approved leave."""

        raise NotImplementedError
