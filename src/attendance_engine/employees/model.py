from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.types import EntityId


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as seen by the attendance engine.

    Note: Plain data only; shift binding is resolved in ``schedules.assignment``.
    """

    employee_id: EntityId
    full_name: str
    employee_code: Optional[str] = None
    designation: Optional[str] = None
    dept_id: Optional[EntityId] = None
    shift_id: Optional[EntityId] = None
    is_active: bool = True
