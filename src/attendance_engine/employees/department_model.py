from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.types import EntityId


@dataclass(frozen=True)
class Department:
    dept_id: EntityId
    dept_name: str
    default_shift_id: Optional[EntityId] = None
