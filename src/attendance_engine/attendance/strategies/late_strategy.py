from __future__ import annotations

from ...core.enums import AttendanceStatus
from .normal_strategy import NormalStrategy


class LateStrategy(NormalStrategy):
    """Late check-in; hours and early departure are measured the same way."""

    status = AttendanceStatus.LATE
