from __future__ import annotations

from ..model import MusterSummary
from .base import PayableDaysCalculator


class StandardPayableDaysCalculator(PayableDaysCalculator):
    """Standard rule: present + half of half days + leaves + holidays + week offs."""

    def total_payable(self, summary: MusterSummary) -> float:
        return summary.present + summary.half_day * 0.5 + summary.leaves + summary.holidays + summary.week_off
