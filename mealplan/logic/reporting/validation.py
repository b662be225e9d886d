"""Plan validation: coverage statistics and invariant checks for a WeeklyPlan.

validate_plan(plan, profile) never mutates its inputs. Duplicate ids, same-day
duplicates and slot violations should always come back empty; anything else
means the assigner is broken.
"""
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Tuple

from mealplan.domain.NeedsProfile import NeedsProfile
from mealplan.domain.WeeklyPlan import WeeklyPlan
from mealplan.utilities.constants import DAYS, SLOT_POSITIONS

__all__ = ["ValidationReport", "validate_plan"]


@dataclass
class ValidationReport:
    total_cells: int
    filled_cells: int
    unfilled_cells: int
    media_cells: int
    media_coverage_percentage: float
    media_coverage_target: float
    meets_media_target: bool
    pool_cells: int = 0
    generated_cells: int = 0
    duplicate_ids: List[str] = field(default_factory=list)
    same_day_duplicates: List[Tuple[str, str]] = field(default_factory=list)
    slot_violations: List[Tuple[str, str]] = field(default_factory=list)
    unfillable: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return (self.meets_media_target and not self.duplicate_ids
                and not self.same_day_duplicates and not self.slot_violations)

    def filled_for(self, slot_position: str) -> int:
        return len(DAYS) - sum(1 for _, slot in self.unfillable if slot == slot_position)

    def to_dict(self):
        return {
            "total_cells": self.total_cells,
            "filled_cells": self.filled_cells,
            "unfilled_cells": self.unfilled_cells,
            "media_cells": self.media_cells,
            "media_coverage_percentage": self.media_coverage_percentage,
            "media_coverage_target": self.media_coverage_target,
            "meets_media_target": self.meets_media_target,
            "pool_cells": self.pool_cells,
            "generated_cells": self.generated_cells,
            "duplicate_ids": list(self.duplicate_ids),
            "same_day_duplicates": [list(x) for x in self.same_day_duplicates],
            "slot_violations": [list(x) for x in self.slot_violations],
            "unfillable": [list(x) for x in self.unfillable],
            "passed": self.passed,
        }


def validate_plan(plan: WeeklyPlan, profile: NeedsProfile) -> ValidationReport:
    total = len(DAYS) * len(SLOT_POSITIONS)
    assignments = list(plan.assignments())
    filled = len(assignments)
    media = sum(1 for a in assignments if a.candidate.has_media)
    generated = sum(1 for a in assignments if a.candidate.is_generated)

    counts = Counter(a.candidate_id for a in assignments)
    duplicate_ids = sorted(cid for cid, n in counts.items() if n > 1)

    same_day: List[Tuple[str, str]] = []
    for day in DAYS:
        day_counts = Counter(a.candidate_id for a in plan.meals[day].values() if a is not None)
        same_day.extend((day, cid) for cid, n in sorted(day_counts.items()) if n > 1)

    # cross_slot cells are an explicit opt-in and not counted as violations
    violations = [(a.day, a.slot_position) for a in assignments
                  if a.tier != "cross_slot" and not a.candidate.is_compatible_with(a.slot_position)]

    unfillable = [(day, slot) for day in DAYS for slot in SLOT_POSITIONS if plan.meals[day][slot] is None]

    coverage = media / filled if filled else 0.0
    return ValidationReport(
        total_cells=total,
        filled_cells=filled,
        unfilled_cells=total - filled,
        media_cells=media,
        media_coverage_percentage=(media / filled) * 100 if filled else 0.0,
        media_coverage_target=profile.media_coverage_target,
        meets_media_target=coverage >= profile.media_coverage_target,
        pool_cells=filled - generated,
        generated_cells=generated,
        duplicate_ids=duplicate_ids,
        same_day_duplicates=same_day,
        slot_violations=violations,
        unfillable=unfillable,
    )
