"""WeeklyPlan domain entity: 7 days x 4 slot positions, each cell a MealAssignment or empty."""
from typing import Dict, Iterator, List, Optional

from mealplan.domain.Candidate import MealCandidate
from mealplan.utilities.constants import DAYS, SLOT_POSITIONS
from mealplan.utilities.errors import UnfillableSlotWarning


class MealAssignment:
    def __init__(self, day: str, slot_position: str, candidate: MealCandidate, rationale: str = "", tier: str = ""):
        self.day = day
        self.slot_position = slot_position
        self.candidate = candidate
        self.rationale = rationale
        self.tier = tier

    @property
    def candidate_id(self) -> str:
        return self.candidate.id

    def __str__(self) -> str:
        return f"{self.day} {self.slot_position}: {self.candidate_id} ({self.tier})"

    __repr__ = __str__

    def to_dict(self):
        return {
            "day": self.day,
            "slot_position": self.slot_position,
            "candidate_id": self.candidate_id,
            "name": self.candidate.name,
            "slot_type": self.candidate.slot_type,
            "has_media": self.candidate.has_media,
            "source": self.candidate.source,
            "rationale": self.rationale,
            "tier": self.tier,
        }


class WeeklyPlan:
    def __init__(self, seed: int):
        self.seed = seed
        self.meals: Dict[str, Dict[str, Optional[MealAssignment]]] = {
            day: {slot: None for slot in SLOT_POSITIONS} for day in DAYS
        }
        self.warnings: List[UnfillableSlotWarning] = []

    def cell(self, day: str, slot_position: str) -> Optional[MealAssignment]:
        return self.meals[day][slot_position]

    def place(self, assignment: MealAssignment) -> None:
        self.meals[assignment.day][assignment.slot_position] = assignment

    def mark_unfillable(self, day: str, slot_position: str, reason: str = "all fallback tiers exhausted") -> UnfillableSlotWarning:
        self.meals[day][slot_position] = None
        warning = UnfillableSlotWarning(day, slot_position, reason)
        self.warnings.append(warning)
        return warning

    def assignments(self) -> Iterator[MealAssignment]:
        """Filled cells in day/slot order."""
        for day in DAYS:
            for slot in SLOT_POSITIONS:
                a = self.meals[day][slot]
                if a is not None:
                    yield a

    def candidate_ids(self) -> List[str]:
        return [a.candidate_id for a in self.assignments()]

    @property
    def filled_count(self) -> int:
        return sum(1 for _ in self.assignments())

    def to_dict(self):
        return {
            "seed": self.seed,
            "days": {
                day: {slot: (a.to_dict() if a is not None else None) for slot, a in slots.items()}
                for day, slots in self.meals.items()
            },
            "warnings": [w.to_dict() for w in self.warnings],
        }
