"""Gap filler boundary: external producers of synthetic candidates for uncovered needs."""
from __future__ import annotations
import logging
from typing import Iterable, List, Sequence

from mealplan.domain.Candidate import MealCandidate
from mealplan.domain.HealthSummary import HealthSummary
from mealplan.domain.NeedsProfile import NeedsProfile
from mealplan.utilities.constants import SOURCE_GENERATED

logger = logging.getLogger(__name__)

__all__ = ["GapFiller", "merge_generated"]


class GapFiller:
    """Base class for gap fillers.

    fill() is awaited by the planning service before the assigner runs. It
    should raise GapFillerUnavailable when it cannot produce anything; any
    other exception or a timeout is treated the same way by the caller.
    """

    async def fill(self, gaps: Sequence[str], profile: NeedsProfile,
                   summary: HealthSummary) -> List[MealCandidate]:
        raise NotImplementedError


def _as_generated(candidate: MealCandidate) -> MealCandidate:
    if candidate.is_generated:
        return candidate
    data = candidate.to_dict()
    data["source"] = SOURCE_GENERATED
    return MealCandidate(**data)


def merge_generated(pool: Sequence[MealCandidate], generated: Iterable[MealCandidate]) -> List[MealCandidate]:
    """Return pool + generated candidates, tagged as generated; ids already taken are dropped."""
    merged = list(pool)
    taken = {c.id for c in merged}
    for candidate in generated:
        if candidate.id in taken:
            logger.warning("Dropping generated candidate with duplicate id %s", candidate.id)
            continue
        taken.add(candidate.id)
        merged.append(_as_generated(candidate))
    return merged
