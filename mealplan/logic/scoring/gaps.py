"""Gap analysis: which required or critical needs have no candidate at all in the pool."""
from __future__ import annotations
import logging
from typing import Iterable, List, Union

from mealplan.domain.Candidate import MealCandidate
from mealplan.domain.NeedsProfile import NeedsProfile
from mealplan.logic.scoring.scorer import ScoredCandidate, tag_matches

logger = logging.getLogger(__name__)

__all__ = ["find_gaps"]


def find_gaps(pool: Iterable[Union[ScoredCandidate, MealCandidate]], profile: NeedsProfile) -> List[str]:
    """Return the required + critical needs that zero candidates satisfy.

    Thin coverage is not a gap; only complete absence is, so the external gap
    filler is not invoked while the pool has something to offer.
    """
    candidates = [p.candidate if isinstance(p, ScoredCandidate) else p for p in pool]
    needs: List[str] = []
    seen = set()
    for need in list(profile.required_tags) + list(profile.critical_tags):
        if need.lower() not in seen:
            seen.add(need.lower())
            needs.append(need)

    gaps = [need for need in needs if not any(tag_matches(c, need) for c in candidates)]
    if gaps:
        logger.info("Gap analysis: no candidates cover %s", ", ".join(gaps))
    return gaps
