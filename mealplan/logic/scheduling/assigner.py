"""Weekly assigner: fills the 7 day x 4 slot grid from a candidate pool.

Rules:
  - Days Monday..Sunday, slots Breakfast, Lunch, Snack, Dinner, in that order.
  - A candidate is used at most once per week (and therefore once per day).
  - Each cell walks the fallback tiers; the first tier with an eligible candidate wins.
  - Inside a tier, media-backed candidates come first, then higher score, then a seeded shuffle.
  - If every tier comes up empty the cell stays empty and an UnfillableSlotWarning is recorded.

All run state lives in a _WeekRun built per call; a WeeklyAssigner can be reused
and shared between concurrent requests.
"""
from __future__ import annotations
import logging
import random
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Union

from mealplan.domain.Candidate import MealCandidate
from mealplan.domain.NeedsProfile import NeedsProfile
from mealplan.domain.WeeklyPlan import MealAssignment, WeeklyPlan
from mealplan.logic.scheduling.seeding import check_seed, derive_seed
from mealplan.logic.scheduling.tiers import Tier, tiers_for
from mealplan.logic.scoring.scorer import ScoredCandidate, ScoringWeights, matched_tags, score_pool
from mealplan.utilities.constants import DAYS, SLOT_POSITIONS
from mealplan.utilities.errors import EmptyPoolError

logger = logging.getLogger(__name__)

__all__ = ["WeeklyAssigner", "assign_week"]


class _WeekRun:
    """Mutable bookkeeping for one assign() call."""

    def __init__(self, profile: NeedsProfile, scored: Sequence[ScoredCandidate], rng: random.Random):
        self.profile = profile
        self.used_ids = set()
        self.used_today = set()
        self.type_counts: Counter = Counter()
        self.scores: Dict[str, int] = {s.candidate.id: s.score for s in scored}
        # Sort first so the outcome depends on the seed, not on the caller's pool order
        order = sorted((s.candidate for s in scored), key=lambda c: c.id)
        rng.shuffle(order)
        self.shuffle_rank: Dict[str, int] = {c.id: i for i, c in enumerate(order)}
        self.by_type: Dict[str, List[MealCandidate]] = defaultdict(list)
        for c in order:
            self.by_type[c.slot_type].append(c)

    def rank_key(self, candidate: MealCandidate):
        return (0 if candidate.has_media else 1, -self.scores[candidate.id], self.shuffle_rank[candidate.id])

    def start_day(self) -> None:
        self.used_today = set()

    def mark_used(self, candidate: MealCandidate) -> None:
        self.used_ids.add(candidate.id)
        self.used_today.add(candidate.id)
        self.type_counts[candidate.slot_type] += 1


def _check_pool(scored: Sequence[ScoredCandidate]) -> None:
    seen = set()
    for s in scored:
        if s.candidate.id in seen:
            raise ValueError(f"Duplicate candidate id in pool: {s.candidate.id!r}")
        seen.add(s.candidate.id)
    for position in SLOT_POSITIONS:
        if not any(s.candidate.is_compatible_with(position) for s in scored):
            raise EmptyPoolError(position)


class WeeklyAssigner:
    def __init__(self, profile: NeedsProfile, *, weights: Optional[ScoringWeights] = None,
                 allow_cross_slot_fallback: bool = False):
        self.profile = profile
        self.weights = weights
        self.tiers = tiers_for(allow_cross_slot_fallback)

    def _scored(self, pool: Iterable[Union[ScoredCandidate, MealCandidate]]) -> List[ScoredCandidate]:
        items = list(pool)
        unscored = [p for p in items if not isinstance(p, ScoredCandidate)]
        if not unscored:
            return items
        if len(unscored) != len(items):
            raise ValueError("Pool mixes scored and unscored candidates")
        return score_pool(unscored, self.profile, self.weights)

    def _rationale(self, candidate: MealCandidate, tier: Tier) -> str:
        matched = matched_tags(candidate, self.profile.preferred_tags)
        if matched:
            text = f"Selected for your {' and '.join(matched[:2])} needs"
        else:
            text = tier.description
        if candidate.is_generated:
            text += " (generated to cover a gap in the library)"
        return text

    def _pick(self, position: str, run: _WeekRun):
        for tier in self.tiers:
            eligible = tier.eligible(position, run)
            if eligible:
                return min(eligible, key=run.rank_key), tier
        return None, None

    def assign(self, pool: Iterable[Union[ScoredCandidate, MealCandidate]], seed: Optional[int] = None) -> WeeklyPlan:
        """Build a WeeklyPlan from the pool.

        Args:
            pool: candidates, scored or not (unscored ones are scored against the profile).
            seed: integer seed; None derives one from the clock. Stored on the plan.

        Raises:
            EmptyPoolError: a slot position has no compatible candidate in the whole pool.
            ValueError: duplicate candidate ids or a non-integer seed.
        """
        scored = self._scored(pool)
        _check_pool(scored)
        seed = derive_seed() if seed is None else check_seed(seed)
        run = _WeekRun(self.profile, scored, random.Random(seed))
        plan = WeeklyPlan(seed)

        for day in DAYS:
            run.start_day()
            for position in SLOT_POSITIONS:
                candidate, tier = self._pick(position, run)
                if candidate is None:
                    warning = plan.mark_unfillable(day, position)
                    logger.warning("No meal available for %s", warning)
                    continue
                run.mark_used(candidate)
                plan.place(MealAssignment(day, position, candidate, self._rationale(candidate, tier), tier.name))
                if tier.name == "cross_slot":
                    logger.warning("Using fallback meal for %s %s: %s", day, position, candidate.name or candidate.id)
                else:
                    logger.debug("%s %s -> %s via %s", day, position, candidate.id, tier.name)

        logger.info("Created weekly plan (seed=%s) with %d meals, %d empty slots",
                    seed, plan.filled_count, len(plan.warnings))
        return plan


def assign_week(pool: Iterable[Union[ScoredCandidate, MealCandidate]], profile: NeedsProfile,
                seed: Optional[int] = None, **options) -> WeeklyPlan:
    """Shortcut for WeeklyAssigner(profile, **options).assign(pool, seed)."""
    return WeeklyAssigner(profile, **options).assign(pool, seed)
