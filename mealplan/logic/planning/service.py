"""End-to-end planning requests.

Flow: build needs profile -> score pool -> (optional) gap analysis + gap filler
-> weekly assigner -> validation -> summary text. The gap filler is the only
awaited step and it always finishes (or times out) before assignment starts.
Nothing here keeps state between calls.
"""
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from mealplan.domain.Candidate import MealCandidate
from mealplan.domain.HealthSummary import HealthSummary
from mealplan.domain.NeedsProfile import NeedsProfile
from mealplan.domain.WeeklyPlan import WeeklyPlan
from mealplan.infra.gap_filler import GapFiller, merge_generated
from mealplan.logic.profile.needs import build_needs_profile
from mealplan.logic.reporting.summary import describe_plan
from mealplan.logic.reporting.validation import ValidationReport, validate_plan
from mealplan.logic.scheduling.assigner import WeeklyAssigner
from mealplan.logic.scheduling.seeding import next_seed
from mealplan.logic.scoring.gaps import find_gaps
from mealplan.logic.scoring.scorer import ScoringWeights, score_pool
from mealplan.utilities.config import GAP_FILLER_TIMEOUT
from mealplan.utilities.errors import GapFillerUnavailable

logger = logging.getLogger(__name__)

__all__ = ["PlanResult", "plan_week", "plan_week_with_gap_filler", "regenerate"]


@dataclass
class PlanResult:
    plan: WeeklyPlan
    report: ValidationReport
    profile: NeedsProfile
    summary: HealthSummary
    gaps: List[str] = field(default_factory=list)
    generated_count: int = 0
    gap_filler_error: Optional[GapFillerUnavailable] = None
    selection_summary: str = ""
    insights: str = ""
    weights: Optional[ScoringWeights] = None
    allow_cross_slot_fallback: bool = False

    @property
    def seed(self) -> int:
        return self.plan.seed

    @property
    def warnings(self):
        return list(self.plan.warnings)

    def to_dict(self) -> Dict:
        return {
            "seed": self.seed,
            "plan": self.plan.to_dict(),
            "report": self.report.to_dict(),
            "profile": self.profile.to_dict(),
            "gaps": list(self.gaps),
            "generated_count": self.generated_count,
            "gap_filler_error": str(self.gap_filler_error) if self.gap_filler_error else None,
            "selection_summary": self.selection_summary,
            "insights": self.insights,
            "allow_cross_slot_fallback": self.allow_cross_slot_fallback,
        }


def _finish(candidates: Sequence[MealCandidate], summary: HealthSummary, profile: NeedsProfile, seed: Optional[int],
            weights: Optional[ScoringWeights], allow_cross_slot_fallback: bool, gaps: List[str],
            generated_count: int, gap_filler_error: Optional[GapFillerUnavailable]) -> PlanResult:
    scored = score_pool(candidates, profile, weights)
    assigner = WeeklyAssigner(profile, weights=weights, allow_cross_slot_fallback=allow_cross_slot_fallback)
    plan = assigner.assign(scored, seed)
    report = validate_plan(plan, profile)
    text = describe_plan(plan, report, profile, summary)
    if not report.meets_media_target:
        logger.info("Media coverage %.1f%% below target %.0f%%",
                    report.media_coverage_percentage, profile.media_coverage_target * 100)
    return PlanResult(
        plan=plan,
        report=report,
        profile=profile,
        summary=summary,
        gaps=gaps,
        generated_count=generated_count,
        gap_filler_error=gap_filler_error,
        selection_summary=text["selection_summary"],
        insights=text["insights"],
        weights=weights,
        allow_cross_slot_fallback=allow_cross_slot_fallback,
    )


def plan_week(candidates: Iterable[MealCandidate], summary: Optional[HealthSummary] = None, *,
              seed: Optional[int] = None, required_tags: Iterable[str] = (),
              critical_tags: Optional[Iterable[str]] = None, media_coverage_target: Optional[float] = None,
              max_per_slot_type: Optional[Dict[str, int]] = None, weights: Optional[ScoringWeights] = None,
              allow_cross_slot_fallback: bool = False) -> PlanResult:
    """Plan a week from the pool as given (no gap filling). Runs synchronously."""
    summary = summary or HealthSummary.default()
    pool = list(candidates)
    profile = build_needs_profile(summary, required_tags=required_tags, critical_tags=critical_tags,
                                  media_coverage_target=media_coverage_target,
                                  max_per_slot_type=max_per_slot_type)
    return _finish(pool, summary, profile, seed, weights, allow_cross_slot_fallback,
                   gaps=[], generated_count=0, gap_filler_error=None)


async def plan_week_with_gap_filler(candidates: Iterable[MealCandidate], summary: Optional[HealthSummary],
                                    gap_filler: Optional[GapFiller], *, timeout: Optional[float] = None,
                                    seed: Optional[int] = None, required_tags: Iterable[str] = (),
                                    critical_tags: Optional[Iterable[str]] = None,
                                    media_coverage_target: Optional[float] = None,
                                    max_per_slot_type: Optional[Dict[str, int]] = None,
                                    weights: Optional[ScoringWeights] = None,
                                    allow_cross_slot_fallback: bool = False) -> PlanResult:
    """Plan a week, first asking the gap filler for candidates covering needs the pool lacks.

    A failing or slow gap filler never aborts the request: the plan is built
    from the original pool and the failure is reported on the result.
    """
    summary = summary or HealthSummary.default()
    pool = list(candidates)
    profile = build_needs_profile(summary, required_tags=required_tags, critical_tags=critical_tags,
                                  media_coverage_target=media_coverage_target,
                                  max_per_slot_type=max_per_slot_type)
    gaps = find_gaps(score_pool(pool, profile, weights), profile)

    generated_count = 0
    error: Optional[GapFillerUnavailable] = None
    if gaps and gap_filler is not None:
        limit = GAP_FILLER_TIMEOUT if timeout is None else timeout
        try:
            generated = await asyncio.wait_for(gap_filler.fill(gaps, profile, summary), timeout=limit)
        except asyncio.TimeoutError as e:
            error = GapFillerUnavailable(f"Gap filler timed out after {limit}s", cause=e)
        except GapFillerUnavailable as e:
            error = e
        except Exception as e:
            error = GapFillerUnavailable(f"Gap filler failed: {e}", cause=e)
        else:
            before = len(pool)
            pool = merge_generated(pool, generated or [])
            generated_count = len(pool) - before
            logger.info("Gap filler added %d candidates for %s", generated_count, ", ".join(gaps))
        if error is not None:
            logger.warning("Gap filler unavailable, planning with the original pool: %s", error)

    return _finish(pool, summary, profile, seed, weights, allow_cross_slot_fallback,
                   gaps=gaps, generated_count=generated_count, gap_filler_error=error)


def regenerate(previous: PlanResult, candidates: Iterable[MealCandidate],
               summary: Optional[HealthSummary] = None, **options) -> PlanResult:
    """Plan again with a fresh seed that differs from the previous one.

    Every setting of the previous request carries over unless given again. A new
    summary re-derives the critical tags, since the old ones may not be preferred anymore.
    """
    profile = previous.profile
    options.setdefault("media_coverage_target", profile.media_coverage_target)
    options.setdefault("required_tags", profile.required_tags)
    options.setdefault("max_per_slot_type", dict(profile.max_per_slot_type))
    options.setdefault("weights", previous.weights)
    options.setdefault("allow_cross_slot_fallback", previous.allow_cross_slot_fallback)
    if summary is None:
        options.setdefault("critical_tags", profile.critical_tags)
    return plan_week(candidates, summary or previous.summary, seed=next_seed(previous.seed), **options)
