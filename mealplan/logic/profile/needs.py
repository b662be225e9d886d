"""Needs profile builder.

Turns a HealthSummary into tag-based selection criteria. Every rule is an
independent row in a table; rules only ever add tags. A tag that ends up both
preferred and excluded stays excluded.
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from mealplan.domain.HealthSummary import HealthSummary
from mealplan.domain.NeedsProfile import NeedsProfile

logger = logging.getLogger(__name__)

__all__ = ["build_needs_profile", "NEEDS_RULES", "FLAG_RULES", "CRITICAL_RULES"]

# field -> value -> (preferred additions, excluded additions)
NEEDS_RULES: Dict[str, Dict[str, Tuple[Tuple[str, ...], Tuple[str, ...]]]] = {
    "recovery_status": {
        "poor": (("Recovery", "Anti-Inflammatory", "Easy Digest"), ("Heavy", "Complex")),
        "excellent": (("Performance", "Energy", "High-Protein"), ()),
    },
    "fatigue_level": {
        "high": (("Energy Boost", "Quick Energy", "B-Vitamins"), ("Heavy", "High-Fat")),
        "low": (("Sustained Energy", "Complex Carbs"), ()),
    },
    "sleep_quality": {
        "poor": (("Sleep Support", "Magnesium", "Tryptophan"), ("Caffeine", "High-Sugar")),
    },
    "metabolic_demand": {
        "high": (("High-Calorie", "Performance", "Protein-Rich"), ()),
        "low": (("Light", "Low-Calorie", "Nutrient-Dense"), ()),
    },
    "protein_emphasis": {
        "high": (("High-Protein", "Muscle Recovery"), ()),
    },
    "carb_timing": {
        "morning": (("Morning Energy", "Complex Carbs"), ()),
        "pre-workout": (("Pre-Workout", "Quick Energy"), ()),
        "post-workout": (("Post-Workout", "Recovery"), ()),
    },
}

# boolean flag -> preferred additions when set
FLAG_RULES: Dict[str, Tuple[str, ...]] = {
    "anti_inflammatory": ("Anti-Inflammatory", "Omega-3", "Antioxidants"),
    "hydration_focus": ("Hydrating", "Electrolytes"),
}

# field -> value -> tags flagged critical (kept only if also preferred)
CRITICAL_RULES: Dict[str, Dict[str, Tuple[str, ...]]] = {
    "recovery_status": {"poor": ("Recovery", "Anti-Inflammatory", "Sleep Support")},
    "fatigue_level": {"high": ("Energy Boost",)},
    "sleep_quality": {"poor": ("Sleep Support",)},
    "recovery_trend": {"declining": ("Recovery",)},
}


def _add(target: List[str], tags: Iterable[str]) -> None:
    for tag in tags:
        if tag not in target:
            target.append(tag)


def _derive_critical(summary: HealthSummary, preferred: List[str]) -> List[str]:
    wanted: List[str] = []
    for field, table in CRITICAL_RULES.items():
        _add(wanted, table.get(getattr(summary, field, None), ()))
    preferred_lower = {t.lower() for t in preferred}
    return [t for t in wanted if t.lower() in preferred_lower]


def build_needs_profile(summary: Optional[HealthSummary] = None, *, required_tags: Iterable[str] = (),
                        critical_tags: Optional[Iterable[str]] = None,
                        media_coverage_target: Optional[float] = None,
                        max_per_slot_type: Optional[Dict[str, int]] = None) -> NeedsProfile:
    """Build the selection criteria for one planning request.

    Args:
        summary: structured health summary; None means "no data available".
        required_tags: hard filter tags supplied by the caller.
        critical_tags: preferred tags whose total absence from the pool should trigger
            gap filling. None derives them from CRITICAL_RULES.
        media_coverage_target: minimum share of filled cells holding a media asset.
        max_per_slot_type: per slot type caps overriding the defaults.

    Raises:
        ValueError: if an explicit critical tag is not a preferred tag, or caps/target are malformed.
    """
    if summary is None:
        summary = HealthSummary.default()

    preferred: List[str] = []
    excluded: List[str] = []
    for field, table in NEEDS_RULES.items():
        add_pref, add_excl = table.get(getattr(summary, field, None), ((), ()))
        _add(preferred, add_pref)
        _add(excluded, add_excl)
    for flag, tags in FLAG_RULES.items():
        if getattr(summary, flag, False):
            _add(preferred, tags)

    # Safety first: exclusion wins over preference
    excluded_lower = {t.lower() for t in excluded}
    preferred = [t for t in preferred if t.lower() not in excluded_lower]

    if critical_tags is None:
        critical = _derive_critical(summary, preferred)
    else:
        critical = [t for t in critical_tags if t and t.strip()]
        preferred_lower = {t.lower() for t in preferred}
        unknown = [t for t in critical if t.strip().lower() not in preferred_lower]
        if unknown:
            raise ValueError(f"Critical tags must be preferred tags of this profile: {unknown}")

    profile = NeedsProfile(
        required_tags=required_tags,
        preferred_tags=preferred,
        exclude_tags=excluded,
        critical_tags=critical,
        max_per_slot_type=max_per_slot_type,
        media_coverage_target=media_coverage_target,
    )
    logger.debug("Needs profile for %s -> %s", summary, profile)
    return profile
