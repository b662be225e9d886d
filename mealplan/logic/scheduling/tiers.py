"""Fallback tiers for per-cell candidate selection.

Each tier names the slot types it draws from and the filter predicates a
candidate has to pass. The assigner walks the tiers in order and stops at the
first one that yields an eligible candidate; an empty walk leaves the cell
unfilled. Predicates receive the candidate and the current week run, which
exposes profile, used_ids, used_today and type_counts.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Tuple

from mealplan.domain.Candidate import MealCandidate
from mealplan.logic.scoring.scorer import tag_matches
from mealplan.utilities.constants import LUNCH_OR_DINNER, SLOT_TYPES, WILDCARD_POSITIONS

__all__ = [
    "Tier", "TIERS", "CROSS_SLOT_TIER", "tiers_for",
    "has_required_tags", "not_excluded", "unused_in_week", "unused_today", "under_cap",
]


# --- predicates ---

def has_required_tags(candidate: MealCandidate, run) -> bool:
    return all(tag_matches(candidate, tag) for tag in run.profile.required_tags)


def not_excluded(candidate: MealCandidate, run) -> bool:
    return not any(tag_matches(candidate, tag) for tag in run.profile.exclude_tags)


def unused_in_week(candidate: MealCandidate, run) -> bool:
    return candidate.id not in run.used_ids


def unused_today(candidate: MealCandidate, run) -> bool:
    return candidate.id not in run.used_today


def under_cap(candidate: MealCandidate, run) -> bool:
    return run.type_counts[candidate.slot_type] < run.profile.cap_for(candidate.slot_type)


# --- slot type selectors ---

def exact_type(position: str) -> Tuple[str, ...]:
    return (position,)


def wildcard_type(position: str) -> Tuple[str, ...]:
    return (LUNCH_OR_DINNER,) if position in WILDCARD_POSITIONS else ()


def compatible_types(position: str) -> Tuple[str, ...]:
    return exact_type(position) + wildcard_type(position)


def any_type(position: str) -> Tuple[str, ...]:
    return SLOT_TYPES


STRICT = (has_required_tags, not_excluded, unused_in_week, unused_today, under_cap)
RELAXED = (has_required_tags, unused_in_week, unused_today, under_cap)
UNUSED_ONLY = (unused_in_week, unused_today, under_cap)


@dataclass(frozen=True)
class Tier:
    name: str
    slot_types: Callable[[str], Tuple[str, ...]]
    predicates: Tuple[Callable[[MealCandidate, object], bool], ...]
    description: str

    def eligible(self, position: str, run) -> List[MealCandidate]:
        """Candidates of this tier for one cell, in the run's pool order."""
        result = []
        for slot_type in self.slot_types(position):
            for candidate in run.by_type.get(slot_type, ()):
                if all(check(candidate, run) for check in self.predicates):
                    result.append(candidate)
        return result


TIERS: Tuple[Tier, ...] = (
    Tier("exact", exact_type, STRICT, "Best match for this meal time"),
    Tier("wildcard", wildcard_type, STRICT, "Best lunch-or-dinner match"),
    Tier("relaxed_exact", exact_type, RELAXED, "Closest match once avoid-tags were relaxed"),
    Tier("relaxed_wildcard", wildcard_type, RELAXED, "Closest lunch-or-dinner match once avoid-tags were relaxed"),
    Tier("any_unused", compatible_types, UNUSED_ONLY, "Fallback pick: no tagged match left"),
)

# Off by default: it breaks slot compatibility the way the legacy planner did
CROSS_SLOT_TIER = Tier("cross_slot", any_type, UNUSED_ONLY, "Fallback pick from another meal time")


def tiers_for(allow_cross_slot_fallback: bool = False) -> Tuple[Tier, ...]:
    if allow_cross_slot_fallback:
        return TIERS + (CROSS_SLOT_TIER,)
    return TIERS
