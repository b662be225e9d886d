"""Candidate scoring against a needs profile.

Tag matching is deliberately fuzzy: case-insensitive and substring tolerant in
both directions, so "Protein" matches a "High-Protein" tag and vice versa.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional

from mealplan.domain.Candidate import MealCandidate
from mealplan.domain.NeedsProfile import NeedsProfile
from mealplan.utilities.config import SCORE_BASE, SCORE_PREFERRED_MATCH, SCORE_EXCLUDED_MATCH

__all__ = ["ScoringWeights", "ScoredCandidate", "tag_matches", "matched_tags", "score_candidate", "score_pool"]


@dataclass(frozen=True)
class ScoringWeights:
    base: int = SCORE_BASE
    preferred_match: int = SCORE_PREFERRED_MATCH
    excluded_match: int = SCORE_EXCLUDED_MATCH


@dataclass(frozen=True)
class ScoredCandidate:
    candidate: MealCandidate
    score: int


def _normalize(text: str) -> str:
    return (text or '').strip().lower()


def tag_matches(candidate: MealCandidate, tag: str) -> bool:
    """True if the keyword matches any candidate tag (either direction) or occurs in name/description."""
    keyword = _normalize(tag)
    if not keyword:
        return False
    for t in candidate.tags:
        t = _normalize(t)
        if t and (keyword in t or t in keyword):
            return True
    return keyword in _normalize(candidate.name) or keyword in _normalize(candidate.description)


def matched_tags(candidate: MealCandidate, tags: Iterable[str]) -> List[str]:
    return [tag for tag in tags if tag_matches(candidate, tag)]


def score_candidate(candidate: MealCandidate, profile: NeedsProfile, weights: Optional[ScoringWeights] = None) -> int:
    """Affinity score; required tags are a filter elsewhere and do not count here."""
    w = weights or ScoringWeights()
    score = w.base
    score += w.preferred_match * len(matched_tags(candidate, profile.preferred_tags))
    score += w.excluded_match * len(matched_tags(candidate, profile.exclude_tags))
    return score


def score_pool(candidates: Iterable[MealCandidate], profile: NeedsProfile,
               weights: Optional[ScoringWeights] = None) -> List[ScoredCandidate]:
    return [ScoredCandidate(c, score_candidate(c, profile, weights)) for c in candidates]
