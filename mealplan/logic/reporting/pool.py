"""Candidate pool statistics."""
from collections import Counter
from typing import Any, Dict, Iterable

from mealplan.domain.Candidate import MealCandidate
from mealplan.utilities.constants import SLOT_TYPES

__all__ = ["pool_statistics"]


def pool_statistics(candidates: Iterable[MealCandidate]) -> Dict[str, Any]:
    """Return { total, with_media, generated, by_slot_type: {type: n}, tags: [sorted distinct] }."""
    items = list(candidates)
    by_type = Counter(c.slot_type for c in items)
    tags = set()
    for c in items:
        tags.update(c.tags)
    return {
        'total': len(items),
        'with_media': sum(1 for c in items if c.has_media),
        'generated': sum(1 for c in items if c.is_generated),
        'by_slot_type': {t: by_type.get(t, 0) for t in SLOT_TYPES},
        'tags': sorted(tags, key=str.lower),
    }
