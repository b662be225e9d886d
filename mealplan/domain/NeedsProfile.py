"""NeedsProfile domain entity: tag-based selection criteria for one planning request."""
from typing import Dict, Iterable, Optional, Tuple

from mealplan.utilities.config import DEFAULT_SLOT_CAP, WILDCARD_SLOT_CAP, MEDIA_COVERAGE_TARGET
from mealplan.utilities.constants import SLOT_TYPES, LUNCH_OR_DINNER


def default_slot_caps() -> Dict[str, int]:
    return {t: (WILDCARD_SLOT_CAP if t == LUNCH_OR_DINNER else DEFAULT_SLOT_CAP) for t in SLOT_TYPES}


def _unique(tags: Iterable[str]) -> Tuple[str, ...]:
    """Strip, drop blanks and case-insensitive duplicates; first spelling wins."""
    seen = set()
    result = []
    for tag in tags or ():
        t = (tag or '').strip()
        if not t or t.lower() in seen:
            continue
        seen.add(t.lower())
        result.append(t)
    return tuple(result)


class NeedsProfile:
    def __init__(self, required_tags: Iterable[str] = (), preferred_tags: Iterable[str] = (),
                 exclude_tags: Iterable[str] = (), critical_tags: Iterable[str] = (),
                 max_per_slot_type: Optional[Dict[str, int]] = None,
                 media_coverage_target: Optional[float] = None):
        caps = default_slot_caps()
        for slot_type, cap in (max_per_slot_type or {}).items():
            if slot_type not in caps:
                raise ValueError(f"Unknown slot type in max_per_slot_type: {slot_type!r}")
            if not isinstance(cap, int) or isinstance(cap, bool) or cap < 0:
                raise ValueError(f"max_per_slot_type[{slot_type!r}] must be a non-negative integer, got {cap!r}")
            caps[slot_type] = cap
        target = MEDIA_COVERAGE_TARGET if media_coverage_target is None else float(media_coverage_target)
        if not 0.0 <= target <= 1.0:
            raise ValueError(f"media_coverage_target must be within [0, 1], got {target}")

        self.required_tags = _unique(required_tags)
        self.preferred_tags = _unique(preferred_tags)
        self.exclude_tags = _unique(exclude_tags)
        self.critical_tags = _unique(critical_tags)
        self.max_per_slot_type = caps
        self.media_coverage_target = target

    def cap_for(self, slot_type: str) -> int:
        return self.max_per_slot_type.get(slot_type, DEFAULT_SLOT_CAP)

    def to_dict(self):
        return {
            "required_tags": list(self.required_tags),
            "preferred_tags": list(self.preferred_tags),
            "exclude_tags": list(self.exclude_tags),
            "critical_tags": list(self.critical_tags),
            "max_per_slot_type": dict(self.max_per_slot_type),
            "media_coverage_target": self.media_coverage_target,
        }

    def __eq__(self, other):
        if not isinstance(other, NeedsProfile):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return (f"required={list(self.required_tags)} preferred={list(self.preferred_tags)} "
                f"excluded={list(self.exclude_tags)} critical={list(self.critical_tags)}")

    __repr__ = __str__
