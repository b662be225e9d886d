"""Candidate pool builders shared by the tests."""
from mealplan.domain.Candidate import MealCandidate

PREFIXES = {"Breakfast": "B", "Lunch": "L", "Snack": "S", "Dinner": "D", "LunchOrDinner": "LD"}


def make_candidate(id, slot_type, tags=(), has_media=True, name="", description="", source="pool"):
    return MealCandidate(id=id, slot_type=slot_type, tags=list(tags), has_media=has_media,
                         name=name or f"Meal {id}", description=description, source=source)


def make_pool(counts, has_media=True, media_per_type=None, tags=()):
    """counts: {slot_type: n}. media_per_type: how many of each type carry media (default: all or none)."""
    pool = []
    for slot_type, n in counts.items():
        for i in range(n):
            media = has_media if media_per_type is None else i < media_per_type
            pool.append(make_candidate(f"{PREFIXES[slot_type]}-{i:03d}", slot_type, tags=tags, has_media=media))
    return pool


def standard_pool(per_type=7, **kwargs):
    return make_pool({"Breakfast": per_type, "Lunch": per_type, "Snack": per_type, "Dinner": per_type}, **kwargs)
