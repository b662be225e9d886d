"""MealCandidate domain entity: a schedulable meal with slot type, tags and media availability."""
from typing import Any, Dict, List, Optional

from mealplan.utilities.constants import (
    SLOT_TYPE_ALIASES, LUNCH_OR_DINNER, WILDCARD_POSITIONS, SOURCE_POOL, SOURCE_GENERATED
)
from mealplan.utilities.validators import MealCandidateInput


class MealCandidate:
    def __init__(self, id: str, slot_type: str, tags: Optional[List[str]] = None, has_media: bool = False,
                 name: str = "", description: str = "", nutrition: Optional[Dict[str, Any]] = None,
                 ingredients: Optional[List[Any]] = None, instructions: Optional[List[str]] = None,
                 source: str = SOURCE_POOL):
        if not id:
            raise ValueError("MealCandidate requires a non-empty id")
        normalized = SLOT_TYPE_ALIASES.get(str(slot_type).strip().lower())
        if normalized is None:
            raise ValueError(f"Unknown slot type: {slot_type!r}")
        if source not in (SOURCE_POOL, SOURCE_GENERATED):
            raise ValueError(f"Unknown candidate source: {source!r}")
        self._id = str(id)
        self.slot_type = normalized
        self.tags = tuple(tags) if tags else ()
        self.has_media = bool(has_media)
        self.name = name
        self.description = description
        # Opaque payloads, passed through untouched
        self.nutrition = dict(nutrition) if nutrition else {}
        self.ingredients = list(ingredients) if ingredients else []
        self.instructions = list(instructions) if instructions else []
        self.source = source

    @property
    def id(self) -> str:
        return self._id

    @property
    def is_generated(self) -> bool:
        return self.source == SOURCE_GENERATED

    def is_compatible_with(self, slot_position: str) -> bool:
        """True if this candidate may occupy a cell of the given slot position."""
        if self.slot_type == slot_position:
            return True
        return self.slot_type == LUNCH_OR_DINNER and slot_position in WILDCARD_POSITIONS

    def __str__(self) -> str:
        media = "media" if self.has_media else "no media"
        return f"{self.id} - {self.name or '?'} [{self.slot_type}, {media}] - Tags: {', '.join(self.tags)}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data, source: Optional[str] = None):
        '''Builds a candidate from a normalized record. Raises pydantic.ValidationError on bad input.'''
        d = dict(data)
        if source is not None:
            d['source'] = source
        checked = MealCandidateInput.model_validate(d)
        has_media = checked.has_media if checked.has_media is not None else bool((checked.image_url or '').strip())
        return MealCandidate(
            id=checked.id,
            slot_type=checked.slot_type,
            tags=checked.tags,
            has_media=has_media,
            name=checked.name,
            description=checked.description,
            nutrition=checked.nutrition,
            ingredients=checked.ingredients,
            instructions=checked.instructions,
            source=checked.source,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "slot_type": self.slot_type,
            "name": self.name,
            "description": self.description,
            "tags": list(self.tags),
            "has_media": self.has_media,
            "nutrition": dict(self.nutrition),
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "source": self.source,
        }
