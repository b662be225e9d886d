"""
Input validation schemas using Pydantic for records entering the scheduler.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Literal, Optional

from mealplan.utilities.constants import (
    DEFAULT_AVERAGES, DEFAULT_STATES, SLOT_TYPE_ALIASES, SOURCE_POOL
)


class MealCandidateInput(BaseModel):
    """Schema for one normalized meal record."""
    id: str = Field(..., min_length=1)
    slot_type: str
    name: str = ""
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    has_media: Optional[bool] = None
    image_url: Optional[str] = None
    nutrition: Dict[str, Any] = Field(default_factory=dict)
    ingredients: List[Any] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    source: Literal["pool", "generated"] = SOURCE_POOL

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        """Numeric database ids are accepted and kept as strings."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('slot_type')
    @classmethod
    def normalize_slot_type(cls, v):
        key = v.strip().lower()
        if key not in SLOT_TYPE_ALIASES:
            raise ValueError(f'Unknown slot type: {v!r}')
        return SLOT_TYPE_ALIASES[key]

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        """Drop blank tags and surrounding whitespace."""
        return [tag.strip() for tag in v if tag and tag.strip()]

    @field_validator('instructions')
    @classmethod
    def validate_instructions(cls, v):
        return [step.strip() for step in v if step and step.strip()]


class HealthSummaryInput(BaseModel):
    """Schema for the structured health summary produced by the analyzer."""
    recovery_status: Literal["poor", "fair", "good", "excellent"] = DEFAULT_STATES["recovery_status"]
    fatigue_level: Literal["low", "moderate", "high"] = DEFAULT_STATES["fatigue_level"]
    sleep_quality: Literal["poor", "fair", "good", "excellent"] = DEFAULT_STATES["sleep_quality"]
    metabolic_demand: Literal["low", "moderate", "high"] = DEFAULT_STATES["metabolic_demand"]
    protein_emphasis: Literal["low", "standard", "moderate", "high"] = DEFAULT_STATES["protein_emphasis"]
    carb_timing: Literal["morning", "pre-workout", "post-workout", "balanced"] = DEFAULT_STATES["carb_timing"]
    anti_inflammatory: bool = False
    hydration_focus: bool = False
    recovery_trend: Literal["improving", "declining", "stable"] = DEFAULT_STATES["recovery_trend"]
    averages: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_AVERAGES))

    @field_validator('recovery_status', 'fatigue_level', 'sleep_quality', 'metabolic_demand',
                     'protein_emphasis', 'carb_timing', 'recovery_trend', mode='before')
    @classmethod
    def lower_case(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('averages')
    @classmethod
    def fill_missing_averages(cls, v):
        """Missing averages fall back to the no-data defaults."""
        merged = dict(DEFAULT_AVERAGES)
        merged.update(v)
        return merged


__all__ = ['MealCandidateInput', 'HealthSummaryInput']
