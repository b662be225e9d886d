"""HealthSummary domain entity: categorical physiological state plus nutrition recommendation flags."""
from typing import Dict, Optional

from mealplan.utilities.constants import DEFAULT_AVERAGES, DEFAULT_STATES
from mealplan.utilities.validators import HealthSummaryInput


class HealthSummary:
    def __init__(self, recovery_status: str = DEFAULT_STATES["recovery_status"],
                 fatigue_level: str = DEFAULT_STATES["fatigue_level"],
                 sleep_quality: str = DEFAULT_STATES["sleep_quality"],
                 metabolic_demand: str = DEFAULT_STATES["metabolic_demand"],
                 protein_emphasis: str = DEFAULT_STATES["protein_emphasis"],
                 carb_timing: str = DEFAULT_STATES["carb_timing"],
                 anti_inflammatory: bool = False, hydration_focus: bool = False,
                 recovery_trend: str = DEFAULT_STATES["recovery_trend"],
                 averages: Optional[Dict[str, float]] = None):
        """Raises ValueError (pydantic.ValidationError) for unknown categorical values.

        Values are matched case-insensitively and stored lower-cased.
        """
        checked = HealthSummaryInput(
            recovery_status=recovery_status,
            fatigue_level=fatigue_level,
            sleep_quality=sleep_quality,
            metabolic_demand=metabolic_demand,
            protein_emphasis=protein_emphasis,
            carb_timing=carb_timing,
            anti_inflammatory=anti_inflammatory,
            hydration_focus=hydration_focus,
            recovery_trend=recovery_trend,
            averages=averages or {},
        )
        self.recovery_status = checked.recovery_status
        self.fatigue_level = checked.fatigue_level
        self.sleep_quality = checked.sleep_quality
        self.metabolic_demand = checked.metabolic_demand
        self.protein_emphasis = checked.protein_emphasis
        self.carb_timing = checked.carb_timing
        self.anti_inflammatory = checked.anti_inflammatory
        self.hydration_focus = checked.hydration_focus
        self.recovery_trend = checked.recovery_trend
        self.averages = dict(checked.averages)

    @classmethod
    def default(cls):
        """Summary used when no health data is available (recovery 65%, strain 12, sleep 7.5h)."""
        return cls()

    @classmethod
    def from_averages(cls, recovery: float, strain: float, sleep: float, hrv: float = DEFAULT_AVERAGES["hrv"],
                      rhr: float = DEFAULT_AVERAGES["rhr"], calories: float = DEFAULT_AVERAGES["calories"],
                      recovery_trend: str = "stable"):
        """Classify numeric averages into the categorical summary fields."""
        if recovery >= 80:
            recovery_status = "excellent"
        elif recovery >= 65:
            recovery_status = "good"
        elif recovery >= 50:
            recovery_status = "fair"
        else:
            recovery_status = "poor"
        fatigue = "high" if recovery < 40 else "moderate" if recovery < 70 else "low"
        demand = "high" if strain > 15 else "moderate" if strain > 10 else "low"
        if sleep >= 8:
            sleep_quality = "excellent"
        elif sleep >= 7:
            sleep_quality = "good"
        elif sleep >= 6:
            sleep_quality = "fair"
        else:
            sleep_quality = "poor"
        carb_timing = "post-workout" if strain > 14 else "balanced" if strain > 8 else "pre-workout"
        return cls(
            recovery_status=recovery_status,
            fatigue_level=fatigue,
            sleep_quality=sleep_quality,
            metabolic_demand=demand,
            protein_emphasis="high" if (strain > 12 or recovery_status == "poor") else "moderate",
            carb_timing=carb_timing,
            anti_inflammatory=recovery_status == "poor" or recovery_trend == "declining",
            hydration_focus=strain > 12 or fatigue == "high",
            recovery_trend=recovery_trend,
            averages={"recovery": recovery, "strain": strain, "sleep": sleep,
                      "hrv": hrv, "rhr": rhr, "calories": calories},
        )

    @staticmethod
    def from_dict(data):
        checked = HealthSummaryInput.model_validate(dict(data or {}))
        return HealthSummary(**checked.model_dump())

    def to_dict(self):
        return {
            "recovery_status": self.recovery_status,
            "fatigue_level": self.fatigue_level,
            "sleep_quality": self.sleep_quality,
            "metabolic_demand": self.metabolic_demand,
            "protein_emphasis": self.protein_emphasis,
            "carb_timing": self.carb_timing,
            "anti_inflammatory": self.anti_inflammatory,
            "hydration_focus": self.hydration_focus,
            "recovery_trend": self.recovery_trend,
            "averages": dict(self.averages),
        }

    def __eq__(self, other):
        if not isinstance(other, HealthSummary):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return (f"recovery={self.recovery_status} fatigue={self.fatigue_level} "
                f"sleep={self.sleep_quality} demand={self.metabolic_demand}")

    __repr__ = __str__
