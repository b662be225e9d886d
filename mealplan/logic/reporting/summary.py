"""Human readable summary text for a finished plan."""
from typing import Dict, List, Optional

from mealplan.domain.HealthSummary import HealthSummary
from mealplan.domain.NeedsProfile import NeedsProfile
from mealplan.domain.WeeklyPlan import WeeklyPlan
from mealplan.logic.reporting.validation import ValidationReport
from mealplan.utilities.constants import DAYS, SLOT_POSITIONS

__all__ = ["slot_fill_phrases", "describe_plan"]

_PLURALS = {"Breakfast": "breakfasts", "Lunch": "lunches", "Snack": "snacks", "Dinner": "dinners"}


def slot_fill_phrases(report: ValidationReport) -> List[str]:
    """Phrases like '6 of 7 breakfasts planned' for every slot that is not fully planned."""
    phrases = []
    for slot in SLOT_POSITIONS:
        filled = report.filled_for(slot)
        if filled < len(DAYS):
            phrases.append(f"{filled} of {len(DAYS)} {_PLURALS[slot]} planned")
    return phrases


def describe_plan(plan: WeeklyPlan, report: ValidationReport, profile: NeedsProfile,
                  summary: Optional[HealthSummary] = None) -> Dict[str, str]:
    """Return {'selection_summary': ..., 'insights': ...}."""
    summary = summary or HealthSummary.default()
    focus = list(profile.preferred_tags[:3])

    if report.generated_cells:
        source_text = (f"{report.pool_cells} from your meal library and "
                       f"{report.generated_cells} generated for needs the library did not cover")
    else:
        source_text = f"all {report.pool_cells} from your meal library"
    selection = f"Selected {report.filled_cells} meals ({source_text})."
    if focus:
        selection += f" Focused on {', '.join(focus)} to support your current physiological state."
    gaps = slot_fill_phrases(report)
    if gaps:
        selection += " " + "; ".join(gaps) + "."

    recovery = summary.averages.get("recovery")
    recovery_text = f" ({recovery:.0f}%)" if recovery is not None else ""
    insights = (f"Your {summary.recovery_status} recovery{recovery_text} and "
                f"{summary.fatigue_level} fatigue levels guided this week's selection.")
    if focus[:2]:
        insights += f" We prioritized {' and '.join(focus[:2])} meals."

    return {"selection_summary": selection, "insights": insights}
