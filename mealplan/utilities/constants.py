from typing import Final

DAYS: Final[tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
)

BREAKFAST: Final[str] = "Breakfast"
LUNCH: Final[str] = "Lunch"
SNACK: Final[str] = "Snack"
DINNER: Final[str] = "Dinner"
LUNCH_OR_DINNER: Final[str] = "LunchOrDinner"

# Fill order matters: Breakfast and Snack are resolved before the wildcard pool is drawn down
SLOT_POSITIONS: Final[tuple[str, ...]] = (BREAKFAST, LUNCH, SNACK, DINNER)
SLOT_TYPES: Final[tuple[str, ...]] = (BREAKFAST, LUNCH, SNACK, DINNER, LUNCH_OR_DINNER)
WILDCARD_POSITIONS: Final[frozenset[str]] = frozenset({LUNCH, DINNER})

# Spellings seen in upstream meal records
SLOT_TYPE_ALIASES: Final[dict[str, str]] = {
    "breakfast": BREAKFAST,
    "lunch": LUNCH,
    "snack": SNACK,
    "snacks": SNACK,
    "dinner": DINNER,
    "lunchordinner": LUNCH_OR_DINNER,
    "lunch/dinner": LUNCH_OR_DINNER,
    "lunch or dinner": LUNCH_OR_DINNER,
    "lunch_or_dinner": LUNCH_OR_DINNER,
}

SOURCE_POOL: Final[str] = "pool"
SOURCE_GENERATED: Final[str] = "generated"

# "No data available" health summary
DEFAULT_AVERAGES: Final[dict[str, float]] = {
    "recovery": 65.0,
    "strain": 12.0,
    "sleep": 7.5,
    "hrv": 45.0,
    "rhr": 65.0,
    "calories": 2200.0,
}
DEFAULT_STATES: Final[dict[str, str]] = {
    "recovery_status": "good",
    "fatigue_level": "moderate",
    "sleep_quality": "good",
    "metabolic_demand": "moderate",
    "protein_emphasis": "moderate",
    "carb_timing": "balanced",
    "recovery_trend": "stable",
}

GAP_FILLER_PROMPT_TEMPLATE: Final[str] = (
    """
    You are a nutritionist creating targeted meals for a weekly plan.
    The current meal library has nothing that covers these needs: {gaps}.
    Tags to favour: {preferred}. Tags to avoid: {excluded}.
    Generate exactly {count} meals, each addressing one of the needs above.
    Answer ONLY with JSON in the following format:
    """
)
GAP_FILLER_JSON_FORMAT: Final[str] = (
    """
{
  "meals": [
    {
      "name": str,
      "slot_type": "Breakfast" | "Lunch" | "Snack" | "Dinner" | "LunchOrDinner",
      "description": str,
      "tags": [str, str],
      "ingredients": [{"name": str, "amount": str}],
      "instructions": [str, str],
      "nutrition": {"calories": int, "protein": int, "carbs": int, "fat": int}
    }
  ]
}
    """
)
