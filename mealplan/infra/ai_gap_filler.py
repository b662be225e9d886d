import asyncio
import os
import re
import json
import logging
from typing import List, Optional, Sequence
from uuid import uuid4

from openai import OpenAI
from pydantic import ValidationError

from mealplan.domain.Candidate import MealCandidate
from mealplan.domain.HealthSummary import HealthSummary
from mealplan.domain.NeedsProfile import NeedsProfile
from mealplan.infra.gap_filler import GapFiller
from mealplan.utilities.config import GAP_FILLER_MAX_MEALS, OPENAI_MODEL
from mealplan.utilities.constants import GAP_FILLER_PROMPT_TEMPLATE, GAP_FILLER_JSON_FORMAT, SOURCE_GENERATED
from mealplan.utilities.errors import GapFillerUnavailable

logger = logging.getLogger(__name__)


def _client_from_env() -> Optional[OpenAI]:
    """None when OPENAI_API_KEY is missing; the gap filler then reports itself unavailable."""
    api_key = os.environ.get("OPENAI_API_KEY")
    return OpenAI(api_key=api_key) if api_key else None


# === Gap Filler ===
class OpenAIGapFiller(GapFiller):
    """Asks an OpenAI model for a few meals targeting needs the library does not cover."""

    def __init__(self, client: Optional[OpenAI] = None, model: str = OPENAI_MODEL,
                 max_meals: int = GAP_FILLER_MAX_MEALS):
        self.client = client
        self.model = model
        self.max_meals = max_meals

    async def fill(self, gaps: Sequence[str], profile: NeedsProfile,
                   summary: HealthSummary) -> List[MealCandidate]:
        if not gaps:
            return []
        # The OpenAI client is blocking; keep the event loop free
        return await asyncio.to_thread(self.generate, list(gaps), profile, summary)

    def generate(self, gaps: List[str], profile: NeedsProfile, summary: HealthSummary) -> List[MealCandidate]:
        client = self.client or _client_from_env()
        if client is None:
            logger.warning("OPENAI_API_KEY not set, cannot generate meals for gaps %s", gaps)
            raise GapFillerUnavailable("OPENAI_API_KEY not set")

        count = min(len(gaps), self.max_meals)
        prompt = GAP_FILLER_PROMPT_TEMPLATE.format(
            gaps=", ".join(gaps),
            preferred=", ".join(profile.preferred_tags) or "none",
            excluded=", ".join(profile.exclude_tags) or "none",
            count=count,
        )
        prompt += (f"\nUser status: {summary.recovery_status} recovery, {summary.fatigue_level} fatigue, "
                   f"{summary.sleep_quality} sleep, {summary.metabolic_demand} metabolic demand.\n")

        try:
            response = client.responses.create(model=self.model, input=prompt + GAP_FILLER_JSON_FORMAT)
        except Exception as e:
            logger.exception("OpenAI request for gap meals failed")
            raise GapFillerUnavailable("Gap meal request failed", cause=e) from e

        raw = (response.output_text or "").strip()
        if not raw:
            logger.warning("AI returned empty gap meal data")
            raise GapFillerUnavailable("Model returned no content")

        meals = parse_generated_meals(raw)
        if meals is None:
            raise GapFillerUnavailable("Model output is not valid JSON")
        candidates = _to_candidates(meals[:count], gaps)
        logger.info("Generated %d candidates for gaps %s", len(candidates), ", ".join(gaps))
        return candidates


def _to_candidates(meals: list, gaps: Sequence[str]) -> List[MealCandidate]:
    batch = uuid4().hex[:8]
    candidates = []
    for index, meal in enumerate(meals):
        if not isinstance(meal, dict):
            continue
        data = dict(meal)
        data["id"] = f"ai_{batch}_{index}"
        data["has_media"] = False
        # Tag each meal with the need it was generated for so coverage is visible
        if index < len(gaps):
            data["tags"] = list(data.get("tags") or []) + [gaps[index]]
        try:
            candidates.append(MealCandidate.from_dict(data, source=SOURCE_GENERATED))
        except ValidationError:
            logger.exception("Discarding malformed generated meal %r", meal.get("name"))
    return candidates


# === JSON Parsing ===
def parse_generated_meals(text: str) -> Optional[list]:
    """Extract the "meals" list from model output; None when no JSON can be recovered."""
    for attempt in (text, _drop_trailing_commas(_unfence(text))):
        try:
            return _meals_from(json.loads(attempt))
        except ValueError:
            pass
    candidate = _first_json_block(_drop_trailing_commas(_unfence(text)))
    if candidate:
        try:
            return _meals_from(json.loads(_drop_trailing_commas(candidate)))
        except ValueError:
            logger.exception("Failed to decode extracted JSON from AI output")
    return None


def _meals_from(parsed) -> list:
    if isinstance(parsed, dict) and isinstance(parsed.get("meals"), list):
        return parsed["meals"]
    if isinstance(parsed, list):
        return parsed
    raise ValueError("JSON has no meals list")


# === Model output recovery ===
_FENCE = re.compile(r"```(?:json)?\s*\n(.*?)```", re.S)
_TRAILING_COMMA = re.compile(r",\s*([}\]])")
_CLOSERS = {"{": "}", "[": "]"}


def _unfence(text: str) -> str:
    """Body of the first ```json fenced block, or the text itself without stray fences."""
    match = _FENCE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip().strip("`").strip()


def _drop_trailing_commas(text: str) -> str:
    """Models like to leave a comma after the last meal or the last tag."""
    return _TRAILING_COMMA.sub(r"\1", text)


def _first_json_block(text: str) -> Optional[str]:
    """First balanced {...} or [...] in prose around the meals JSON; None on a bracket mismatch."""
    expected = []
    start = None
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            if start is None:
                start = i
            expected.append(_CLOSERS[ch])
        elif ch in "}]" and expected:
            if expected.pop() != ch:
                return None
            if not expected:
                return text[start:i + 1]
    return None
