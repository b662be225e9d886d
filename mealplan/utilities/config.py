"""Configuration management for the meal-plan scheduler."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Scheduling defaults
MEDIA_COVERAGE_TARGET: Final[float] = float(os.getenv('MEDIA_COVERAGE_TARGET', '0.75'))
DEFAULT_SLOT_CAP: Final[int] = int(os.getenv('DEFAULT_SLOT_CAP', '7'))
WILDCARD_SLOT_CAP: Final[int] = int(os.getenv('WILDCARD_SLOT_CAP', '14'))

# Scoring weights
SCORE_BASE: Final[int] = int(os.getenv('SCORE_BASE', '10'))
SCORE_PREFERRED_MATCH: Final[int] = int(os.getenv('SCORE_PREFERRED_MATCH', '15'))
SCORE_EXCLUDED_MATCH: Final[int] = int(os.getenv('SCORE_EXCLUDED_MATCH', '-30'))

# Gap filler
GAP_FILLER_TIMEOUT: Final[float] = float(os.getenv('GAP_FILLER_TIMEOUT', '30'))
GAP_FILLER_MAX_MEALS: Final[int] = int(os.getenv('GAP_FILLER_MAX_MEALS', '4'))
OPENAI_MODEL: Final[str] = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
