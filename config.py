"""Configuration for the LifeStyle & Risk app."""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

load_dotenv(BASE_DIR / ".env")

# Dataset
DATA_PATH = Path(os.getenv("OBESITY_DATA_PATH", BASE_DIR / "data" / "obesity_project_data.json"))
# Every state shares the anchor's category/group structure
ANCHOR_STATE = os.getenv("OBESITY_ANCHOR_STATE", "Alabama")
REQUIRED_WEIGHTS = ("low_fruit", "no_exercise")

# Estimator
FALLBACK_BASE_RATE = 30.0
NEUTRAL_SCORE = 50
SCORE_MIN = 0
SCORE_MAX = 100

# Severity bands (strict greater-than)
HIGH_RISK_THRESHOLD = 35
MEDIUM_RISK_THRESHOLD = 28

# Initial form values
DEFAULT_STATE = "Texas"
DEFAULT_CATEGORY = "Age (years)"
DEFAULT_GROUP = "18 - 24"

# Theme preference
THEME_SETTINGS_PATH = Path(
    os.getenv("OBESITY_THEME_PATH", Path.home() / ".lifestyle_risk" / "settings.json")
)

# Logging
LOG_LEVEL = os.getenv("OBESITY_LOG_LEVEL", "INFO")
