"""Group options, risk estimate and severity band for a cohort selection."""

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List

import config
from dataset import Dataset, lookup_base_rate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiskBreakdown:
    base_rate: float
    used_fallback: bool
    fruit_adjustment: float
    exercise_adjustment: float

    @property
    def total(self) -> float:
        return self.base_rate + self.fruit_adjustment + self.exercise_adjustment

    @property
    def score(self) -> float:
        """Total rounded half-up to one decimal, as shown to the user."""
        if not math.isfinite(self.total):
            return self.total
        return float(Decimal(self.total).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def resolve_groups(dataset: Dataset, category: str) -> List[str]:
    """Group labels valid for ``category``, in dataset order.

    Read from the anchor state. An unknown category gives an empty list.
    """
    try:
        return list(dataset.demographics[dataset.anchor_state][category])
    except (KeyError, TypeError):
        return []


def lifestyle_adjustment(score: float, weight: float) -> float:
    """Linear delta: 0 at the neutral score, +/- ``weight`` at the ends."""
    return (score - config.NEUTRAL_SCORE) * (weight / config.NEUTRAL_SCORE)


def explain_risk(dataset: Dataset, selection) -> RiskBreakdown:
    base_rate = lookup_base_rate(dataset, *selection.cohort)
    used_fallback = base_rate is None
    if used_fallback:
        logger.warning(
            "No base rate for %s / %s / %s, using fallback %.1f",
            *selection.cohort, config.FALLBACK_BASE_RATE,
        )
        base_rate = config.FALLBACK_BASE_RATE

    return RiskBreakdown(
        base_rate=base_rate,
        used_fallback=used_fallback,
        fruit_adjustment=lifestyle_adjustment(selection.fruit_score, dataset.weight("low_fruit")),
        exercise_adjustment=lifestyle_adjustment(selection.exercise_score, dataset.weight("no_exercise")),
    )


def estimate_risk(dataset: Dataset, selection) -> float:
    """Estimated obesity risk (percent, one decimal). Never raises on lookup misses."""
    return explain_risk(dataset, selection).score


def format_risk(value: float) -> str:
    return f"{value:.1f}%"


def risk_band(score: float) -> str:
    if score > config.HIGH_RISK_THRESHOLD:
        return "high"
    if score > config.MEDIUM_RISK_THRESHOLD:
        return "med"
    return "low"
