"""Form selection state and the dependent group dropdown rule."""

from dataclasses import dataclass, replace
from typing import Tuple

import config
from dataset import Dataset, list_categories, list_states
from risk_engine import resolve_groups


@dataclass(frozen=True)
class Selection:
    """What the user currently has picked in the form.

    Attributes:
        state: State name, e.g. "Texas"
        category: Demographic category, e.g. "Age (years)"
        group: Group label within the category, e.g. "18 - 24"
        fruit_score: 0 (high intake) .. 100 (zero intake)
        exercise_score: 0 (very active) .. 100 (sedentary)
    """

    state: str
    category: str
    group: str
    fruit_score: float = config.NEUTRAL_SCORE
    exercise_score: float = config.NEUTRAL_SCORE

    @property
    def cohort(self) -> Tuple[str, str, str]:
        return self.state, self.category, self.group


def first_group(dataset: Dataset, category: str) -> str:
    groups = resolve_groups(dataset, category)
    return groups[0] if groups else ""


def default_selection(dataset: Dataset) -> Selection:
    """Configured starting cohort, falling back to the first valid option of each field."""
    state = config.DEFAULT_STATE
    if state not in dataset.demographics:
        state = list_states(dataset)[0] if dataset.demographics else ""

    category = config.DEFAULT_CATEGORY
    categories = list_categories(dataset)
    if category not in categories:
        category = categories[0] if categories else ""

    group = config.DEFAULT_GROUP
    if group not in resolve_groups(dataset, category):
        group = first_group(dataset, category)
    return Selection(state=state, category=category, group=group)


def change_category(dataset: Dataset, selection: Selection, category: str) -> Selection:
    """Switch category and reset the group to the first one valid for it."""
    return replace(selection, category=category, group=first_group(dataset, category))

