"""Loading and lookups for the bundled obesity dataset.

The data file holds two parts:

- ``demographics``: state -> category -> group -> base rate (percent)
- ``model_weights``: lifestyle factor -> coefficient

All states are expected to share one category/group structure. That structure
is read from a single anchor state and checked against every other state when
the file is loaded, so the rest of the app can rely on it.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

import config

logger = logging.getLogger(__name__)

Demographics = Dict[str, Dict[str, Dict[str, float]]]
Schema = Dict[str, Tuple[str, ...]]


class DatasetError(Exception):
    """Raised when the data file cannot be read or is missing a section."""


class DatasetSchemaError(DatasetError):
    """Raised when a state's structure differs from the anchor state's."""


@dataclass(frozen=True)
class Dataset:
    demographics: Demographics
    model_weights: Dict[str, float]
    anchor_state: str = config.ANCHOR_STATE
    schema: Schema = field(default_factory=dict, compare=False)

    def weight(self, name: str) -> float:
        return float(self.model_weights[name])


def _require_mapping(value, where: str) -> None:
    if not isinstance(value, dict):
        raise DatasetSchemaError(f"{where} must be an object, got {type(value).__name__}.")


def build_schema(demographics: Demographics, anchor_state: str) -> Schema:
    """Category -> ordered group labels, taken from the anchor state."""
    _require_mapping(demographics, "demographics")
    anchor = demographics.get(anchor_state)
    if anchor is None:
        raise DatasetSchemaError(
            f"Anchor state '{anchor_state}' is not in the dataset "
            f"({len(demographics)} states loaded)."
        )
    _require_mapping(anchor, f"State '{anchor_state}'")
    for category, groups in anchor.items():
        _require_mapping(groups, f"State '{anchor_state}', category '{category}'")
    return {category: tuple(groups) for category, groups in anchor.items()}


def validate_dataset(dataset: Dataset) -> Schema:
    """Check that every state conforms to the anchor's structure.

    Returns the schema on success. Raises DatasetSchemaError naming the first
    offending state (and category) with the missing / unexpected labels.
    """
    schema = build_schema(dataset.demographics, dataset.anchor_state)

    _require_mapping(dataset.model_weights, "model_weights")
    for name in config.REQUIRED_WEIGHTS:
        value = dataset.model_weights.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DatasetSchemaError(
                f"model_weights.{name} must be a number, got {value!r}."
            )

    expected_categories = set(schema)
    for state, categories in dataset.demographics.items():
        _require_mapping(categories, f"State '{state}'")
        found = set(categories)
        if found != expected_categories:
            raise DatasetSchemaError(
                f"State '{state}' categories differ from '{dataset.anchor_state}': "
                f"missing {sorted(expected_categories - found)}, "
                f"unexpected {sorted(found - expected_categories)}."
            )
        for category, groups in categories.items():
            _require_mapping(groups, f"State '{state}', category '{category}'")
            expected_groups = set(schema[category])
            found_groups = set(groups)
            if found_groups != expected_groups:
                raise DatasetSchemaError(
                    f"State '{state}', category '{category}' groups differ from "
                    f"'{dataset.anchor_state}': "
                    f"missing {sorted(expected_groups - found_groups)}, "
                    f"unexpected {sorted(found_groups - expected_groups)}."
                )
    return schema


def parse_dataset(raw: dict, anchor_state: str = config.ANCHOR_STATE) -> Dataset:
    if not isinstance(raw, dict):
        raise DatasetError("Dataset root must be a JSON object.")
    missing = [key for key in ("demographics", "model_weights") if key not in raw]
    if missing:
        raise DatasetError(f"Dataset is missing section(s): {', '.join(missing)}.")

    dataset = Dataset(
        demographics=raw["demographics"],
        model_weights=raw["model_weights"],
        anchor_state=anchor_state,
    )
    return replace(dataset, schema=validate_dataset(dataset))


def load_dataset(path=None, anchor_state: str = config.ANCHOR_STATE) -> Dataset:
    """Read and validate the data file."""
    path = Path(path or config.DATA_PATH)
    try:
        with path.open(encoding="utf-8") as fh:
            raw = json.load(fh)
    except FileNotFoundError as e:
        raise DatasetError(f"Dataset file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise DatasetError(f"Dataset file {path} is not valid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DatasetError(f"Could not read dataset file {path}: {e}") from e

    dataset = parse_dataset(raw, anchor_state)
    logger.info(
        "Loaded dataset from %s: %d states, %d categories",
        path, len(dataset.demographics), len(dataset.schema),
    )
    return dataset


def list_states(dataset: Dataset) -> List[str]:
    return sorted(dataset.demographics)


def list_categories(dataset: Dataset) -> List[str]:
    anchor = dataset.demographics.get(dataset.anchor_state, {})
    return list(anchor)


def lookup_base_rate(dataset: Dataset, state: str, category: str, group: str) -> Optional[float]:
    """Base rate for a cohort, or None when any key in the path is missing."""
    try:
        return float(dataset.demographics[state][category][group])
    except (KeyError, TypeError, ValueError):
        return None


def to_frame(dataset: Dataset) -> pd.DataFrame:
    """Long-form table: one row per (state, category, group). Unusable rates become NaN."""
    rows = [
        {
            "state": state,
            "category": category,
            "group": group,
            "base_rate": rate if pd.api.types.is_scalar(rate) else None,
        }
        for state, categories in dataset.demographics.items()
        for category, groups in categories.items()
        for group, rate in groups.items()
    ]
    df = pd.DataFrame(rows, columns=["state", "category", "group", "base_rate"])
    # non-numeric leaves read as missing, same as lookup_base_rate
    df["base_rate"] = pd.to_numeric(df["base_rate"], errors="coerce").astype(float)
    return df
