"""Tables and chart behind the full report view."""

import matplotlib.pyplot as plt
import pandas as pd

from dataset import Dataset, to_frame
from risk_engine import RiskBreakdown, resolve_groups

RISK_COLOR = "#ff4d4d"
PROTECTIVE_COLOR = "#10b981"


def contribution_frame(breakdown: RiskBreakdown) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "factor": ["Base rate", "Fruit intake", "Physical activity"],
            "contribution": [
                breakdown.base_rate,
                breakdown.fruit_adjustment,
                breakdown.exercise_adjustment,
            ],
        }
    ).set_index("factor")


# --- Personalized lifestyle impact bar plot ---
def contribution_chart(breakdown: RiskBreakdown, cohort_label: str):
    impacts = contribution_frame(breakdown).drop(index="Base rate")
    impacts = impacts.sort_values("contribution", ascending=True)
    colors = [RISK_COLOR if v > 0 else PROTECTIVE_COLOR for v in impacts["contribution"]]

    fig, ax = plt.subplots(figsize=(8, len(impacts) * 0.6 + 1.5))
    ax.barh(impacts.index, impacts["contribution"], color=colors)
    ax.axvline(0, color="#636e72", linewidth=0.8)
    ax.set_xlabel("Change to risk (percentage points)")
    ax.set_title(f"Lifestyle impact on base rate for {cohort_label}")
    plt.tight_layout()
    return fig


def group_comparison(dataset: Dataset, state: str, category: str) -> pd.DataFrame:
    """Base rate of every group of ``category`` in ``state``, in schema order."""
    df = to_frame(dataset)
    df = df[(df["state"] == state) & (df["category"] == category)]
    position = {group: i for i, group in enumerate(resolve_groups(dataset, category))}
    df = df.assign(_order=df["group"].map(position)).sort_values("_order", kind="stable")
    return df[["group", "base_rate"]].reset_index(drop=True)


def state_comparison(dataset: Dataset, category: str, group: str) -> pd.DataFrame:
    """Base rate of one cohort across all states, highest first."""
    df = to_frame(dataset)
    df = df[(df["category"] == category) & (df["group"] == group)]
    df = df.sort_values(["base_rate", "state"], ascending=[False, True])
    df = df[["state", "base_rate"]].reset_index(drop=True)
    df.insert(0, "rank", range(1, len(df) + 1))
    return df
