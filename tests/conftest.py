import json

import pytest

from dataset import parse_dataset

RAW = {
    "demographics": {
        "Alabama": {
            "Age (years)": {"18 - 24": 25.0, "25 - 34": 38.0, "65 or older": 33.0},
            "Gender": {"Male": 38.5, "Female": 41.5},
        },
        "Texas": {
            "Age (years)": {"18 - 24": 30, "25 - 34": 34.5, "65 or older": 30.5},
            "Gender": {"Male": 36.0, "Female": 35.5},
        },
        "Colorado": {
            "Age (years)": {"18 - 24": 14.5, "25 - 34": 23.0, "65 or older": 22.0},
            "Gender": {"Male": 25.5, "Female": 24.0},
        },
    },
    "model_weights": {"low_fruit": 10, "no_exercise": 10},
}


@pytest.fixture
def raw_data():
    return json.loads(json.dumps(RAW))


@pytest.fixture
def dataset(raw_data):
    return parse_dataset(raw_data, anchor_state="Alabama")


@pytest.fixture
def data_file(tmp_path, raw_data):
    path = tmp_path / "obesity_project_data.json"
    path.write_text(json.dumps(raw_data), encoding="utf-8")
    return path
