import pytest

import config
from dataset import (
    DatasetError,
    DatasetSchemaError,
    list_categories,
    list_states,
    load_dataset,
    lookup_base_rate,
    parse_dataset,
    to_frame,
)


def test_load_dataset_from_file(data_file):
    dataset = load_dataset(data_file, anchor_state="Alabama")
    assert list_states(dataset) == ["Alabama", "Colorado", "Texas"]
    assert dataset.schema["Gender"] == ("Male", "Female")
    assert dataset.weight("low_fruit") == 10.0


def test_bundled_dataset_is_valid():
    dataset = load_dataset(config.DATA_PATH)
    assert dataset.anchor_state in dataset.demographics
    assert list_categories(dataset) == ["Age (years)", "Income", "Gender", "Education"]
    assert lookup_base_rate(dataset, "Texas", "Age (years)", "18 - 24") == 30.0


def test_missing_file_raises(tmp_path):
    with pytest.raises(DatasetError, match="not found"):
        load_dataset(tmp_path / "nope.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DatasetError, match="not valid JSON"):
        load_dataset(path)


def test_missing_section_raises(raw_data):
    del raw_data["model_weights"]
    with pytest.raises(DatasetError, match="model_weights"):
        parse_dataset(raw_data, anchor_state="Alabama")


def test_missing_anchor_state_raises(raw_data):
    with pytest.raises(DatasetSchemaError, match="Anchor state 'Nowhere'"):
        parse_dataset(raw_data, anchor_state="Nowhere")


def test_state_with_missing_category_is_rejected(raw_data):
    del raw_data["demographics"]["Texas"]["Gender"]
    with pytest.raises(DatasetSchemaError) as exc:
        parse_dataset(raw_data, anchor_state="Alabama")
    assert "Texas" in str(exc.value)
    assert "Gender" in str(exc.value)


def test_state_with_different_groups_is_rejected(raw_data):
    raw_data["demographics"]["Colorado"]["Gender"] = {"Male": 25.5, "Other": 20.0}
    with pytest.raises(DatasetSchemaError) as exc:
        parse_dataset(raw_data, anchor_state="Alabama")
    message = str(exc.value)
    assert "Colorado" in message
    assert "'Female'" in message
    assert "'Other'" in message


def test_non_numeric_weight_is_rejected(raw_data):
    raw_data["model_weights"]["no_exercise"] = "high"
    with pytest.raises(DatasetSchemaError, match="no_exercise"):
        parse_dataset(raw_data, anchor_state="Alabama")


def test_list_categories_follows_anchor_order(dataset):
    assert list_categories(dataset) == ["Age (years)", "Gender"]


@pytest.mark.parametrize(
    "cohort",
    [
        ("Nowhere", "Gender", "Male"),
        ("Texas", "Income", "Male"),
        ("Texas", "Gender", "18 - 24"),
    ],
)
def test_lookup_base_rate_returns_none_on_miss(dataset, cohort):
    assert lookup_base_rate(dataset, *cohort) is None


def test_lookup_base_rate_hit(dataset):
    assert lookup_base_rate(dataset, "Colorado", "Gender", "Female") == 24.0


def test_to_frame(dataset):
    df = to_frame(dataset)
    assert list(df.columns) == ["state", "category", "group", "base_rate"]
    assert len(df) == 3 * 5
    row = df[(df["state"] == "Texas") & (df["group"] == "Male")]
    assert row["base_rate"].iloc[0] == 36.0



def test_directory_path_raises_dataset_error(tmp_path):
    with pytest.raises(DatasetError, match="Could not read"):
        load_dataset(tmp_path)


def test_undecodable_file_raises_dataset_error(tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe{")
    with pytest.raises(DatasetError):
        load_dataset(path)


def test_scalar_category_is_rejected(raw_data):
    raw_data["demographics"]["Texas"]["Gender"] = 5
    with pytest.raises(DatasetSchemaError, match="State 'Texas', category 'Gender' must be an object"):
        parse_dataset(raw_data, anchor_state="Alabama")


def test_scalar_state_is_rejected(raw_data):
    raw_data["demographics"]["Colorado"] = []
    with pytest.raises(DatasetSchemaError, match="State 'Colorado' must be an object"):
        parse_dataset(raw_data, anchor_state="Alabama")


@pytest.mark.parametrize("section", ["demographics", "model_weights"])
def test_non_object_section_is_rejected(raw_data, section):
    raw_data[section] = ["not", "a", "mapping"]
    with pytest.raises(DatasetSchemaError, match=f"{section} must be an object"):
        parse_dataset(raw_data, anchor_state="Alabama")


def test_to_frame_reads_unusable_rate_as_nan(raw_data):
    raw_data["demographics"]["Texas"]["Gender"]["Male"] = None
    raw_data["demographics"]["Texas"]["Gender"]["Female"] = "n/a"
    dataset = parse_dataset(raw_data, anchor_state="Alabama")
    df = to_frame(dataset)
    texas = df[(df["state"] == "Texas") & (df["category"] == "Gender")]
    assert texas["base_rate"].isna().all()
    assert df["base_rate"].dtype == float
