import pandas as pd
import pytest

from survey_svm.config import FEATURE_COLUMNS
from survey_svm.data import DATASET_REGISTRY, DatasetLoader, check_aligned
from survey_svm.errors import DataLoadError, PartitionMismatchError, SchemaMismatchError


def test_load_registered_dataset(survey_dir):
    ds = DatasetLoader(survey_dir).load("diabetes")

    df = ds["df"]
    assert ds["feature_names"] == FEATURE_COLUMNS
    assert ds["target_name"] == "diabetes"
    assert list(df.columns) == FEATURE_COLUMNS + ["diabetes"]
    assert all(df[c].dtype == float for c in FEATURE_COLUMNS)
    assert isinstance(df["diabetes"].dtype, pd.CategoricalDtype)
    assert list(df["diabetes"].cat.categories) == ["No", "Yes"]
    assert ds["metadata"]["n_samples"] == len(df)
    assert sum(ds["metadata"]["class_distribution"].values()) == len(df)


def test_unknown_dataset_name(survey_dir):
    with pytest.raises(ValueError, match="Unknown dataset"):
        DatasetLoader(survey_dir).load("stroke")


def test_missing_file(tmp_path):
    with pytest.raises(DataLoadError, match="not found"):
        DatasetLoader(tmp_path).load("cancer")


def test_column_count_mismatch(survey_dir):
    path = survey_dir / DATASET_REGISTRY["cancer"]["file"]
    pd.read_csv(path).drop(columns=["height"]).to_csv(path, index=False)

    with pytest.raises(SchemaMismatchError, match="expected 7 columns"):
        DatasetLoader(survey_dir).load("cancer")


def test_renamed_column(survey_dir):
    path = survey_dir / DATASET_REGISTRY["cancer"]["file"]
    pd.read_csv(path).rename(columns={"bmi": "body_mass"}).to_csv(path, index=False)

    with pytest.raises(SchemaMismatchError, match="missing columns"):
        DatasetLoader(survey_dir).load("cancer")


def test_schema_error_is_a_load_error():
    assert issubclass(SchemaMismatchError, DataLoadError)


def test_unexpected_label_value(survey_dir):
    path = survey_dir / DATASET_REGISTRY["cancer"]["file"]
    df = pd.read_csv(path)
    df.loc[0, "cancer"] = "Maybe"
    df.to_csv(path, index=False)

    with pytest.raises(DataLoadError, match="unexpected values"):
        DatasetLoader(survey_dir).load("cancer")


def test_missing_values_rejected(survey_dir):
    path = survey_dir / DATASET_REGISTRY["diabetes"]["file"]
    df = pd.read_csv(path)
    df.loc[3, "age"] = None
    df.to_csv(path, index=False)

    with pytest.raises(DataLoadError, match="missing values"):
        DatasetLoader(survey_dir).load("diabetes")


def test_empty_file(survey_dir):
    path = survey_dir / DATASET_REGISTRY["diabetes"]["file"]
    path.write_text("")

    with pytest.raises(DataLoadError):
        DatasetLoader(survey_dir).load("diabetes")


def test_load_custom_csv_with_own_columns(tmp_path):
    path = tmp_path / "custom.csv"
    pd.DataFrame({
        "age": [30, 40, 50, 60],
        "bmi": [22.0, 27.5, 31.0, 35.2],
        "stroke": ["No", "No", "Yes", "No"],
    }).to_csv(path, index=False)

    ds = DatasetLoader().load_custom_csv(path, "stroke", feature_columns=["age", "bmi"])

    assert ds["feature_names"] == ["age", "bmi"]
    assert ds["metadata"]["class_distribution"] == {"No": 3, "Yes": 1}


def test_load_all_returns_aligned_tables(loaded_datasets):
    assert set(loaded_datasets) == {"cancer", "diabetes", "diabetes_borderline"}
    assert check_aligned(loaded_datasets) == 300

    cancer = loaded_datasets["cancer"]["df"]
    diabetes = loaded_datasets["diabetes"]["df"]
    pd.testing.assert_frame_equal(cancer[FEATURE_COLUMNS], diabetes[FEATURE_COLUMNS])


def test_check_aligned_rejects_unequal_tables(loaded_datasets):
    short = dict(loaded_datasets["cancer"])
    short["df"] = short["df"].iloc[:-1]

    with pytest.raises(PartitionMismatchError, match="not row-aligned"):
        check_aligned({"cancer": short, "diabetes": loaded_datasets["diabetes"]})


def test_check_aligned_rejects_shuffled_rows(loaded_datasets):
    shuffled = dict(loaded_datasets["diabetes"])
    shuffled["df"] = shuffled["df"].sample(frac=1.0, random_state=0).reset_index(drop=True)

    with pytest.raises(PartitionMismatchError, match="rows differ"):
        check_aligned({"cancer": loaded_datasets["cancer"], "diabetes": shuffled})


def test_load_all_rejects_shuffled_table(survey_dir):
    path = survey_dir / DATASET_REGISTRY["diabetes"]["file"]
    pd.read_csv(path).sample(frac=1.0, random_state=1).to_csv(path, index=False)

    with pytest.raises(PartitionMismatchError, match="not row-aligned"):
        DatasetLoader(survey_dir).load_all(["cancer", "diabetes"])


def test_synthetic_tables_are_imbalanced(survey_frames):
    for name, df in survey_frames.items():
        target = DATASET_REGISTRY[name]["target"]
        counts = df[target].value_counts()
        assert counts["Yes"] > 0
        assert counts["Yes"] < counts["No"]


def test_borderline_variant_adds_positives(survey_frames):
    strict = survey_frames["diabetes"]["diabetes"] == "Yes"
    loose = survey_frames["diabetes_borderline"]["diabetes"] == "Yes"

    assert (loose | ~strict).all()
    assert loose.sum() >= strict.sum()
