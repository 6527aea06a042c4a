import numpy as np
import pytest

from survey_svm.data import DatasetLoader, make_synthetic_survey, write_synthetic_survey
from survey_svm.models import ClassifierTrainer

N_ROWS = 300


@pytest.fixture
def survey_frames():
    """Three aligned synthetic survey tables."""
    return make_synthetic_survey(N_ROWS, seed=7)


@pytest.fixture
def survey_dir(tmp_path):
    """Directory holding the synthetic tables under their registered file names."""
    data_dir = tmp_path / "clean"
    write_synthetic_survey(data_dir, n_rows=N_ROWS, seed=7)
    return data_dir


@pytest.fixture
def loaded_datasets(survey_dir):
    return DatasetLoader(survey_dir).load_all(["cancer", "diabetes", "diabetes_borderline"])


@pytest.fixture
def imbalanced_xy():
    """100 rows, 90 'No' around the origin and 10 'Yes' in a separate cluster."""
    rng = np.random.default_rng(0)
    X_neg = rng.normal(0.0, 1.0, size=(90, 2))
    X_pos = rng.normal(4.0, 0.5, size=(10, 2))
    X = np.vstack([X_neg, X_pos])
    y = np.array(["No"] * 90 + ["Yes"] * 10)
    order = rng.permutation(100)
    return X[order], y[order]


@pytest.fixture
def overlapping_xy():
    """
    100 rows, 90 'No' / 10 'Yes', where every 'Yes' row shares its exact
    features with several 'No' rows.

    Five locations on the x2 = 0 line hold 16 'No' and 1 'Yes' each; five
    on the x2 = 5 line hold 2 'No' and 1 'Yes' each. Without weights every
    location is majority 'No'. A 1:10 weight flips only the x2 = 5 line.
    """
    X, y = [], []
    for i in range(5):
        X += [[float(i), 0.0]] * 17
        y += ["No"] * 16 + ["Yes"]
        X += [[float(i), 5.0]] * 3
        y += ["No"] * 2 + ["Yes"]
    return np.array(X), np.array(y)


@pytest.fixture
def imbalanced_split(imbalanced_xy):
    """Split dict shaped like apply_partition's output."""
    X, y = imbalanced_xy
    pos_idx = np.flatnonzero(y == "Yes")
    neg_idx = np.flatnonzero(y == "No")
    test_mask = np.zeros(len(y), dtype=bool)
    test_mask[pos_idx[:2]] = True
    test_mask[neg_idx[:18]] = True
    return {
        "X_train": X[~test_mask],
        "X_test": X[test_mask],
        "y_train": y[~test_mask],
        "y_test": y[test_mask],
        "feature_names": ["f1", "f2"],
        "target_name": "condition",
        "positive_label": "Yes",
        "negative_label": "No",
        "metadata": {"name": "toy"},
    }


@pytest.fixture
def trained_linear(imbalanced_split):
    return ClassifierTrainer().fit(
        imbalanced_split["X_train"],
        imbalanced_split["y_train"],
        kernel="linear",
        params={"C": 1.0},
        class_weight={"No": 1.0, "Yes": 10.0},
        positive_label="Yes",
        negative_label="No",
        feature_names=["f1", "f2"],
    )
