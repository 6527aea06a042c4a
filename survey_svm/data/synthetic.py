"""Synthetic survey tables with the clean-data schema, for demos and tests."""

from pathlib import Path

import numpy as np
import pandas as pd

from survey_svm.config import FEATURE_COLUMNS, NEGATIVE_LABEL, POSITIVE_LABEL, RANDOM_SEED
from survey_svm.data.loader import DATASET_REGISTRY
from survey_svm.utils import get_logger

log = get_logger(__name__)


def _sigmoid(z: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-z))


def make_synthetic_survey(n_rows: int = 1000, seed: int = RANDOM_SEED) -> dict[str, pd.DataFrame]:
    """
    Generate one frame per registered dataset, all describing the same respondents.

    Diabetes risk rises with age and BMI, cancer risk mostly with age and
    alcohol use, so both labels are imbalanced but learnable.
    """
    if n_rows < 10:
        raise ValueError(f"n_rows must be at least 10, got {n_rows}")

    rng = np.random.default_rng(seed)

    height = np.clip(rng.normal(170.0, 10.0, n_rows), 140.0, 210.0)
    bmi = np.clip(rng.normal(28.0, 6.0, n_rows), 15.0, 60.0)
    weight = bmi * (height / 100.0) ** 2
    age = rng.integers(18, 81, n_rows).astype(float)
    employed = rng.random(n_rows) < 0.65
    hours_worked = np.where(employed, np.clip(rng.normal(40.0, 10.0, n_rows), 1.0, 80.0), 0.0)
    alcohol_days = np.clip(rng.poisson(40, n_rows) * rng.integers(0, 3, n_rows), 0, 365).astype(float)

    features = pd.DataFrame({
        "bmi": bmi.round(1),
        "weight": weight.round(1),
        "height": height.round(1),
        "age": age,
        "hours_worked": hours_worked.round(0),
        "alcohol_days": alcohol_days,
    })[FEATURE_COLUMNS]

    diabetes_risk = _sigmoid(-2.4 + 0.05 * (age - 50.0) + 0.15 * (bmi - 28.0))
    draw = rng.random(n_rows)
    diabetes = draw < diabetes_risk
    # Borderline answers sit just above the diagnosed band of the same draw
    borderline = (~diabetes) & (draw < diabetes_risk * 1.6)

    cancer_risk = _sigmoid(-2.6 + 0.06 * (age - 50.0) + 0.004 * (alcohol_days - 40.0))
    cancer = rng.random(n_rows) < cancer_risk

    def _label(mask: np.ndarray) -> np.ndarray:
        return np.where(mask, POSITIVE_LABEL, NEGATIVE_LABEL)

    frames = {
        "cancer": features.assign(cancer=_label(cancer)),
        "diabetes": features.assign(diabetes=_label(diabetes)),
        "diabetes_borderline": features.assign(diabetes=_label(diabetes | borderline)),
    }

    for name, df in frames.items():
        target = DATASET_REGISTRY[name]["target"]
        log.debug("Synthetic %s: %s", name, df[target].value_counts().to_dict())

    return frames


def write_synthetic_survey(directory: str | Path, n_rows: int = 1000,
                           seed: int = RANDOM_SEED) -> dict[str, Path]:
    """Write the synthetic tables under the registered file names."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    paths = {}
    for name, df in make_synthetic_survey(n_rows, seed).items():
        path = directory / DATASET_REGISTRY[name]["file"]
        df.to_csv(path, index=False)
        paths[name] = path

    log.info("Wrote %d synthetic survey tables (%d rows) to %s", len(paths), n_rows, directory)
    return paths
