"""Dataset loading module for the clean survey tables."""

from pathlib import Path

import pandas as pd

from survey_svm.config import DATA_DIR, FEATURE_COLUMNS, NEGATIVE_LABEL, POSITIVE_LABEL
from survey_svm.errors import DataLoadError, PartitionMismatchError, SchemaMismatchError
from survey_svm.utils import get_logger

log = get_logger(__name__)

# Registry of the clean survey tables. All of them describe the same
# respondents in the same row order.
DATASET_REGISTRY = {
    "cancer": {
        "file": "cancer_clean.csv",
        "target": "cancer",
        "description": "Ever told by a doctor they had cancer",
        "positive_label": POSITIVE_LABEL,
        "negative_label": NEGATIVE_LABEL,
    },
    "diabetes": {
        "file": "diabetes_clean.csv",
        "target": "diabetes",
        "description": "Diagnosed diabetes, borderline answers counted as No",
        "positive_label": POSITIVE_LABEL,
        "negative_label": NEGATIVE_LABEL,
    },
    "diabetes_borderline": {
        "file": "diabetes_borderline_clean.csv",
        "target": "diabetes",
        "description": "Diagnosed diabetes, borderline answers counted as Yes",
        "positive_label": POSITIVE_LABEL,
        "negative_label": NEGATIVE_LABEL,
    },
}


class DatasetLoader:
    """Loads the clean survey tables and checks them against the fixed schema."""

    def __init__(self, data_dir: str | Path | None = None):
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
        self.datasets = {}

    @staticmethod
    def list_available() -> list[str]:
        """Return names of all registered datasets."""
        return list(DATASET_REGISTRY.keys())

    def load(self, name: str) -> dict:
        """
        Load a registered dataset by name.

        Returns a dict with keys:
            - df: pd.DataFrame with float features and a categorical label
            - feature_names: list of feature column names
            - target_name: name of the label column
            - positive_label / negative_label: the minority and majority label values
            - metadata: row counts and class distribution
        """
        if name not in DATASET_REGISTRY:
            raise ValueError(
                f"Unknown dataset '{name}'. "
                f"Available: {self.list_available()}"
            )

        entry = DATASET_REGISTRY[name]
        log.info("Loading dataset: %s", name)
        log.info("Description: %s", entry["description"])

        result = self.load_custom_csv(
            self.data_dir / entry["file"],
            target_column=entry["target"],
            positive_label=entry["positive_label"],
            negative_label=entry["negative_label"],
            name=name,
        )
        self.datasets[name] = result
        return result

    def load_all(self, names: list[str]) -> dict[str, dict]:
        """Load several registered datasets and verify they are row-aligned."""
        datasets = {name: self.load(name) for name in names}
        check_aligned(datasets)
        return datasets

    def load_custom_csv(
        self,
        path: str | Path,
        target_column: str,
        positive_label: str = POSITIVE_LABEL,
        negative_label: str = NEGATIVE_LABEL,
        feature_columns: list[str] | None = None,
        name: str | None = None,
    ) -> dict:
        """Load a survey CSV with the given label column and validate its schema."""
        path = Path(path)
        if feature_columns is None:
            feature_columns = list(FEATURE_COLUMNS)
        expected = feature_columns + [target_column]

        log.info("Reading CSV from: %s", path)
        if not path.is_file():
            raise DataLoadError(f"Dataset file not found: {path}")

        try:
            df = pd.read_csv(path)
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise DataLoadError(f"Could not parse {path}: {e}") from e

        if len(df.columns) != len(expected):
            raise SchemaMismatchError(
                f"{path}: expected {len(expected)} columns {expected}, "
                f"found {len(df.columns)} {list(df.columns)}"
            )
        missing = [c for c in expected if c not in df.columns]
        if missing:
            raise SchemaMismatchError(f"{path}: missing columns {missing}")

        df = df[expected].copy()

        n_missing = int(df.isnull().sum().sum())
        if n_missing > 0:
            raise DataLoadError(
                f"{path}: found {n_missing} missing values in a clean dataset"
            )

        try:
            df[feature_columns] = df[feature_columns].astype(float)
        except ValueError as e:
            raise DataLoadError(f"{path}: non-numeric feature values: {e}") from e

        labels = df[target_column].astype(str).str.strip()
        unknown = set(labels.unique()) - {positive_label, negative_label}
        if unknown:
            raise DataLoadError(
                f"{path}: unexpected values in '{target_column}': {sorted(unknown)}"
            )
        df[target_column] = pd.Categorical(
            labels, categories=[negative_label, positive_label]
        )

        metadata = {
            "name": name or str(path),
            "path": str(path),
            "n_samples": len(df),
            "n_features": len(feature_columns),
            "class_distribution": {
                str(k): int(v) for k, v in df[target_column].value_counts().items()
            },
        }

        log.info(
            "Loaded %d samples with %d features (%s)",
            metadata["n_samples"],
            metadata["n_features"],
            metadata["class_distribution"],
        )

        return {
            "df": df,
            "feature_names": feature_columns,
            "target_name": target_column,
            "positive_label": positive_label,
            "negative_label": negative_label,
            "metadata": metadata,
        }


def check_aligned(datasets: dict[str, dict]) -> int:
    """
    Return the shared row count of the datasets.

    Raises PartitionMismatchError if the row counts differ or if the shared
    feature columns disagree at any row, i.e. the tables do not list the
    same respondents in the same order.
    """
    counts = {name: len(ds["df"]) for name, ds in datasets.items()}
    if len(set(counts.values())) > 1:
        raise PartitionMismatchError(f"Datasets are not row-aligned: {counts}")
    if not datasets:
        return 0

    ref_name, ref = next(iter(datasets.items()))
    for name, ds in datasets.items():
        shared = [c for c in ref["feature_names"] if c in ds["feature_names"]]
        if not shared:
            continue
        left = ref["df"][shared].reset_index(drop=True)
        right = ds["df"][shared].reset_index(drop=True)
        if not left.equals(right):
            mismatched = int((left != right).any(axis=1).sum())
            raise PartitionMismatchError(
                f"Datasets '{ref_name}' and '{name}' are not row-aligned: "
                f"{mismatched} rows differ in {shared}"
            )
    return counts[ref_name]
