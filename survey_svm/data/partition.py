"""Train/test partitioning shared across the row-aligned survey tables."""

from dataclasses import dataclass

import numpy as np
from sklearn.model_selection import train_test_split

from survey_svm.config import RANDOM_SEED, TEST_SIZE
from survey_svm.errors import PartitionMismatchError
from survey_svm.utils import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Partition:
    """Disjoint train/test row indices drawn for a table of ``n_rows`` rows."""

    train_index: np.ndarray
    test_index: np.ndarray
    n_rows: int
    test_size: float
    seed: int

    @property
    def n_train(self) -> int:
        return len(self.train_index)

    @property
    def n_test(self) -> int:
        return len(self.test_index)


def draw_partition(n_rows: int, test_size: float = TEST_SIZE, seed: int = RANDOM_SEED) -> Partition:
    """
    Draw a seeded random train/test split of ``range(n_rows)``.

    The split is not stratified: the same indices are reused for every
    target, and each target has its own label distribution.
    """
    if not 0.0 < test_size < 1.0:
        raise ValueError(f"test_size must be between 0 and 1, got {test_size}")
    if n_rows < 2:
        raise ValueError(f"Cannot partition {n_rows} rows")

    train_index, test_index = train_test_split(
        np.arange(n_rows),
        test_size=test_size,
        random_state=seed,
        shuffle=True,
    )
    # Sorted so subsets keep the source row order
    train_index = np.sort(train_index)
    test_index = np.sort(test_index)

    log.info(
        "Partition: %d train / %d test (%.0f%% test, seed=%d)",
        len(train_index), len(test_index), test_size * 100, seed,
    )
    return Partition(
        train_index=train_index,
        test_index=test_index,
        n_rows=n_rows,
        test_size=test_size,
        seed=seed,
    )


def apply_partition(dataset: dict, partition: Partition) -> dict:
    """
    Split one loaded dataset using a previously drawn partition.

    Features are returned unscaled.
    """
    df = dataset["df"]
    if len(df) != partition.n_rows:
        raise PartitionMismatchError(
            f"Partition was drawn for {partition.n_rows} rows but dataset "
            f"'{dataset['metadata']['name']}' has {len(df)}"
        )

    feature_names = dataset["feature_names"]
    target_name = dataset["target_name"]

    X = df[feature_names].to_numpy(dtype=float)
    y = df[target_name].astype(str).to_numpy()

    return {
        "X_train": X[partition.train_index],
        "X_test": X[partition.test_index],
        "y_train": y[partition.train_index],
        "y_test": y[partition.test_index],
        "feature_names": feature_names,
        "target_name": target_name,
        "positive_label": dataset["positive_label"],
        "negative_label": dataset["negative_label"],
        "metadata": dataset["metadata"],
        "partition": partition,
    }
