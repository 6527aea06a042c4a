"""Configuration constants for the survey analysis."""

from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data" / "clean"
DEFAULT_OUTPUT_DIR = "survey_svm_output"

# Reproducibility: one seed drives the partition draw and the CV fold assignment
RANDOM_SEED = 42
TEST_SIZE = 0.3
CV_FOLDS = 5

# Survey schema, fixed by the upstream cleaning step
FEATURE_COLUMNS = [
    "bmi",
    "weight",
    "height",
    "age",
    "hours_worked",
    "alcohol_days",
]
POSITIVE_LABEL = "Yes"
NEGATIVE_LABEL = "No"
LABEL_VALUES = (NEGATIVE_LABEL, POSITIVE_LABEL)

# Candidate hyperparameters per kernel. Keys map onto sklearn.svm.SVC arguments:
# C is the cost, coef0 the polynomial offset, gamma the kernel bandwidth.
PARAM_GRIDS = {
    "linear": [
        {"C": 0.01},
        {"C": 0.1},
        {"C": 1.0},
        {"C": 10.0},
    ],
    "poly": [
        {"C": c, "degree": d, "coef0": r, "gamma": g}
        for c in (0.1, 1.0, 10.0)
        for d in (2, 3)
        for r in (0.0, 1.0)
        for g in (1e-5, 1e-4)
    ],
    "rbf": [
        {"C": c, "gamma": g}
        for c in (0.1, 1.0, 10.0)
        for g in (0.001, 0.01, 0.1)
    ],
}

# Solver cap; features are left unscaled so polynomial fits can be slow to converge
MAX_ITER = 1_000_000

# Feature pairs sliced for the 2-D decision-boundary plots
DECISION_BOUNDARY_FEATURES = [
    ("age", "bmi"),
    ("hours_worked", "alcohol_days"),
]

DEGENERATE_POLICIES = ("perfect", "worst", "skip")
DEFAULT_DEGENERATE_POLICY = "perfect"
