"""Cross-validated hyperparameter search against a 1 - F1 objective."""

import time
from dataclasses import dataclass, field

import numpy as np
from sklearn.metrics import f1_score
from sklearn.model_selection import KFold

from survey_svm.config import (
    CV_FOLDS,
    DEFAULT_DEGENERATE_POLICY,
    DEGENERATE_POLICIES,
    PARAM_GRIDS,
    RANDOM_SEED,
)
from survey_svm.errors import DegenerateLabelsError
from survey_svm.models.trainer import build_svc, validate_class_weight
from survey_svm.utils import get_logger

log = get_logger(__name__)


def f1_objective(y_true, y_pred, positive_label: str) -> float | None:
    """
    Return 1 - F1 for ``positive_label``, or None when F1 is undefined.

    F1 is undefined when the fold has no true positive-label rows or the
    predictions contain none, since precision or recall is then 0/0.
    """
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    pos_true = y_true == positive_label
    pos_pred = y_pred == positive_label

    if not pos_true.any() or not pos_pred.any():
        return None

    return 1.0 - float(f1_score(y_true, y_pred, pos_label=positive_label))


@dataclass
class CandidateScore:
    params: dict
    mean_score: float
    fold_scores: list = field(default_factory=list)
    degenerate_folds: int = 0


@dataclass
class TuningResult:
    kernel: str
    best_params: dict
    best_score: float
    candidates: list
    cv_folds: int
    degenerate_policy: str
    tune_time_seconds: float = 0.0

    @property
    def degenerate_folds(self) -> int:
        return sum(c.degenerate_folds for c in self.candidates)

    def to_dict(self) -> dict:
        return {
            "kernel": self.kernel,
            "best_params": self.best_params,
            "best_score": round(self.best_score, 4),
            "cv_folds": self.cv_folds,
            "degenerate_policy": self.degenerate_policy,
            "degenerate_folds": self.degenerate_folds,
            "tune_time_seconds": self.tune_time_seconds,
            "candidates": [
                {
                    "params": c.params,
                    "mean_score": round(c.mean_score, 4),
                    "degenerate_folds": c.degenerate_folds,
                }
                for c in self.candidates
            ],
        }


class HyperparameterTuner:
    """Grid search over SVM kernel parameters with k-fold cross-validation."""

    def __init__(self, cv_folds: int = CV_FOLDS, seed: int = RANDOM_SEED,
                 degenerate_policy: str = DEFAULT_DEGENERATE_POLICY):
        """
        Args:
            cv_folds: number of cross-validation folds.
            seed: seed for the fold assignment shuffle.
            degenerate_policy: how to score a fold where F1 is undefined.
                "perfect" scores it 0, "worst" scores it 1, "skip" leaves
                it out of the candidate's average.
        """
        if cv_folds < 2:
            raise ValueError(f"cv_folds must be at least 2, got {cv_folds}")
        if degenerate_policy not in DEGENERATE_POLICIES:
            raise ValueError(
                f"Unknown degenerate policy '{degenerate_policy}'. "
                f"Available: {list(DEGENERATE_POLICIES)}"
            )
        self.cv_folds = cv_folds
        self.seed = seed
        self.degenerate_policy = degenerate_policy

    def _score_fold(self, y_true, y_pred, positive_label: str) -> float | None:
        score = f1_objective(y_true, y_pred, positive_label)
        if score is not None:
            return score
        if self.degenerate_policy == "perfect":
            return 0.0
        if self.degenerate_policy == "worst":
            return 1.0
        return None

    def tune(self, X, y, kernel: str, class_weight: dict, positive_label: str,
             negative_label: str, grid: list[dict] | None = None) -> TuningResult:
        """
        Evaluate every candidate in the grid and return the one with the
        lowest mean 1 - F1 across folds. Ties keep the earlier candidate.
        """
        validate_class_weight(class_weight, positive_label, negative_label)
        if grid is None:
            if kernel not in PARAM_GRIDS:
                raise ValueError(f"No parameter grid for kernel '{kernel}'")
            grid = PARAM_GRIDS[kernel]
        if not grid:
            raise ValueError("Parameter grid is empty")

        X = np.asarray(X)
        y = np.asarray(y)
        folds = list(
            KFold(n_splits=self.cv_folds, shuffle=True, random_state=self.seed).split(X)
        )

        log.info(
            "Tuning %s: %d candidates x %d folds on %d samples",
            kernel, len(grid), self.cv_folds, len(X),
        )

        t0 = time.time()
        candidates = []
        for params in grid:
            fold_scores = []
            degenerate = 0
            for fold_no, (fit_idx, val_idx) in enumerate(folds, start=1):
                if len(np.unique(y[fit_idx])) < 2:
                    raise DegenerateLabelsError(
                        f"Training part of fold {fold_no} holds a single label; "
                        f"use fewer folds"
                    )
                model = build_svc(kernel, params, class_weight)
                model.fit(X[fit_idx], y[fit_idx])
                y_pred = model.predict(X[val_idx])

                if f1_objective(y[val_idx], y_pred, positive_label) is None:
                    degenerate += 1
                    log.warning(
                        "  %s %s fold %d: F1 undefined, policy '%s'",
                        kernel, params, fold_no, self.degenerate_policy,
                    )
                score = self._score_fold(y[val_idx], y_pred, positive_label)
                if score is not None:
                    fold_scores.append(score)

            mean_score = float(np.mean(fold_scores)) if fold_scores else 1.0
            candidates.append(CandidateScore(
                params=dict(params),
                mean_score=mean_score,
                fold_scores=fold_scores,
                degenerate_folds=degenerate,
            ))
            log.debug("  %s %s: mean 1-F1=%.4f", kernel, params, mean_score)

        best = min(candidates, key=lambda c: c.mean_score)
        tune_time = time.time() - t0

        log.info(
            "Best %s params: %s (mean 1-F1=%.4f, %.1fs)",
            kernel, best.params, best.mean_score, tune_time,
        )

        return TuningResult(
            kernel=kernel,
            best_params=best.params,
            best_score=best.mean_score,
            candidates=candidates,
            cv_folds=self.cv_folds,
            degenerate_policy=self.degenerate_policy,
            tune_time_seconds=round(tune_time, 3),
        )
