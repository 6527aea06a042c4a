"""Class-weighted SVM training for the survey targets."""

import time
from dataclasses import dataclass, field

import numpy as np
from sklearn.svm import SVC

from survey_svm.config import MAX_ITER
from survey_svm.errors import ClassWeightError, DegenerateLabelsError
from survey_svm.utils import get_logger

log = get_logger(__name__)

# Kernel configurations: name -> fixed SVC kwargs. Tuned values (C, degree,
# coef0, gamma) are layered on top per fit.
KERNEL_CONFIGS = {
    "linear": {"kernel": "linear", "max_iter": MAX_ITER, "cache_size": 500},
    "poly": {"kernel": "poly", "max_iter": MAX_ITER, "cache_size": 500},
    "rbf": {"kernel": "rbf", "max_iter": MAX_ITER, "cache_size": 500},
}


def validate_class_weight(class_weight: dict, positive_label: str, negative_label: str) -> None:
    """Raise ClassWeightError unless the map up-weights the minority (positive) label."""
    missing = {positive_label, negative_label} - set(class_weight)
    if missing:
        raise ClassWeightError(f"Class-weight map has no entry for {sorted(missing)}")

    for label, weight in class_weight.items():
        if not weight > 0:
            raise ClassWeightError(f"Weight for '{label}' must be positive, got {weight}")

    if not class_weight[positive_label] > class_weight[negative_label]:
        raise ClassWeightError(
            f"Minority label '{positive_label}' weight ({class_weight[positive_label]}) "
            f"must exceed majority label '{negative_label}' weight "
            f"({class_weight[negative_label]})"
        )


def class_weight_from_counts(y, positive_label: str, negative_label: str) -> dict:
    """Weight the majority label 1 and the minority label by the imbalance ratio."""
    y = np.asarray(y)
    n_pos = int((y == positive_label).sum())
    n_neg = int((y == negative_label).sum())
    if n_pos == 0 or n_neg == 0:
        raise DegenerateLabelsError(
            f"Need both labels to derive weights, found {n_pos} '{positive_label}' "
            f"and {n_neg} '{negative_label}'"
        )
    if n_pos >= n_neg:
        raise ClassWeightError(
            f"'{positive_label}' is not the minority label ({n_pos} vs {n_neg})"
        )
    weights = {negative_label: 1.0, positive_label: round(n_neg / n_pos, 3)}
    log.info("Class weights from counts (%d/%d): %s", n_neg, n_pos, weights)
    return weights


def build_svc(kernel: str, params: dict, class_weight: dict) -> SVC:
    """Instantiate an unfitted SVC for a kernel and hyperparameter set."""
    if kernel not in KERNEL_CONFIGS:
        raise ValueError(f"Unknown kernel '{kernel}'. Available: {list(KERNEL_CONFIGS)}")
    kwargs = dict(KERNEL_CONFIGS[kernel])
    kwargs.update(params)
    return SVC(class_weight=class_weight, **kwargs)


@dataclass(frozen=True)
class TrainedModel:
    """A fitted SVM together with everything needed to interpret its outputs."""

    estimator: SVC
    kernel: str
    params: dict
    class_weight: dict
    positive_label: str
    negative_label: str
    feature_names: list = field(default_factory=list)
    train_time_seconds: float = 0.0
    converged: bool = True

    def predict(self, X) -> np.ndarray:
        return self.estimator.predict(X)

    def decision_scores(self, X) -> np.ndarray:
        """Signed distance to the boundary; larger means more likely the positive label."""
        scores = self.estimator.decision_function(X)
        if self.estimator.classes_[1] == self.positive_label:
            return scores
        return -scores

    @property
    def n_support(self) -> int:
        return int(self.estimator.n_support_.sum())


class ClassifierTrainer:
    """Fits one class-weighted SVM per target/kernel combination."""

    def fit(
        self,
        X,
        y,
        kernel: str,
        params: dict,
        class_weight: dict,
        positive_label: str,
        negative_label: str,
        feature_names: list[str] | None = None,
    ) -> TrainedModel:
        """
        Fit an SVM on unscaled features.

        Raises ClassWeightError if the weights would not counteract the
        imbalance and DegenerateLabelsError if y has a single label.
        """
        validate_class_weight(class_weight, positive_label, negative_label)
        labels = set(np.unique(y))
        if labels != {positive_label, negative_label}:
            raise DegenerateLabelsError(
                f"Training labels must be exactly {{{positive_label!r}, {negative_label!r}}}, "
                f"found {sorted(labels)}"
            )

        model = build_svc(kernel, params, class_weight)

        t0 = time.time()
        model.fit(X, y)
        train_time = time.time() - t0

        trained = TrainedModel(
            estimator=model,
            kernel=kernel,
            params=dict(params),
            class_weight=dict(class_weight),
            positive_label=positive_label,
            negative_label=negative_label,
            feature_names=list(feature_names or []),
            train_time_seconds=round(train_time, 3),
            converged=model.fit_status_ == 0,
        )

        if not trained.converged:
            log.warning(
                "  %s %s: solver stopped at max_iter=%d before converging",
                kernel, params, model.max_iter,
            )

        log.info(
            "  %s %s: %d support vectors, %.3fs",
            kernel, params, trained.n_support, train_time,
        )
        return trained
