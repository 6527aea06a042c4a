"""Held-out evaluation of trained SVMs: confusion counts, class accuracies, ROC."""

from dataclasses import asdict, dataclass

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    auc,
    confusion_matrix,
    f1_score,
    recall_score,
    roc_curve,
)

from survey_svm.errors import DegenerateLabelsError
from survey_svm.models.trainer import TrainedModel
from survey_svm.utils import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class SubsetMetrics:
    """Confusion counts and derived accuracies for one subset (train or test)."""

    tn: int
    fp: int
    fn: int
    tp: int
    accuracy: float
    majority_accuracy: float
    minority_accuracy: float
    f1: float

    @property
    def n_samples(self) -> int:
        return self.tn + self.fp + self.fn + self.tp

    @property
    def confusion_matrix(self) -> list[list[int]]:
        """Rows are true labels, columns predictions, in (majority, minority) order."""
        return [[self.tn, self.fp], [self.fn, self.tp]]

    def to_dict(self) -> dict:
        data = asdict(self)
        data["confusion_matrix"] = self.confusion_matrix
        return data


@dataclass(frozen=True)
class RocCurve:
    fpr: np.ndarray
    tpr: np.ndarray
    thresholds: np.ndarray
    auc: float

    def to_dict(self) -> dict:
        return {
            "fpr": [round(float(v), 6) for v in self.fpr],
            "tpr": [round(float(v), 6) for v in self.tpr],
            "auc": round(self.auc, 4),
        }


@dataclass(frozen=True)
class EvaluationReport:
    target: str
    kernel: str
    params: dict
    train: SubsetMetrics
    test: SubsetMetrics
    roc: RocCurve

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "kernel": self.kernel,
            "params": self.params,
            "train": self.train.to_dict(),
            "test": self.test.to_dict(),
            "roc": self.roc.to_dict(),
        }


def confusion_counts(y_true, y_pred, positive_label: str, negative_label: str) -> SubsetMetrics:
    """Build the 2x2 confusion table and the accuracies derived from it."""
    cm = confusion_matrix(y_true, y_pred, labels=[negative_label, positive_label])
    tn, fp, fn, tp = (int(v) for v in cm.ravel())

    return SubsetMetrics(
        tn=tn,
        fp=fp,
        fn=fn,
        tp=tp,
        accuracy=round(float(accuracy_score(y_true, y_pred)), 4),
        majority_accuracy=round(float(recall_score(
            y_true, y_pred, pos_label=negative_label, zero_division=0,
        )), 4),
        minority_accuracy=round(float(recall_score(
            y_true, y_pred, pos_label=positive_label, zero_division=0,
        )), 4),
        f1=round(float(f1_score(
            y_true, y_pred, pos_label=positive_label, zero_division=0,
        )), 4),
    )


def roc_points(y_true, scores, positive_label: str) -> RocCurve:
    """ROC curve over every decision threshold, from (0, 0) to (1, 1)."""
    y_true = np.asarray(y_true)
    n_pos = int((y_true == positive_label).sum())
    if n_pos == 0 or n_pos == len(y_true):
        raise DegenerateLabelsError(
            f"ROC needs both labels; found {n_pos} of {len(y_true)} rows labelled '{positive_label}'"
        )

    fpr, tpr, thresholds = roc_curve(y_true, scores, pos_label=positive_label)
    return RocCurve(fpr=fpr, tpr=tpr, thresholds=thresholds, auc=float(auc(fpr, tpr)))


class ModelEvaluator:
    """Evaluates a trained model on both sides of its partition."""

    def evaluate(self, model: TrainedModel, split: dict, target: str | None = None) -> EvaluationReport:
        """
        Score the model on the train and test subsets of ``split`` (the dict
        returned by ``apply_partition``).
        """
        pos, neg = model.positive_label, model.negative_label
        target = target or split["metadata"]["name"]

        train = confusion_counts(split["y_train"], model.predict(split["X_train"]), pos, neg)
        test = confusion_counts(split["y_test"], model.predict(split["X_test"]), pos, neg)
        roc = roc_points(split["y_test"], model.decision_scores(split["X_test"]), pos)

        if train.minority_accuracy == 0.0 and train.tp + train.fn > 0:
            log.warning(
                "  %s/%s never predicts '%s' on its training set",
                target, model.kernel, pos,
            )

        log.info(
            "  %s/%s: test acc=%.4f, majority=%.4f, minority=%.4f, f1=%.4f, auc=%.4f",
            target, model.kernel, test.accuracy, test.majority_accuracy,
            test.minority_accuracy, test.f1, roc.auc,
        )

        return EvaluationReport(
            target=target,
            kernel=model.kernel,
            params=dict(model.params),
            train=train,
            test=test,
            roc=roc,
        )
