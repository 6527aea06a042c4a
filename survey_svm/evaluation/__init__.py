from survey_svm.evaluation.evaluator import (
    EvaluationReport,
    ModelEvaluator,
    RocCurve,
    SubsetMetrics,
    confusion_counts,
    roc_points,
)
from survey_svm.evaluation.plots import plot_decision_boundary, plot_roc_curves
from survey_svm.evaluation.reporter import Reporter

__all__ = [
    "EvaluationReport",
    "ModelEvaluator",
    "RocCurve",
    "SubsetMetrics",
    "confusion_counts",
    "roc_points",
    "plot_decision_boundary",
    "plot_roc_curves",
    "Reporter",
]
