import json

import numpy as np
import pytest

from survey_svm.evaluation import EvaluationReport, Reporter, RocCurve, confusion_counts
from survey_svm.models import HyperparameterTuner


def _report(train_pred, test_pred, auc=0.75, target="diabetes", kernel="rbf"):
    y = ["No"] * 8 + ["Yes"] * 2
    roc = RocCurve(fpr=np.array([0.0, 1.0]), tpr=np.array([0.0, 1.0]),
                   thresholds=np.array([np.inf, 0.0]), auc=auc)
    return EvaluationReport(
        target=target,
        kernel=kernel,
        params={"C": 1.0},
        train=confusion_counts(y, train_pred, "Yes", "No"),
        test=confusion_counts(y, test_pred, "Yes", "No"),
        roc=roc,
    )


@pytest.fixture
def reporter():
    return Reporter()


def test_interpret_flags_majority_collapse(reporter):
    lines = reporter.interpret(_report(["No"] * 8 + ["Yes"] * 2, ["No"] * 10))
    assert "only the majority label" in lines[0]


def test_interpret_describes_sensitivity_tradeoff(reporter):
    test_pred = ["No"] * 5 + ["Yes"] * 5
    lines = reporter.interpret(_report(test_pred, test_pred))
    assert "catches 100% of positive cases" in lines[0]


def test_interpret_auc_band(reporter):
    pred = ["No"] * 8 + ["Yes"] * 2
    assert "(fair)" in reporter.interpret(_report(pred, pred, auc=0.75))[1]
    assert "(excellent)" in reporter.interpret(_report(pred, pred, auc=0.95))[1]
    assert "chance" in reporter.interpret(_report(pred, pred, auc=0.5))[1]


def test_interpret_flags_overfitting(reporter):
    lines = reporter.interpret(_report(["No"] * 8 + ["Yes"] * 2, ["Yes"] * 8 + ["No"] * 2))
    assert any("fitted to noise" in line for line in lines)


def _tuning(imbalanced_xy):
    X, y = imbalanced_xy
    return HyperparameterTuner(cv_folds=3).tune(
        X, y, "rbf", {"No": 1.0, "Yes": 9.0}, "Yes", "No", grid=[{"C": 1.0}],
    )


def test_generate_summary_and_json(reporter, imbalanced_xy, tmp_path):
    tuning = _tuning(imbalanced_xy)
    pred = ["No"] * 7 + ["Yes"] * 3
    evaluations = {
        ("diabetes", "rbf"): _report(pred, pred, target="diabetes", kernel="rbf"),
        ("diabetes", "linear"): _report(pred, ["No"] * 10, target="diabetes", kernel="linear"),
    }
    report = reporter.generate(
        datasets_metadata={"diabetes": {"n_samples": 10}},
        eda_reports={"diabetes": {}},
        partition_info={"n_rows": 10, "n_train": 7, "n_test": 3, "test_size": 0.3, "seed": 42},
        class_weights={"diabetes": {"No": 1.0, "Yes": 9.0}},
        tuning_results={key: tuning for key in evaluations},
        evaluations=evaluations,
        plots=["plots/roc_diabetes.png"],
    )

    assert len(report["models"]) == 2
    assert report["best_by_target"]["diabetes"]["kernel"] == "rbf"

    text = reporter.print_summary(report)
    assert "SURVEY SVM ANALYSIS REPORT" in text
    assert "Interpretation:" in text
    assert "plots/roc_diabetes.png" in text
    assert "linear" in text

    path = tmp_path / "out" / "report.json"
    reporter.save_json(report, path)
    saved = json.loads(path.read_text())
    assert saved["partition"]["seed"] == 42
    assert saved["models"][0]["evaluation"]["roc"]["auc"] == 0.75
