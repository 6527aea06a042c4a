from survey_svm.evaluation import ModelEvaluator, plot_decision_boundary, plot_roc_curves


def test_roc_plot_written(trained_linear, imbalanced_split, tmp_path):
    report = ModelEvaluator().evaluate(trained_linear, imbalanced_split)
    out = tmp_path / "plots" / "roc.png"

    result = plot_roc_curves({"linear": report.roc}, "toy", out)

    assert result["status"] == "success"
    assert out.exists()
    assert "linear AUC=" in result["description"]


def test_roc_plot_without_curves(tmp_path):
    assert "error" in plot_roc_curves({}, "toy", tmp_path / "roc.png")


def test_decision_boundary_written(trained_linear, imbalanced_split, tmp_path):
    out = tmp_path / "boundary.png"

    result = plot_decision_boundary(
        trained_linear,
        imbalanced_split["X_train"],
        imbalanced_split["y_train"],
        ("f1", "f2"),
        out,
        resolution=40,
    )

    assert result["status"] == "success"
    assert out.exists()
    assert 0.0 < result["positive_region_share"] < 1.0


def test_decision_boundary_unknown_feature(trained_linear, imbalanced_split, tmp_path):
    result = plot_decision_boundary(
        trained_linear,
        imbalanced_split["X_train"],
        imbalanced_split["y_train"],
        ("f1", "bmi"),
        tmp_path / "boundary.png",
    )

    assert "error" in result
