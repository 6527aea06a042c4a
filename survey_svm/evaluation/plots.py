"""ROC and decision-boundary plots for trained survey models."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np

from survey_svm.models.trainer import TrainedModel


def _pyplot():
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    return plt


def plot_roc_curves(
    curves: dict[str, Any],
    title: str,
    output_path: str | Path,
) -> dict[str, Any]:
    """Plot one ROC line per kernel on shared axes.

    Args:
        curves: Mapping of line label (usually the kernel) to a RocCurve.
        title: Figure title, usually the target name.
        output_path: PNG path to write.

    Returns:
        Status dict with output file path.
    """
    if not curves:
        return {"error": "No ROC curves provided"}

    plt = _pyplot()
    fig, ax = plt.subplots(figsize=(6, 6))

    for label, roc in curves.items():
        ax.plot(roc.fpr, roc.tpr, lw=2, label=f"{label} (AUC = {roc.auc:.3f})")
    ax.plot([0, 1], [0, 1], color="gray", lw=1.5, linestyle="--", label="Random")

    ax.set_xlim([0.0, 1.0])
    ax.set_ylim([0.0, 1.05])
    ax.set_xlabel("False Positive Rate")
    ax.set_ylabel("True Positive Rate")
    ax.set_title(f"ROC Curve: {title}", fontsize=13, fontweight="bold")
    ax.legend(loc="lower right")
    ax.grid(alpha=0.3)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    return {
        "status": "success",
        "output_file": str(output_path),
        "description": f"ROC curves for {title}: "
        + ", ".join(f"{k} AUC={v.auc:.3f}" for k, v in curves.items()),
    }


def plot_decision_boundary(
    model: TrainedModel,
    X: np.ndarray,
    y: np.ndarray,
    features: tuple[str, str],
    output_path: str | Path,
    resolution: int = 150,
) -> dict[str, Any]:
    """Plot a 2-D slice of the decision surface.

    The two named features vary over their observed range; every other
    feature is held at its median in ``X``.

    Args:
        model: Trained model whose feature_names include both features.
        X: Feature matrix the slice and scatter are drawn from.
        y: Labels for the scatter points.
        features: (x-axis feature, y-axis feature).
        output_path: PNG path to write.
        resolution: Grid points per axis.

    Returns:
        Status dict with output file path.
    """
    names = list(model.feature_names)
    missing = [f for f in features if f not in names]
    if missing:
        return {"error": f"Features not in model: {missing}"}

    ix, iy = names.index(features[0]), names.index(features[1])
    X = np.asarray(X, dtype=float)
    y = np.asarray(y)

    xs = np.linspace(X[:, ix].min(), X[:, ix].max(), resolution)
    ys = np.linspace(X[:, iy].min(), X[:, iy].max(), resolution)
    xx, yy = np.meshgrid(xs, ys)

    grid = np.tile(np.median(X, axis=0), (xx.size, 1))
    grid[:, ix] = xx.ravel()
    grid[:, iy] = yy.ravel()
    zz = model.decision_scores(grid).reshape(xx.shape)

    plt = _pyplot()
    fig, ax = plt.subplots(figsize=(8, 6))

    ax.contourf(xx, yy, (zz > 0).astype(float), levels=[-0.5, 0.5, 1.5],
                colors=["#BBDEFB", "#FFCDD2"], alpha=0.6)
    ax.contour(xx, yy, zz, levels=[0.0], colors="black", linewidths=1.5)

    neg = y == model.negative_label
    pos = y == model.positive_label
    ax.scatter(X[neg, ix], X[neg, iy], c="#1976D2", s=10, alpha=0.5,
               label=model.negative_label)
    ax.scatter(X[pos, ix], X[pos, iy], c="#D32F2F", s=14, alpha=0.8,
               edgecolors="black", linewidth=0.3, label=model.positive_label)

    ax.set_xlabel(features[0], fontsize=12)
    ax.set_ylabel(features[1], fontsize=12)
    ax.set_title(f"{model.kernel} SVM decision boundary", fontsize=13, fontweight="bold")
    ax.legend(fontsize=9)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    share = float((zz > 0).mean())
    return {
        "status": "success",
        "output_file": str(output_path),
        "positive_region_share": round(share, 4),
        "description": f"{model.kernel} boundary over {features[0]} x {features[1]}, "
        f"{share:.1%} of the slice predicted '{model.positive_label}'",
    }
