"""Report assembly: summary tables, narrative interpretation and JSON output."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from survey_svm import __version__
from survey_svm.evaluation.evaluator import EvaluationReport
from survey_svm.utils import get_logger

log = get_logger(__name__)

# AUC bands used in the narrative, checked top down
AUC_BANDS = [
    (0.9, "excellent"),
    (0.8, "good"),
    (0.7, "fair"),
    (0.6, "poor"),
    (0.0, "little better than chance"),
]

OVERFIT_GAP = 0.10


class Reporter:
    """Compiles tuning and evaluation results into a report dict and text summary."""

    def interpret(self, evaluation: EvaluationReport) -> list[str]:
        """Narrative reading of one model's test-set behaviour."""
        test, train = evaluation.test, evaluation.train
        name = f"{evaluation.target} ({evaluation.kernel})"
        lines = []

        if test.tp + test.fp == 0:
            lines.append(
                f"{name}: predicts only the majority label on the test set; "
                f"the class weights did not move the boundary enough."
            )
        elif test.minority_accuracy >= test.majority_accuracy:
            lines.append(
                f"{name}: catches {test.minority_accuracy:.0%} of positive cases at the cost "
                f"of flagging {1 - test.majority_accuracy:.0%} of negatives; the weighting "
                f"favours sensitivity over overall accuracy ({test.accuracy:.0%})."
            )
        else:
            lines.append(
                f"{name}: keeps {test.majority_accuracy:.0%} of negatives correct but finds "
                f"only {test.minority_accuracy:.0%} of positive cases."
            )

        band = next(label for cutoff, label in AUC_BANDS if evaluation.roc.auc >= cutoff)
        lines.append(
            f"{name}: AUC {evaluation.roc.auc:.3f} ({band}) - ranking quality of the "
            f"decision values independent of the chosen threshold."
        )

        gap = train.accuracy - test.accuracy
        if gap > OVERFIT_GAP:
            lines.append(
                f"{name}: training accuracy exceeds test accuracy by {gap:.0%}, "
                f"suggesting the boundary is fitted to noise."
            )
        return lines

    def summary_frame(self, report: dict) -> pd.DataFrame:
        rows = []
        for entry in report["models"]:
            ev = entry["evaluation"]
            rows.append({
                "target": ev["target"],
                "kernel": ev["kernel"],
                "params": ", ".join(f"{k}={v}" for k, v in ev["params"].items()),
                "cv_1-F1": entry["tuning"]["best_score"],
                "train_acc": ev["train"]["accuracy"],
                "test_acc": ev["test"]["accuracy"],
                "majority_acc": ev["test"]["majority_accuracy"],
                "minority_acc": ev["test"]["minority_accuracy"],
                "f1": ev["test"]["f1"],
                "auc": ev["roc"]["auc"],
            })
        return pd.DataFrame(rows)

    def generate(
        self,
        datasets_metadata: dict,
        eda_reports: dict,
        partition_info: dict,
        class_weights: dict,
        tuning_results: dict,
        evaluations: dict,
        plots: list | None = None,
    ) -> dict:
        """
        Assemble the final report.

        tuning_results and evaluations are keyed by (target, kernel).
        """
        models = []
        interpretation = []
        for key, evaluation in evaluations.items():
            models.append({
                "tuning": tuning_results[key].to_dict(),
                "evaluation": evaluation.to_dict(),
            })
            interpretation.extend(self.interpret(evaluation))

        best = {}
        for evaluation in evaluations.values():
            current = best.get(evaluation.target)
            if current is None or evaluation.test.f1 > current.test.f1:
                best[evaluation.target] = evaluation

        report = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "datasets": datasets_metadata,
            "exploratory_analysis": eda_reports,
            "partition": partition_info,
            "class_weights": class_weights,
            "models": models,
            "best_by_target": {
                target: {"kernel": ev.kernel, "params": ev.params, "test_f1": ev.test.f1}
                for target, ev in best.items()
            },
            "interpretation": interpretation,
            "plots": plots or [],
        }
        log.info("Report generated for %d models", len(models))
        return report

    def print_summary(self, report: dict) -> str:
        """Render the report as plain text."""
        width = 100
        lines = [
            "=" * width,
            "SURVEY SVM ANALYSIS REPORT",
            "=" * width,
            "",
            f"Partition: {report['partition']['n_train']} train / "
            f"{report['partition']['n_test']} test (seed {report['partition']['seed']})",
            "",
            "Class weights:",
        ]
        for target, weights in report["class_weights"].items():
            lines.append(f"  {target:<22} {weights}")

        lines += ["", "Test-set results:"]
        frame = self.summary_frame(report)
        if frame.empty:
            lines.append("  (no models)")
        else:
            lines.append(frame.to_string(index=False, float_format=lambda v: f"{v:.4f}"))

        lines += ["", "Best kernel per target (test F1):"]
        for target, best in report["best_by_target"].items():
            lines.append(f"  {target:<22} {best['kernel']:<8} F1={best['test_f1']:.4f}")

        lines += ["", "Interpretation:"]
        lines += [f"  - {line}" for line in report["interpretation"]]

        if report["plots"]:
            lines += ["", "Plots:"]
            lines += [f"  {p}" for p in report["plots"]]

        lines += ["", "=" * width]
        return "\n".join(lines)

    def save_json(self, report: dict, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(report, f, indent=2, default=str)
