"""
Survey SVM analysis pipeline.

Orchestrates the full run: data loading -> exploration -> partitioning ->
tuning -> training -> evaluation -> reporting. Every stage runs once per
invocation; any failure aborts the run.
"""

import os
import traceback

from survey_svm import __version__
from survey_svm.analysis import DataExplorer
from survey_svm.config import (
    CV_FOLDS,
    DECISION_BOUNDARY_FEATURES,
    DEFAULT_DEGENERATE_POLICY,
    DEFAULT_OUTPUT_DIR,
    RANDOM_SEED,
    TEST_SIZE,
)
from survey_svm.data import (
    DATASET_REGISTRY,
    DatasetLoader,
    apply_partition,
    check_aligned,
    draw_partition,
    write_synthetic_survey,
)
from survey_svm.evaluation import (
    ModelEvaluator,
    Reporter,
    plot_decision_boundary,
    plot_roc_curves,
)
from survey_svm.models import (
    KERNEL_CONFIGS,
    ClassifierTrainer,
    HyperparameterTuner,
    class_weight_from_counts,
)
from survey_svm.utils import get_logger

log = get_logger("survey_svm")

DISCLAIMER = (
    "DISCLAIMER: This is a statistical analysis of self-reported survey data. "
    "It does NOT provide medical diagnoses or replace professional medical advice."
)


class SurveyAnalysisPipeline:
    """
    Runs the complete survey SVM analysis.

    Stages:
        1. Data Loading    - read the row-aligned clean tables
        2. Exploration     - class balance and feature separation
        3. Partitioning    - one seeded train/test draw shared by all targets
        4. Tuning          - k-fold search per target and kernel
        5. Training        - class-weighted fit with the tuned parameters
        6. Evaluation      - confusion counts and ROC on held-out rows
        7. Reporting       - summary, interpretation, plots and JSON
    """

    def __init__(
        self,
        targets: list[str] | None = None,
        kernels: list[str] | None = None,
        data_dir: str | None = None,
        test_size: float = TEST_SIZE,
        cv_folds: int = CV_FOLDS,
        seed: int = RANDOM_SEED,
        degenerate_policy: str = DEFAULT_DEGENERATE_POLICY,
        class_weights: dict | None = None,
        output_dir: str = DEFAULT_OUTPUT_DIR,
        make_plots: bool = True,
        synthetic_rows: int | None = None,
    ):
        if targets is None:
            targets = list(DATASET_REGISTRY.keys())
        if kernels is None:
            kernels = list(KERNEL_CONFIGS.keys())

        unknown = (set(targets) - set(DATASET_REGISTRY)) | (set(kernels) - set(KERNEL_CONFIGS))
        if unknown:
            raise ValueError(f"Unknown targets or kernels: {sorted(unknown)}")

        self.targets = targets
        self.kernels = kernels
        self.data_dir = data_dir
        self.test_size = test_size
        self.cv_folds = cv_folds
        self.seed = seed
        self.degenerate_policy = degenerate_policy
        self.class_weights = dict(class_weights or {})
        self.output_dir = output_dir
        self.make_plots = make_plots
        self.synthetic_rows = synthetic_rows

        # Pipeline state
        self._datasets = None
        self._eda_reports = None
        self._partition = None
        self._splits = None
        self._tuning_results = None
        self._models = None
        self._evaluations = None
        self._plots = []
        self._report = None

    def run(self) -> dict:
        """
        Execute every stage in order.

        Returns the final report dict.
        """
        log.info("=" * 60)
        log.info("SURVEY SVM ANALYSIS v%s", __version__)
        log.info("=" * 60)
        log.info(DISCLAIMER)

        stages = [
            ("1/7 Data Loading", self._stage_load),
            ("2/7 Exploratory Analysis", self._stage_eda),
            ("3/7 Partitioning", self._stage_partition),
            ("4/7 Hyperparameter Tuning", self._stage_tune),
            ("5/7 Classifier Training", self._stage_train),
            ("6/7 Evaluation", self._stage_evaluate),
            ("7/7 Report Generation", self._stage_report),
        ]

        for stage_name, stage_fn in stages:
            log.info("-" * 60)
            log.info("STAGE: %s", stage_name)
            log.info("-" * 60)
            try:
                stage_fn()
            except Exception:
                log.error("Stage '%s' failed:\n%s", stage_name, traceback.format_exc())
                raise

        return self._report

    def _stage_load(self):
        data_dir = self.data_dir
        if self.synthetic_rows:
            data_dir = os.path.join(self.output_dir, "synthetic_data")
            write_synthetic_survey(data_dir, n_rows=self.synthetic_rows, seed=self.seed)
        loader = DatasetLoader(data_dir)
        self._datasets = loader.load_all(self.targets)

    def _stage_eda(self):
        explorer = DataExplorer()
        self._eda_reports = {
            name: explorer.run(dataset) for name, dataset in self._datasets.items()
        }

    def _stage_partition(self):
        n_rows = check_aligned(self._datasets)
        self._partition = draw_partition(n_rows, test_size=self.test_size, seed=self.seed)
        self._splits = {
            name: apply_partition(dataset, self._partition)
            for name, dataset in self._datasets.items()
        }
        for name, split in self._splits.items():
            if name not in self.class_weights:
                self.class_weights[name] = class_weight_from_counts(
                    split["y_train"], split["positive_label"], split["negative_label"]
                )

    def _stage_tune(self):
        tuner = HyperparameterTuner(
            cv_folds=self.cv_folds,
            seed=self.seed,
            degenerate_policy=self.degenerate_policy,
        )
        self._tuning_results = {}
        for name, split in self._splits.items():
            for kernel in self.kernels:
                self._tuning_results[(name, kernel)] = tuner.tune(
                    split["X_train"],
                    split["y_train"],
                    kernel=kernel,
                    class_weight=self.class_weights[name],
                    positive_label=split["positive_label"],
                    negative_label=split["negative_label"],
                )

    def _stage_train(self):
        trainer = ClassifierTrainer()
        self._models = {}
        for (name, kernel), tuning in self._tuning_results.items():
            split = self._splits[name]
            log.info("Training: %s / %s", name, kernel)
            self._models[(name, kernel)] = trainer.fit(
                split["X_train"],
                split["y_train"],
                kernel=kernel,
                params=tuning.best_params,
                class_weight=self.class_weights[name],
                positive_label=split["positive_label"],
                negative_label=split["negative_label"],
                feature_names=split["feature_names"],
            )

    def _stage_evaluate(self):
        evaluator = ModelEvaluator()
        self._evaluations = {
            (name, kernel): evaluator.evaluate(model, self._splits[name], target=name)
            for (name, kernel), model in self._models.items()
        }

    def _stage_plots(self):
        plot_dir = os.path.join(self.output_dir, "plots")
        for name in self.targets:
            curves = {
                kernel: self._evaluations[(name, kernel)].roc for kernel in self.kernels
            }
            result = plot_roc_curves(curves, name, os.path.join(plot_dir, f"roc_{name}.png"))
            self._record_plot(result)

            split = self._splits[name]
            for kernel in self.kernels:
                for fx, fy in DECISION_BOUNDARY_FEATURES:
                    path = os.path.join(plot_dir, f"boundary_{name}_{kernel}_{fx}_{fy}.png")
                    result = plot_decision_boundary(
                        self._models[(name, kernel)],
                        split["X_test"],
                        split["y_test"],
                        (fx, fy),
                        path,
                    )
                    self._record_plot(result)

    def _record_plot(self, result: dict):
        if "error" in result:
            log.warning("Plot skipped: %s", result["error"])
            return
        log.info("Plot: %s", result["description"])
        self._plots.append(result["output_file"])

    def _stage_report(self):
        if self.make_plots:
            self._stage_plots()

        reporter = Reporter()
        self._report = reporter.generate(
            datasets_metadata={n: d["metadata"] for n, d in self._datasets.items()},
            eda_reports=self._eda_reports,
            partition_info={
                "n_rows": self._partition.n_rows,
                "n_train": self._partition.n_train,
                "n_test": self._partition.n_test,
                "test_size": self._partition.test_size,
                "seed": self._partition.seed,
            },
            class_weights=self.class_weights,
            tuning_results=self._tuning_results,
            evaluations=self._evaluations,
            plots=self._plots,
        )

        summary = reporter.print_summary(self._report)
        print("\n" + summary)

        os.makedirs(self.output_dir, exist_ok=True)
        json_path = os.path.join(self.output_dir, "report.json")
        reporter.save_json(self._report, json_path)
        log.info("Full JSON report saved to: %s", json_path)
