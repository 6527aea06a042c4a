"""CLI entry point: python -m survey_svm"""

import argparse
import logging
import sys

from survey_svm.config import (
    CV_FOLDS,
    DEFAULT_DEGENERATE_POLICY,
    DEFAULT_OUTPUT_DIR,
    DEGENERATE_POLICIES,
    RANDOM_SEED,
    TEST_SIZE,
)
from survey_svm.data.loader import DATASET_REGISTRY
from survey_svm.models.trainer import KERNEL_CONFIGS
from survey_svm.pipeline import SurveyAnalysisPipeline
from survey_svm.utils import set_level


def main(argv=None):
    parser = argparse.ArgumentParser(
        description=(
            "Survey SVM Analysis - "
            "cost-sensitive SVMs for diabetes and cancer survey data."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m survey_svm --data-dir data/clean\n"
            "  python -m survey_svm --targets diabetes --kernels linear rbf\n"
            "  python -m survey_svm --synthetic 800 --no-plots\n"
            "  python -m survey_svm --degenerate-policy skip --cv-folds 10\n"
        ),
    )

    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Directory holding the clean survey CSV files",
    )
    parser.add_argument(
        "--targets",
        type=str,
        nargs="+",
        default=None,
        choices=list(DATASET_REGISTRY.keys()),
        help="Datasets to analyze (default: all)",
    )
    parser.add_argument(
        "--kernels",
        type=str,
        nargs="+",
        default=None,
        choices=list(KERNEL_CONFIGS.keys()),
        help="SVM kernels to fit (default: all)",
    )
    parser.add_argument(
        "--test-size",
        type=float,
        default=TEST_SIZE,
        help=f"Fraction of rows held out for testing (default: {TEST_SIZE})",
    )
    parser.add_argument(
        "--cv-folds",
        type=int,
        default=CV_FOLDS,
        help=f"Number of cross-validation folds (default: {CV_FOLDS})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=RANDOM_SEED,
        help=f"Seed for the partition and fold draws (default: {RANDOM_SEED})",
    )
    parser.add_argument(
        "--degenerate-policy",
        type=str,
        default=DEFAULT_DEGENERATE_POLICY,
        choices=list(DEGENERATE_POLICIES),
        help="Score for CV folds where F1 is undefined "
             f"(default: {DEFAULT_DEGENERATE_POLICY})",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for the report and plots (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Skip ROC and decision-boundary plots",
    )
    parser.add_argument(
        "--synthetic",
        type=int,
        default=None,
        metavar="N",
        help="Generate N synthetic respondents instead of reading --data-dir",
    )
    parser.add_argument(
        "--list-targets",
        action="store_true",
        help="List all available datasets and exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-candidate tuning scores",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        set_level(logging.DEBUG)

    if args.list_targets:
        print("Available datasets:")
        for name, info in DATASET_REGISTRY.items():
            print(f"  {name:<22} {info['file']:<32} {info['description']}")
        return 0

    try:
        pipeline = SurveyAnalysisPipeline(
            targets=args.targets,
            kernels=args.kernels,
            data_dir=args.data_dir,
            test_size=args.test_size,
            cv_folds=args.cv_folds,
            seed=args.seed,
            degenerate_policy=args.degenerate_policy,
            output_dir=args.output_dir,
            make_plots=not args.no_plots,
            synthetic_rows=args.synthetic,
        )
        pipeline.run()
    except Exception as e:
        print(f"\nAnalysis failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
