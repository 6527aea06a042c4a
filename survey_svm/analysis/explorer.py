"""Exploratory analysis of the survey tables ahead of model fitting."""

import numpy as np
import pandas as pd
from scipy import stats

from survey_svm.utils import get_logger

log = get_logger(__name__)


class DataExplorer:
    """Summarises class balance and feature separation for one survey target."""

    def run(self, dataset: dict) -> dict:
        """
        Run exploratory analysis on a loaded dataset.

        Returns a JSON-friendly report dict.
        """
        df = dataset["df"]
        feature_names = dataset["feature_names"]
        target_name = dataset["target_name"]

        log.info("Exploring %s (%d samples)", dataset["metadata"]["name"], len(df))

        return {
            "basic_stats": self._basic_stats(df, feature_names),
            "class_balance": self._class_balance(
                df, target_name, dataset["positive_label"], dataset["negative_label"]
            ),
            "feature_separation": self._feature_separation(
                df, feature_names, target_name, dataset["positive_label"]
            ),
        }

    def _basic_stats(self, df: pd.DataFrame, features: list[str]) -> dict:
        desc = df[features].describe().round(3)
        return {
            "shape": list(df.shape),
            "summary": desc.to_dict(),
        }

    def _class_balance(self, df: pd.DataFrame, target: str, positive: str, negative: str) -> dict:
        """Label counts and the majority/minority ratio."""
        counts = df[target].value_counts()
        n_pos = int(counts.get(positive, 0))
        n_neg = int(counts.get(negative, 0))
        imbalance_ratio = n_neg / n_pos if n_pos > 0 else float("inf")

        balance_status = "balanced" if imbalance_ratio < 1.5 else (
            "moderate_imbalance" if imbalance_ratio < 3.0 else "severe_imbalance"
        )

        log.info(
            "Class balance: %d %s / %d %s, %s (ratio=%.2f)",
            n_neg, negative, n_pos, positive, balance_status, imbalance_ratio,
        )

        return {
            "counts": {negative: n_neg, positive: n_pos},
            "positive_rate": round(n_pos / len(df), 4) if len(df) else 0.0,
            "imbalance_ratio": round(imbalance_ratio, 4),
            "status": balance_status,
        }

    def _feature_separation(self, df: pd.DataFrame, features: list[str],
                            target: str, positive: str) -> list[dict]:
        """
        Rank features by how well they separate the labels (Welch t-test).
        """
        is_pos = (df[target] == positive).to_numpy()
        if is_pos.all() or not is_pos.any():
            log.warning("Feature separation needs both labels present")
            return []

        results = []
        for feat in features:
            values = df[feat].to_numpy(dtype=float)
            pos, neg = values[is_pos], values[~is_pos]
            t_stat, p_val = stats.ttest_ind(pos, neg, equal_var=False)
            std = values.std()
            effect_size = abs(pos.mean() - neg.mean()) / std if std > 0 else 0.0

            results.append({
                "feature": feat,
                "mean_positive": round(float(pos.mean()), 3),
                "mean_negative": round(float(neg.mean()), 3),
                "t_statistic": round(float(np.nan_to_num(t_stat)), 4),
                "p_value": float(np.nan_to_num(p_val, nan=1.0)),
                "effect_size": round(float(effect_size), 4),
            })

        results.sort(key=lambda x: abs(x["t_statistic"]), reverse=True)

        for i, r in enumerate(results[:3]):
            log.info(
                "  %d. %s (t=%.2f, d=%.2f, p=%.2e)",
                i + 1, r["feature"], r["t_statistic"], r["effect_size"], r["p_value"],
            )
        return results
