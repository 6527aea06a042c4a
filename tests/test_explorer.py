from survey_svm.analysis import DataExplorer


def test_explorer_sections(loaded_datasets):
    report = DataExplorer().run(loaded_datasets["diabetes"])

    assert set(report) == {"basic_stats", "class_balance", "feature_separation"}
    assert report["basic_stats"]["shape"] == [300, 7]


def test_class_balance_counts(loaded_datasets):
    ds = loaded_datasets["cancer"]
    balance = DataExplorer().run(ds)["class_balance"]

    counts = ds["df"]["cancer"].value_counts()
    assert balance["counts"] == {"No": int(counts["No"]), "Yes": int(counts["Yes"])}
    assert balance["imbalance_ratio"] > 1.0
    assert balance["status"] in {"moderate_imbalance", "severe_imbalance"}


def test_feature_separation_ranks_age_for_diabetes(loaded_datasets):
    ranked = DataExplorer().run(loaded_datasets["diabetes"])["feature_separation"]

    assert len(ranked) == 6
    assert {r["feature"] for r in ranked[:3]} & {"age", "bmi", "weight"}
    t_values = [abs(r["t_statistic"]) for r in ranked]
    assert t_values == sorted(t_values, reverse=True)


def test_feature_separation_needs_both_labels(loaded_datasets):
    ds = dict(loaded_datasets["cancer"])
    ds["df"] = ds["df"][ds["df"]["cancer"] == "No"]

    assert DataExplorer().run(ds)["feature_separation"] == []
