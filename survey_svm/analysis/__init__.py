from survey_svm.analysis.explorer import DataExplorer

__all__ = ["DataExplorer"]
