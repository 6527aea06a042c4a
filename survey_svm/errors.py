"""
Errors raised by the survey analysis pipeline.

Any of these aborts the run; nothing is retried.
"""


class SurveyAnalysisError(Exception):
    """Base class for analysis failures."""
    pass


class DataLoadError(SurveyAnalysisError):
    """Raised when a dataset file is missing, unreadable or malformed."""
    pass


class SchemaMismatchError(DataLoadError):
    """Raised when a dataset's columns differ from the expected schema."""
    pass


class PartitionMismatchError(SurveyAnalysisError):
    """Raised when a partition is applied to a dataset with a different row count than it was drawn for."""
    pass


class ClassWeightError(SurveyAnalysisError):
    """Raised when a class-weight map would not counteract the label imbalance."""
    pass


class DegenerateLabelsError(SurveyAnalysisError):
    """Raised when a metric needs both labels but only one is present."""
    pass
