from survey_svm.data.loader import DATASET_REGISTRY, DatasetLoader, check_aligned
from survey_svm.data.partition import Partition, apply_partition, draw_partition
from survey_svm.data.synthetic import make_synthetic_survey, write_synthetic_survey

__all__ = [
    "DATASET_REGISTRY",
    "DatasetLoader",
    "check_aligned",
    "Partition",
    "apply_partition",
    "draw_partition",
    "make_synthetic_survey",
    "write_synthetic_survey",
]
