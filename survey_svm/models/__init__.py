from survey_svm.models.trainer import (
    KERNEL_CONFIGS,
    ClassifierTrainer,
    TrainedModel,
    class_weight_from_counts,
    validate_class_weight,
)
from survey_svm.models.tuner import HyperparameterTuner, TuningResult, f1_objective

__all__ = [
    "KERNEL_CONFIGS",
    "ClassifierTrainer",
    "TrainedModel",
    "class_weight_from_counts",
    "validate_class_weight",
    "HyperparameterTuner",
    "TuningResult",
    "f1_objective",
]
