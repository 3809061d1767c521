"""
personality package public API
"""
from .preprocessing  import (
    FEATURES, FEATURE_COLUMNS, FEATURE_LABELS, CLASS_LABELS, INPUT_RANGES,
    FeatureVector, UserInputs, normalize, encode_yes_no, field_spec, input_fields,
)
from .dataset        import Dataset, DatasetError, PersonalityError, load_dataset, split_index
from .model_manager  import (
    NetworkConfig, DEFAULT_CONFIG, LAYER_NAMES, PersonalityModel, KerasPersonalityModel,
    TrainingHistoryEntry, TrainingRun, build_model, train_model, describe_architecture,
)
from .evaluator      import ConfusionCounts, Metrics, confusion_counts, metrics_from_counts, evaluate
from .predictor      import PredictionResult, predict, describe
from .pipeline       import PipelineResult, run_pipeline
from .visualization  import (
    NetworkLayout, layout_network, render_network_svg,
    history_frame, plot_training_history, plot_confusion_matrix,
)
from .app_controller import (
    init_state, get_session, get_inputs, set_inputs,
    ensure_model, is_trained, get_result, get_error, clear_error,
    get_prediction, clear_prediction, ensure_prediction,
    set_page, get_page,
)

__all__ = [
    # preprocessing
    "FEATURES", "FEATURE_COLUMNS", "FEATURE_LABELS", "CLASS_LABELS", "INPUT_RANGES",
    "FeatureVector", "UserInputs", "normalize", "encode_yes_no", "field_spec", "input_fields",
    # dataset
    "Dataset", "DatasetError", "PersonalityError", "load_dataset", "split_index",
    # model_manager
    "NetworkConfig", "DEFAULT_CONFIG", "LAYER_NAMES", "PersonalityModel", "KerasPersonalityModel",
    "TrainingHistoryEntry", "TrainingRun", "build_model", "train_model", "describe_architecture",
    # evaluator
    "ConfusionCounts", "Metrics", "confusion_counts", "metrics_from_counts", "evaluate",
    # predictor
    "PredictionResult", "predict", "describe",
    # pipeline
    "PipelineResult", "run_pipeline",
    # visualization
    "NetworkLayout", "layout_network", "render_network_svg",
    "history_frame", "plot_training_history", "plot_confusion_matrix",
    # app_controller
    "init_state", "get_session", "get_inputs", "set_inputs",
    "ensure_model", "is_trained", "get_result", "get_error", "clear_error",
    "get_prediction", "clear_prediction", "ensure_prediction",
    "set_page", "get_page",
]
