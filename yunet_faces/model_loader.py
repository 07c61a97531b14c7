"""
Model loading for the YuNet face detector.

Responsibility:
    Load the YuNet ONNX model from disk, configure the compute backend,
    and return a ready-to-infer cv2.FaceDetectorYN object.

Non-goals:
    - No preprocessing, inference, or result conversion.
    - No automatic model downloading.
    - No fallback to alternative models.

Failure behavior:
    - A missing model file raises FileNotFoundError with the exact
      missing path and expected location.
    - An unavailable CUDA backend raises RuntimeError.
"""

import logging
from pathlib import Path
from typing import Tuple

import cv2

from yunet_faces.config import DetectionConfig, ModelConfig, get_project_root

logger = logging.getLogger(__name__)

# Placeholder input size; the backend resets it to the real image size per call.
_INITIAL_INPUT_SIZE: Tuple[int, int] = (320, 320)


def resolve_model_path(config: ModelConfig) -> Path:
    """Return the absolute model path, resolving relative paths against the project root."""
    model = Path(config.model_path)
    if not model.is_absolute():
        model = get_project_root() / model
    return model


def load_model(
    model_config: ModelConfig,
    detection_config: DetectionConfig,
) -> "cv2.FaceDetectorYN":
    """Load and configure the YuNet face detection model.

    Args:
        model_config: Model file path and backend preference.
        detection_config: Score/NMS thresholds and top-k handed to YuNet.

    Returns:
        A configured cv2.FaceDetectorYN ready for inference.

    Raises:
        FileNotFoundError: If the model file does not exist.
        RuntimeError: If the requested backend is unavailable.
    """
    model = resolve_model_path(model_config)

    if not model.is_file():
        raise FileNotFoundError(
            f"YuNet model not found.\n"
            f"  Expected: {model}\n"
            f"  Download face_detection_yunet_2023mar.onnx from the OpenCV model zoo\n"
            f"  and place it at the path above, or update 'model.model_path' in your config."
        )

    if model_config.backend == "cuda":
        logger.info("Setting CUDA backend and target.")
        backend_id = cv2.dnn.DNN_BACKEND_CUDA
        target_id = cv2.dnn.DNN_TARGET_CUDA
    else:
        logger.info("Using CPU backend.")
        backend_id = cv2.dnn.DNN_BACKEND_OPENCV
        target_id = cv2.dnn.DNN_TARGET_CPU

    logger.info("Loading model: %s", model)
    try:
        detector = cv2.FaceDetectorYN.create(
            str(model),
            "",
            _INITIAL_INPUT_SIZE,
            detection_config.score_threshold,
            detection_config.nms_threshold,
            detection_config.top_k,
            backend_id,
            target_id,
        )
    except cv2.error as e:
        if model_config.backend == "cuda":
            raise RuntimeError(
                f"Failed to set CUDA backend. Ensure OpenCV was built with "
                f"CUDA support (custom build).\n"
                f"  OpenCV error: {e}"
            ) from e
        raise RuntimeError(f"Failed to load YuNet model {model}: {e}") from e

    logger.info("Model loaded successfully.")
    return detector
