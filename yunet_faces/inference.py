"""
Inference backends for the face detection pipeline.

Responsibility:
    Define the call boundary between the orchestrator and the face
    detection network, and provide the YuNet implementation backed by
    cv2.FaceDetectorYN.

Boundary contract:
    backend(buffer, width, height, step) -> List[RawDetection]

    buffer is a densely packed BGR uint8 pixel buffer of height * step
    bytes that stays valid for the duration of the call. The backend
    returns raw records in the order the network produced them, after its
    own non-maximum suppression.

Concurrency:
    YuNetBackend keeps one cv2.FaceDetectorYN per thread. The OpenCV
    object carries per-input-size state, so it is never shared between
    threads; calls from different threads are independent.
"""

import logging
import threading
from typing import List, Optional, Protocol

import cv2
import numpy as np

from yunet_faces.config import DetectionConfig, ModelConfig
from yunet_faces.errors import DetectionFailedError
from yunet_faces.model_loader import load_model
from yunet_faces.raw_detection import RawDetection

logger = logging.getLogger(__name__)


class InferenceBackend(Protocol):
    """Anything that turns a packed BGR buffer into raw detections."""

    def __call__(
        self,
        buffer: np.ndarray,
        width: int,
        height: int,
        step: int,
    ) -> List[RawDetection]:
        ...


class YuNetBackend:
    """YuNet face detection through OpenCV's FaceDetectorYN.

    Usage:
        backend = YuNetBackend()                          # Default model path
        backend = YuNetBackend(model_config, det_config)  # Custom config
        raw = backend(buffer, width, height, step)

    The model is loaded once in the constructing thread, which fails fast
    on a missing model file. Other threads load their own copy on first use.
    """

    def __init__(
        self,
        model_config: Optional[ModelConfig] = None,
        detection_config: Optional[DetectionConfig] = None,
    ) -> None:
        """Load the model for the current thread.

        Raises:
            FileNotFoundError: If the model file is missing.
            RuntimeError: If the requested backend is unavailable.
        """
        self._model_config = model_config or ModelConfig()
        self._detection_config = detection_config or DetectionConfig()
        self._local = threading.local()
        self._local.detector = load_model(self._model_config, self._detection_config)

    def _thread_detector(self) -> "cv2.FaceDetectorYN":
        detector = getattr(self._local, "detector", None)
        if detector is None:
            logger.debug("Loading YuNet for thread %s", threading.current_thread().name)
            detector = load_model(self._model_config, self._detection_config)
            self._local.detector = detector
        return detector

    def __call__(
        self,
        buffer: np.ndarray,
        width: int,
        height: int,
        step: int,
    ) -> List[RawDetection]:
        """Run YuNet on a packed BGR buffer.

        Raises:
            ValueError: If buffer is too small for the given geometry.
            DetectionFailedError: If OpenCV reports an inference error.
        """
        frame = _frame_view(buffer, width, height, step)
        detector = self._thread_detector()

        try:
            detector.setInputSize((width, height))
            _, faces = detector.detect(frame)
        except cv2.error as e:
            raise DetectionFailedError(f"YuNet inference failed: {e}") from e

        if faces is None:
            return []

        return [RawDetection.from_yunet_row(row) for row in faces]


def _frame_view(buffer, width: int, height: int, step: int) -> np.ndarray:
    """Rebuild an (H, W, 3) image from a packed buffer and row stride."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size {width}x{height}.")
    if step < width * 3:
        raise ValueError(
            f"Row stride {step} is smaller than width * 3 ({width * 3})."
        )

    flat = np.frombuffer(buffer, dtype=np.uint8)
    if flat.size < height * step:
        raise ValueError(
            f"Buffer holds {flat.size} bytes, expected at least {height * step}."
        )

    rows = flat[: height * step].reshape(height, step)
    return np.ascontiguousarray(rows[:, : width * 3]).reshape(height, width, 3)
