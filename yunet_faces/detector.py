"""
Face detection orchestration: the public entry points.

Public contract:
    detect_faces(image, backend) -> list[Face]
    detect_faces_from_file(path, backend) -> list[Face]
    Detector(config=None, backend=None).detect(image) / .detect_file(path)

Flow:
    image → preprocessor.pack → backend(buffer, width, height, step)
          → [RawDetection] → Face.from_raw → [Face]

Constraints:
    - Faces are returned in the order the backend produced them. No
      sorting, deduplication, or thresholding happens here.
    - A raw detection that fails validation is logged and dropped; the
      rest of the batch is kept.
    - Any backend failure is fatal for the call and surfaces as
      DetectionFailedError. Nothing is retried.
    - No module-level model instance. The backend is passed in, so each
      call is independent and reentrant when the backend is.

Non-goals:
    - No drawing, display, or output writing.
    - No tracking or temporal state.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from yunet_faces.config import AppConfig, load_config
from yunet_faces.errors import DetectionFailedError, MalformedDetectionError
from yunet_faces.face import Face
from yunet_faces.image_loader import load_image
from yunet_faces.inference import InferenceBackend, YuNetBackend
from yunet_faces.preprocessor import pack

logger = logging.getLogger(__name__)


def detect_faces(image: np.ndarray, backend: InferenceBackend) -> List[Face]:
    """Detect faces in an in-memory image.

    Args:
        image: Image as a numpy array. BGR uint8 (H, W, 3) is the native
               format; grayscale, BGRA, uint16 and float images are
               converted first.
        backend: Inference backend to run on the packed image.

    Returns:
        Validated faces in detector order. Empty if none were found.

    Raises:
        TypeError: If image is not a numpy ndarray.
        InvalidImageError: If the image is empty, has an unsupported layout,
                           or exceeds 65535 px on a side.
        DetectionFailedError: If the backend fails.
    """
    packed = pack(image)

    try:
        raw_detections = backend(packed.buffer, packed.width, packed.height, packed.step)
    except DetectionFailedError:
        raise
    except Exception as e:
        raise DetectionFailedError(f"Face detection failed: {e}") from e

    faces: List[Face] = []
    dropped = 0

    for raw in raw_detections:
        try:
            faces.append(Face.from_raw(raw, packed.dimensions))
        except MalformedDetectionError as e:
            dropped += 1
            logger.debug("Detector reported an invalid face: %r: %s. Discarding it.", raw, e)

    if dropped:
        logger.warning(
            "Dropped %d of %d detections with invalid geometry.",
            dropped, dropped + len(faces),
        )

    logger.debug(
        "Detected %d faces in %dx%d image.", len(faces), packed.width, packed.height
    )
    return faces


def detect_faces_from_file(
    path: Union[str, Path],
    backend: InferenceBackend,
) -> List[Face]:
    """Load an image file and detect faces in it.

    Raises:
        InvalidInputFileError: If the path does not name a readable file.
        ImageDecodeError: If the file cannot be decoded.
        InvalidImageError: If the decoded image exceeds 65535 px on a side.
        DetectionFailedError: If the backend fails.
    """
    image = load_image(path)
    return detect_faces(image, backend)


class Detector:
    """Face detector bundling a configuration with an inference backend.

    Usage:
        detector = Detector()                        # YuNet with safe defaults
        detector = Detector(config=my_config)        # Custom config
        detector = Detector(backend=fake_backend)    # Any InferenceBackend
        faces = detector.detect(frame)               # numpy image
        faces = detector.detect_file("photo.jpg")

    The YuNet model is loaded once in the constructor.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        backend: Optional[InferenceBackend] = None,
    ) -> None:
        """Initialize the detector.

        Args:
            config: Configuration. If None, defaults and environment
                    overrides are used (no config file required).
            backend: Inference backend. If None, a YuNetBackend is built
                     from config.

        Raises:
            FileNotFoundError: If the YuNet model file is missing.
            RuntimeError: If the requested compute backend is unavailable.
            ValueError: If configuration values are invalid.
        """
        if config is None:
            config = load_config()

        self._config = config
        if backend is None:
            backend = YuNetBackend(config.model, config.detection)
            logger.info(
                "Detector initialized (backend=%s, score_threshold=%.2f)",
                config.model.backend,
                config.detection.score_threshold,
            )
        self._backend = backend

    def detect(self, image: np.ndarray) -> List[Face]:
        """Detect faces in an in-memory image. See detect_faces()."""
        return detect_faces(image, self._backend)

    def detect_file(self, path: Union[str, Path]) -> List[Face]:
        """Detect faces in an image file. See detect_faces_from_file()."""
        return detect_faces_from_file(path, self._backend)

    @property
    def config(self) -> AppConfig:
        """Return the active configuration (read-only)."""
        return self._config
