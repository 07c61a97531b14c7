"""
Image loading for the face detection pipeline.

Responsibility:
    Read an image file from disk and decode it into a BGR uint8 numpy
    array, reporting failures as distinguishable error types.

Failure behavior:
    - Path missing, not a regular file, or unreadable → InvalidInputFileError.
    - Bytes read but the decoder cannot produce an image → ImageDecodeError,
      with the OpenCV error chained when there is one.

Non-goals:
    - No directory, video, or webcam sources.
    - No resizing or color conversion beyond what cv2.IMREAD_COLOR does.
"""

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from yunet_faces.errors import ImageDecodeError, InvalidInputFileError

logger = logging.getLogger(__name__)


def load_image(path: Union[str, Path]) -> np.ndarray:
    """Load an image file as a BGR uint8 array of shape (H, W, 3).

    Args:
        path: Path to an image file in any format OpenCV can decode.

    Returns:
        The decoded image.

    Raises:
        InvalidInputFileError: If the path does not name a readable file.
        ImageDecodeError: If the file contents cannot be decoded.
    """
    path = Path(path)

    if not path.is_file():
        raise InvalidInputFileError(
            f"Input image not found: '{path}'. "
            f"Provide a path to an existing image file."
        )

    try:
        data = np.fromfile(str(path), dtype=np.uint8)
    except OSError as e:
        raise InvalidInputFileError(f"Cannot read image file '{path}': {e}") from e

    if data.size == 0:
        raise ImageDecodeError(f"Image file is empty: '{path}'.")

    try:
        image = cv2.imdecode(data, cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise ImageDecodeError(f"Failed to decode image '{path}': {e}") from e

    if image is None:
        raise ImageDecodeError(
            f"Failed to decode image '{path}'. "
            f"The file is not in a format OpenCV can read."
        )

    logger.debug("Loaded image %s (%dx%d)", path, image.shape[1], image.shape[0])
    return image
