"""
Preprocessing for the face detection pipeline.

Responsibility:
    Convert a caller-supplied image (numpy array in any supported layout)
    into a densely packed 8-bit BGR buffer, and describe it with the
    width, height, and row stride the inference backend expects.

Supported inputs:
    - Shapes (H, W), (H, W, 1), (H, W, 3) BGR, (H, W, 4) BGRA.
    - dtypes uint8, uint16 (scaled by 1/257), bool, and floating point
      (assumed in [0, 1], clipped then scaled to [0, 255]).

Non-goals:
    - No file I/O (see image_loader).
    - No resizing. The detector runs at the caller's resolution, and the
      resulting Face geometry is relative to that resolution.

Hard-coded:
    - Width and height must each fit in 16 bits. Larger images are
      rejected, never truncated.
    - Row stride is always width * 3 (no padding).
"""

from dataclasses import dataclass

import cv2
import numpy as np

from yunet_faces.errors import InvalidImageError

MAX_DIMENSION = 0xFFFF
CHANNELS = 3


@dataclass(frozen=True)
class PackedImage:
    """A BGR8 pixel buffer ready for the inference backend.

    Attributes:
        buffer: C-contiguous uint8 array of length height * step.
        width: Image width in pixels.
        height: Image height in pixels.
        step: Bytes per row (always width * 3).
    """

    buffer: np.ndarray
    width: int
    height: int
    step: int

    @property
    def dimensions(self):
        """(width, height) of the packed image."""
        return (self.width, self.height)


def to_bgr8(image: np.ndarray) -> np.ndarray:
    """Convert an image to a C-contiguous (H, W, 3) uint8 BGR array.

    Args:
        image: Input image as a numpy array (see module docstring for the
               accepted shapes and dtypes).

    Returns:
        The converted image. A uint8 BGR input that is already contiguous
        is returned as-is, without a copy.

    Raises:
        TypeError: If image is not a numpy ndarray.
        InvalidImageError: If the image is empty, has an unsupported shape
                           or dtype, or is larger than 65535 px on a side.
    """
    if not isinstance(image, np.ndarray):
        raise TypeError(
            f"Expected image to be a numpy ndarray, "
            f"got {type(image).__name__}. "
            f"Use cv2.imread() or detect_faces_from_file() to obtain images."
        )

    if image.size == 0:
        raise InvalidImageError(
            "Image is empty (zero size). "
            "Ensure the input source is providing valid images."
        )

    if image.ndim not in (2, 3):
        raise InvalidImageError(
            f"Expected a 2- or 3-dimensional image, "
            f"got {image.ndim} dimensions with shape {image.shape}."
        )

    if image.ndim == 3 and image.shape[2] not in (1, 3, 4):
        raise InvalidImageError(
            f"Expected 1, 3 or 4 channels, got {image.shape[2]} channels."
        )

    height, width = image.shape[:2]
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise InvalidImageError(
            f"Image is {width}x{height}; width and height must each be "
            f"at most {MAX_DIMENSION} pixels."
        )

    image = _to_uint8(image)

    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]

    if image.ndim == 2:
        image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    elif image.shape[2] == 4:
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)

    return np.ascontiguousarray(image)


def pack(image: np.ndarray) -> PackedImage:
    """Convert an image and describe it for the inference backend.

    Raises:
        TypeError: If image is not a numpy ndarray.
        InvalidImageError: See to_bgr8().
    """
    frame = to_bgr8(image)
    height, width = frame.shape[:2]
    return PackedImage(
        buffer=frame.reshape(-1),
        width=width,
        height=height,
        step=width * CHANNELS,
    )


def _to_uint8(image: np.ndarray) -> np.ndarray:
    """Scale supported dtypes to uint8."""
    if image.dtype == np.uint8:
        return image
    if image.dtype == np.bool_:
        return image.astype(np.uint8) * 255
    if image.dtype == np.uint16:
        return np.round(image / 257.0).astype(np.uint8)
    if np.issubdtype(image.dtype, np.floating):
        return np.round(np.clip(image, 0.0, 1.0) * 255.0).astype(np.uint8)

    raise InvalidImageError(
        f"Unsupported image dtype {image.dtype}. "
        f"Expected uint8, uint16, bool, or floating point."
    )
