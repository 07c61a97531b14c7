"""
Face entity: the validated form of a raw detection.

Responsibility:
    Convert a RawDetection into a Face, rejecting records whose geometry
    is not a valid unsigned 16-bit pixel coordinate, and expose the
    geometry in absolute pixels and in coordinates normalized by the
    dimensions of the image the detection was computed on.

Validation policy (strict):
    Every rectangle and landmark field must lie in [0, 65535]. The first
    field that does not raises MalformedDetectionError. Negative widths
    and heights are the usual culprits; the detector emits them rarely,
    for low-confidence or edge-of-frame detections. The score is not
    checked or clamped.

Non-goals:
    - No clamping of normalized values. They are in [0, 1] for any Face
      that passed validation and lies inside its image, but landmarks
      extrapolated past the image edge can exceed 1.
    - No detection, tracking, or identity.
"""

from dataclasses import dataclass
from numbers import Integral
from typing import Tuple

from yunet_faces.errors import MalformedDetectionError
from yunet_faces.geometry import FaceLandmarks, Rectangle
from yunet_faces.raw_detection import RawDetection

_PIXEL_MAX = 0xFFFF


def _check_pixel(field: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise MalformedDetectionError(field, value)
    if not 0 <= value <= _PIXEL_MAX:
        raise MalformedDetectionError(field, value)
    return int(value)


def _check_dimensions(dimensions: Tuple[int, int]) -> Tuple[int, int]:
    if len(dimensions) != 2:
        raise ValueError(
            f"detection_dimensions must be a (width, height) pair, "
            f"got {dimensions!r}."
        )
    width, height = dimensions
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise ValueError(
                f"detection_dimensions {name} must be an int, got {value!r}."
            )
        if not 0 < value <= _PIXEL_MAX:
            raise ValueError(
                f"detection_dimensions {name} must be in [1, {_PIXEL_MAX}], "
                f"got {value}."
            )
    return (int(width), int(height))


@dataclass(frozen=True, slots=True)
class Face:
    """A detected face with validated pixel geometry.

    Attributes:
        confidence: Detector score, nominally in [0, 1]. Passed through
                    verbatim.
        rectangle: Face box in absolute pixels.
        landmarks: Five keypoints in absolute pixels.
        detection_dimensions: (width, height) of the image the detection
                              was computed on.

    Build instances with Face.from_raw().
    """

    confidence: float
    rectangle: Rectangle[int]
    landmarks: FaceLandmarks[int]
    detection_dimensions: Tuple[int, int]

    @classmethod
    def from_raw(
        cls,
        raw: RawDetection,
        detection_dimensions: Tuple[int, int],
    ) -> "Face":
        """Validate a raw detection and build a Face from it.

        Args:
            raw: Record as reported by the inference backend.
            detection_dimensions: (width, height) of the detection image.

        Returns:
            A Face owning copies of the raw geometry.

        Raises:
            MalformedDetectionError: If any rectangle or landmark value is
                                     outside [0, 65535].
            ValueError: If detection_dimensions is not a pair of positive
                        16-bit ints.
        """
        dimensions = _check_dimensions(tuple(detection_dimensions))

        rectangle = Rectangle.with_size(
            _check_pixel("x", raw.x),
            _check_pixel("y", raw.y),
            _check_pixel("w", raw.w),
            _check_pixel("h", raw.h),
        )

        if len(raw.landmarks) != 10:
            raise MalformedDetectionError(
                "landmarks",
                len(raw.landmarks),
                f"Malformed detection: expected 10 landmark coordinates, "
                f"got {len(raw.landmarks)}.",
            )
        coords = [
            _check_pixel(f"landmarks[{i}]", v) for i, v in enumerate(raw.landmarks)
        ]

        return cls(
            confidence=float(raw.score),
            rectangle=rectangle,
            landmarks=FaceLandmarks.from_flat(coords),
            detection_dimensions=dimensions,
        )

    def normalized_rectangle(self) -> Rectangle[float]:
        """Face box divided by the detection image size, per axis."""
        width, height = self.detection_dimensions
        r = self.rectangle
        return Rectangle.with_size(
            r.left / width,
            r.top / height,
            r.width / width,
            r.height / height,
        )

    def normalized_landmarks(self) -> FaceLandmarks[float]:
        """Landmarks divided by the detection image size, per axis."""
        width, height = self.detection_dimensions
        coords = []
        for x, y in self.landmarks.points():
            coords.extend((x / width, y / height))
        return FaceLandmarks.from_flat(coords)

    def to_dict(self) -> dict:
        """Return a plain dict suitable for JSON serialization."""
        return {
            "confidence": round(self.confidence, 4),
            "rectangle": self.rectangle.to_dict(),
            "landmarks": self.landmarks.to_dict(),
            "detection_dimensions": list(self.detection_dimensions),
        }
