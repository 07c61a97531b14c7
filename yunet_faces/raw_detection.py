"""
Raw detection record crossing the inference boundary.

Responsibility:
    Hold one detector output record exactly as the detector reported it
    (score, integer rectangle, ten integer landmark coordinates) and
    adapt the YuNet output row layout into that record.

Non-goals:
    - No validation. Nothing about a RawDetection is trusted; see
      Face.from_raw for the checks.
    - No coordinate scaling.

Hard-coded:
    - cv2.FaceDetectorYN row layout: 15 float32 values
      [x, y, w, h, re_x, re_y, le_x, le_y, nose_x, nose_y,
       mr_x, mr_y, ml_x, ml_y, score].
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

_YUNET_ROW_LENGTH = 15


@dataclass(frozen=True, slots=True)
class RawDetection:
    """An unvalidated face record from the detector.

    Attributes:
        score: Detector confidence, passed through verbatim.
        x: Left edge in pixels.
        y: Top edge in pixels.
        w: Width in pixels. The detector has been seen to report negative
           values on rare occasions.
        h: Height in pixels.
        landmarks: Ten coordinates, (x, y) pairs in FaceLandmarks order.
    """

    score: float
    x: int
    y: int
    w: int
    h: int
    landmarks: Tuple[int, ...]

    @classmethod
    def from_yunet_row(cls, row: Sequence[float]) -> "RawDetection":
        """Convert one row of cv2.FaceDetectorYN output.

        Coordinates are rounded to the nearest integer pixel. NaN and
        infinite coordinates are passed through as floats; Face.from_raw
        rejects them.

        Raises:
            ValueError: If the row does not have 15 values.
        """
        if len(row) != _YUNET_ROW_LENGTH:
            raise ValueError(
                f"Expected a YuNet row of {_YUNET_ROW_LENGTH} values, "
                f"got {len(row)}."
            )

        coords = [_to_pixel(v) for v in row[:14]]
        return cls(
            score=float(row[14]),
            x=coords[0],
            y=coords[1],
            w=coords[2],
            h=coords[3],
            landmarks=tuple(coords[4:14]),
        )


def _to_pixel(value: float):
    value = float(value)
    if not math.isfinite(value):
        return value
    return int(round(value))
