"""
Geometric primitives for face detection results.

Responsibility:
    Define the axis-aligned Rectangle and the five-point FaceLandmarks
    containers shared by the raw detector output and the Face entity.
    Both are generic over the coordinate type: int for absolute pixels,
    float for normalized coordinates.

Non-goals:
    - No validation. A rectangle may carry negative extents and landmarks
      may fall outside the image; rejecting such values is the job of
      the Face conversion.
    - No drawing or clipping helpers.
"""

from dataclasses import dataclass
from typing import Generic, Sequence, Tuple, TypeVar

T = TypeVar("T", int, float)

Point = Tuple[T, T]


@dataclass(frozen=True, slots=True)
class Rectangle(Generic[T]):
    """An axis-aligned box given by its top-left corner and its extent.

    Attributes:
        left: X coordinate of the left edge.
        top: Y coordinate of the top edge.
        width: Horizontal extent.
        height: Vertical extent.
    """

    left: T
    top: T
    width: T
    height: T

    @classmethod
    def with_size(cls, left: T, top: T, width: T, height: T) -> "Rectangle[T]":
        """Build a rectangle from its top-left corner and size."""
        return cls(left=left, top=top, width=width, height=height)

    @property
    def right(self) -> T:
        """X coordinate of the right edge (left + width)."""
        return self.left + self.width

    @property
    def bottom(self) -> T:
        """Y coordinate of the bottom edge (top + height)."""
        return self.top + self.height

    def to_dict(self) -> dict:
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True, slots=True)
class FaceLandmarks(Generic[T]):
    """Five facial keypoints as (x, y) pairs.

    "Right" and "left" follow the face itself: a person's right eye
    appears on the left side of the image.
    """

    right_eye: Point
    left_eye: Point
    nose: Point
    mouth_right: Point
    mouth_left: Point

    @classmethod
    def from_flat(cls, values: Sequence[T]) -> "FaceLandmarks[T]":
        """Build landmarks from ten flat coordinates (x0, y0, ..., x4, y4).

        Raises:
            ValueError: If values does not hold exactly ten numbers.
        """
        if len(values) != 10:
            raise ValueError(
                f"Expected 10 landmark coordinates, got {len(values)}."
            )
        return cls(
            right_eye=(values[0], values[1]),
            left_eye=(values[2], values[3]),
            nose=(values[4], values[5]),
            mouth_right=(values[6], values[7]),
            mouth_left=(values[8], values[9]),
        )

    def points(self) -> Tuple[Point, Point, Point, Point, Point]:
        """Return the five points in canonical order."""
        return (
            self.right_eye,
            self.left_eye,
            self.nose,
            self.mouth_right,
            self.mouth_left,
        )

    def to_dict(self) -> dict:
        return {
            "right_eye": list(self.right_eye),
            "left_eye": list(self.left_eye),
            "nose": list(self.nose),
            "mouth_right": list(self.mouth_right),
            "mouth_left": list(self.mouth_left),
        }
