"""
Tests for the geometry module.
"""

import dataclasses

import pytest

from yunet_faces.geometry import FaceLandmarks, Rectangle


def test_rectangle_with_size():
    """Test construction from corner and extent, plus derived edges."""
    rect = Rectangle.with_size(10, 20, 30, 40)

    assert rect.left == 10
    assert rect.top == 20
    assert rect.width == 30
    assert rect.height == 40
    assert rect.right == 40
    assert rect.bottom == 60


def test_rectangle_accepts_negative_extent():
    """Test that the primitive itself performs no validation."""
    rect = Rectangle.with_size(50, 50, -5, -10)

    assert rect.right == 45
    assert rect.bottom == 40


def test_rectangle_float_coordinates():
    """Test that float coordinates are carried as-is."""
    rect = Rectangle.with_size(0.25, 0.5, 0.5, 0.25)

    assert rect.right == pytest.approx(0.75)
    assert rect.bottom == pytest.approx(0.75)


def test_rectangle_is_immutable():
    """Test that a rectangle cannot be modified after construction."""
    rect = Rectangle.with_size(1, 2, 3, 4)

    with pytest.raises(dataclasses.FrozenInstanceError):
        rect.left = 5


def test_landmarks_from_flat_order():
    """Test that flat coordinates map to named points in canonical order."""
    lm = FaceLandmarks.from_flat([1, 2, 3, 4, 5, 6, 7, 8, 9, 10])

    assert lm.right_eye == (1, 2)
    assert lm.left_eye == (3, 4)
    assert lm.nose == (5, 6)
    assert lm.mouth_right == (7, 8)
    assert lm.mouth_left == (9, 10)
    assert lm.points() == ((1, 2), (3, 4), (5, 6), (7, 8), (9, 10))


def test_landmarks_from_flat_wrong_length():
    """Test that anything but ten coordinates is rejected."""
    with pytest.raises(ValueError, match="10 landmark"):
        FaceLandmarks.from_flat([1, 2, 3])


def test_to_dict():
    """Test plain-dict export of both primitives."""
    rect = Rectangle.with_size(1, 2, 3, 4)
    lm = FaceLandmarks.from_flat(list(range(10)))

    assert rect.to_dict() == {"left": 1, "top": 2, "width": 3, "height": 4}
    assert lm.to_dict()["nose"] == [4, 5]
