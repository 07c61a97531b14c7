"""
Tests for the raw detection module.
"""

import numpy as np
import pytest

from yunet_faces.raw_detection import RawDetection


def test_from_yunet_row():
    """Test conversion of a YuNet output row into a raw record."""
    row = np.array(
        [10.2, 20.7, 100.0, 120.4,
         40.0, 60.0, 80.0, 61.0, 60.0, 90.0, 45.0, 110.0, 75.0, 111.0,
         0.92],
        dtype=np.float32,
    )

    raw = RawDetection.from_yunet_row(row)

    assert raw.x == 10
    assert raw.y == 21
    assert raw.w == 100
    assert raw.h == 120
    assert raw.landmarks == (40, 60, 80, 61, 60, 90, 45, 110, 75, 111)
    assert raw.score == pytest.approx(0.92, abs=1e-6)
    assert all(isinstance(v, int) for v in raw.landmarks)


def test_from_yunet_row_keeps_negative_values():
    """Test that the adapter does not validate or clamp."""
    row = [-12.0, 5.0, -3.0, 40.0] + [-1.0] * 10 + [0.1]

    raw = RawDetection.from_yunet_row(row)

    assert raw.x == -12
    assert raw.w == -3
    assert raw.landmarks[0] == -1


def test_from_yunet_row_wrong_length():
    """Test that rows of the wrong length are rejected."""
    with pytest.raises(ValueError, match="15 values"):
        RawDetection.from_yunet_row([0.0] * 14)


def test_from_yunet_row_passes_non_finite_values_through():
    """Test that NaN and inf coordinates survive conversion untouched."""
    row = [np.nan, 5.0, np.inf, 40.0] + [1.0] * 9 + [-np.inf] + [0.3]

    raw = RawDetection.from_yunet_row(row)

    assert np.isnan(raw.x)
    assert raw.y == 5
    assert raw.w == np.inf
    assert raw.landmarks[9] == -np.inf
