"""
Tests for the serializer module.
"""

import csv
import json

from yunet_faces.face import Face
from yunet_faces.raw_detection import RawDetection
from yunet_faces.serializer import save_csv, save_json


def _face(x, score):
    raw = RawDetection(
        score=score, x=x, y=20, w=40, h=50,
        landmarks=(1, 2, 3, 4, 5, 6, 7, 8, 9, 10),
    )
    return Face.from_raw(raw, (320, 240))


def test_save_json(tmp_path):
    """Test JSON export schema and totals."""
    output = tmp_path / "nested" / "faces.json"
    faces = {"b.jpg": [_face(10, 0.9), _face(100, 0.7)], "a.jpg": []}

    save_json(faces, str(output))

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["total_images"] == 2
    assert payload["total_faces"] == 2
    assert [img["image_id"] for img in payload["images"]] == ["a.jpg", "b.jpg"]
    first = payload["images"][1]["faces"][0]
    assert first["rectangle"]["left"] == 10
    assert first["landmarks"]["mouth_left"] == [9, 10]
    assert first["detection_dimensions"] == [320, 240]


def test_save_csv(tmp_path):
    """Test CSV export, one row per face, in detector order."""
    output = tmp_path / "faces.csv"
    faces = {"frame.png": [_face(50, 0.81234), _face(5, 0.6)]}

    save_csv(faces, str(output))

    with open(output, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))

    assert len(rows) == 2
    assert rows[0]["left"] == "50"
    assert rows[0]["confidence"] == "0.8123"
    assert rows[0]["right_eye_x"] == "1"
    assert rows[0]["mouth_left_y"] == "10"
    assert rows[1]["image_width"] == "320"


def test_exported_from_package():
    """Test that the export functions are part of the public API."""
    import yunet_faces

    assert yunet_faces.save_json is save_json
    assert yunet_faces.save_csv is save_csv
