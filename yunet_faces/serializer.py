"""
Serialization of face detection results.

Responsibility:
    Export faces to structured file formats (JSON, CSV) for downstream
    consumption or offline analysis.

Non-goals:
    - No rendering, display, or detection logic.
    - No streaming output; each call writes one complete file.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Dict, List

from yunet_faces.face import Face

logger = logging.getLogger(__name__)

_LANDMARK_NAMES = ("right_eye", "left_eye", "nose", "mouth_right", "mouth_left")


def save_json(
    faces_by_image: Dict[str, List[Face]],
    output_path: str,
) -> None:
    """Export faces to a JSON file.

    Output schema:
        {
            "images": [
                {
                    "image_id": "photo.jpg",
                    "faces": [Face.to_dict(), ...]
                }
            ],
            "total_images": N,
            "total_faces": M
        }

    Args:
        faces_by_image: Mapping of image id → list of Face objects.
        output_path: Path to the output JSON file.

    Raises:
        OSError: If the output path is not writable.
    """
    _ensure_parent_dir(output_path)

    images = []
    total_faces = 0

    for image_id in sorted(faces_by_image.keys()):
        faces = faces_by_image[image_id]
        total_faces += len(faces)
        images.append({
            "image_id": image_id,
            "faces": [f.to_dict() for f in faces],
        })

    payload = {
        "images": images,
        "total_images": len(images),
        "total_faces": total_faces,
    }

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)

    logger.info(
        "JSON output saved: %s (%d images, %d faces)",
        output_path, len(images), total_faces,
    )


def save_csv(
    faces_by_image: Dict[str, List[Face]],
    output_path: str,
) -> None:
    """Export faces to a CSV file, one row per face.

    Columns: image_id, confidence, left, top, width, height,
    image_width, image_height, then x/y for each landmark.

    Raises:
        OSError: If the output path is not writable.
    """
    _ensure_parent_dir(output_path)

    fieldnames = [
        "image_id", "confidence", "left", "top", "width", "height",
        "image_width", "image_height",
    ]
    for name in _LANDMARK_NAMES:
        fieldnames.extend((f"{name}_x", f"{name}_y"))

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        total = 0
        for image_id in sorted(faces_by_image.keys()):
            for face in faces_by_image[image_id]:
                writer.writerow(_csv_row(image_id, face))
                total += 1

    logger.info("CSV output saved: %s (%d rows)", output_path, total)


def _csv_row(image_id: str, face: Face) -> dict:
    rect = face.rectangle
    row = {
        "image_id": image_id,
        "confidence": round(face.confidence, 4),
        "left": rect.left,
        "top": rect.top,
        "width": rect.width,
        "height": rect.height,
        "image_width": face.detection_dimensions[0],
        "image_height": face.detection_dimensions[1],
    }
    for name, (x, y) in zip(_LANDMARK_NAMES, face.landmarks.points()):
        row[f"{name}_x"] = x
        row[f"{name}_y"] = y
    return row


def _ensure_parent_dir(path: str) -> None:
    """Create parent directories if they don't exist."""
    parent = Path(path).parent
    parent.mkdir(parents=True, exist_ok=True)
