"""
YuNet Faces: validated face geometry from the YuNet face detector.

Public API:
    - detect_faces / detect_faces_from_file: Detect faces with a given backend.
    - Detector: Configuration plus backend bundled behind one object.
    - Face, Rectangle, FaceLandmarks: Result types.
    - RawDetection, InferenceBackend, YuNetBackend: The inference boundary.
    - DetectionError and subclasses: Failure types.
    - save_json / save_csv: Export faces per image to JSON or CSV.

Usage:
    from yunet_faces import Detector

    detector = Detector()
    faces = detector.detect_file("photo.jpg")
    for face in faces:
        print(face.confidence, face.normalized_rectangle())
"""

from yunet_faces.detector import Detector, detect_faces, detect_faces_from_file
from yunet_faces.errors import (
    DetectionError,
    DetectionFailedError,
    ImageDecodeError,
    InvalidImageError,
    InvalidInputFileError,
    MalformedDetectionError,
)
from yunet_faces.face import Face
from yunet_faces.geometry import FaceLandmarks, Rectangle
from yunet_faces.inference import InferenceBackend, YuNetBackend
from yunet_faces.raw_detection import RawDetection
from yunet_faces.serializer import save_csv, save_json

__all__ = [
    "Detector",
    "detect_faces",
    "detect_faces_from_file",
    "Face",
    "FaceLandmarks",
    "Rectangle",
    "RawDetection",
    "InferenceBackend",
    "YuNetBackend",
    "DetectionError",
    "DetectionFailedError",
    "ImageDecodeError",
    "InvalidImageError",
    "InvalidInputFileError",
    "MalformedDetectionError",
    "save_json",
    "save_csv",
]
