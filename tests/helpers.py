"""Shared test helpers for emojify tests."""

from typing import List

import numpy as np

from emojify.compositor import FaceGeometry
from emojify.emoji import FaceSignal
from emojify.face_detector import DetectedFace


RED = (255, 0, 0)
BLUE = (0, 0, 255)


class FakeDetector:
    """Detector returning a fixed list of faces and counting its calls."""

    def __init__(self, faces: List[DetectedFace]):
        self.faces = faces
        self.calls = 0

    def detect(self, image):
        self.calls += 1
        return list(self.faces)


def solid_rgba(height: int, width: int, color=RED, alpha: int = 255) -> np.ndarray:
    """Create a single-colour RGBA image."""
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[:, :, :3] = color
    image[:, :, 3] = alpha
    return image


def make_face(
    x=100.0, y=100.0, width=200.0, height=200.0,
    smiling=0.9, left_open=0.9, right_open=0.9,
) -> DetectedFace:
    """Create a detected face; defaults to a smiling 200x200 face at (100, 100)."""
    return DetectedFace(
        signal=FaceSignal(
            smiling_probability=smiling,
            left_eye_open_probability=left_open,
            right_eye_open_probability=right_open,
        ),
        geometry=FaceGeometry(x=x, y=y, width=width, height=height),
    )
