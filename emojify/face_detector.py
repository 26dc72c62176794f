"""
Face detection and expression signals using OpenCV Haar Cascades.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import cv2
import numpy as np

from .compositor import FaceGeometry
from .emoji import FaceSignal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectedFace:
    """One face found in a picture: where it is and what it expresses."""

    signal: FaceSignal
    geometry: FaceGeometry


def hits_to_probability(hits: int) -> float:
    """
    Turn a number of cascade hits into a probability in [0, 1).

    A single hit gives ~0.63, which clears both the smiling and the
    eye-open thresholds.
    """
    return 1.0 - math.exp(-hits)


def _load_cascade(name: str) -> Optional[cv2.CascadeClassifier]:
    cascade = cv2.CascadeClassifier(cv2.data.haarcascades + name)
    if cascade.empty():
        logger.warning("Haar cascade %s could not be loaded", name)
        return None
    return cascade


class FaceDetector:
    """
    Face detector yielding face boxes plus smile / eye-open probabilities.

    Faces come from the frontal face cascade. Within each face the lower half
    is searched for a smile and each side of the upper half for an open eye.

    Args:
        min_face_size: Smallest face (width, height) to report
        scale_factor: Cascade image pyramid scale step
        min_neighbors: Cascade detection confidence
    """

    def __init__(
        self,
        min_face_size: Tuple[int, int] = (48, 48),
        scale_factor: float = 1.1,
        min_neighbors: int = 5,
    ):
        self.min_face_size = tuple(min_face_size)
        self.scale_factor = scale_factor
        self.min_neighbors = min_neighbors

        self.face_cascade = _load_cascade('haarcascade_frontalface_default.xml')
        self.smile_cascade = _load_cascade('haarcascade_smile.xml')
        self.eye_cascade = _load_cascade('haarcascade_eye.xml')

        self.available = self.face_cascade is not None
        if not self.available:
            logger.warning("Face detection not available, no faces will be reported")

    @staticmethod
    def _to_gray(image: np.ndarray) -> np.ndarray:
        if image.ndim == 2:
            return image
        if image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_RGBA2GRAY)
        return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)

    def _count_hits(
        self,
        cascade: Optional[cv2.CascadeClassifier],
        region: np.ndarray,
        min_neighbors: int,
    ) -> int:
        if cascade is None or region.size == 0:
            return 0
        hits = cascade.detectMultiScale(
            region,
            scaleFactor=self.scale_factor,
            minNeighbors=min_neighbors,
        )
        return len(hits)

    def _face_signal(self, face_gray: np.ndarray) -> FaceSignal:
        h, w = face_gray.shape[:2]
        upper = face_gray[: h // 2]
        lower = face_gray[h // 2:]

        # Smiles need many more neighbours than eyes to avoid mouth false positives
        smile_hits = self._count_hits(self.smile_cascade, lower, self.min_neighbors * 4)

        # The subject's left eye shows up on the right side of the image
        right_eye_hits = self._count_hits(self.eye_cascade, upper[:, : w // 2], self.min_neighbors)
        left_eye_hits = self._count_hits(self.eye_cascade, upper[:, w // 2:], self.min_neighbors)

        return FaceSignal(
            smiling_probability=hits_to_probability(smile_hits),
            left_eye_open_probability=hits_to_probability(left_eye_hits),
            right_eye_open_probability=hits_to_probability(right_eye_hits),
        )

    def detect(self, image: np.ndarray) -> List[DetectedFace]:
        """
        Detect faces in an image.

        Args:
            image: RGB, RGBA or grayscale array

        Returns:
            Detected faces in cascade order (empty if none or detector unavailable)
        """
        if not self.available:
            return []

        gray = self._to_gray(image)
        boxes = self.face_cascade.detectMultiScale(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            minSize=self.min_face_size,
        )

        faces = []
        for (x, y, w, h) in boxes:
            signal = self._face_signal(gray[y:y + h, x:x + w])
            geometry = FaceGeometry(x=float(x), y=float(y), width=float(w), height=float(h))
            faces.append(DetectedFace(signal=signal, geometry=geometry))

        logger.debug("detect: %d face(s)", len(faces))
        return faces

    @staticmethod
    def draw_face_boxes(
        image: np.ndarray,
        faces: List[DetectedFace],
        color: Tuple[int, int, int] = (0, 255, 0),
    ) -> np.ndarray:
        """
        Draw bounding boxes around detected faces.

        Args:
            image: Input image (not modified)
            faces: Faces returned by ``detect``
            color: RGB color for the boxes

        Returns:
            Copy of the image with boxes drawn
        """
        frame = np.ascontiguousarray(image).copy()
        for face in faces:
            g = face.geometry
            top_left = (int(g.x), int(g.y))
            bottom_right = (int(g.x + g.width), int(g.y + g.height))
            if frame.ndim == 3 and frame.shape[2] == 4:
                cv2.rectangle(frame, top_left, bottom_right, (*color, 255), 2)
            else:
                cv2.rectangle(frame, top_left, bottom_right, color, 2)
        return frame
