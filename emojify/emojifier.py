"""
Emojifier: detect faces in a picture and cover each with a matching emoji.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Sequence, Union

import numpy as np

from .assets import AssetMissing, get_emoji_image
from .compositor import composite
from .emoji import Emoji, classify
from .face_detector import DetectedFace
from .image_processor import ImageProcessor

logger = logging.getLogger(__name__)

NO_FACES_MESSAGE = "No faces detected in the picture."


@dataclass
class FaceResult:
    """Outcome for one detected face."""

    face: DetectedFace
    emoji: Emoji
    applied: bool


@dataclass
class EmojifyResult:
    """
    Result of emojifying one picture.

    Attributes:
        image: Final picture (the input array itself when no face was found)
        faces: One entry per detected face, in detection order
        notices: User-facing messages (no faces, missing emoji images)
    """

    image: np.ndarray
    faces: List[FaceResult] = field(default_factory=list)
    notices: List[str] = field(default_factory=list)

    @property
    def no_faces(self) -> bool:
        return not self.faces

    @property
    def emoji_counts(self) -> Counter:
        return Counter(f.emoji for f in self.faces if f.applied)


class Emojifier:
    """
    Runs face detection, expression classification and compositing.

    Args:
        detector: Object with ``detect(image) -> Sequence[DetectedFace]``
        assets: Sticker image per emoji category
    """

    def __init__(self, detector, assets: Mapping[Emoji, np.ndarray]):
        self.detector = detector
        self.assets = assets
        self.image_processor = ImageProcessor()

    def emojify(self, image: np.ndarray) -> EmojifyResult:
        """
        Cover every face in ``image`` with its emoji.

        Faces are drawn in detection order onto the running result, so a
        later emoji may cover an earlier one where faces overlap.

        Args:
            image: RGB or RGBA picture (not modified)

        Returns:
            EmojifyResult with the final picture and per-face outcomes
        """
        faces: Sequence[DetectedFace] = self.detector.detect(image)
        logger.info("emojify: number of faces = %d", len(faces))

        result = EmojifyResult(image=image)
        if len(faces) == 0:
            result.notices.append(NO_FACES_MESSAGE)
            return result

        canvas = image
        for face in faces:
            emoji = classify(face.signal)
            try:
                sticker = get_emoji_image(self.assets, emoji)
            except AssetMissing as e:
                logger.warning("%s, face at %s left as is", e, face.geometry.position)
                result.notices.append(str(e))
                result.faces.append(FaceResult(face=face, emoji=emoji, applied=False))
                continue

            canvas = composite(canvas, sticker, face.geometry)
            result.faces.append(FaceResult(face=face, emoji=emoji, applied=True))

        result.image = canvas
        return result

    def emojify_file(self, image_path: Union[str, Path]) -> EmojifyResult:
        """Load a picture from disk and emojify it."""
        return self.emojify(self.image_processor.load(image_path))
