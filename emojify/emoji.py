"""
Expression classification: face signals to emoji category.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

# Probability above which a face counts as smiling / an eye as open.
# Comparisons are strict: a value equal to the threshold is "not smiling"/"closed".
SMILING_THRESHOLD = 0.15
EYE_OPEN_THRESHOLD = 0.5


class Emoji(Enum):
    """The eight emoji categories a face can be classified into."""

    SMILING = 'smiling'
    FROWNING = 'frowning'
    LEFT_WINK = 'left_wink'
    RIGHT_WINK = 'right_wink'
    CLOSED_EYE_SMILING = 'closed_eye_smiling'
    CLOSED_EYE_FROWNING = 'closed_eye_frowning'
    LEFT_WINK_FROWNING = 'left_wink_frowning'
    RIGHT_WINK_FROWNING = 'right_wink_frowning'

    @property
    def label(self) -> str:
        return self.value.replace('_', ' ').title()

    @property
    def glyph(self) -> str:
        return EMOJI_GLYPHS[self]

    @property
    def badge(self) -> str:
        """Glyph followed by the label, unique per emoji."""
        return f"{self.glyph} {self.label}"


# Display glyphs (used by the app and reports, never for classification)
EMOJI_GLYPHS = {
    Emoji.SMILING: '😄',
    Emoji.FROWNING: '🙁',
    Emoji.LEFT_WINK: '😉',
    Emoji.RIGHT_WINK: '😉',
    Emoji.CLOSED_EYE_SMILING: '😆',
    Emoji.CLOSED_EYE_FROWNING: '😣',
    Emoji.LEFT_WINK_FROWNING: '😒',
    Emoji.RIGHT_WINK_FROWNING: '😒',
}

# (is_smiling, is_left_eye_open, is_right_eye_open) -> category
EMOJI_TABLE: Dict[Tuple[bool, bool, bool], Emoji] = {
    (True, True, True): Emoji.SMILING,
    (False, True, True): Emoji.FROWNING,
    (False, False, False): Emoji.CLOSED_EYE_FROWNING,
    (True, False, False): Emoji.CLOSED_EYE_SMILING,
    (True, False, True): Emoji.LEFT_WINK,
    (False, False, True): Emoji.LEFT_WINK_FROWNING,
    (True, True, False): Emoji.RIGHT_WINK,
    (False, True, False): Emoji.RIGHT_WINK_FROWNING,
}


@dataclass(frozen=True)
class FaceSignal:
    """
    Expression probabilities reported by a face detector for one face.

    Args:
        smiling_probability: Probability that the face is smiling, in [0, 1]
        left_eye_open_probability: Probability that the subject's left eye is open
        right_eye_open_probability: Probability that the subject's right eye is open
    """

    smiling_probability: float
    left_eye_open_probability: float
    right_eye_open_probability: float


def expression_state(signal: FaceSignal) -> Tuple[bool, bool, bool]:
    """
    Threshold a face signal into (is_smiling, is_left_eye_open, is_right_eye_open).
    """
    is_smiling = signal.smiling_probability > SMILING_THRESHOLD
    is_left_eye_open = signal.left_eye_open_probability > EYE_OPEN_THRESHOLD
    is_right_eye_open = signal.right_eye_open_probability > EYE_OPEN_THRESHOLD
    return is_smiling, is_left_eye_open, is_right_eye_open


def classify(signal: FaceSignal) -> Emoji:
    """
    Pick the emoji category matching a face's expression.

    Args:
        signal: Expression probabilities of one face

    Returns:
        The matching Emoji. Every input maps to exactly one category.
    """
    logger.debug(
        "classify: smiling=%.3f left_eye_open=%.3f right_eye_open=%.3f",
        signal.smiling_probability,
        signal.left_eye_open_probability,
        signal.right_eye_open_probability,
    )

    emoji = EMOJI_TABLE[expression_state(signal)]

    logger.debug("Selected emoji: %s", emoji.name)
    return emoji
