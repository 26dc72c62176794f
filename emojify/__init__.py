"""
Emojify: cover faces in photos with emoji matching their expression.
"""

from .emoji import Emoji, FaceSignal, classify, SMILING_THRESHOLD, EYE_OPEN_THRESHOLD
from .compositor import FaceGeometry, InvalidGeometry, composite, SCALE_FACTOR
from .face_detector import DetectedFace, FaceDetector
from .assets import AssetMissing, load_emoji_assets, default_emoji_assets
from .image_processor import ImageProcessor
from .emojifier import Emojifier, EmojifyResult

__all__ = [
    'Emoji',
    'FaceSignal',
    'classify',
    'SMILING_THRESHOLD',
    'EYE_OPEN_THRESHOLD',
    'FaceGeometry',
    'InvalidGeometry',
    'composite',
    'SCALE_FACTOR',
    'DetectedFace',
    'FaceDetector',
    'AssetMissing',
    'load_emoji_assets',
    'default_emoji_assets',
    'ImageProcessor',
    'Emojifier',
    'EmojifyResult',
]
