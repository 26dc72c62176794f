"""
Emoji sticker assets: loading from disk and rendering default stickers.
"""

import logging
from pathlib import Path
from typing import Dict, Mapping, Union

import numpy as np
from PIL import Image, ImageDraw

from .emoji import Emoji
from .image_processor import ImageProcessor

logger = logging.getLogger(__name__)


# Asset file name for each category
EMOJI_ASSET_FILES = {
    Emoji.SMILING: 'smile.png',
    Emoji.FROWNING: 'frown.png',
    Emoji.LEFT_WINK: 'leftwink.png',
    Emoji.RIGHT_WINK: 'rightwink.png',
    Emoji.CLOSED_EYE_SMILING: 'closed_smile.png',
    Emoji.CLOSED_EYE_FROWNING: 'closed_frown.png',
    Emoji.LEFT_WINK_FROWNING: 'leftwinkfrown.png',
    Emoji.RIGHT_WINK_FROWNING: 'rightwinkfrown.png',
}

FACE_COLOR = (255, 204, 77, 255)
OUTLINE_COLOR = (224, 150, 30, 255)
FEATURE_COLOR = (80, 50, 20, 255)


class AssetMissing(KeyError):
    """Raised when no sticker image is available for an emoji category."""

    def __init__(self, emoji: Emoji):
        super().__init__(emoji)
        self.emoji = emoji

    def __str__(self):
        return f"No emoji image for {self.emoji.name}"


def get_emoji_image(assets: Mapping[Emoji, np.ndarray], emoji: Emoji) -> np.ndarray:
    """
    Look up the sticker for a category.

    Raises:
        AssetMissing: If ``assets`` holds no image for ``emoji``.
    """
    image = assets.get(emoji)
    if image is None:
        raise AssetMissing(emoji)
    return image


def load_emoji_assets(asset_dir: Union[str, Path]) -> Dict[Emoji, np.ndarray]:
    """
    Load sticker PNGs from a directory.

    Args:
        asset_dir: Directory holding the files named in EMOJI_ASSET_FILES

    Returns:
        RGBA arrays keyed by category. Categories whose file is missing are
        left out (and logged), so lookups for them raise AssetMissing.
    """
    asset_dir = Path(asset_dir)
    processor = ImageProcessor()
    assets = {}

    for emoji, filename in EMOJI_ASSET_FILES.items():
        path = asset_dir / filename
        if not path.exists():
            logger.warning("Emoji image not found: %s", path)
            continue
        assets[emoji] = processor.load_rgba(path)

    logger.info("Loaded %d/%d emoji images from %s", len(assets), len(EMOJI_ASSET_FILES), asset_dir)
    return assets


def _draw_eye(draw: ImageDraw.ImageDraw, cx: float, cy: float, size: int, is_open: bool):
    r = size * 0.06
    width = max(1, size // 40)
    if is_open:
        draw.ellipse([cx - r, cy - r * 1.4, cx + r, cy + r * 1.4], fill=FEATURE_COLOR)
    else:
        draw.arc([cx - r * 1.5, cy - r, cx + r * 1.5, cy + r], start=0, end=180,
                 fill=FEATURE_COLOR, width=width)


def render_emoji(emoji: Emoji, size: int = 256) -> np.ndarray:
    """
    Draw a flat sticker for a category.

    Eyes are drawn as seen on the photo: the subject's left eye is on the
    right-hand side of the sticker.

    Args:
        emoji: Category to draw
        size: Side length in pixels

    Returns:
        RGBA array of shape (size, size, 4) with a transparent background
    """
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")

    image = Image.new('RGBA', (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)

    margin = size * 0.03
    draw.ellipse(
        [margin, margin, size - margin, size - margin],
        fill=FACE_COLOR,
        outline=OUTLINE_COLOR,
        width=max(1, size // 50),
    )

    smiling = emoji in (
        Emoji.SMILING, Emoji.LEFT_WINK, Emoji.RIGHT_WINK, Emoji.CLOSED_EYE_SMILING
    )
    left_open = emoji in (
        Emoji.SMILING, Emoji.FROWNING, Emoji.RIGHT_WINK, Emoji.RIGHT_WINK_FROWNING
    )
    right_open = emoji in (
        Emoji.SMILING, Emoji.FROWNING, Emoji.LEFT_WINK, Emoji.LEFT_WINK_FROWNING
    )

    eye_y = size * 0.4
    _draw_eye(draw, size * 0.35, eye_y, size, right_open)
    _draw_eye(draw, size * 0.65, eye_y, size, left_open)

    mouth_width = max(1, size // 25)
    if smiling:
        draw.arc([size * 0.28, size * 0.42, size * 0.72, size * 0.78], start=20, end=160,
                 fill=FEATURE_COLOR, width=mouth_width)
    else:
        draw.arc([size * 0.3, size * 0.66, size * 0.7, size * 0.9], start=200, end=340,
                 fill=FEATURE_COLOR, width=mouth_width)

    return np.array(image)


def default_emoji_assets(size: int = 256) -> Dict[Emoji, np.ndarray]:
    """Rendered stickers for all eight categories."""
    return {emoji: render_emoji(emoji, size) for emoji in Emoji}


def save_emoji_assets(asset_dir: Union[str, Path], size: int = 256) -> Dict[Emoji, Path]:
    """
    Render all stickers and write them as PNGs under their asset file names.

    Returns:
        Written file path per category
    """
    asset_dir = Path(asset_dir)
    asset_dir.mkdir(parents=True, exist_ok=True)
    processor = ImageProcessor()

    written = {}
    for emoji, image in default_emoji_assets(size).items():
        path = asset_dir / EMOJI_ASSET_FILES[emoji]
        processor.save(image, path)
        written[emoji] = path
    return written
