"""
Compositing of emoji stickers onto face regions.

Images are numpy arrays of shape (H, W, 3) for RGB or (H, W, 4) for RGBA.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)

# Emoji width relative to the face width
SCALE_FACTOR = 0.9


class InvalidGeometry(ValueError):
    """Raised when an image or a face box has a non-positive width or height."""


@dataclass(frozen=True)
class FaceGeometry:
    """
    Bounding box of a detected face, in image pixel coordinates.

    Args:
        x: Left edge of the box
        y: Top edge of the box
        width: Box width in pixels
        height: Box height in pixels
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


def _check_image(image: np.ndarray, name: str):
    if not isinstance(image, np.ndarray) or image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(
            f"{name} must be an (H, W, 3) or (H, W, 4) array, "
            f"got shape {getattr(image, 'shape', None)}"
        )
    height, width = image.shape[:2]
    if width <= 0 or height <= 0:
        raise InvalidGeometry(f"{name} has non-positive size {width}x{height}")


def _to_pixel(value: float) -> int:
    # Round half up so that x.5 offsets behave the same on both sides of 0
    return int(math.floor(value + 0.5))


def overlay_size(overlay_shape: Tuple[int, ...], face: FaceGeometry) -> Tuple[int, int]:
    """
    Size of the emoji once scaled to a face.

    The width follows the face width. The height keeps the overlay's aspect
    ratio and then gets the scale factor applied a second time.

    Args:
        overlay_shape: Shape of the overlay array (H, W, ...)
        face: Face the overlay is scaled to

    Returns:
        (width, height) in whole pixels
    """
    overlay_height, overlay_width = overlay_shape[:2]
    new_width = int(face.width * SCALE_FACTOR)
    new_height = int(overlay_height * new_width // overlay_width * SCALE_FACTOR)
    return new_width, new_height


def overlay_position(size: Tuple[int, int], face: FaceGeometry) -> Tuple[float, float]:
    """
    Top-left corner for a scaled overlay of the given (width, height).

    Horizontally centred on the face; vertically the overlay is shifted up
    by a third of its height from the face centre, not a half.
    """
    width, height = size
    center_x, center_y = face.center
    pos_x = center_x - width // 2
    pos_y = center_y - height // 3
    return pos_x, pos_y


def blend_at(dst: np.ndarray, src: np.ndarray, x: int, y: int) -> np.ndarray:
    """
    Alpha-blend ``src`` onto ``dst`` in place with its top-left corner at (x, y).

    Parts of ``src`` falling outside ``dst`` are clipped. A 3-channel ``src``
    is drawn opaque; a 4-channel one uses its alpha channel (source-over).

    Args:
        dst: Destination array, modified in place
        src: Image to draw
        x: Column of the top-left corner (may be negative)
        y: Row of the top-left corner (may be negative)

    Returns:
        ``dst``
    """
    h, w = src.shape[:2]

    y1, y2 = max(0, y), min(dst.shape[0], y + h)
    x1, x2 = max(0, x), min(dst.shape[1], x + w)
    if y1 >= y2 or x1 >= x2:
        return dst

    src_crop = src[y1 - y:y2 - y, x1 - x:x2 - x]
    dst_crop = dst[y1:y2, x1:x2]

    if src.shape[2] == 4:
        alpha = src_crop[:, :, 3:4].astype(np.float32) / 255.0
    else:
        alpha = np.ones(src_crop.shape[:2] + (1,), dtype=np.float32)

    colour = src_crop[:, :, :3].astype(np.float32)
    base = dst_crop[:, :, :3].astype(np.float32)

    if dst.shape[2] == 4:
        base_alpha = dst_crop[:, :, 3:4].astype(np.float32) / 255.0
        out_alpha = alpha + base_alpha * (1.0 - alpha)
        weighted = alpha * colour + (1.0 - alpha) * base_alpha * base
        # Fully transparent results keep whatever colour the background had
        blended = np.where(out_alpha > 0, weighted / np.maximum(out_alpha, 1e-6), base)
        dst_crop[:, :, 3:4] = np.rint(out_alpha * 255.0).astype(np.uint8)
    else:
        blended = alpha * colour + (1.0 - alpha) * base

    dst_crop[:, :, :3] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)
    return dst


def composite(background: np.ndarray, overlay: np.ndarray, face: FaceGeometry) -> np.ndarray:
    """
    Draw an emoji over a face.

    Args:
        background: Picture containing the face
        overlay: Emoji image, ideally RGBA
        face: Bounding box of the face

    Returns:
        New array with the same shape and dtype as ``background``. Neither
        input is modified. If the scaled emoji truncates to zero pixels the
        result is an unchanged copy of ``background``.

    Raises:
        InvalidGeometry: If an image or the face box has a non-positive
            width/height.
    """
    _check_image(background, 'background')
    _check_image(overlay, 'overlay')
    if face.width <= 0 or face.height <= 0:
        raise InvalidGeometry(f"face has non-positive size {face.width}x{face.height}")

    # Result starts as a copy of the picture
    result = np.empty_like(background)
    result[:] = background

    new_width, new_height = overlay_size(overlay.shape, face)
    if new_width <= 0 or new_height <= 0:
        logger.debug(
            "composite: emoji scaled to a %sx%s face is empty (%dx%d), nothing drawn",
            face.width, face.height, new_width, new_height,
        )
        return result

    # Nearest neighbour keeps the output reproducible
    resized = cv2.resize(
        np.ascontiguousarray(overlay),
        (new_width, new_height),
        interpolation=cv2.INTER_NEAREST,
    )

    resized_size = (resized.shape[1], resized.shape[0])
    pos_x, pos_y = overlay_position(resized_size, face)
    logger.debug(
        "composite: emoji %dx%d at (%.1f, %.1f)", resized_size[0], resized_size[1], pos_x, pos_y
    )

    blend_at(result, resized, _to_pixel(pos_x), _to_pixel(pos_y))
    return result
