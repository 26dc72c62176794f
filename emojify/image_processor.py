"""
Image loading and conversion utilities.
"""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image


class ImageProcessor:
    """Conversion between files, PIL images and RGB/RGBA numpy arrays."""

    def from_pil(self, image: Image.Image) -> np.ndarray:
        """
        Convert a PIL image to a numpy array.

        Args:
            image: Any PIL image

        Returns:
            RGBA array if the image carries transparency, RGB array otherwise
        """
        if image.mode in ('RGBA', 'LA', 'PA') or (
            image.mode == 'P' and 'transparency' in image.info
        ):
            return np.array(image.convert('RGBA'))
        return np.array(image.convert('RGB'))

    def to_pil(self, image: np.ndarray) -> Image.Image:
        """
        Convert a numpy array to a PIL image.

        Args:
            image: Array of shape (H, W), (H, W, 3) or (H, W, 4)

        Returns:
            PIL image in L, RGB or RGBA mode
        """
        image = np.ascontiguousarray(image, dtype=np.uint8)
        if image.ndim == 2 or (image.ndim == 3 and image.shape[2] in (3, 4)):
            return Image.fromarray(image)
        raise ValueError(f"Unsupported image shape: {image.shape}")

    def load(self, image_path: Union[str, Path]) -> np.ndarray:
        """
        Load a picture from disk.

        Args:
            image_path: Path to image file

        Returns:
            RGB array, or RGBA if the file has transparency
        """
        image_path = Path(image_path)
        if not image_path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")

        with Image.open(image_path) as image:
            return self.from_pil(image)

    def load_rgba(self, image_path: Union[str, Path]) -> np.ndarray:
        """Load an image from disk as an RGBA array."""
        image_path = Path(image_path)
        if not image_path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")

        with Image.open(image_path) as image:
            return np.array(image.convert('RGBA'))

    def save(self, image: np.ndarray, image_path: Union[str, Path]) -> Path:
        """
        Write an array to disk; the format follows the file extension.

        JPEG cannot store alpha, so RGBA arrays are flattened to RGB for it.
        """
        image_path = Path(image_path)
        image_path.parent.mkdir(parents=True, exist_ok=True)

        pil_image = self.to_pil(image)
        if pil_image.mode == 'RGBA' and image_path.suffix.lower() in ('.jpg', '.jpeg'):
            pil_image = pil_image.convert('RGB')
        pil_image.save(image_path)
        return image_path
